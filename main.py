#!/usr/bin/env python3
"""S3 Chunk Uploader - エントリーポイント"""
import argparse
import sys

from s3_chunk_uploader import S3Uploader, Config


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Upload a file to S3, in concurrent parts when it is large"
    )
    parser.add_argument("file_path", help="File to upload")
    parser.add_argument("--config", default="config.json", help="JSON configuration file")
    parser.add_argument("--region", help="S3 region (default: $S3_REGION)")
    parser.add_argument("--bucket", help="S3 bucket (default: $S3_BUCKET)")
    parser.add_argument("--concurrency", type=int, help="Number of parts uploaded at once")
    parser.add_argument("--chunk-size", type=int, help="Part size in bytes")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """メイン関数"""
    args = parse_args(argv)

    try:
        config = Config.load(args.config).with_overrides(
            region=args.region,
            bucket=args.bucket,
            max_concurrency=args.concurrency,
            multipart_chunksize=args.chunk_size,
        )
        uploader = S3Uploader(config)
        result = uploader.upload(args.file_path)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Success: {result.url}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
