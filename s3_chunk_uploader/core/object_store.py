"""オブジェクトストレージへの書き込み操作"""
from typing import Protocol, Sequence

from ..models.upload import CompletedUpload, PartResult


class ObjectStoreClient(Protocol):
    """アップロードで使うストレージ操作"""

    def put_object(self, key: str, content_type: str, cache_control: str, body: bytes) -> str:
        ...

    def create_multipart_upload(self, key: str, content_type: str, cache_control: str) -> str:
        ...

    def upload_part(self, key: str, upload_id: str, part_number: int, body: bytes) -> str:
        ...

    def complete_multipart_upload(self, key: str, upload_id: str,
                                  parts: Sequence[PartResult]) -> CompletedUpload:
        ...

    def abort_multipart_upload(self, key: str, upload_id: str) -> None:
        ...


class S3ObjectStore:
    """boto3 の S3 クライアントで ObjectStoreClient を実装"""

    def __init__(self, s3_client, bucket: str):
        self.s3_client = s3_client
        self.bucket = bucket

    def put_object(self, key: str, content_type: str, cache_control: str, body: bytes) -> str:
        """オブジェクト全体を書き込み、ETag を返す"""
        response = self.s3_client.put_object(
            Bucket=self.bucket,
            Key=key,
            CacheControl=cache_control,
            ContentType=content_type,
            Body=body,
        )
        return response["ETag"]

    def create_multipart_upload(self, key: str, content_type: str, cache_control: str) -> str:
        """マルチパートアップロードを開始し、UploadId を返す"""
        response = self.s3_client.create_multipart_upload(
            Bucket=self.bucket,
            Key=key,
            CacheControl=cache_control,
            ContentType=content_type,
        )
        return response["UploadId"]

    def upload_part(self, key: str, upload_id: str, part_number: int, body: bytes) -> str:
        response = self.s3_client.upload_part(
            Bucket=self.bucket,
            Key=key,
            PartNumber=part_number,
            UploadId=upload_id,
            Body=body,
        )
        return response["ETag"]

    def complete_multipart_upload(self, key: str, upload_id: str,
                                  parts: Sequence[PartResult]) -> CompletedUpload:
        """パート番号順の一覧でアップロードを完了"""
        response = self.s3_client.complete_multipart_upload(
            Bucket=self.bucket,
            Key=key,
            UploadId=upload_id,
            MultipartUpload={
                "Parts": [
                    {"PartNumber": part.part_number, "ETag": part.etag}
                    for part in parts
                ]
            },
        )
        return CompletedUpload(
            etag=response["ETag"],
            location=response.get("Location", ""),
            key=response.get("Key", key),
            bucket=response.get("Bucket", self.bucket),
        )

    def abort_multipart_upload(self, key: str, upload_id: str) -> None:
        self.s3_client.abort_multipart_upload(
            Bucket=self.bucket,
            Key=key,
            UploadId=upload_id,
        )
