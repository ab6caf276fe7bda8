"""S3アップロード実行クラス"""
from typing import Callable, List

from ..errors import (
    CompletionError,
    PartUploadError,
    SessionInitError,
    SingleUploadError,
)
from ..models.config import AWSConfig, UploadOptions
from ..models.upload import (
    PartDescriptor,
    PartResult,
    UploadResult,
    UploadSession,
    UploadState,
)
from ..utils.file_utils import FileInfo, get_file_info, read_range
from ..utils.logger import LoggerManager
from ..utils.progress import PartProgress
from .object_store import ObjectStoreClient
from .planner import plan_parts
from .task_queue import BoundedTaskQueue


def s3_url(region: str, bucket: str, object_key: str) -> str:
    return f"https://{bucket}.s3.{region}.amazonaws.com/{object_key}"


class UploadCoordinator:
    """ファイルサイズに応じて単一PUTかマルチパートでアップロードする

    1インスタンスで同時に複数のアップロードを実行しないこと（state は直近のアップロードのもの）。
    """

    def __init__(self, store: ObjectStoreClient, aws_config: AWSConfig, options: UploadOptions):
        self.store = store
        self.aws_config = aws_config
        self.options = options
        self.logger = LoggerManager.get_logger()
        self.state = UploadState.CREATED

    def upload(self, file_path: str, object_key: str, content_type: str) -> UploadResult:
        """ファイルをアップロード"""
        file_info = get_file_info(file_path)

        if file_info.size < self.options.multipart_threshold:
            return self.upload_single(file_info, object_key, content_type)
        return self.upload_multipart(file_info, object_key, content_type)

    def upload_single(self, file_info: FileInfo, object_key: str, content_type: str) -> UploadResult:
        """ファイル全体を1回の put_object で書き込む"""
        self.logger.info(f"Uploading {file_info.path} ({file_info.size} bytes) as a single object...")

        try:
            with open(file_info.path, "rb") as file:
                body = file.read()
            etag = self.store.put_object(object_key, content_type, self.options.cache_control, body)
        except Exception as e:
            self.logger.error(f"Error uploading {file_info.path}: {e}")
            raise SingleUploadError(f"Failed to upload {file_info.path}: {e}", e) from e

        self.logger.info(f"Successfully uploaded {file_info.path} to {self.aws_config.bucket}/{object_key}")
        return UploadResult(
            object_key=object_key,
            etag=etag,
            region=self.aws_config.region,
            bucket=self.aws_config.bucket,
            url=s3_url(self.aws_config.region, self.aws_config.bucket, object_key),
        )

    def upload_multipart(self, file_info: FileInfo, object_key: str, content_type: str) -> UploadResult:
        """パートに分割して並列アップロードし、最後に完了させる"""
        self.state = UploadState.CREATED
        parts = plan_parts(file_info.size, self.options.multipart_chunksize)

        # Created -> Initiated
        try:
            upload_id = self.store.create_multipart_upload(
                object_key, content_type, self.options.cache_control
            )
        except Exception as e:
            self.state = UploadState.FAILED
            self.logger.error(f"Error creating multipart upload for {object_key}: {e}")
            raise SessionInitError(f"Failed to create multipart upload for {object_key}: {e}", e) from e

        session = UploadSession(
            object_key=object_key,
            upload_id=upload_id,
            content_type=content_type,
            total_parts=len(parts),
        )
        self.state = UploadState.INITIATED

        # Initiated -> PartsInFlight
        with open(file_info.path, "rb") as file:
            progress = PartProgress(
                len(parts), file_info.size, file_info.name, self.options.enable_progress
            )
            queue: BoundedTaskQueue[PartResult] = BoundedTaskQueue(
                self.options.max_concurrency, name="upload-part"
            )
            for part in parts:
                queue.add(self._create_upload_part_fn(file.fileno(), session, part, progress))

            self.logger.info(
                f"Starting upload of {file_info.size} bytes over {session.total_parts} parts "
                f"(concurrency {self.options.max_concurrency})..."
            )
            self.state = UploadState.PARTS_IN_FLIGHT
            try:
                results = queue.execute().result()
            except PartUploadError:
                # 実行中のパートが終わるまでファイルを閉じない
                queue.join()
                self._fail(session)
                raise
        progress.complete()

        # PartsInFlight -> Completing
        self.state = UploadState.COMPLETING
        ordered = self.order_parts(results)
        self.logger.info("All parts uploaded, now completing the upload...")

        try:
            completed = self.store.complete_multipart_upload(object_key, upload_id, ordered)
        except Exception as e:
            self.logger.error(f"Error completing multipart upload {upload_id}: {e}")
            self._fail(session)
            raise CompletionError(f"Failed to complete multipart upload for {object_key}: {e}", e) from e

        self.state = UploadState.COMPLETED
        self.logger.info(f"Successfully uploaded {file_info.path} to {self.aws_config.bucket}/{object_key}")
        return UploadResult(
            object_key=completed.key or object_key,
            etag=completed.etag,
            region=self.aws_config.region,
            bucket=completed.bucket or self.aws_config.bucket,
            url=completed.location or s3_url(self.aws_config.region, self.aws_config.bucket, object_key),
        )

    def _create_upload_part_fn(self, fd: int, session: UploadSession, part: PartDescriptor,
                               progress: PartProgress) -> Callable[[], PartResult]:
        """1パート分を読み込んでアップロードする関数を返す"""

        def upload_part() -> PartResult:
            self.logger.info(
                f"Uploading part {part.part_number} of {session.total_parts} ({part.length} bytes)..."
            )
            try:
                body = read_range(fd, part.offset, part.length)
                etag = self.store.upload_part(
                    session.object_key, session.upload_id, part.part_number, body
                )
            except Exception as e:
                self.logger.error(f"Error uploading part {part.part_number}: {e}")
                raise PartUploadError(part.part_number, e) from e

            progress(part.length)
            self.logger.info(
                f"Successfully uploaded part {part.part_number} of {session.total_parts} ({part.length} bytes)."
            )
            return PartResult(part_number=part.part_number, etag=etag)

        return upload_part

    def _fail(self, session: UploadSession) -> None:
        """失敗状態にし、設定されていればセッションを中止する"""
        self.state = UploadState.FAILED
        if not self.options.abort_on_failure:
            self.logger.warning(
                f"Multipart upload {session.upload_id} for {session.object_key} was left open"
            )
            return

        try:
            self.store.abort_multipart_upload(session.object_key, session.upload_id)
            self.logger.info(f"Aborted multipart upload {session.upload_id}")
        except Exception as e:
            self.logger.error(f"Error aborting multipart upload {session.upload_id}: {e}")

    @staticmethod
    def order_parts(results: List[PartResult]) -> List[PartResult]:
        return sorted(results, key=lambda r: r.part_number)
