"""S3 Chunk Uploader パッケージ"""
from typing import Optional
from .models.config import Config
from .models.upload import UploadResult
from .utils.logger import LoggerManager
from .utils.file_utils import generate_object_key, lookup_content_type, split_extension
from .core.s3_client import S3ClientManager
from .core.object_store import ObjectStoreClient, S3ObjectStore
from .core.uploader import UploadCoordinator
from .errors import UploadError, ValidationError


class S3Uploader:
    """S3アップローダーのメインクラス"""

    def __init__(self, config: Config, store: Optional[ObjectStoreClient] = None):
        self.config = config

        # ロガーをセットアップ
        self.logger = LoggerManager.setup(self.config.logging)

        if store is None:
            self.config.validate()
            client_manager = S3ClientManager(self.config.aws)
            store = S3ObjectStore(client_manager.get_client(), self.config.aws.bucket)

        self.coordinator = UploadCoordinator(store, self.config.aws, self.config.options)
        self.logger.info("S3 Uploader initialized")

    @classmethod
    def from_config_file(cls, config_path: str = "config.json") -> 'S3Uploader':
        """設定ファイルと環境変数から作成"""
        return cls(Config.load(config_path))

    def upload(self, file_path: str) -> UploadResult:
        """ファイルをランダムなキーでアップロード"""
        content_type = lookup_content_type(file_path)
        object_key = generate_object_key(split_extension(file_path))

        self.logger.info(f"Uploading {file_path} to {self.config.aws.bucket}/{object_key} ({content_type})")
        return self.coordinator.upload(file_path, object_key, content_type)


__all__ = ['S3Uploader', 'Config', 'UploadResult', 'UploadError', 'ValidationError']
