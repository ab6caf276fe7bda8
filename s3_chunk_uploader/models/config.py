"""設定管理用のデータクラス"""
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional
import json
import os
import re


DEFAULT_CACHE_CONTROL = "max-age=315360000, immutable"


@dataclass
class LoggingConfig:
    """ロギング設定"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


@dataclass
class AssumeRoleConfig:
    """AssumeRole設定"""
    role_arn: str
    session_name: str
    external_id: Optional[str] = None
    duration_seconds: int = 3600

    def __post_init__(self):
        """AssumeRole設定のバリデーション"""
        arn_pattern = r'^arn:aws:iam::[0-9]{12}:role\/[a-zA-Z0-9+=,.@_-]+$'
        if not re.match(arn_pattern, self.role_arn):
            raise ValueError(
                f"Invalid role_arn format: {self.role_arn}. "
                "Expected format: arn:aws:iam::ACCOUNT_ID:role/ROLE_NAME"
            )

        if not self.session_name or not self.session_name.strip():
            raise ValueError("session_name cannot be empty")

        # 2-64文字の英数字、アンダースコア、ハイフン、ピリオドのみ
        session_name_pattern = r'^[a-zA-Z0-9_.-]{2,64}$'
        if not re.match(session_name_pattern, self.session_name):
            raise ValueError(
                f"Invalid session_name: {self.session_name}. "
                "Must be 2-64 characters long and contain only alphanumeric characters, "
                "underscores, hyphens, and periods"
            )

        if not (900 <= self.duration_seconds <= 43200):
            raise ValueError(
                f"Invalid duration_seconds: {self.duration_seconds}. "
                "Must be between 900 and 43200 seconds (15 minutes to 12 hours)"
            )


@dataclass
class AWSConfig:
    """AWS関連の設定"""
    region: str = ""
    bucket: str = ""
    profile: Optional[str] = None
    assume_role: Optional[AssumeRoleConfig] = None
    endpoint_url: Optional[str] = None  # S3互換ストレージ用

    def __post_init__(self):
        if self.assume_role:
            if isinstance(self.assume_role, dict):
                self.assume_role = AssumeRoleConfig(**self.assume_role)
            elif not isinstance(self.assume_role, AssumeRoleConfig):
                raise TypeError(
                    f"assume_role must be dict or AssumeRoleConfig, got {type(self.assume_role)}"
                )


@dataclass
class UploadOptions:
    """アップロードオプション"""
    multipart_threshold: int = 1024 * 5_000  # これ未満は単一PUT
    max_concurrency: int = 8
    multipart_chunksize: int = 1024 * 10_000
    cache_control: str = DEFAULT_CACHE_CONTROL
    abort_on_failure: bool = False
    enable_progress: bool = True

    def __post_init__(self):
        if self.multipart_chunksize <= 0:
            raise ValueError(
                f"Invalid multipart_chunksize: {self.multipart_chunksize}. Must be positive"
            )
        if self.multipart_threshold < 0:
            raise ValueError(
                f"Invalid multipart_threshold: {self.multipart_threshold}. Must not be negative"
            )
        if self.max_concurrency < 1:
            raise ValueError(
                f"Invalid max_concurrency: {self.max_concurrency}. Must be at least 1"
            )


# 環境変数名 -> (セクション, フィールド, 型)
ENV_VARIABLES = {
    "S3_REGION": ("aws", "region", str),
    "S3_BUCKET": ("aws", "bucket", str),
    "S3_UPLOAD_CONCURRENCY": ("options", "max_concurrency", int),
    "S3_UPLOAD_CHUNK_SIZE": ("options", "multipart_chunksize", int),
    "S3_UPLOAD_MULTIPART_THRESHOLD": ("options", "multipart_threshold", int),
}


@dataclass
class Config:
    """メイン設定クラス"""
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    aws: AWSConfig = field(default_factory=AWSConfig)
    options: UploadOptions = field(default_factory=UploadOptions)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """辞書から作成"""
        return cls(
            logging=LoggingConfig(**data.get("logging", {})),
            aws=AWSConfig(**data.get("aws", {})),
            options=UploadOptions(**data.get("options", {})),
        )

    @classmethod
    def from_file(cls, config_path: str) -> 'Config':
        """設定ファイルから読み込み"""
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file {config_path} not found.")

        try:
            with open(config_path, "r", encoding="utf-8") as file:
                data = json.load(file)
        except json.JSONDecodeError as e:
            raise ValueError(f"Error decoding JSON from {config_path}: {e}") from e

        try:
            return cls.from_dict(data)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid configuration in {config_path}: {e}") from e

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Config':
        """環境変数から作成"""
        return cls().apply_env(environ)

    @classmethod
    def load(cls, config_path: Optional[str] = None,
             environ: Optional[Mapping[str, str]] = None) -> 'Config':
        """設定ファイル（存在する場合）を読み込み、環境変数で上書き"""
        if config_path and os.path.exists(config_path):
            config = cls.from_file(config_path)
        else:
            config = cls()
        return config.apply_env(environ)

    def apply_env(self, environ: Optional[Mapping[str, str]] = None) -> 'Config':
        """環境変数の値で上書きした新しい設定を返す"""
        environ = os.environ if environ is None else environ
        sections = {"aws": {}, "options": {}}

        for name, (section, key, cast) in ENV_VARIABLES.items():
            value = environ.get(name)
            if value is None or value == "":
                continue
            try:
                sections[section][key] = cast(value)
            except ValueError as e:
                raise ValueError(f"Invalid environment variable ({name}): {value!r}") from e

        return replace(
            self,
            aws=replace(self.aws, **sections["aws"]),
            options=replace(self.options, **sections["options"]),
        )

    def with_overrides(self, region: Optional[str] = None, bucket: Optional[str] = None,
                       max_concurrency: Optional[int] = None,
                       multipart_chunksize: Optional[int] = None) -> 'Config':
        """コマンドライン引数で上書きした新しい設定を返す"""
        aws_values = {k: v for k, v in (("region", region), ("bucket", bucket)) if v}
        option_values = {
            k: v for k, v in (
                ("max_concurrency", max_concurrency),
                ("multipart_chunksize", multipart_chunksize),
            ) if v is not None
        }
        return replace(
            self,
            aws=replace(self.aws, **aws_values),
            options=replace(self.options, **option_values),
        )

    def validate(self) -> None:
        """アップロードに必要な値が揃っているか確認"""
        if not self.aws.region:
            raise ValueError("Either set S3_REGION in the environment or pass --region")
        if not self.aws.bucket:
            raise ValueError("Either set S3_BUCKET in the environment or pass --bucket")
