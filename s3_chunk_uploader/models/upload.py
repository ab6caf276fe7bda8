"""アップロード処理で扱うデータクラス"""
from dataclasses import dataclass
from enum import Enum


class UploadState(Enum):
    """マルチパートアップロードの状態"""
    CREATED = "created"
    INITIATED = "initiated"
    PARTS_IN_FLIGHT = "parts_in_flight"
    COMPLETING = "completing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class PartDescriptor:
    """ファイル内の1パート分のバイト範囲"""
    part_number: int  # 1始まり
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length


@dataclass(frozen=True)
class UploadSession:
    """create_multipart_upload で作成されたセッション"""
    object_key: str
    upload_id: str
    content_type: str
    total_parts: int


@dataclass(frozen=True)
class PartResult:
    """アップロード済みパート"""
    part_number: int
    etag: str


@dataclass(frozen=True)
class CompletedUpload:
    """complete_multipart_upload のレスポンス"""
    etag: str
    location: str
    key: str
    bucket: str


@dataclass
class UploadResult:
    """アップロード結果"""
    object_key: str
    etag: str
    region: str
    bucket: str
    url: str
