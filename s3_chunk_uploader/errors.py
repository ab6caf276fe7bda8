"""アップロード関連の例外"""
from typing import Optional


class UploadError(Exception):
    """アップロード処理の基底例外"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ValidationError(UploadError):
    """リモート呼び出し前の入力チェックに失敗"""


class SessionInitError(UploadError):
    """マルチパートアップロードの開始に失敗"""


class PartUploadError(UploadError):
    """パートの読み込みまたはアップロードに失敗"""

    def __init__(self, part_number: int, cause: BaseException):
        super().__init__(f"Failed to upload part {part_number}: {cause}", cause)
        self.part_number = part_number


class CompletionError(UploadError):
    """マルチパートアップロードの完了に失敗"""


class SingleUploadError(UploadError):
    """単一オブジェクトの書き込みに失敗"""


class QueueFinalizedError(Exception):
    """execute() 後にタスクを追加しようとした"""
