"""テスト共通のフィクスチャ"""
import threading
from typing import Dict, List, Optional, Sequence

import pytest

from s3_chunk_uploader.models.config import LoggingConfig
from s3_chunk_uploader.models.upload import CompletedUpload, PartResult
from s3_chunk_uploader.utils.logger import LoggerManager


@pytest.fixture(autouse=True)
def logger():
    LoggerManager.reset()
    yield LoggerManager.setup(LoggingConfig(level="DEBUG"))
    LoggerManager.reset()


class FakeObjectStore:
    """呼び出しを記録するインメモリのストア"""

    def __init__(self):
        self.lock = threading.Lock()
        self.calls: List[tuple] = []
        self.parts: Dict[int, bytes] = {}
        self.completed_parts: Optional[List[PartResult]] = None
        self.fail_create: Optional[Exception] = None
        self.fail_complete: Optional[Exception] = None
        self.fail_abort: Optional[Exception] = None
        self.fail_parts: Dict[int, Exception] = {}

    def _record(self, *call):
        with self.lock:
            self.calls.append(call)

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]

    def put_object(self, key, content_type, cache_control, body):
        self._record("put_object", key, content_type, cache_control, len(body))
        return '"single-etag"'

    def create_multipart_upload(self, key, content_type, cache_control):
        self._record("create_multipart_upload", key, content_type, cache_control)
        if self.fail_create:
            raise self.fail_create
        return "upload-1"

    def upload_part(self, key, upload_id, part_number, body):
        self._record("upload_part", key, upload_id, part_number, len(body))
        if part_number in self.fail_parts:
            raise self.fail_parts[part_number]
        with self.lock:
            self.parts[part_number] = body
        return f'"etag-{part_number}"'

    def complete_multipart_upload(self, key, upload_id, parts: Sequence[PartResult]):
        self._record("complete_multipart_upload", key, upload_id)
        self.completed_parts = list(parts)
        if self.fail_complete:
            raise self.fail_complete
        return CompletedUpload(
            etag='"multi-etag"',
            location=f"https://bucket.s3.us-east-1.amazonaws.com/{key}",
            key=key,
            bucket="bucket",
        )

    def abort_multipart_upload(self, key, upload_id):
        self._record("abort_multipart_upload", key, upload_id)
        if self.fail_abort:
            raise self.fail_abort


@pytest.fixture
def store():
    return FakeObjectStore()


@pytest.fixture
def make_file(tmp_path):
    """指定サイズのファイルを作成（内容は位置ごとに異なる）"""

    def _make(size: int, name: str = "data.bin") -> str:
        path = tmp_path / name
        pattern = bytes(range(251))
        path.write_bytes((pattern * (size // len(pattern) + 1))[:size])
        return str(path)

    return _make
