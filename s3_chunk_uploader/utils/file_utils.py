"""ファイル操作関連のユーティリティ"""
import mimetypes
import os
import secrets
from dataclasses import dataclass

from ..errors import ValidationError


KEY_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

# 拡張子 -> Content-Type
CONTENT_TYPES = {
    "aac": "audio/aac",
    "avi": "video/x-msvideo",
    "bin": "application/octet-stream",
    "bz2": "application/x-bzip2",
    "css": "text/css",
    "csv": "text/csv",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "flac": "audio/flac",
    "gif": "image/gif",
    "gz": "application/gzip",
    "htm": "text/html",
    "html": "text/html",
    "ico": "image/x-icon",
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "js": "text/javascript",
    "json": "application/json",
    "m4a": "audio/mp4",
    "md": "text/markdown",
    "mkv": "video/x-matroska",
    "mov": "video/quicktime",
    "mp3": "audio/mpeg",
    "mp4": "video/mp4",
    "ogg": "audio/ogg",
    "pdf": "application/pdf",
    "png": "image/png",
    "svg": "image/svg+xml",
    "tar": "application/x-tar",
    "tar.gz": "application/gzip",
    "tgz": "application/gzip",
    "txt": "text/plain",
    "wasm": "application/wasm",
    "wav": "audio/wav",
    "webm": "video/webm",
    "webp": "image/webp",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "xml": "application/xml",
    "zip": "application/zip",
}


@dataclass
class FileInfo:
    """ファイル情報"""
    path: str
    size: int

    @property
    def name(self) -> str:
        return os.path.basename(self.path)


def get_file_info(file_path: str) -> FileInfo:
    """アップロード対象ファイルの情報を取得"""
    if not os.path.isfile(file_path):
        raise ValidationError(f"No file exists at path ({file_path})")

    size = os.path.getsize(file_path)
    if not size:
        raise ValidationError(f"Unable to upload a zero byte file ({file_path})")

    return FileInfo(path=file_path, size=size)


def read_range(fd: int, offset: int, length: int) -> bytes:
    """offset から length バイトを読み込む（ファイル位置は変更しない）"""
    chunks = []
    remaining = length
    position = offset

    while remaining > 0:
        data = os.pread(fd, remaining, position)
        if not data:
            raise IOError(
                f"Expected to read {length} bytes at offset {offset}, got {length - remaining}: "
                "stat size differs from read size"
            )
        chunks.append(data)
        remaining -= len(data)
        position += len(data)

    return b"".join(chunks)


def split_extension(file_path: str) -> str:
    """登録済みの拡張子を優先して拡張子を取り出す（最長一致）"""
    name = os.path.basename(file_path).lower()
    matches = [ext for ext in CONTENT_TYPES if name.endswith(f".{ext}")]
    if matches:
        return max(matches, key=len)

    _, ext = os.path.splitext(name)
    return ext.lstrip(".")


def lookup_content_type(file_path: str) -> str:
    """拡張子から Content-Type を決定"""
    extension = split_extension(file_path)
    if extension in CONTENT_TYPES:
        return CONTENT_TYPES[extension]

    guessed_type, _ = mimetypes.guess_type(file_path)
    if extension and guessed_type:
        return guessed_type

    raise ValidationError(
        f"This file doesn't have a recognized extension: ({file_path})"
    )


def generate_object_key(extension: str, segment_length: int = 4) -> str:
    """ランダムなオブジェクトキーを生成（例: Ab3x/9QzT/k2Lm.mp4）"""
    segments = [
        "".join(secrets.choice(KEY_ALPHABET) for _ in range(segment_length))
        for _ in range(3)
    ]
    key = "/".join(segments)
    return f"{key}.{extension}" if extension else key
