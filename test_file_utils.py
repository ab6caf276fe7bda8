"""ファイルユーティリティのテスト"""
import os
import re

import pytest

from s3_chunk_uploader.errors import ValidationError
from s3_chunk_uploader.utils.file_utils import (
    generate_object_key,
    get_file_info,
    lookup_content_type,
    read_range,
    split_extension,
)


class TestReadRange:
    def test_reads_exact_range_without_moving_position(self, make_file):
        path = make_file(1_000)
        with open(path, "rb") as f:
            expected = f.read()
            f.seek(0)
            assert read_range(f.fileno(), 300, 200) == expected[300:500]
            assert read_range(f.fileno(), 0, 10) == expected[:10]
            assert f.tell() == 0

    def test_short_file_raises(self, make_file):
        path = make_file(100)
        with open(path, "rb") as f:
            with pytest.raises(IOError, match="stat size differs"):
                read_range(f.fileno(), 90, 20)


class TestGetFileInfo:
    def test_regular_file(self, make_file):
        info = get_file_info(make_file(42, name="clip.mp4"))
        assert info.size == 42
        assert info.name == "clip.mp4"

    def test_empty_file(self, make_file):
        with pytest.raises(ValidationError):
            get_file_info(make_file(0))


class TestContentType:
    @pytest.mark.parametrize("path, expected", [
        ("photo.JPG", "image/jpeg"),
        ("/videos/clip.mp4", "video/mp4"),
        ("backup.tar.gz", "application/gzip"),
        ("notes.txt", "text/plain"),
    ])
    def test_known_extensions(self, path, expected):
        assert lookup_content_type(path) == expected

    def test_longest_extension_wins(self):
        assert split_extension("backup.tar.gz") == "tar.gz"
        assert split_extension("archive.gz") == "gz"

    @pytest.mark.parametrize("path", ["README", "data.unknownext"])
    def test_unrecognized_extension(self, path):
        with pytest.raises(ValidationError, match="recognized extension"):
            lookup_content_type(path)


class TestObjectKey:
    def test_key_format(self):
        key = generate_object_key("mp4")
        assert re.fullmatch(r"[0-9A-Za-z]{4}/[0-9A-Za-z]{4}/[0-9A-Za-z]{4}\.mp4", key)

    def test_keys_differ(self):
        assert len({generate_object_key("bin") for _ in range(20)}) == 20
