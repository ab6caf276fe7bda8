"""ファイルをパートに分割する"""
from typing import List

from ..models.upload import PartDescriptor


def count_parts(file_size: int, chunk_size: int) -> int:
    """パート数 = ceil(file_size / chunk_size)"""
    return -(-file_size // chunk_size)


def plan_parts(file_size: int, chunk_size: int) -> List[PartDescriptor]:
    """[0, file_size) を chunk_size ごとのパートに分割する

    最後のパート以外は chunk_size バイト。空ファイルは呼び出し側で弾くこと。
    """
    if file_size <= 0:
        raise ValueError(f"Unable to plan parts for a file of {file_size} bytes")
    if chunk_size <= 0:
        raise ValueError(f"Invalid chunk size: {chunk_size}")

    parts = []
    offset = 0
    part_number = 0

    while offset < file_size:
        part_number += 1
        length = min(chunk_size, file_size - offset)
        parts.append(PartDescriptor(part_number=part_number, offset=offset, length=length))
        offset += length

    return parts
