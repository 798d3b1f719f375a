"""入力ストリームの分割"""
from typing import BinaryIO, Generator

from ..models.errors import StreamReadError


def read_chunk(stream: BinaryIO, size: int) -> bytes:
    """最大sizeバイトを読み込む

    パイプなどは要求より少ないバイト数を返すことがあるため、
    sizeに達するかEOFになるまで読み続ける。
    """
    buffer = bytearray()
    while len(buffer) < size:
        try:
            data = stream.read(size - len(buffer))
        except Exception as e:
            # gzip/lzmaの途中切れ(EOFError)やzlib.errorなどもOSErrorではない
            raise StreamReadError(e) from e

        if isinstance(data, str):
            raise StreamReadError(TypeError("input stream must be opened in binary mode"))
        if not data:
            break
        buffer.extend(data)
    return bytes(buffer)


def iter_chunks(stream: BinaryIO, max_part_size: int) -> Generator[bytes, None, None]:
    """ストリームをmax_part_size以下のチャンクに分割して順に生成

    ストリームは一度だけ消費される。空のストリームからは何も生成しない。
    最後以外のチャンクはちょうどmax_part_sizeバイトになる。
    """
    if max_part_size < 1:
        raise ValueError(f"Invalid max_part_size: {max_part_size}")

    while True:
        chunk = read_chunk(stream, max_part_size)
        if not chunk:
            return
        yield chunk
        # 足りないまま戻った = EOF
        if len(chunk) < max_part_size:
            return
