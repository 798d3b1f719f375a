"""先頭バイトからのContent-Type判定"""

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# libmagicが見るのは先頭部分だけなので、大きなパートを丸ごと渡さない
SNIFF_LENGTH = 2048


def detect_content_type(data: bytes) -> str:
    """データの先頭からMIMEタイプを推定"""
    # libmagicはネイティブライブラリを読み込むので、実際に判定するときだけimport
    import magic

    if not data:
        return DEFAULT_CONTENT_TYPE

    content_type = magic.from_buffer(data[:SNIFF_LENGTH], mime=True)
    return content_type or DEFAULT_CONTENT_TYPE
