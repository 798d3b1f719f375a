"""文字列ユーティリティ"""
from typing import Sequence


def english_join(words: Sequence[str], oxford_comma: bool = True) -> str:
    """英語の列挙のように連結する

    oxford_commaの場合、3語以上なら最後の"and"の前にもカンマを付ける。
    2語以下ではoxford_commaに関係なく"A and B"の形になる。

    >>> english_join(["accessKey", "bucket"])
    'accessKey and bucket'
    >>> english_join(["accessKey", "secretKey", "bucket"])
    'accessKey, secretKey, and bucket'
    """
    words = list(words)
    if not words:
        return ""
    if len(words) == 1:
        return words[0]
    if len(words) == 2:
        return f"{words[0]} and {words[1]}"

    head = ", ".join(words[:-1])
    separator = ", and " if oxford_comma else " and "
    return f"{head}{separator}{words[-1]}"
