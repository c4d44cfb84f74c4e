from __future__ import annotations

from .. import t
from .parser import wordsFromStream
from .stream import DEFAULT_PARSE_CONFIG, ParseConfig, Stream


def wordsFromMarkup(
    data: str,
    config: ParseConfig = DEFAULT_PARSE_CONFIG,
    startLine: int = 1,
) -> t.Generator[t.WordT, None, None]:
    s = Stream(data, config=config, startLine=startLine)
    yield from wordsFromStream(s, 0)


def parseWords(
    data: str,
    config: ParseConfig = DEFAULT_PARSE_CONFIG,
    startLine: int = 1,
) -> list[t.WordT]:
    # Eager version of wordsFromMarkup();
    # either the whole input tokenizes, or this raises.
    return list(wordsFromMarkup(data, config, startLine=startLine))


def strFromWords(words: t.Iterable[t.WordT]) -> str:
    return " ".join(str(word) for word in words)
