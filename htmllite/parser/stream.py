from __future__ import annotations

import bisect
import dataclasses
import re
from dataclasses import dataclass

from .. import t
from .result import Err, Ok, OkT, ResultT


@dataclass(frozen=True)
class ParseConfig:
    # Ignore (with a warning) trailing text that can't start a word,
    # rather than failing the parse.
    allowTrailing: bool = False
    # Appended to locations in messages, to say *which* markup was being parsed.
    context: str | None = None

    def replace(self, **kwargs: t.Any) -> ParseConfig:
        return dataclasses.replace(self, **kwargs)


DEFAULT_PARSE_CONFIG = ParseConfig()


@dataclass
class Stream:
    _chars: str
    _len: int
    _lineBreaks: list[int]
    startLine: int
    config: ParseConfig

    def __init__(self, chars: str, config: ParseConfig = DEFAULT_PARSE_CONFIG, startLine: int = 1) -> None:
        self._chars = chars
        self._len = len(chars)
        self._lineBreaks = []
        self.startLine = startLine
        self.config = config
        for i, char in enumerate(chars):
            if char == "\n":
                self._lineBreaks.append(i)

    def __getitem__(self, key: int) -> str:
        if key < 0 or key >= self._len:
            return ""
        return self._chars[key]

    def slice(self, start: int | None, stop: int | None) -> str:
        if start is not None and start < 0:
            start = 0
        if stop is not None and stop < 0:
            stop = 0
        return self._chars[start:stop]

    def eof(self, index: int) -> bool:
        return index >= self._len

    def __len__(self) -> int:
        return self._len

    @property
    def context(self) -> str | None:
        return self.config.context

    def line(self, index: int) -> int:
        # Zero-based line index
        lineIndex = bisect.bisect_left(self._lineBreaks, index)
        return lineIndex + self.startLine

    def col(self, index: int) -> int:
        lineIndex = bisect.bisect_left(self._lineBreaks, index)
        if lineIndex == 0:
            return index + 1
        startOfCol = self._lineBreaks[lineIndex - 1]
        return index - startOfCol

    def loc(self, index: int) -> str:
        rc = f"{self.line(index)}:{self.col(index)}"
        if self.config.context is None:
            return rc
        return f"{rc} of {self.config.context}"

    def skipTo(self, start: int, text: str) -> ResultT[str]:
        # Skip forward until encountering `text`.
        # Produces the text encountered before this point.
        i = self._chars.find(text, start)
        if i == -1:
            return Err(start)
        return Ok(self.slice(start, i), i)

    def matchRe(self, start: int, pattern: re.Pattern) -> ResultT[re.Match]:
        match = pattern.match(self._chars, start)
        if match:
            return Ok(match, match.end())
        else:
            return Err(start)

    def nextLineStart(self, start: int) -> int:
        # The index of the first character on the next line.
        # Returns an OOB index if on the last line.
        lineIndex = bisect.bisect_left(self._lineBreaks, start)
        if lineIndex >= len(self._lineBreaks):
            return len(self._chars)
        else:
            return self._lineBreaks[lineIndex] + 1

    def remainingTextOnLine(self, start: int) -> OkT[str]:
        # The text on the current line from the start point on,
        # not including the newline.
        end = self.nextLineStart(start)
        text = self.slice(start, end).rstrip("\n")
        return Ok(text, start + len(text))
