from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from . import t

if t.TYPE_CHECKING:
    from .spans import Span

# Turning spans into something visible is the consumer's job;
# this is just the common part of it: deciding which font, color and size
# a span should use, given the consumer's own defaults.


@dataclass(frozen=True)
class RGBA:
    r: int
    g: int
    b: int
    a: int = 255

    def hex(self) -> str:
        if self.a == 255:
            return f"#{self.r:02x}{self.g:02x}{self.b:02x}"
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}{self.a:02x}"


WHITE = RGBA(255, 255, 255)

hexColorRe = re.compile(r"#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def parseHexColor(text: str) -> RGBA | None:
    match = hexColorRe.match(text.strip())
    if match is None:
        return None
    digits = match[1]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
    return RGBA(*channels)


class FontVariant(Enum):
    REGULAR = "regular"
    BOLD = "bold"
    ITALIC = "italic"
    BOLD_ITALIC = "bold_italic"

    @staticmethod
    def fromFlags(bold: bool, italic: bool) -> FontVariant:
        if bold and italic:
            return FontVariant.BOLD_ITALIC
        if bold:
            return FontVariant.BOLD
        if italic:
            return FontVariant.ITALIC
        return FontVariant.REGULAR


@dataclass(frozen=True)
class StyleDefaults:
    color: RGBA = WHITE
    fontSize: float = 20.0
    # Tags that act as style toggles. Any tag name works;
    # these are just the conventional ones.
    boldTag: str = "b"
    italicTag: str = "i"


@dataclass(frozen=True)
class SpanStyle:
    bold: bool
    italic: bool
    color: RGBA
    fontSize: float

    @property
    def font(self) -> FontVariant:
        return FontVariant.fromFlags(self.bold, self.italic)


def spanColor(span: Span) -> RGBA | None:
    color = span.get("color", RGBA)
    if color is not None:
        return color
    text = span.get("color", str)
    if text is not None:
        return parseHexColor(text)
    return None


def spanFontSize(span: Span) -> float | None:
    size = span.get("font_size", (int, float))
    if size is None or isinstance(size, bool):
        return None
    return float(size)


def resolveStyle(span: Span, defaults: StyleDefaults | None = None) -> SpanStyle:
    if defaults is None:
        defaults = StyleDefaults()
    color = spanColor(span)
    fontSize = spanFontSize(span)
    return SpanStyle(
        bold=span.has(defaults.boldTag),
        italic=span.has(defaults.italicTag),
        color=color if color is not None else defaults.color,
        fontSize=fontSize if fontSize is not None else defaults.fontSize,
    )
