from __future__ import annotations

# Character predicates for the markup grammar.
# All of them accept the empty string (what Stream returns past eof)
# and answer False for it.


def isASCIIAlpha(ch: str) -> bool:
    return ch != "" and ("a" <= ch <= "z" or "A" <= ch <= "Z")


def isDigit(ch: str) -> bool:
    return ch != "" and "0" <= ch <= "9"


def isASCIIAlphanum(ch: str) -> bool:
    return isASCIIAlpha(ch) or isDigit(ch)


def isWhitespace(ch: str) -> bool:
    return ch != "" and ch in " \t\n\r\f"


def isTagnameChar(ch: str) -> bool:
    return isASCIIAlphanum(ch) or ch in ("-", "_")


def isAttrNameChar(ch: str) -> bool:
    return isTagnameChar(ch)


def isIdentStartChar(ch: str) -> bool:
    return isASCIIAlpha(ch) or ch == "_"


def isIdentChar(ch: str) -> bool:
    return isASCIIAlphanum(ch) or ch == "_"


def isQuote(ch: str) -> bool:
    return ch != "" and ch in "\"'"
