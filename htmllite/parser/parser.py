from __future__ import annotations

import re

from .. import messages as m
from .. import t
from ..errors import GrammarError, UnterminatedInputError
from . import preds
from .nodes import (
    Call,
    EndTag,
    NumberValue,
    Reference,
    StartTag,
    StringValue,
    Text,
    ValueExpr,
)
from .result import Err, Ok, ResultT
from .stream import Stream

NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")


def wordsFromStream(s: Stream, start: int) -> t.Generator[t.WordT, None, None]:
    # Consumes the stream until eof, yielding words.
    # Raises on the first malformed word; nothing after it is produced.
    _, i, _ = parseWhitespace(s, start)
    while not s.eof(i):
        word, i, _ = parseWord(s, i)
        if word is None:
            handleTrailing(s, i)
            return
        yield word
        _, i, _ = parseWhitespace(s, i)


def handleTrailing(s: Stream, start: int) -> None:
    garbage, _, _ = s.remainingTextOnLine(start)
    if len(garbage) > 20:
        garbage = garbage[:20] + "..."
    if s.config.allowTrailing:
        m.warn(f"Ignoring trailing text that isn't a word: {garbage}", lineNum=s.loc(start))
        return
    raise UnterminatedInputError(
        f"Expected a {{text}} literal, a start tag, or an end tag; got: {garbage}",
        s.loc(start),
    )


def parseWord(s: Stream, start: int) -> ResultT[t.WordT]:
    """
    Parses a single word at `start`.
    Fails (without raising) only if the character at `start`
    can't begin a word at all;
    anything that *does* look like the start of a word
    is either parsed successfully or raises a GrammarError.
    """
    if s[start] == "{":
        return parseText(s, start)
    if s[start] == "<":
        if s[start + 1] == "/":
            return parseEndTag(s, start)
        return parseStartTag(s, start)
    return Err(start)


def parseText(s: Stream, start: int) -> ResultT[Text]:
    if s[start] != "{":
        return Err(start)
    _, i, _ = parseWhitespace(s, start + 1)

    # committed now

    if not preds.isQuote(s[i]):
        raise GrammarError("Text words must be a string literal wrapped in {}, like {\"text\"}.", s.loc(start))
    text, i, _ = parseStringLiteral(s, i)
    assert text is not None
    _, i, _ = parseWhitespace(s, i)
    if s[i] != "}":
        raise GrammarError(f"Missing the closing }} of the text word {{{quoteForMessage(text)}.", s.loc(start))
    return Ok(Text.fromStream(s, start, text), i + 1)


def parseStartTag(s: Stream, start: int) -> ResultT[StartTag]:
    if s[start] != "<":
        return Err(start)
    else:
        i = start + 1

    # After the <, we're committed to a start tag,
    # so failure will really be a parse error.

    tagname, i, _ = parseTagName(s, i)
    if tagname is None:
        if s[i] == ">":
            raise GrammarError("Missing start tag name. (Got <>.)", s.loc(start))
        raise GrammarError(f"Expected a tag name after <, got {s.slice(i, i + 10)!r}.", s.loc(start))

    attrs, i, _ = parseAttributeList(s, i, tagname)
    assert attrs is not None

    _, i, _ = parseWhitespace(s, i)

    if s[i] == ">":
        return Ok(StartTag.fromStream(s, start, tagname, attrs), i + 1)

    if s.eof(i):
        raise GrammarError(f"Tag <{tagname}> wasn't closed at end of input.", s.loc(start))
    if s[i] == "/" and s[i + 1] == ">":
        raise GrammarError(f"Self-closing syntax isn't supported (on <{tagname}>).", s.loc(i))

    # If I can, guess at what the 'garbage' is so I can display it.
    # Only look at next 20 chars, tho, so I don't spam the console.
    next20 = s.slice(i, i + 20)
    garbageEnd = min(safeIndex(next20, ">", 20), safeIndex(next20, " ", 20))
    raise GrammarError(
        f"While trying to parse a <{tagname}> start tag, ran into some unparseable stuff ({next20[:garbageEnd]}).",
        s.loc(i),
    )


def parseTagName(s: Stream, start: int) -> ResultT[str]:
    if not preds.isASCIIAlpha(s[start]):
        return Err(start)
    end = start + 1
    while preds.isTagnameChar(s[end]):
        end += 1
    return Ok(s.slice(start, end), end)


def parseEndTag(s: Stream, start: int) -> ResultT[EndTag]:
    if s.slice(start, start + 2) != "</":
        return Err(start)
    i = start + 2

    # committed now

    if s[i] == ">":
        raise GrammarError("Missing end tag name. (Got </>.)", s.loc(start))
    if s.eof(i):
        raise GrammarError("Hit the end of input in the middle of an end tag.", s.loc(start))
    tagname, i, _ = parseTagName(s, i)
    if tagname is None:
        raise GrammarError("Garbage in an end tag.", s.loc(start))
    _, i, _ = parseWhitespace(s, i)
    if s.eof(i):
        raise GrammarError(f"Hit the end of input in the middle of an end tag </{tagname}>.", s.loc(start))
    if s[i] != ">":
        raise GrammarError(f"Garbage after the tagname in </{tagname}>.", s.loc(start))
    i += 1
    return Ok(EndTag.fromStream(s, start, tagname), i)


def parseAttributeList(s: Stream, start: int, tagname: str) -> ResultT[dict[str, ValueExpr]]:
    i = start
    attrs: dict[str, ValueExpr] = {}
    while True:
        ws, i, _ = parseWhitespace(s, i)
        if s.eof(i) or s[i] in ("/", ">"):
            break
        if ws is None:
            raise GrammarError(
                f"Expected whitespace between the attributes of <{tagname}>. ({s.slice(start, i + 5)}...)",
                s.loc(i),
            )
        startAttr = i
        attr, i, _ = parseAttribute(s, i)
        if attr is None:
            break
        attrName, attrValue = attr
        if attrName in attrs:
            m.warn(
                f"Attribute '{attrName}' appears twice in <{tagname}>; the last one wins.",
                lineNum=s.loc(startAttr),
            )
        attrs[attrName] = attrValue
    return Ok(attrs, i)


def parseAttribute(s: Stream, start: int) -> ResultT[tuple[str, ValueExpr]]:
    i = start
    while preds.isAttrNameChar(s[i]):
        i += 1
    if i == start:
        return Err(start)

    # Committed to an attribute

    attrName = s.slice(start, i)
    _, i, _ = parseWhitespace(s, i)
    if s[i] != "=":
        raise GrammarError(f"Attribute '{attrName}' is missing its = and value.", s.loc(start))
    _, i, _ = parseWhitespace(s, i + 1)

    # Now committed to a value too

    if s[i] == "{":
        _, i, _ = parseWhitespace(s, i + 1)
        attrValue, i, _ = parseExpression(s, i)
        if attrValue is None:
            raise GrammarError(f"Garbage inside the {{}} value of {attrName}=.", s.loc(i))
        _, i, _ = parseWhitespace(s, i)
        if s[i] != "}":
            raise GrammarError(f"The {{}} value of {attrName}= was never closed.", s.loc(start))
        i += 1
    else:
        attrValue, i, _ = parseExpression(s, i, allowCall=False)
        if attrValue is None:
            if s.eof(i) or s[i] == ">":
                raise GrammarError(f"Missing attribute value after {attrName}=.", s.loc(i))
            raise GrammarError(f"Garbage after {attrName}=.", s.loc(i))

    return Ok((attrName, attrValue), i)


def parseExpression(s: Stream, start: int, allowCall: bool = True) -> ResultT[ValueExpr]:
    # The embedded value grammar: a string, a number,
    # a (possibly dotted) identifier,
    # or a call of an identifier with expression arguments.
    if preds.isQuote(s[start]):
        text, i, _ = parseStringLiteral(s, start)
        assert text is not None
        return Ok(StringValue(text), i)
    if s[start] == "-" or preds.isDigit(s[start]):
        return parseNumber(s, start)
    name, i, _ = parseIdentifier(s, start)
    if name is None:
        return Err(start)
    if not allowCall:
        return Ok(Reference(name), i)
    _, afterWs, _ = parseWhitespace(s, i)
    if s[afterWs] != "(":
        return Ok(Reference(name), i)
    args, i, _ = parseArguments(s, afterWs, name)
    assert args is not None
    return Ok(Call(name, tuple(args)), i)


def parseArguments(s: Stream, start: int, funcName: str) -> ResultT[list[ValueExpr]]:
    if s[start] != "(":
        return Err(start)
    args: list[ValueExpr] = []
    _, i, _ = parseWhitespace(s, start + 1)
    if s[i] == ")":
        return Ok(args, i + 1)
    while True:
        arg, i, _ = parseExpression(s, i)
        if arg is None:
            raise GrammarError(f"Garbage in the arguments to {funcName}().", s.loc(i))
        args.append(arg)
        _, i, _ = parseWhitespace(s, i)
        if s[i] == ")":
            return Ok(args, i + 1)
        if s[i] != ",":
            raise GrammarError(f"The arguments to {funcName}() were never closed.", s.loc(start))
        _, i, _ = parseWhitespace(s, i + 1)


def parseIdentifier(s: Stream, start: int) -> ResultT[str]:
    i = start
    while True:
        if not preds.isIdentStartChar(s[i]):
            if i == start:
                return Err(start)
            raise GrammarError(f"Expected a name after the . in {s.slice(start, i)}", s.loc(start))
        i += 1
        while preds.isIdentChar(s[i]):
            i += 1
        if s[i] != ".":
            return Ok(s.slice(start, i), i)
        i += 1


def parseNumber(s: Stream, start: int) -> ResultT[NumberValue]:
    match, i, _ = s.matchRe(start, NUMBER_RE)
    if match is None:
        return Err(start)
    text = match[0]
    if "." in text:
        return Ok(NumberValue(float(text)), i)
    return Ok(NumberValue(int(text)), i)


def parseStringLiteral(s: Stream, start: int) -> ResultT[str]:
    quote = s[start]
    if not preds.isQuote(quote):
        return Err(start)
    text, i, _ = s.skipTo(start + 1, quote)
    if text is None:
        raise GrammarError("String literal was never closed.", s.loc(start))
    return Ok(text, i + 1)


def parseWhitespace(s: Stream, start: int) -> ResultT[bool]:
    i = start
    while preds.isWhitespace(s[i]):
        i += 1
    if i != start:
        return Ok(True, i)
    else:
        return Err(start)


def safeIndex(text: str, needle: str, default: int) -> int:
    try:
        return text.index(needle)
    except ValueError:
        return default


def quoteForMessage(text: str) -> str:
    if len(text) > 20:
        text = text[:20] + "..."
    return repr(text)
