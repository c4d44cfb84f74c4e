from __future__ import annotations

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass, field

from .. import t
from ..errors import UnboundReferenceError

if t.TYPE_CHECKING:
    from .stream import Stream


def quoteString(text: str) -> str:
    # Literals have no escapes, so pick whichever quote isn't in the text.
    if '"' in text:
        return f"'{text}'"
    return f'"{text}"'


def startTagStr(tagName: str, attrs: t.AttrDictT) -> str:
    s = f"<{tagName}"
    for k, v in attrs.items():
        if isinstance(v, ValueExpr):
            s += f" {k}={v.attrStr()}"
        else:
            s += f" {k}={{{v!r}}}"
    s += ">"
    return s


@dataclass
class Word(metaclass=ABCMeta):
    @abstractmethod
    def __str__(self) -> str:
        pass


@dataclass
class Text(Word):
    text: str
    loc: str | None = None

    @classmethod
    def fromStream(cls, s: Stream, start: int, text: str) -> t.Self:
        return cls(text=text, loc=s.loc(start))

    def __str__(self) -> str:
        return "{" + quoteString(self.text) + "}"


@dataclass
class StartTag(Word):
    tag: str
    attrs: t.AttrDictT = field(default_factory=dict)
    loc: str | None = None

    @classmethod
    def fromStream(
        cls,
        s: Stream,
        start: int,
        tag: str,
        attrs: None | t.AttrDictT = None,
    ) -> t.Self:
        if attrs is None:
            attrs = {}
        return cls(tag=tag, attrs=attrs, loc=s.loc(start))

    def __str__(self) -> str:
        return startTagStr(self.tag, self.attrs)

    def printEndTag(self) -> str:
        return f"</{self.tag}>"


@dataclass
class EndTag(Word):
    tag: str
    loc: str | None = None

    @classmethod
    def fromStream(cls, s: Stream, start: int, tag: str) -> t.Self:
        return cls(tag=tag, loc=s.loc(start))

    def __str__(self) -> str:
        return f"</{self.tag}>"


# Attribute values are captured by the tokenizer as small expressions,
# and only evaluated by the compiler, against the caller's bindings,
# when a span actually needs them.


class ValueExpr(metaclass=ABCMeta):
    @abstractmethod
    def evaluate(self, bindings: t.BindingsT, loc: str | None = None) -> t.Any:
        pass

    @abstractmethod
    def __str__(self) -> str:
        pass

    def attrStr(self) -> str:
        # How the value is written after `name=` in a start tag.
        return "{" + str(self) + "}"


@dataclass(frozen=True)
class StringValue(ValueExpr):
    value: str

    def evaluate(self, bindings: t.BindingsT, loc: str | None = None) -> str:
        return self.value

    def __str__(self) -> str:
        return quoteString(self.value)

    def attrStr(self) -> str:
        return str(self)


@dataclass(frozen=True)
class NumberValue(ValueExpr):
    value: int | float

    def evaluate(self, bindings: t.BindingsT, loc: str | None = None) -> int | float:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def attrStr(self) -> str:
        return str(self)


@dataclass(frozen=True)
class Reference(ValueExpr):
    name: str

    def evaluate(self, bindings: t.BindingsT, loc: str | None = None) -> t.Any:
        head, *rest = self.name.split(".")
        if head not in bindings:
            raise UnboundReferenceError(f"'{head}' isn't bound; pass it to the compiler.", loc)
        val = bindings[head]
        for i, part in enumerate(rest):
            try:
                val = getattr(val, part)
            except AttributeError:
                path = ".".join([head, *rest[:i]])
                raise UnboundReferenceError(f"'{path}' has no attribute '{part}'.", loc) from None
        return val

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Call(ValueExpr):
    name: str
    args: tuple[ValueExpr, ...] = ()

    def evaluate(self, bindings: t.BindingsT, loc: str | None = None) -> t.Any:
        func = Reference(self.name).evaluate(bindings, loc)
        if not callable(func):
            raise UnboundReferenceError(f"'{self.name}' is bound to a {type(func).__name__}, which isn't callable.", loc)
        return func(*(arg.evaluate(bindings, loc) for arg in self.args))

    def __str__(self) -> str:
        return f"{self.name}({', '.join(str(arg) for arg in self.args)})"
