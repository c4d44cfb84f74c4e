from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .. import t
from .bag import AttributeBag

ValT = t.TypeVar("ValT")


@dataclass(frozen=True)
class Span:
    # A snippet of text, plus everything its enclosing tags said about it.
    text: str
    tags: tuple[str, ...] = ()
    attributes: AttributeBag = field(default_factory=AttributeBag)
    loc: str | None = None

    # Spans hold a mutable bag, so they aren't hashable.
    __hash__ = None  # type: ignore[assignment]

    def has(self, tagName: str) -> bool:
        return tagName in self.tags

    @t.overload
    def get(self, name: str) -> t.Any: ...

    @t.overload
    def get(self, name: str, kind: type[ValT]) -> ValT | None: ...

    def get(self, name: str, kind: t.Any = object) -> t.Any:
        return self.attributes.get(name, kind)

    @t.overload
    def take(self, name: str) -> t.Any: ...

    @t.overload
    def take(self, name: str, kind: type[ValT]) -> ValT | None: ...

    def take(self, name: str, kind: t.Any = object) -> t.Any:
        return self.attributes.take(name, kind)


class Spans(Sequence):
    """The compiled output: spans in source order."""

    __slots__ = ("_spans",)

    def __init__(self, spans: t.Iterable[Span] = ()) -> None:
        self._spans = tuple(spans)

    @classmethod
    def single(cls, span: Span) -> Spans:
        return cls([span])

    @t.overload
    def __getitem__(self, index: int) -> Span: ...

    @t.overload
    def __getitem__(self, index: slice) -> Spans: ...

    def __getitem__(self, index: int | slice) -> Span | Spans:
        if isinstance(index, slice):
            return Spans(self._spans[index])
        return self._spans[index]

    def __len__(self) -> int:
        return len(self._spans)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Spans):
            return self._spans == other._spans
        return NotImplemented

    def __repr__(self) -> str:
        return f"Spans({list(self._spans)!r})"

    @property
    def text(self) -> str:
        return "".join(span.text for span in self._spans)
