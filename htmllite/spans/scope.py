from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from .. import t
from ..errors import MismatchedTagError, UnstartedTagError


@dataclass
class ScopeEntry:
    tag: str
    attrs: t.AttrDictT = field(default_factory=dict)
    loc: str | None = None

    def printLoc(self) -> str:
        return f"<{self.tag}> at {self.loc}" if self.loc else f"<{self.tag}>"


@dataclass
class ScopeStack:
    """
    The open tags, outermost first, each with the attributes it defined.

    Also keeps the flattened view of those attributes,
    where an inner tag's value for a name beats any outer tag's.
    """

    entries: list[ScopeEntry] = field(default_factory=list)
    _tagCounts: Counter[str] = field(default_factory=Counter)
    _flat: dict[str, t.Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def depth(self) -> int:
        return len(self.entries)

    def printOpenTags(self) -> list[str]:
        return [x.printLoc() for x in self.entries]

    def inTagContext(self, tagName: str) -> bool:
        return self._tagCounts[tagName] > 0

    def push(self, tag: str, attrs: t.AttrDictT | None = None, loc: str | None = None) -> ScopeEntry:
        entry = ScopeEntry(tag, dict(attrs) if attrs else {}, loc)
        self.entries.append(entry)
        self._tagCounts[tag] += 1
        # A new innermost scope can only override, so no need to rebuild.
        self._flat.update(entry.attrs)
        return entry

    def pop(self, tag: str, loc: str | None = None) -> ScopeEntry:
        if not self.entries:
            raise UnstartedTagError(f"Saw an end tag </{tag}>, but there's no open element corresponding to it.", loc)
        top = self.entries[-1]
        if top.tag != tag:
            raise MismatchedTagError(
                f"Saw an end tag </{tag}>, but the innermost open element is {top.printLoc()}.\nOpen tags: {', '.join(self.printOpenTags())}",
                loc,
            )
        self.entries.pop()
        self._tagCounts[tag] -= 1
        if top.attrs:
            self._reflatten()
        return top

    def _reflatten(self) -> None:
        # Rebuilt from scratch, so a closed scope's attributes are really gone,
        # not just hidden behind whatever an outer scope happened to define.
        self._flat = {}
        for entry in self.entries:
            self._flat.update(entry.attrs)

    def snapshotTags(self) -> tuple[str, ...]:
        return tuple(entry.tag for entry in self.entries)

    def snapshotAttributes(self) -> dict[str, t.Any]:
        return dict(self._flat)

    def definingEntry(self, name: str) -> ScopeEntry | None:
        # The innermost entry that defines `name`, ie where its current value came from.
        for entry in reversed(self.entries):
            if name in entry.attrs:
                return entry
        return None
