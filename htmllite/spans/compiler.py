from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .. import messages as m
from .. import t
from ..errors import CompileError, CompilerStateError, SharedResourceError, UnclosedTagError
from ..parser import DEFAULT_PARSE_CONFIG, EndTag, ParseConfig, StartTag, Text, ValueExpr, wordsFromMarkup
from .bag import AttributeBag, isMoveOnly
from .scope import ScopeStack
from .span import Span, Spans


class CompilerState(Enum):
    Ready = "ready"
    InScope = "in scope"
    Failed = "failed"
    Finished = "finished"

    @property
    def isTerminal(self) -> bool:
        return self in (CompilerState.Failed, CompilerState.Finished)


@dataclass
class SpanCompiler:
    """
    Walks a word stream, tracking the open tags,
    and turns every text word into a Span.

    Any error moves the compiler to Failed for good;
    there's no recovery and no partial output.
    """

    bindings: t.BindingsT = field(default_factory=dict)
    scopes: ScopeStack = field(default_factory=ScopeStack)
    spans: list[Span] = field(default_factory=list)
    state: CompilerState = CompilerState.Ready
    # id() -> (value, index of the owning span, attribute name, loc of the owning span).
    # The value is held so its id can't be reused while we're compiling.
    _owned: dict[int, tuple[t.Any, int, str, str | None]] = field(default_factory=dict)

    def feed(self, word: t.WordT) -> Span | None:
        if self.state.isTerminal:
            raise CompilerStateError(f"Can't feed a word to a compiler that's already {self.state.value}.", word.loc)
        try:
            return self._feed(word)
        except CompileError:
            self.state = CompilerState.Failed
            raise

    def _feed(self, word: t.WordT) -> Span | None:
        if isinstance(word, StartTag):
            self.scopes.push(word.tag, word.attrs, word.loc)
            self.state = CompilerState.InScope
            return None
        elif isinstance(word, EndTag):
            self.scopes.pop(word.tag, word.loc)
            self.state = CompilerState.InScope if self.scopes.depth else CompilerState.Ready
            return None
        elif isinstance(word, Text):
            span = Span(
                text=word.text,
                tags=self.scopes.snapshotTags(),
                attributes=self.evaluateAttributes(word.loc),
                loc=word.loc,
            )
            self.spans.append(span)
            return span
        else:
            t.assert_never(word)

    def feedAll(self, words: t.Iterable[t.WordT]) -> SpanCompiler:
        try:
            for word in words:
                self.feed(word)
        except CompileError:
            # Errors from the word source itself (ie the tokenizer) fail us too,
            # but a compiler that already finished stays finished.
            if not self.state.isTerminal:
                self.state = CompilerState.Failed
            raise
        return self

    def finish(self) -> Spans:
        if self.state.isTerminal:
            raise CompilerStateError(f"Can't finish a compiler that's already {self.state.value}.")
        if self.scopes.depth:
            self.state = CompilerState.Failed
            innermost = self.scopes.entries[-1]
            raise UnclosedTagError(
                f"Reached the end of the markup with elements still open.\nOpen tags: {', '.join(self.scopes.printOpenTags())}",
                innermost.loc,
            )
        self.state = CompilerState.Finished
        return Spans(self.spans)

    def evaluateAttributes(self, spanLoc: str | None) -> AttributeBag:
        bag = AttributeBag()
        for name, val in self.scopes.snapshotAttributes().items():
            entry = self.scopes.definingEntry(name)
            tagLoc = entry.loc if entry else None
            if isinstance(val, ValueExpr):
                val = val.evaluate(self.bindings, tagLoc)
            if isMoveOnly(val):
                self.claim(name, val, tagLoc, spanLoc)
            bag.set(name, val)
        return bag

    def claim(self, name: str, val: t.Any, tagLoc: str | None, spanLoc: str | None) -> None:
        # A move-only value can only ever have one owner: one attribute of one span.
        # Spans are appended after their attributes are evaluated,
        # so the span being built is always at index len(self.spans).
        spanIndex = len(self.spans)
        if id(val) in self._owned:
            _, ownerIndex, ownerName, ownerLoc = self._owned[id(val)]
            if ownerIndex == spanIndex:
                owner = f"attribute '{ownerName}' of the same span"
            elif ownerLoc:
                owner = f"another span, at {ownerLoc}"
            else:
                owner = "another, earlier span"
            raise SharedResourceError(
                f"Attribute '{name}' holds a move-only {type(val).__name__} that already belongs to {owner}. "
                + f"Construct it inline (like {name}={{Factory(...)}}) so each owner gets its own.",
                tagLoc or spanLoc,
            )
        self._owned[id(val)] = (val, spanIndex, name, spanLoc)


def compileWords(words: t.Iterable[t.WordT], /, **bindings: t.Any) -> Spans:
    return SpanCompiler(bindings=bindings).feedAll(words).finish()


def compileMarkup(text: str, config: ParseConfig | None = None, /, **bindings: t.Any) -> Spans:
    """
    Tokenizes and compiles `text` in one go.
    Names used in attribute values (like click={handler})
    are looked up in `bindings`.
    """
    if config is None:
        config = DEFAULT_PARSE_CONFIG
    return compileWords(wordsFromMarkup(text, config), **bindings)


def tryCompileMarkup(text: str, config: ParseConfig | None = None, /, **bindings: t.Any) -> Spans | None:
    # For callers that would rather skip a bad markup payload than abort:
    # the failure is reported as a fatal message instead of raised.
    try:
        return compileMarkup(text, config, **bindings)
    except CompileError as err:
        m.dieFromError(err)
        return None
