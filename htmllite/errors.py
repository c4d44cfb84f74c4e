from __future__ import annotations


class CompileError(Exception):
    """
    Base for everything that can abort a compilation.
    `loc` is a "line:col" string (possibly with a context suffix),
    or None when the offending word wasn't parsed from text.
    """

    def __init__(self, message: str, loc: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.loc = loc

    def __str__(self) -> str:
        if self.loc is None:
            return self.message
        return f"{self.message} (at {self.loc})"


class GrammarError(CompileError):
    pass


class UnterminatedInputError(CompileError):
    pass


class ScopeError(CompileError):
    pass


class UnstartedTagError(ScopeError):
    pass


class MismatchedTagError(ScopeError):
    pass


class UnclosedTagError(ScopeError):
    pass


class UnboundReferenceError(CompileError):
    pass


class SharedResourceError(CompileError):
    pass


class CompilerStateError(CompileError):
    pass
