# pylint: disable=wrong-import-position

from __future__ import annotations

import platform
import sys


def verify_python_version() -> None:
    if sys.version_info < (3, 9):
        print(
            """htmllite requires Python 3.9 or higher; you are on {}.""".format(
                platform.python_version(),
            ),
        )
        sys.exit(1)


verify_python_version()

from . import messages, parser, spans, style
from .errors import (
    CompileError,
    CompilerStateError,
    GrammarError,
    MismatchedTagError,
    ScopeError,
    SharedResourceError,
    UnboundReferenceError,
    UnclosedTagError,
    UnstartedTagError,
    UnterminatedInputError,
)
from .parser import (
    DEFAULT_PARSE_CONFIG,
    EndTag,
    ParseConfig,
    StartTag,
    Text,
    parseWords,
    wordsFromMarkup,
)
from .spans import (
    AttributeBag,
    CompilerState,
    MoveOnly,
    OneShot,
    ScopeStack,
    Span,
    SpanCompiler,
    Spans,
    compileMarkup,
    compileWords,
    tryCompileMarkup,
)
from .style import (
    FontVariant,
    RGBA,
    SpanStyle,
    StyleDefaults,
    parseHexColor,
    resolveStyle,
)
