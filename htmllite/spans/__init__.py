from .bag import (
    AttributeBag,
    MoveOnly,
    OneShot,
    isMoveOnly,
)
from .compiler import (
    CompilerState,
    SpanCompiler,
    compileMarkup,
    compileWords,
    tryCompileMarkup,
)
from .scope import (
    ScopeEntry,
    ScopeStack,
)
from .span import (
    Span,
    Spans,
)
