# pylint: skip-file
# Module for holding types, for easy importing into the rest of the codebase
from __future__ import annotations

import sys

# The only things that should be available during runtime.
from typing import TYPE_CHECKING, Generic, TypeVar, cast, overload

# Only available in 3.11, so stub them out for earlier versions
if sys.version_info >= (3, 11):
    from typing import assert_never
else:
    from typing_extensions import assert_never


if TYPE_CHECKING:
    from typing import (
        Any,
        Callable,
        Collection,
        ContextManager,
        Generator,
        Iterable,
        Iterator,
        Literal,
        Mapping,
        NoReturn,
        MutableMapping,
        Sequence,
        TextIO,
        Type,
        TypeAlias,
    )

    from typing_extensions import (
        Self,
    )

    from .parser.nodes import EndTag, StartTag, Text, ValueExpr

    WordT: TypeAlias = "Text | StartTag | EndTag"

    # Attribute values on a start tag are either captured by the tokenizer
    # as unevaluated expressions, or are arbitrary objects
    # when the words are built directly in Python.
    AttrValueT: TypeAlias = "ValueExpr | Any"
    AttrDictT: TypeAlias = "dict[str, AttrValueT]"

    BindingsT: TypeAlias = "Mapping[str, Any]"
