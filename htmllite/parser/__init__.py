from . import result
from .main import (
    parseWords,
    strFromWords,
    wordsFromMarkup,
)
from .nodes import (
    Call,
    EndTag,
    NumberValue,
    Reference,
    StartTag,
    StringValue,
    Text,
    ValueExpr,
    Word,
)
from .parser import (
    parseWord,
    wordsFromStream,
)
from .stream import (
    DEFAULT_PARSE_CONFIG,
    ParseConfig,
    Stream,
)
