from __future__ import annotations

from .. import t

# Parse functions return (value, index, failed) triples.
# On success the index is just past the consumed text;
# on failure it's the start index, so the caller can try something else.
# Failing this way means "this isn't my syntax";
# once a function has committed to a syntax, problems raise a GrammarError instead.

ValT_co = t.TypeVar("ValT_co", covariant=True)
ValT_contra = t.TypeVar("ValT_contra", contravariant=True)
OkT: t.TypeAlias = "tuple[ValT_co, int, t.Literal[False]]"
ErrT: t.TypeAlias = "tuple[None, int, t.Literal[True]]"
ResultT: t.TypeAlias = "OkT[ValT_co] | ErrT"


def Ok(val: ValT_contra, index: int) -> OkT[ValT_contra]:
    return (val, index, False)


def Err(index: int) -> ErrT:
    return (None, index, True)
