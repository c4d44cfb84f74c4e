from __future__ import annotations

from .. import t

ValT = t.TypeVar("ValT")


class MoveOnly:
    """
    Base class for attribute values that must never be duplicated,
    only handed from one owner to the next.

    An AttributeBag won't expose these through get();
    the only way out is take(), which removes them from the bag.
    """

    def __copy__(self) -> t.NoReturn:
        msg = f"{type(self).__name__} is move-only and can't be copied."
        raise TypeError(msg)

    def __deepcopy__(self, memo: dict) -> t.NoReturn:
        msg = f"{type(self).__name__} is move-only and can't be copied."
        raise TypeError(msg)


class OneShot(MoveOnly):
    """A callback that can be invoked exactly once."""

    def __init__(self, func: t.Callable[..., t.Any]) -> None:
        self._func = func
        self.fired = False

    def __call__(self, *args: t.Any, **kwargs: t.Any) -> t.Any:
        if self.fired:
            msg = f"OneShot({self._func!r}) was already fired."
            raise RuntimeError(msg)
        self.fired = True
        return self._func(*args, **kwargs)

    def __repr__(self) -> str:
        state = "fired" if self.fired else "armed"
        return f"<OneShot {self._func!r} ({state})>"


def isMoveOnly(val: t.Any) -> bool:
    return isinstance(val, MoveOnly)


class AttributeBag:
    """
    Attribute name -> value, where values are of any type.

    Reads are typed: get() and take() accept the type you expect,
    and a value of some other type is treated as absent
    rather than as an error.

    There's no locking; if several threads take() from one bag,
    the caller has to serialize them.
    """

    __slots__ = ("_values",)

    def __init__(self, values: t.Mapping[str, t.Any] | None = None) -> None:
        self._values: dict[str, t.Any] = dict(values) if values else {}

    def set(self, name: str, value: t.Any) -> None:
        self._values[name] = value

    @t.overload
    def get(self, name: str) -> t.Any: ...

    @t.overload
    def get(self, name: str, kind: type[ValT]) -> ValT | None: ...

    def get(self, name: str, kind: t.Any = object) -> t.Any:
        val = self._values.get(name)
        if val is None or not isinstance(val, kind) or isMoveOnly(val):
            return None
        return val

    @t.overload
    def take(self, name: str) -> t.Any: ...

    @t.overload
    def take(self, name: str, kind: type[ValT]) -> ValT | None: ...

    def take(self, name: str, kind: t.Any = object) -> t.Any:
        if name not in self._values or not isinstance(self._values[name], kind):
            return None
        return self._values.pop(name)

    def names(self) -> list[str]:
        return list(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> t.Iterator[str]:
        return iter(list(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AttributeBag):
            return self._values == other._values
        return NotImplemented

    # Bags are mutable (take() drains them), so they can't be hashed.
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v!r}" for k, v in self._values.items())
        return f"AttributeBag({inner})"
