"""Result type returned by every backend call.

A call resolves to ``Ok(value)`` or ``Err(error)`` and never raises across
the transport boundary; callers branch on ``is_ok()`` or ``match`` instead
of catching.

    >>> Ok(21).map(lambda x: x * 2)
    Ok(42)
    >>> Err("boom").unwrap_or(0)
    0
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")


class Result(Generic[T, E]):
    """Success or failure; exactly one side is populated.

    ``ok()`` is the value on success and ``None`` otherwise, ``err()`` the
    reverse. Instances are not mutated after construction. Build them with
    ``Ok``/``Err`` rather than directly.
    """

    __slots__ = ("_value", "_ok")
    __match_args__ = ("_value",)

    def __init__(self, value: T | E, ok: bool) -> None:
        self._value = value
        self._ok = ok

    def is_ok(self) -> bool:
        return self._ok

    def is_err(self) -> bool:
        return not self._ok

    def ok(self) -> T | None:
        return self._value if self._ok else None  # type: ignore[return-value]

    def err(self) -> E | None:
        return None if self._ok else self._value  # type: ignore[return-value]

    def unwrap(self) -> T:
        """Value on success. Raises RuntimeError on Err."""
        if not self._ok:
            raise RuntimeError(f"called unwrap() on {self!r}")
        return self._value  # type: ignore[return-value]

    def unwrap_err(self) -> E:
        """Error on failure. Raises RuntimeError on Ok."""
        if self._ok:
            raise RuntimeError(f"called unwrap_err() on {self!r}")
        return self._value  # type: ignore[return-value]

    def unwrap_or(self, default: T) -> T:
        return self._value if self._ok else default  # type: ignore[return-value]

    # ─── Combinators ───────────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        return Ok(f(self._value)) if self._ok else self  # type: ignore[arg-type, return-value]

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        return self if self._ok else Err(f(self._value))  # type: ignore[arg-type, return-value]

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        return f(self._value) if self._ok else self  # type: ignore[arg-type, return-value]

    def match(self, *, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        """Handle both sides; returns whichever handler ran."""
        return ok(self._value) if self._ok else err(self._value)  # type: ignore[arg-type]

    def inspect_err(self, f: Callable[[E], object]) -> Result[T, E]:
        """Run ``f`` on the error (logging, counters) and pass self through."""
        if not self._ok:
            f(self._value)  # type: ignore[arg-type]
        return self

    # ─── Dunder Methods ────────────────────────────────────────────────

    def __bool__(self) -> bool:
        return self._ok

    def __repr__(self) -> str:
        return f"{'Ok' if self._ok else 'Err'}({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self._ok is other._ok and self._value == other._value

    def __hash__(self) -> int:
        # values are often lists/dicts from JSON, so hash their repr
        return hash((self._ok, repr(self._value)))

    def __iter__(self) -> Iterator[T]:
        """Yields the value on success, nothing on failure."""
        if self._ok:
            yield self._value  # type: ignore[misc]


def Ok(value: T) -> Result[T, E]:  # noqa: N802
    return Result(value, True)


def Err(error: E) -> Result[T, E]:  # noqa: N802
    return Result(error, False)
