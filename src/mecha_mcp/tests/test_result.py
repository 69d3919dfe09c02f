"""Tests for the Result monad.

Validates:
- Functor and monad laws
- Extraction and matching on both variants
- Equality and hashing
"""

from __future__ import annotations

from typing import Callable

import pytest

from mecha_mcp.foundation.errors import Err, ErrorCode, Ok, Result, error_info


# ═════════════════════════════════════════════════════════════════════════════
# Laws
# ═════════════════════════════════════════════════════════════════════════════


def test_functor_identity() -> None:
    """fmap id = id"""
    assert Ok(42).map(lambda x: x) == Ok(42)
    assert Err("fail").map(lambda x: x) == Err("fail")


def test_functor_composition() -> None:
    """fmap (f . g) = fmap f . fmap g"""
    f: Callable[[int], int] = lambda x: x + 1
    g: Callable[[int], int] = lambda x: x * 2
    result: Result[int, str] = Ok(5)

    assert result.map(lambda x: f(g(x))) == result.map(g).map(f)


def test_monad_left_identity() -> None:
    """return a >>= f = f a"""
    f: Callable[[int], Result[int, str]] = lambda x: Ok(x * 2)
    assert Ok(21).flat_map(f) == f(21)


def test_monad_right_identity() -> None:
    """m >>= return = m"""
    m: Result[int, str] = Ok(42)
    assert m.flat_map(Ok) == m


def test_flat_map_short_circuits_on_err() -> None:
    calls: list[int] = []
    result: Result[int, str] = Err("boom")

    assert result.flat_map(lambda x: calls.append(x) or Ok(x)) == Err("boom")
    assert calls == []


# ═════════════════════════════════════════════════════════════════════════════
# Extraction
# ═════════════════════════════════════════════════════════════════════════════


def test_unwrap_variants() -> None:
    assert Ok(1).unwrap() == 1
    assert Err("e").unwrap_err() == "e"
    assert Err("e").unwrap_or(0) == 0
    with pytest.raises(RuntimeError):
        Err("e").unwrap()
    with pytest.raises(RuntimeError):
        Ok(1).unwrap_err()


def test_ok_and_err_accessors() -> None:
    assert Ok(None).is_ok() and Ok(None).ok() is None and Ok(None).err() is None
    assert Err("e").is_err() and Err("e").ok() is None and Err("e").err() == "e"


def test_match_and_map_err() -> None:
    err = error_info("Not found", status_code=404, code=ErrorCode.HTTP_ERROR)
    result: Result[str, object] = Err(err)

    assert result.match(ok=str.upper, err=lambda e: e.message) == "Not found"
    assert result.map_err(lambda e: e.status_code) == Err(404)
    assert Ok("hi").match(ok=str.upper, err=str) == "HI"


def test_inspect_err_and_iter() -> None:
    seen: list[str] = []
    Err("x").inspect_err(seen.append)
    Ok("y").inspect_err(seen.append)

    assert seen == ["x"]
    assert list(Ok(3)) == [3]
    assert list(Err(3)) == []


# ═════════════════════════════════════════════════════════════════════════════
# Dunder
# ═════════════════════════════════════════════════════════════════════════════


def test_equality_distinguishes_variants() -> None:
    assert Ok(1) != Err(1)
    assert Ok([1, 2]) == Ok([1, 2])


def test_hash_is_stable_for_unhashable_values() -> None:
    assert hash(Ok({"a": [1]})) == hash(Ok({"a": [1]}))
    assert len({Ok(1), Ok(1), Err(1)}) == 2


def test_bool_and_repr() -> None:
    assert Ok(0) and not Err(0)
    assert repr(Ok("a")) == "Ok('a')"
    assert repr(Err(1)) == "Err(1)"
