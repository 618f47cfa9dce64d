"""Tests for unsubscribe selectors and shape-based coercion."""
from __future__ import annotations

from dataclasses import dataclass

import pytest

from tidal.errors import SelectorError, TidalError
from tidal.selectors import (
    ByCallback,
    ByContext,
    ById,
    ByName,
    ByPair,
    selector_from,
)
from tidal.subscription import Subscription


def _fn(*args) -> None:
    pass


def _other(*args) -> None:
    pass


CTX = object()


def _sub(callback=_fn, context=CTX, id: int = 0) -> Subscription:
    return Subscription(callback=callback, context=context, id=id)


# ---------------------------------------------------------------------------
# selector_from
# ---------------------------------------------------------------------------

class TestSelectorFrom:
    def test_list_pair(self) -> None:
        assert selector_from(["e", _fn]) == ByPair(name="e", callback=_fn)

    def test_tuple_pair(self) -> None:
        assert selector_from(("e", _fn)) == ByPair(name="e", callback=_fn)

    @pytest.mark.parametrize("value", [[], ["e"], ["e", _fn, "extra"]])
    def test_malformed_pair_raises(self, value: list) -> None:
        with pytest.raises(SelectorError) as exc_info:
            selector_from(value)
        assert exc_info.value.value is value
        assert isinstance(exc_info.value, TidalError)

    def test_string_is_name(self) -> None:
        assert selector_from("e") == ByName(name="e")

    def test_int_is_id(self) -> None:
        assert selector_from(42) == ById(id=42)

    def test_zero_is_id(self) -> None:
        assert selector_from(0) == ById(id=0)

    def test_float_is_id(self) -> None:
        selector = selector_from(42.0)
        assert isinstance(selector, ById)
        assert selector.matches("e", _sub(id=42))

    def test_function_is_callback(self) -> None:
        assert selector_from(_fn) == ByCallback(callback=_fn)

    def test_object_is_context(self) -> None:
        assert selector_from(CTX) == ByContext(context=CTX)

    def test_dict_is_context(self) -> None:
        ctx = {"owner": "x"}
        selector = selector_from(ctx)
        assert isinstance(selector, ByContext)
        assert selector.context is ctx

    def test_callable_object_is_callback(self) -> None:
        class Handler:
            def __call__(self) -> None:
                pass

        handler = Handler()
        assert selector_from(handler) == ByCallback(callback=handler)

    @pytest.mark.parametrize("value", [None, True, False])
    def test_none_and_bool_yield_none(self, value) -> None:
        assert selector_from(value) is None


# ---------------------------------------------------------------------------
# matches
# ---------------------------------------------------------------------------

class TestMatches:
    def test_pair_requires_name_and_callback(self) -> None:
        selector = ByPair(name="e", callback=_fn)
        assert selector.matches("e", _sub())
        assert not selector.matches("f", _sub())
        assert not selector.matches("e", _sub(callback=_other))

    def test_name_matches_everything_on_channel(self) -> None:
        selector = ByName(name="e")
        assert selector.matches("e", _sub())
        assert selector.matches("e", _sub(callback=_other, id=7))
        assert not selector.matches("f", _sub())

    def test_callback_ignores_channel(self) -> None:
        selector = ByCallback(callback=_fn)
        assert selector.matches("a", _sub())
        assert selector.matches("b", _sub())
        assert not selector.matches("a", _sub(callback=_other))

    def test_callback_is_identity_for_equal_instances(self) -> None:
        @dataclass
        class Handler:
            def __call__(self) -> None:
                pass

        h1, h2 = Handler(), Handler()
        assert h1 == h2
        assert ByCallback(callback=h1).matches("e", _sub(callback=h1))
        assert not ByCallback(callback=h1).matches("e", _sub(callback=h2))
        assert not ByPair(name="e", callback=h1).matches("e", _sub(callback=h2))

    def test_bound_methods_match_by_receiver_and_function(self) -> None:
        class Owner:
            def handle(self) -> None:
                pass

            def other(self) -> None:
                pass

        a, b = Owner(), Owner()
        selector = ByCallback(callback=a.handle)
        assert selector.matches("e", _sub(callback=a.handle))
        assert not selector.matches("e", _sub(callback=b.handle))
        assert not selector.matches("e", _sub(callback=a.other))

    def test_context_is_identity(self) -> None:
        ctx = {"k": 1}
        selector = ByContext(context=ctx)
        assert selector.matches("e", _sub(context=ctx))
        assert not selector.matches("e", _sub(context={"k": 1}))

    def test_id(self) -> None:
        selector = ById(id=3)
        assert selector.matches("e", _sub(id=3))
        assert not selector.matches("e", _sub(id=4))


class TestSubscription:
    def test_invoke_spreads_args(self) -> None:
        seen: list[tuple] = []
        sub = _sub(callback=lambda *args: seen.append(args))
        sub.invoke((1, "two"))
        assert seen == [(1, "two")]

    def test_frozen(self) -> None:
        sub = _sub()
        with pytest.raises(AttributeError):
            sub.id = 5  # type: ignore[misc]
