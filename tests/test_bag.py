from __future__ import annotations

import copy

import pytest

from htmllite import AttributeBag, MoveOnly, OneShot, Span


def test_set_and_typed_get():
    bag = AttributeBag()
    bag.set("color", "#fff")
    bag.set("font_size", 12)
    assert bag.get("color") == "#fff"
    assert bag.get("color", str) == "#fff"
    assert bag.get("font_size", int) == 12
    # A type mismatch is just a miss.
    assert bag.get("color", int) is None
    assert bag.get("missing", str) is None
    # ...and reading never consumes anything.
    assert bag.get("color", str) == "#fff"
    assert len(bag) == 2


def test_set_overwrites():
    bag = AttributeBag({"x": 1})
    bag.set("x", "two")
    assert bag.get("x", int) is None
    assert bag.get("x", str) == "two"


def test_take_removes_the_value():
    bag = AttributeBag({"x": 1, "y": 2})
    assert bag.take("x", int) == 1
    assert "x" not in bag
    assert bag.take("x", int) is None
    assert bag.get("x") is None
    assert list(bag) == ["y"]


def test_take_with_the_wrong_type_leaves_the_bag_alone():
    bag = AttributeBag({"x": 1})
    assert bag.take("x", str) is None
    assert bag.names() == ["x"]
    assert bag.take("x") == 1


class Handle(MoveOnly):
    pass


def test_move_only_values_only_come_out_through_take():
    handle = Handle()
    bag = AttributeBag()
    bag.set("h", handle)
    assert "h" in bag
    assert bag.get("h") is None
    assert bag.get("h", Handle) is None
    assert bag.take("h", Handle) is handle
    assert bag.take("h", Handle) is None


def test_move_only_values_cant_be_copied():
    with pytest.raises(TypeError):
        copy.copy(Handle())
    with pytest.raises(TypeError):
        copy.deepcopy(OneShot(print))


def test_one_shot_fires_once():
    calls = []
    shot = OneShot(lambda x: calls.append(x) or "done")
    assert not shot.fired
    assert shot("a") == "done"
    assert shot.fired
    with pytest.raises(RuntimeError):
        shot("b")
    assert calls == ["a"]


def test_span_delegates_to_its_bag():
    shot = OneShot(print)
    span = Span("hi", ("b", "i"), AttributeBag({"click": shot, "color": "#000"}))
    assert span.has("b")
    assert not span.has("u")
    assert span.get("color", str) == "#000"
    assert span.get("click") is None
    assert span.take("click", OneShot) is shot
    assert span.take("click", OneShot) is None
    assert span.get("click", OneShot) is None
    assert span.attributes.names() == ["color"]


def test_bags_compare_by_contents():
    assert AttributeBag({"x": 1, "y": "two"}) == AttributeBag({"y": "two", "x": 1})
    assert AttributeBag({"x": 1}) != AttributeBag({"x": 2})
    bag = AttributeBag({"x": 1})
    bag.take("x")
    assert bag == AttributeBag()
    with pytest.raises(TypeError):
        hash(bag)
