from collections import OrderedDict, namedtuple
from dataclasses import dataclass, field

import pytest

from fieldcmp.config import PRETTY_INDENT_ENV_VAR, resolve_pretty_indent
from fieldcmp.core import pretty_repr

Point = namedtuple("Point", ["x", "y"])


@dataclass
class Inner:
    value: int
    hidden: str = field(default="secret", repr=False)


@dataclass
class Outer:
    name: str
    inner: Inner


@dataclass(repr=False)
class Opaque:
    value: int

    def __repr__(self) -> str:
        return "Opaque!"


def test_scalars_use_builtin_repr() -> None:
    assert pretty_repr(10) == "10"
    assert pretty_repr("str") == "'str'"
    assert pretty_repr(None) == "None"
    assert pretty_repr(2.5) == "2.5"


def test_empty_containers_stay_inline() -> None:
    assert pretty_repr([]) == "[]"
    assert pretty_repr(()) == "()"
    assert pretty_repr({}) == "{}"
    assert pretty_repr(set()) == "set()"
    assert pretty_repr(frozenset()) == "frozenset()"


def test_nested_sequences_break_every_element() -> None:
    assert pretty_repr([(1, 2)]) == "[\n    (\n        1,\n        2,\n    ),\n]"


def test_mapping_entries_render_key_and_value() -> None:
    assert pretty_repr({"k": [1]}) == "{\n    'k': [\n        1,\n    ],\n}"


def test_dataclass_renders_repr_fields_only() -> None:
    rendered = pretty_repr(Outer(name="o", inner=Inner(value=3)))

    assert rendered == (
        "Outer(\n"
        "    name='o',\n"
        "    inner=Inner(\n"
        "        value=3,\n"
        "    ),\n"
        ")"
    )


def test_dataclass_with_custom_repr_is_left_alone() -> None:
    assert pretty_repr(Opaque(value=1)) == "Opaque!"


def test_named_tuple_renders_field_names() -> None:
    assert pretty_repr(Point(1, 2)) == "Point(\n    x=1,\n    y=2,\n)"


def test_mapping_subclass_keeps_type_name() -> None:
    assert pretty_repr(OrderedDict(a=1)) == "OrderedDict({\n    'a': 1,\n})"


def test_sets_are_sorted_for_stable_output() -> None:
    assert pretty_repr({3, 1, 2}) == "{\n    1,\n    2,\n    3,\n}"
    assert pretty_repr(frozenset({"b", "a"})) == "frozenset({\n    'a',\n    'b',\n})"


def test_self_referencing_list_does_not_recurse_forever() -> None:
    looped: list = [1]
    looped.append(looped)

    assert pretty_repr(looped) == "[\n    1,\n    [...],\n]"


def test_explicit_indent_width() -> None:
    assert pretty_repr([1], indent=2) == "[\n  1,\n]"


def test_indent_width_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(PRETTY_INDENT_ENV_VAR, "2")

    assert resolve_pretty_indent() == 2
    assert pretty_repr([1]) == "[\n  1,\n]"


@pytest.mark.parametrize(("raw", "expected"), [("abc", 4), ("0", 4), ("-3", 4), ("99", 16), (" 8 ", 8)])
def test_indent_width_env_fallbacks(monkeypatch: pytest.MonkeyPatch, raw: str, expected: int) -> None:
    monkeypatch.setenv(PRETTY_INDENT_ENV_VAR, raw)

    assert resolve_pretty_indent() == expected
