# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import math

import pytest

from statusprobe.evaluation.values import format_number, parse_json, render_number, render_string, to_json
from statusprobe.models.values import ABSENT


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (30.0, "30"),
        (1.5, "1.5"),
        (-2.5, "-2.5"),
        (0.1, "0.1"),
        (0.000001, "0.000001"),
        (1e-7, "1e-7"),
        (123e-20, "1.23e-18"),
        (1e20, "100000000000000000000"),
        (1e21, "1e+21"),
        (float("nan"), "NaN"),
        (float("-inf"), "-Infinity"),
    ],
)
def test_format_number_matches_javascript_rendering(value, expected):
    assert format_number(value) == expected


def test_render_string_scalars_and_containers():
    assert render_string(30) == "30"
    assert render_string(True) == "true"
    assert render_string(False) == "false"
    assert render_string(None) == "null"
    assert render_string(ABSENT) == "undefined"
    assert render_string("text") == "text"
    assert render_string([1, "a", None]) == "1,a,"
    assert render_string({"a": 1}) == "[object Object]"


def test_render_number_coercions():
    assert render_number("  42 ") == 42.0
    assert render_number("") == 0.0
    assert render_number("1e3") == 1000.0
    assert render_number("0x1F") == 31.0
    assert render_number("Infinity") == math.inf
    assert render_number(None) == 0.0
    assert render_number(True) == 1.0
    assert render_number([]) == 0.0
    assert render_number(["5"]) == 5.0


@pytest.mark.parametrize("value", ["abc", "inf", "1_000", "12px", ABSENT, [1, 2], {"a": 1}])
def test_render_number_non_numeric_is_nan(value):
    assert math.isnan(render_number(value))


def test_to_json_is_compact_and_normalizes_integral_floats():
    assert to_json(["developer", "typescript"]) == '["developer","typescript"]'
    assert to_json({"a": 1.0, "b": [None, True]}) == '{"a":1,"b":[null,true]}'
    assert to_json("é") == '"é"'


def test_to_json_renders_numbers_like_string_coercion():
    assert to_json([1e-7]) == "[1e-7]"
    assert to_json({"a": 1e21, "b": 0.5}) == '{"a":1e+21,"b":0.5}'
    assert to_json([float("nan"), -float("inf")]) == "[null,null]"
    assert to_json({"kept": 1, "dropped": ABSENT}) == '{"kept":1}'


@pytest.mark.parametrize("value", ["\u0663", "\u0661\u0662", "\uff15"])
def test_render_number_rejects_non_ascii_digits(value):
    assert math.isnan(render_number(value))


def test_parse_json_rejects_non_standard_constants():
    assert parse_json('{"a": [1, 2]}') == {"a": [1, 2]}
    with pytest.raises(ValueError):
        parse_json('{"a": NaN}')
    with pytest.raises(ValueError):
        parse_json("")
