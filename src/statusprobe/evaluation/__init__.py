# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Check evaluation engine: value comparator, JSON path extractor and evaluator."""

from .comparator import PatternError, compare, compile_pattern
from .evaluator import evaluate_check, evaluate_checks
from .jsonpath import extract, select_element, split_path
from .values import format_number, parse_json, render_number, render_string, to_json

__all__ = [
    "PatternError",
    "compare",
    "compile_pattern",
    "evaluate_check",
    "evaluate_checks",
    "extract",
    "format_number",
    "parse_json",
    "render_number",
    "render_string",
    "select_element",
    "split_path",
    "to_json",
]
