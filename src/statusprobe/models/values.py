# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dynamic values extracted from responses."""

from __future__ import annotations

from typing import Any, Final


class _Absent:
    """Marker for a value that does not exist (missing header, unresolved JSON path)."""

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __copy__(self) -> _Absent:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Absent:
        return self

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT: Final = _Absent()

# str | int | float | bool | None | list | dict, or ABSENT.
DynamicValue = Any


def is_absent(value: Any) -> bool:
    return value is ABSENT


__all__ = ["ABSENT", "DynamicValue", "is_absent"]
