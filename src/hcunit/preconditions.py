"""Fail-fast argument checks."""

from __future__ import annotations

from .errors import InvalidArgumentError


def check_argument(condition: object, message: str = "Invalid argument") -> None:
    if not condition:
        raise InvalidArgumentError(message)
