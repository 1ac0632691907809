"""Test helpers (small, reusable doubles).

Keep this file tiny: Result-producing parsers for the scope tests and a pair
of exception classes for the adapter tests.
"""

from __future__ import annotations

import json
from typing import Literal

from fallible import Result, failure, success

type ParseJSONError = Literal["InvalidJSON"]
type ParseIntegerError = Literal["NotInteger"]
type ParseError = ParseJSONError | ParseIntegerError


def parse_json(raw: str) -> Result[object, ParseJSONError]:
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        return failure("InvalidJSON")
    return success(value)


def parse_integer(value: object) -> Result[int, ParseIntegerError]:
    try:
        number = int(str(value))
    except ValueError:
        return failure("NotInteger")
    return success(number)


async def async_parse_json(raw: str) -> Result[object, ParseJSONError]:
    return parse_json(raw)


async def async_parse_integer(value: object) -> Result[int, ParseIntegerError]:
    return parse_integer(value)


class DomainError(Exception):
    """An expected, typed failure raised by code under adaptation."""


class OtherDomainError(Exception):
    """A second expected failure unrelated to ``DomainError``."""
