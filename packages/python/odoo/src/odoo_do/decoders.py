"""
Decoders turning raw XML-RPC results into the types operations return.

Each decoder either returns a value of its declared type or raises
UnexpectedResponseError. bool is a subclass of int in Python, so integer
decoders reject booleans explicitly: Odoo answers ``False`` where an id was
expected when a call silently did nothing.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from .errors import UnexpectedResponseError
from .types import RpcValue

__all__ = ["Decoder", "raw", "as_int", "as_bool", "as_id_list", "as_mapping"]

T = TypeVar("T")

Decoder = Callable[[RpcValue], T]


def raw(value: RpcValue) -> RpcValue:
    """Return the value unchanged."""
    return value


def as_int(value: RpcValue) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise UnexpectedResponseError("an integer", value)
    return value


def as_bool(value: RpcValue) -> bool:
    if not isinstance(value, bool):
        raise UnexpectedResponseError("a boolean", value)
    return value


def as_id_list(value: RpcValue) -> list[int]:
    """Decode a list of record ids, preserving server order."""
    if not isinstance(value, (list, tuple)):
        raise UnexpectedResponseError("a list of ids", value)
    ids: list[int] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, int):
            raise UnexpectedResponseError("a list of ids", value)
        ids.append(item)
    return ids


def as_mapping(value: RpcValue) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise UnexpectedResponseError("a mapping", value)
    return value
