"""
Type definitions for odoo.do

This module contains the configuration dataclass and the type aliases used
across the odoo.do package.
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, TypeAlias, Union


# Values XML-RPC can carry: nil, boolean, int, double, string, dateTime,
# base64, array and struct.
RpcScalar: TypeAlias = Union[None, bool, int, float, str, bytes, datetime.datetime]
RpcValue: TypeAlias = Union[RpcScalar, list[Any], tuple[Any, ...], dict[str, Any]]

# Trailing keyword map passed to execute_kw (e.g. {"context": {"lang": "fr_FR"}}).
Context: TypeAlias = Mapping[str, Any]

# Record values for create() and write().
Values: TypeAlias = Mapping[str, Any]


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for one Odoo database."""
    url: str
    db: str
    username: str
    password: str = field(repr=False)

    def missing_fields(self) -> list[str]:
        """Return the names of the mandatory fields that are empty."""
        return [
            f.name for f in fields(self)
            if not isinstance(getattr(self, f.name), str) or not getattr(self, f.name)
        ]

    def is_valid(self) -> bool:
        """Check that every mandatory field is a non-empty string."""
        return not self.missing_fields()
