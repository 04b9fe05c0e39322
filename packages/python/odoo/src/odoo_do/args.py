"""
Positional argument lists for Odoo XML-RPC calls.

XML-RPC is positional, so the order values are added in is the order the
server reads them. Every call starts with a credential prefix whose shape
depends on whether the session has authenticated yet.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .types import ClientConfig

__all__ = ["Args", "credential_prefix"]


class Args(list):
    """Ordered, append-only list of positional arguments for one call."""

    def add(self, *values: Any) -> "Args":
        """
        Append one or more values, in order.

        Returns:
            The same Args instance, for chaining
        """
        self.extend(values)
        return self


def credential_prefix(config: ClientConfig, uid: int = 0) -> Args:
    """
    Build the credentials every call starts with.

    Before authentication this is ``[db, username, password, {}]``, the
    signature of ``common.authenticate`` (the last item is the user agent
    environment). Once a uid is known it is ``[db, uid, password]``, the
    prefix of ``object.execute_kw``.
    """
    if uid:
        return Args([config.db, uid, config.password])
    return Args([config.db, config.username, config.password, {}])
