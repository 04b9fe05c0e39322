"""
Configuration management for odoo.do

This module provides the global connection settings used when connect() is
called without an explicit ClientConfig.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import ClientConfig


def _get_env(key: str) -> str | None:
    """Get environment variable value."""
    return os.environ.get(key)


# Global configuration
_global_config: dict[str, str | None] = {
    "url": _get_env("ODOO_URL") or "http://localhost:8069",
    "db": _get_env("ODOO_DB"),
    "username": _get_env("ODOO_USERNAME"),
    "password": _get_env("ODOO_PASSWORD"),
}


def configure(
    *,
    url: str | None = None,
    db: str | None = None,
    username: str | None = None,
    password: str | None = None,
) -> None:
    """
    Configure the default Odoo connection.

    Args:
        url: Base URL of the Odoo server (default: http://localhost:8069)
        db: Database name
        username: Login of the user to authenticate as
        password: Password or API key of that user

    Example::

        from odoo_do import configure

        configure(
            url="https://erp.example.com",
            db="production",
            username="admin",
            password="secret",
        )
    """
    global _global_config

    if url is not None:
        _global_config["url"] = url
    if db is not None:
        _global_config["db"] = db
    if username is not None:
        _global_config["username"] = username
    if password is not None:
        _global_config["password"] = password


def get_config() -> "ClientConfig":
    """
    Get the current default connection settings.

    Fields that were never configured are returned as empty strings, so the
    result fails ClientConfig.is_valid() until they are set.

    Example::

        from odoo_do import get_config

        config = get_config()
        print(f"Odoo URL: {config.url}")
    """
    from .types import ClientConfig

    return ClientConfig(
        url=_global_config["url"] or "http://localhost:8069",
        db=_global_config["db"] or "",
        username=_global_config["username"] or "",
        password=_global_config["password"] or "",
    )


def configure_from_env() -> None:
    """
    Configure the default connection from environment variables.

    Reads from:
        - ODOO_URL
        - ODOO_DB
        - ODOO_USERNAME
        - ODOO_PASSWORD
    """
    configure(
        url=_get_env("ODOO_URL"),
        db=_get_env("ODOO_DB"),
        username=_get_env("ODOO_USERNAME"),
        password=_get_env("ODOO_PASSWORD"),
    )
