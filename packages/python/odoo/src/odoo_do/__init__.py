"""
odoo-do - XML-RPC client for Odoo servers.

This package provides an async Python client for the Odoo external API with
support for:
- One-shot authentication through the ``common`` service
- ORM methods (read, create, write, unlink, search, search_read, search_count)
- Arbitrary model methods through execute_kw
- Domain construction with prefix operators or typed combinators
- Typed errors with stable codes

Example usage:
    from odoo_do import ClientConfig, clause, connect, new_domain

    async def main():
        client = await connect(ClientConfig(
            url="http://localhost:8069",
            db="test",
            username="admin",
            password="admin",
        ))

        ids = await client.search("res.users", new_domain(clause("active", "=", True)))
        users = await client.read("res.users", ids, ["login", "name"])
        print(users)

        await client.close()

    import asyncio
    asyncio.run(main())
"""

from __future__ import annotations

__version__ = "0.1.0"

from .args import Args, credential_prefix
from .client import OdooClient, connect
from .config import configure, configure_from_env, get_config
from .domain import (
    OP_AND,
    OP_NOT,
    OP_OR,
    Clause,
    Domain,
    all_of,
    any_of,
    clause,
    negate,
    new_domain,
    validate_domain,
)
from .errors import (
    AuthenticationError,
    ErrorCode,
    InvalidConfigError,
    InvalidContextError,
    InvalidDomainError,
    OdooError,
    RpcFault,
    TransportError,
    UnexpectedResponseError,
    is_error_code,
)
from .types import ClientConfig, Context, RpcValue, Values

__all__ = [
    # Main API
    "connect",
    "OdooClient",
    "ClientConfig",
    "Context",
    "Values",
    "RpcValue",
    "Args",
    "credential_prefix",
    # Configuration
    "configure",
    "configure_from_env",
    "get_config",
    # Domains
    "OP_AND",
    "OP_OR",
    "OP_NOT",
    "Clause",
    "Domain",
    "clause",
    "new_domain",
    "all_of",
    "any_of",
    "negate",
    "validate_domain",
    # Errors
    "ErrorCode",
    "OdooError",
    "InvalidConfigError",
    "AuthenticationError",
    "InvalidContextError",
    "InvalidDomainError",
    "TransportError",
    "RpcFault",
    "UnexpectedResponseError",
    "is_error_code",
    # Version
    "__version__",
]
