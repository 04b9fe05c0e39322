"""
OdooClient - authenticated XML-RPC session against an Odoo server.

The client logs in once through the ``common`` service, keeps the returned
user id, and sends every model method through ``object.execute_kw`` with
that id as credential.

The session is meant to be owned by one task at a time. Authentication and
close() are serialized by a lock; concurrent model calls on one session are
allowed but share its uid.
"""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType
from typing import Any, Sequence, TypeVar

import httpx

from .args import Args, credential_prefix
from .config import get_config
from .decoders import Decoder, as_bool, as_id_list, as_int, as_mapping, raw
from .errors import AuthenticationError, InvalidConfigError, InvalidContextError, OdooError
from .transport import COMMON_PATH, OBJECT_PATH, XmlRpcEndpoint, build_endpoint_url
from .types import ClientConfig, Context, RpcValue, Values

__all__ = ["OdooClient", "connect"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OdooClient:
    """
    XML-RPC client for one Odoo database and user.

    Example:
        client = await connect(ClientConfig(
            url="http://localhost:8069",
            db="test",
            username="admin",
            password="admin",
        ))

        ids = await client.search("res.users", new_domain(clause("active", "=", True)))
        users = await client.read("res.users", ids, ["login", "name"])

        await client.close()
    """

    __slots__ = (
        "_config",
        "_uid",
        "_authenticated",
        "_closed",
        "_lock",
        "_common",
        "_object",
    )

    def __init__(
        self,
        config: ClientConfig,
        *,
        timeout: float | None = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """
        Validate the configuration and open both endpoints, unauthenticated.

        Most callers should use connect(), which also authenticates.

        Args:
            config: Connection settings; every field must be non-empty
            timeout: HTTP timeout in seconds for every call
            transport: Optional httpx transport shared by both endpoints
            headers: Extra HTTP headers sent with every call

        Raises:
            InvalidConfigError: A mandatory field of config is empty
        """
        missing = config.missing_fields()
        if missing:
            raise InvalidConfigError(config, missing)

        self._config = config
        self._uid = 0
        self._authenticated = False
        self._closed = False
        self._lock = asyncio.Lock()
        self._common = XmlRpcEndpoint(
            build_endpoint_url(config.url, COMMON_PATH),
            timeout=timeout,
            transport=transport,
            headers=headers,
        )
        self._object = XmlRpcEndpoint(
            build_endpoint_url(config.url, OBJECT_PATH),
            timeout=timeout,
            transport=transport,
            headers=headers,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def uid(self) -> int:
        """User id of the authenticated session, 0 before login and after close."""
        return self._uid

    @property
    def is_authenticated(self) -> bool:
        return self._uid != 0 and self._authenticated

    @property
    def is_closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    async def authenticate(self) -> int:
        """
        Log in with the configured credentials.

        Does nothing if the session is already authenticated.

        Returns:
            The authenticated user id

        Raises:
            AuthenticationError: The server rejected the credentials, the
                call failed, or the session is closed
        """
        async with self._lock:
            if self._closed:
                raise AuthenticationError(self._config, "session is closed")
            if self.is_authenticated:
                return self._uid

            try:
                uid = await self._common.call("authenticate", credential_prefix(self._config))
            except OdooError as e:
                logger.warning(
                    "Authentication call to %s failed: %s", self._common.url, e.message
                )
                raise AuthenticationError(self._config, e.message) from e

            if isinstance(uid, bool) or not isinstance(uid, int) or uid <= 0:
                logger.warning(
                    "Authentication rejected for user %s on database %s",
                    self._config.username,
                    self._config.db,
                )
                raise AuthenticationError(self._config, "invalid credentials")

            self._uid = uid
            self._authenticated = True
            logger.info(
                "Authenticated to %s on %s as uid %d",
                self._config.url,
                self._config.db,
                uid,
            )
            return uid

    async def close(self) -> None:
        """
        Forget the session and close both endpoints.

        The client cannot authenticate again afterwards; open a new one with
        connect(). Safe to call more than once.
        """
        async with self._lock:
            self._uid = 0
            self._authenticated = False
            self._closed = True
            try:
                await self._common.close()
            finally:
                await self._object.close()

    # ------------------------------------------------------------------
    # Generic dispatch
    # ------------------------------------------------------------------

    async def execute_kw(
        self,
        method: str,
        model: str,
        args: Sequence[Any] = (),
        *context: Context,
    ) -> RpcValue:
        """
        Call any model method through ``object.execute_kw``.

        See https://www.odoo.com/documentation/17.0/developer/reference/external_api.html

        Args:
            method: Model method name (e.g. "action_confirm")
            model: Model name (e.g. "sale.order")
            args: Positional arguments of the method
            *context: At most one keyword map, sent as the last argument
                (e.g. {"context": {"lang": "fr_FR"}})

        Returns:
            The raw decoded response

        Raises:
            InvalidContextError: More than one context map was given
            AuthenticationError: The session is not authenticated
            RpcFault: The server raised an error
            TransportError: The HTTP call failed
        """
        if len(context) > 1:
            raise InvalidContextError(len(context))
        if not self.is_authenticated:
            raise AuthenticationError(self._config, "session is not authenticated")

        params = credential_prefix(self._config, self._uid)
        params.add(model, method, list(args))
        if context:
            params.add(dict(context[0]))

        logger.debug("execute_kw %s.%s", model, method)
        return await self._object.call("execute_kw", params)

    async def _call(
        self,
        method: str,
        model: str,
        args: Args,
        decoder: Decoder[T],
        context: tuple[Context, ...],
    ) -> T:
        response = await self.execute_kw(method, model, args, *context)
        return decoder(response)

    # ------------------------------------------------------------------
    # ORM methods
    # ------------------------------------------------------------------

    async def read(
        self,
        model: str,
        ids: Sequence[int],
        fields: Sequence[str] | None = None,
        *context: Context,
    ) -> Any:
        """
        Read records by id.

        Without fields, every field the user can read is returned, which
        tends to be a lot.

        Returns:
            A list with one mapping of field values per record
        """
        args = Args([list(ids)])
        if fields:
            args.add(list(fields))
        return await self._call("read", model, args, raw, context)

    async def create(self, model: str, values: Values, *context: Context) -> int:
        """
        Create one record and return its id.

        Fields missing from values get their default value.
        """
        return await self._call("create", model, Args([dict(values)]), as_int, context)

    async def write(
        self,
        model: str,
        ids: Sequence[int],
        values: Values,
        *context: Context,
    ) -> bool:
        """Update the given records with the same field values."""
        args = Args([list(ids), dict(values)])
        return await self._call("write", model, args, as_bool, context)

    async def unlink(self, model: str, ids: Sequence[int], *context: Context) -> bool:
        """Delete records in bulk."""
        return await self._call("unlink", model, Args([list(ids)]), as_bool, context)

    async def search(self, model: str, domain: Sequence[Any], *context: Context) -> list[int]:
        """
        Return the ids of all records matching domain.

        An empty domain matches every record.
        """
        return await self._call("search", model, Args([list(domain)]), as_id_list, context)

    async def search_read(
        self,
        model: str,
        domain: Sequence[Any],
        fields: Sequence[str] | None = None,
        *context: Context,
    ) -> Any:
        """
        Search and read in a single request.

        Equivalent to search() followed by read(); without fields every
        readable field of the matched records is returned.
        """
        args = Args([list(domain)])
        if fields:
            args.add(list(fields))
        return await self._call("search_read", model, args, raw, context)

    async def search_count(self, model: str, domain: Sequence[Any], *context: Context) -> int:
        """Count the records matching domain."""
        return await self._call("search_count", model, Args([list(domain)]), as_int, context)

    async def version(self) -> dict[str, Any]:
        """Return the server version information. Needs no authentication."""
        response = await self._common.call("version", [])
        return as_mapping(response)

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    async def __aenter__(self) -> OdooClient:
        await self.authenticate()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    def __repr__(self) -> str:
        if self._closed:
            state = "closed"
        elif self.is_authenticated:
            state = f"uid={self._uid}"
        else:
            state = "unauthenticated"
        return f"OdooClient({self._config.url!r}, db={self._config.db!r}, {state})"


async def connect(config: ClientConfig | None = None, **options: Any) -> OdooClient:
    """
    Open a session and authenticate.

    Args:
        config: Connection settings (default: get_config())
        **options: Client options
            - timeout: HTTP timeout in seconds (default: 30.0)
            - transport: httpx transport to use instead of the network
            - headers: Extra HTTP headers

    Returns:
        An authenticated OdooClient

    Raises:
        InvalidConfigError: A mandatory field is empty; nothing was sent
        AuthenticationError: Login failed; both endpoints are closed again

    Example:
        client = await connect(ClientConfig(
            url="https://erp.example.com",
            db="production",
            username="bot",
            password=api_key,
        ))
    """
    client = OdooClient(config or get_config(), **options)
    try:
        await client.authenticate()
    except BaseException:
        await client.close()
        raise
    return client
