"""
XmlRpcEndpoint - one Odoo XML-RPC service over HTTP.

Odoo exposes its external API as several XML-RPC services under
``/xmlrpc/2/``; the client talks to two of them, ``common`` (login and
server version) and ``object`` (model methods). Each endpoint owns its own
httpx.AsyncClient and encodes calls with the standard library's xmlrpc
marshaller.
"""

from __future__ import annotations

import logging
import xmlrpc.client
from types import TracebackType
from typing import Any, Sequence
from xml.parsers.expat import ExpatError

import httpx

from .errors import RpcFault, TransportError
from .types import RpcValue

__all__ = ["XmlRpcEndpoint", "COMMON_PATH", "OBJECT_PATH", "build_endpoint_url"]

logger = logging.getLogger(__name__)

COMMON_PATH = "/xmlrpc/2/common"
OBJECT_PATH = "/xmlrpc/2/object"


def build_endpoint_url(base_url: str, path: str) -> str:
    """
    Join the server base URL and a service path.

    Args:
        base_url: Odoo server URL (e.g. "https://erp.example.com/")
        path: Service path (e.g. "/xmlrpc/2/common")

    Returns:
        The endpoint URL, without a doubled slash
    """
    return base_url.rstrip("/") + path


class XmlRpcEndpoint:
    """
    Call-and-decode wrapper around a single XML-RPC endpoint.

    Example:
        endpoint = XmlRpcEndpoint("http://localhost:8069/xmlrpc/2/common")
        version = await endpoint.call("version", [])
        await endpoint.close()
    """

    __slots__ = ("_url", "_http", "_closed")

    def __init__(
        self,
        url: str,
        *,
        timeout: float | None = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """
        Open the endpoint.

        Args:
            url: Full endpoint URL
            timeout: HTTP timeout in seconds (None disables it)
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests
            headers: Extra HTTP headers sent with every call
        """
        self._url = url
        self._http = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "text/xml", **(headers or {})},
        )
        self._closed = False

    @property
    def url(self) -> str:
        return self._url

    @property
    def closed(self) -> bool:
        return self._closed

    async def call(self, method: str, params: Sequence[Any]) -> RpcValue:
        """
        Perform one XML-RPC call.

        Args:
            method: Remote method name (e.g. "execute_kw")
            params: Positional parameters

        Returns:
            The decoded response value

        Raises:
            RpcFault: The server answered with an XML-RPC fault
            TransportError: The endpoint is closed, the HTTP request failed,
                or the payload could not be encoded or decoded
        """
        if self._closed:
            raise TransportError("Endpoint is closed", url=self._url)

        try:
            body = xmlrpc.client.dumps(tuple(params), methodname=method, allow_none=True)
        except (TypeError, OverflowError) as e:
            raise TransportError(f"Cannot encode parameters for {method}: {e}", url=self._url) from e

        logger.debug("XML-RPC call %s on %s", method, self._url)
        try:
            response = await self._http.post(self._url, content=body.encode("utf-8"))
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {self._url} failed: {e}", url=self._url) from e

        if not response.is_success:
            raise TransportError(
                f"HTTP {response.status_code} from {self._url}: {response.reason_phrase}",
                url=self._url,
                status_code=response.status_code,
            )

        return self._decode(method, response.content)

    def _decode(self, method: str, content: bytes) -> RpcValue:
        try:
            params, _ = xmlrpc.client.loads(content, use_builtin_types=True)
        except xmlrpc.client.Fault as fault:
            logger.debug("XML-RPC fault %s from %s", fault.faultCode, method)
            raise RpcFault(fault.faultCode, fault.faultString, method=method) from fault
        except (ExpatError, xmlrpc.client.ResponseError, ValueError) as e:
            raise TransportError(f"Malformed XML-RPC response to {method}: {e}", url=self._url) from e

        if len(params) != 1:
            raise TransportError(
                f"XML-RPC response to {method} carries {len(params)} values, expected 1",
                url=self._url,
            )
        return params[0]

    async def close(self) -> None:
        """Close the underlying HTTP client. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        await self._http.aclose()

    async def __aenter__(self) -> XmlRpcEndpoint:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"XmlRpcEndpoint({self._url!r}, {state})"
