"""
Error types for the odoo.do client.

Every error raised by this package extends OdooError and carries a stable
numeric code, so callers can branch on the kind of failure instead of on
message text.

Error Code Ranges:
- 1xxx: Configuration errors
- 2xxx: Authentication errors
- 3xxx: Invalid call shape (raised before any network activity)
- 4xxx: Transport and server errors
- 5xxx: Response decoding errors
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .types import ClientConfig


class ErrorCode(IntEnum):
    """Numeric error codes for every error kind raised by odoo_do."""

    INVALID_CONFIG = 1001

    AUTHENTICATION_ERROR = 2001

    INVALID_CONTEXT = 3001
    INVALID_DOMAIN = 3002

    TRANSPORT_ERROR = 4001
    RPC_FAULT = 4002

    UNEXPECTED_RESPONSE = 5001


ERROR_CODE_NAMES: dict[ErrorCode, str] = {code: code.name for code in ErrorCode}


# ============================================================================
# Base Error Class
# ============================================================================


class OdooError(Exception):
    """
    Base error class for all odoo_do errors.

    Error Hierarchy:
    - OdooError (base)
      - InvalidConfigError: A mandatory configuration field is empty
      - AuthenticationError: Login failed, or the session is not authenticated
      - InvalidContextError: More than one context map passed to a call
      - InvalidDomainError: A domain failed an explicit arity check
      - TransportError: HTTP failure or undecodable XML-RPC payload
      - RpcFault: The server answered with an XML-RPC fault
      - UnexpectedResponseError: A response did not have the expected shape

    Example:
        ```python
        try:
            ids = await client.search("res.partner", domain)
        except OdooError as error:
            print(f"Odoo error [{error.code}]: {error.message}")
        ```

    Attributes:
        message: Human-readable error message.
        code: Numeric error code.
        code_name: String name of the error code (e.g. 'RPC_FAULT').
    """

    def __init__(self, message: str, code: ErrorCode) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.code_name = ERROR_CODE_NAMES.get(code, "UNKNOWN_ERROR")

    def __str__(self) -> str:
        return f"{self.code_name}({int(self.code)}): {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, code={int(self.code)})"

    def to_dict(self) -> dict[str, Any]:
        """Return a dictionary representation of the error."""
        return {
            "name": self.__class__.__name__,
            "message": self.message,
            "code": int(self.code),
            "code_name": self.code_name,
        }


# ============================================================================
# Specific Error Types
# ============================================================================


class InvalidConfigError(OdooError):
    """
    Raised when a ClientConfig has one or more empty mandatory fields.

    Error Code: 1001 (INVALID_CONFIG)

    Raised by connect() before any network activity.

    Attributes:
        config: The rejected configuration.
        missing: Names of the empty fields.
    """

    def __init__(self, config: ClientConfig, missing: list[str] | None = None) -> None:
        self.config = config
        self.missing = missing or []
        fields = ", ".join(self.missing) or "unknown"
        super().__init__(
            f"Invalid Odoo configuration, missing: {fields}",
            ErrorCode.INVALID_CONFIG,
        )


class AuthenticationError(OdooError):
    """
    Raised when authentication fails or a call needs an authenticated session.

    Error Code: 2001 (AUTHENTICATION_ERROR)

    The message names the url, database and user that were attempted. The
    password is never included.

    Attributes:
        config: The configuration used for the attempt.
    """

    def __init__(self, config: ClientConfig, reason: str | None = None) -> None:
        self.config = config
        self.reason = reason
        message = (
            f"Cannot authenticate to url {config.url} on {config.db} "
            f"with user {config.username}"
        )
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, ErrorCode.AUTHENTICATION_ERROR)


class InvalidContextError(OdooError):
    """
    Raised when more than one context map is passed to a remote call.

    Error Code: 3001 (INVALID_CONTEXT)
    """

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(
            f"Maximum one context variable is admitted, got {count}",
            ErrorCode.INVALID_CONTEXT,
        )


class InvalidDomainError(OdooError):
    """
    Raised by Domain.validate() when operators and operands do not balance.

    Error Code: 3002 (INVALID_DOMAIN)
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCode.INVALID_DOMAIN)


class TransportError(OdooError):
    """
    Raised when the HTTP round-trip fails or its payload cannot be decoded.

    Error Code: 4001 (TRANSPORT_ERROR)

    Attributes:
        url: Endpoint URL that was called.
        status_code: HTTP status, when the server answered.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.TRANSPORT_ERROR)
        self.url = url
        self.status_code = status_code


class RpcFault(OdooError):
    """
    Raised when the server answers a call with an XML-RPC fault.

    Error Code: 4002 (RPC_FAULT)

    Odoo reports access errors, validation errors and missing methods this
    way; fault_string usually holds the server-side traceback.

    Attributes:
        fault_code: The fault code sent by the server.
        fault_string: The fault description sent by the server.
        method: The XML-RPC method that failed.
    """

    def __init__(self, fault_code: Any, fault_string: str, method: str | None = None) -> None:
        self.fault_code = fault_code
        self.fault_string = fault_string
        self.method = method
        summary = fault_string.strip().splitlines()[-1] if fault_string.strip() else ""
        super().__init__(
            f"{method or 'call'} failed with fault {fault_code}: {summary}",
            ErrorCode.RPC_FAULT,
        )


class UnexpectedResponseError(OdooError):
    """
    Raised when a response value does not match the type an operation returns.

    Error Code: 5001 (UNEXPECTED_RESPONSE)

    Attributes:
        expected: Description of the expected shape.
        value: The value actually received.
    """

    def __init__(self, expected: str, value: Any) -> None:
        self.expected = expected
        self.value = value
        super().__init__(
            f"Expected {expected}, got {type(value).__name__}: {value!r}",
            ErrorCode.UNEXPECTED_RESPONSE,
        )


# ============================================================================
# Error Utilities
# ============================================================================


def is_error_code(error: BaseException, code: ErrorCode) -> bool:
    """
    Check if an error is an OdooError with a specific error code.

    Example:
        ```python
        try:
            await client.authenticate()
        except Exception as error:
            if is_error_code(error, ErrorCode.AUTHENTICATION_ERROR):
                ...
        ```
    """
    return isinstance(error, OdooError) and error.code == code
