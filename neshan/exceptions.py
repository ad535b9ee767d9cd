"""
Neshan API Exceptions

This module contains exception classes for the Neshan client. Every failure
raised by the client is a NeshanError subclass, so callers can branch on the
kind of failure without inspecting message strings.
"""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class NeshanError(Exception):
    """Base exception class for all Neshan client errors, dood!

    Attributes:
        message: Human-readable error message
        code: Service error code (if available)
        response: Raw response data (if available)
    """

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        response: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.response = response
        logger.debug(f"{type(self).__name__}: {message} (code: {code})")

    def __str__(self) -> str:
        if self.code is not None:
            return f"{self.message} (code: {self.code})"
        return self.message


class ConfigurationError(NeshanError):
    """Raised when the client or its configuration is invalid.

    This occurs when the API key cannot be sent as an HTTP header value,
    or when a configuration file is missing, malformed or incomplete.
    """

    def __init__(self, message: str, code: Optional[int] = None, response: Optional[Any] = None) -> None:
        super().__init__(message, code, response)


class TransportError(NeshanError):
    """Raised when the request could not be completed.

    This includes connection failures, DNS resolution failures and timeouts.
    The underlying httpx exception is available as ``__cause__``.
    """

    def __init__(
        self,
        message: str = "Network error occurred.",
        code: Optional[int] = None,
        response: Optional[Any] = None,
    ) -> None:
        super().__init__(message, code, response)


class ServiceError(NeshanError):
    """Raised when the service answers with a non-success status and a {code, message} body.

    Attributes:
        code: Error code reported by the service
        message: Error message reported by the service
        statusCode: HTTP status code of the response
    """

    def __init__(
        self,
        code: int,
        message: str,
        statusCode: Optional[int] = None,
        response: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code, response)
        self.code: int = code
        self.statusCode = statusCode

    def __repr__(self) -> str:
        return f"ServiceError(code={self.code!r}, message={self.message!r}, statusCode={self.statusCode!r})"


class DecodingError(NeshanError):
    """Raised when a response body does not match the expected JSON shape.

    Unlike ServiceError this means the client and the service disagree about
    the contract, so the raw body is kept for inspection.
    """

    def __init__(
        self,
        message: str,
        statusCode: Optional[int] = None,
        response: Optional[Any] = None,
    ) -> None:
        super().__init__(message, None, response)
        self.statusCode = statusCode


def parseServiceError(statusCode: int, responseData: Any) -> ServiceError:
    """Build ServiceError from a decoded error body.

    Args:
        statusCode: HTTP status code
        responseData: Parsed JSON body of the error response

    Returns:
        ServiceError carrying the service code and message

    Raises:
        DecodingError: If the body is not a {code: int, message: str} object

    Example:
        >>> err = parseServiceError(400, {"code": 400, "message": "Invalid input"})
        >>> err.code, err.message
        (400, 'Invalid input')
    """
    if not isinstance(responseData, dict):
        raise DecodingError(
            f"Error body must be a JSON object, got {type(responseData).__name__}",
            statusCode=statusCode,
            response=responseData,
        )

    code = responseData.get("code")
    message = responseData.get("message")
    # bool is a subclass of int, but `true` is not an error code
    if not isinstance(code, int) or isinstance(code, bool):
        raise DecodingError(f"Error body has invalid code: {code!r}", statusCode=statusCode, response=responseData)
    if not isinstance(message, str):
        raise DecodingError(
            f"Error body has invalid message: {message!r}", statusCode=statusCode, response=responseData
        )

    return ServiceError(code, message, statusCode=statusCode, response=responseData)
