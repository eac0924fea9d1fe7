"""Exception hierarchy for the Vonage client.

Local validation problems surface as ``ValueError`` (pydantic's
``ValidationError`` included) before any request is sent. Everything
raised after a request was attempted derives from ``VonageClientException``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional


class VonageClientException(Exception):
    """Base exception for all client-side failures raised by this library."""


class VonageUnexpectedException(VonageClientException):
    """Internal or serialization failure that callers are not expected to recover from."""


class VonageResponseParseException(VonageUnexpectedException):
    """A successful HTTP response whose body could not be decoded into the expected type."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class VonageUnacceptableAuthException(VonageClientException):
    """None of the configured auth methods is accepted by the endpoint."""

    def __init__(self, available: List[str], accepted: List[str]) -> None:
        super().__init__(
            f"No acceptable authentication type could be found. "
            f"Acceptable types are: {', '.join(accepted)}. "
            f"Supplied types were: {', '.join(available) or 'none'}."
        )
        self.available = available
        self.accepted = accepted


class VonageApiResponseException(VonageClientException):
    """
    Non-2xx answer from the API, decoded from an RFC 7807 problem-detail body.

    Attributes:
        status_code: HTTP status code. Always present.
        type: Problem type URI.
        title: Short summary. Falls back to the HTTP reason phrase.
        detail: Human-readable explanation.
        instance: Trace / request identifier.
        extra: Any other properties of the error body, unmodified.
    """

    _KNOWN_FIELDS = ("type", "title", "detail", "instance")

    def __init__(
        self,
        status_code: int,
        *,
        type: Optional[str] = None,
        title: Optional[str] = None,
        detail: Optional[str] = None,
        instance: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.status_code = status_code
        self.type = type
        self.title = title
        self.detail = detail
        self.instance = instance
        self.extra: Dict[str, Any] = dict(extra or {})
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        message = f"{self.status_code} ({self.title})"
        if self.detail:
            message += f": {self.detail}"
        return message

    @classmethod
    def from_response(
        cls,
        status_code: int,
        body: Optional[bytes | str],
        reason: Optional[str] = None,
    ):
        """
        Build the exception from a raw error response.

        An empty or non-JSON body still produces an exception carrying
        the status code; the title then falls back to ``reason``.
        """
        payload: Dict[str, Any] = {}
        if body:
            try:
                decoded = json.loads(body)
            except ValueError:
                decoded = None
            if isinstance(decoded, dict):
                payload = decoded

        known = {k: payload.pop(k) for k in cls._KNOWN_FIELDS if k in payload}
        if not known.get("title"):
            known["title"] = reason
        family = cls._pop_family_fields(payload)
        return cls(status_code, extra=payload, **family, **known)

    @classmethod
    def _pop_family_fields(cls, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Hook for subclasses that promote extra body fields to attributes."""
        return {}

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.__dict__ == other.__dict__

    __hash__ = None  # type: ignore[assignment]


class MessageResponseException(VonageApiResponseException):
    """Messages API error."""


class VerifyResponseException(VonageApiResponseException):
    """Legacy Verify API HTTP-level error."""


class SubaccountsResponseException(VonageApiResponseException):
    """Subaccounts API error."""


class ConversationsResponseException(VonageApiResponseException):
    """Conversations API error."""


class UsersResponseException(VonageApiResponseException):
    """Users API error."""


class ProactiveConnectResponseException(VonageApiResponseException):
    """Proactive Connect API error; validation failures add an ``errors`` list."""

    def __init__(self, status_code: int, *, errors: Optional[List[Any]] = None, **kwargs: Any) -> None:
        self.errors = errors
        super().__init__(status_code, **kwargs)

    @classmethod
    def _pop_family_fields(cls, payload: Dict[str, Any]) -> Dict[str, Any]:
        return {"errors": payload.pop("errors", None)}
