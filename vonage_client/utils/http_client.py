"""
vonage_client/utils/http_client.py

WHAT THIS FILE IS FOR
---------------------
This module provides a minimal, synchronous HTTP client abstraction
used by the endpoint layer to make outbound HTTP calls to the
Vonage REST APIs.

It exists to:
- Centralize basic HTTP call behavior (any verb; JSON, form or multipart bodies)
- Standardize timeout handling
- Own the single, lazily created requests.Session (connection pool)
- Avoid scattering raw `requests.*` calls across the codebase

This client is intentionally kept *very thin*.

WHAT THIS FILE IS NOT FOR
-------------------------
This module is NOT responsible for:
- Retry logic
- Logging or structured tracing
- Authentication
- URL templating
- Response parsing or error translation

Those responsibilities belong to higher-level components
(common/endpoint.py, utils/auth.py and the per-family clients).

DESIGN INTENT
-------------
This file acts as a *low-level transport utility*.
Every client operation issues one request through `send` and blocks
until a response or a network-level failure is received.
"""

from __future__ import annotations

import requests
from typing import Any, Dict, Mapping, Optional, Tuple, Union

# Timeout can be:
# - single float -> applied to both connect + read
# - (connect_timeout, read_timeout)
TimeoutType = Union[float, Tuple[float, float]]


class HttpClient:
    """
    Minimal synchronous HTTP client wrapper.

    PURPOSE
    -------
    This class provides a *very thin abstraction* over `requests`
    so every API family sends requests the same way.

    It intentionally:
    - Does NOT add retries
    - Does NOT add logging
    - Does NOT interpret response payloads

    SESSION LIFECYCLE
    -----------------
    The underlying `requests.Session` is created on first use and reused
    for the lifetime of this object. Call `close()` to release pooled
    connections.
    """

    def __init__(self, timeout_seconds: TimeoutType = 60, user_agent: Optional[str] = None):
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
            if self.user_agent:
                self._session.headers["User-Agent"] = self.user_agent
        return self._session

    def send(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        json_body: Any = None,
        data: Any = None,
        files: Optional[Mapping[str, Any]] = None,
        timeout_seconds: Optional[TimeoutType] = None,
    ) -> requests.Response:
        """
        Send one HTTP request.

        Args:
            method: HTTP verb (GET, POST, PUT, PATCH, DELETE).
            url: Absolute URL.
            params: Query parameters. List values become repeated keys.
            headers: Request headers.
            json_body: JSON-serializable body (sets Content-Type via requests).
            data: Form dict or raw bytes.
            files: Multipart parts, passed to requests unchanged.
            timeout_seconds: Per-call override of the instance default.

        Returns:
            requests.Response

        Raises:
            requests.RequestException:
                Any network-level error (timeout, DNS, connection error).
                Caller decides whether to translate it.
        """
        return self.session.request(
            method,
            url,
            params=params,
            headers=headers or {},
            json=json_body,
            data=data,
            files=files,
            timeout=timeout_seconds if timeout_seconds is not None else self.timeout_seconds,
        )

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None
