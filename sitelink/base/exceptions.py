# ============================================================================
# sitelink/base/exceptions.py
# Structured Error Taxonomy
# ============================================================================
#
# PURPOSE:
# Every failure the session client raises on its own carries an error code,
# a human-readable message and a details dictionary. Transport errors raised
# by httpx / websockets are NOT wrapped; they reach the caller unchanged.
#
# ERROR CODE FORMAT:
# - CLIENT_XXX: the caller handed the client something it cannot work with
# - HTTP_XXX: the remote side answered with something we treat as failure
#
# USAGE:
#   from sitelink.base.exceptions import RequestFailedError
#
#   try:
#       await client.get("users")
#   except RequestFailedError as e:
#       print(e.status_code, e.url)
#
# ============================================================================

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    # Client-side errors
    ORIGIN_INVALID = "CLIENT_001"
    PATH_NOT_RELATIVE = "CLIENT_002"

    # Remote errors
    REQUEST_FAILED = "HTTP_001"


class SiteLinkError(Exception):
    """
    Base exception for all sitelink errors.

    Attributes:
        code: ErrorCode enum value (e.g., "CLIENT_001")
        message: Human-readable error message
        details: Optional dictionary with additional context
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}

        # Build exception message with code for easy debugging
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a JSON-friendly dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


class InvalidOriginError(SiteLinkError):
    """Raised when a session origin is not an absolute URL."""

    def __init__(self, origin: str):
        super().__init__(
            ErrorCode.ORIGIN_INVALID,
            f"origin must be an absolute URL, got {origin!r}",
            details={"origin": origin},
        )
        self.origin = origin


class RelativePathRequiredError(SiteLinkError):
    """Raised when the session base path is set to an absolute URL."""

    def __init__(self, path: str):
        super().__init__(
            ErrorCode.PATH_NOT_RELATIVE,
            f"path must be relative to origin, got {path!r}",
            details={"path": path},
        )
        self.path = path


class RequestFailedError(SiteLinkError):
    """
    Raised when the final response of a request is not in the 2xx range.

    The response hook has already run when this is raised, so `response` is
    the hook's replacement if it supplied one.
    """

    def __init__(self, url: str, status_code: int, response: Any = None):
        super().__init__(
            ErrorCode.REQUEST_FAILED,
            f"Fetch failed.\n\t- url: {url}\n\t- status: {status_code}",
            details={"url": url, "status_code": status_code},
        )
        self.url = url
        self.status_code = status_code
        self.response = response


__all__ = [
    "ErrorCode",
    "SiteLinkError",
    "InvalidOriginError",
    "RelativePathRequiredError",
    "RequestFailedError",
]
