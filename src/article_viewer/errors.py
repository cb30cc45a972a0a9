from __future__ import annotations

from typing import Optional


class FetchError(Exception):
    """Any failure to obtain articles from the backend."""


class NetworkFailure(FetchError):
    """The request never produced an HTTP response (refused, timed out, DNS)."""


class ServerFailure(FetchError):
    """The backend answered, but with a non-2xx status or a body we cannot use."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
