# src/scrapers/errors.py

"""Exceptions raised by the ingestion scrapers."""


class FetchError(Exception):
    """The primary listing request failed (network error or non-2xx)."""

    def __init__(
        self,
        message: str,
        url: str = "",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
