"""HTTP access to the spreadsheet-backed endpoint.

Every call performs exactly one round trip (plus any redirects the endpoint
answers with) and returns an ApiResponse. Transport errors, non-2xx statuses,
malformed bodies and backend-reported failures are all turned into tagged
ApiError values; nothing is raised to the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, TypeVar

import httpx

from fittrack.api.response import ApiError, ApiResponse, parse_envelope
from fittrack.config.settings import Settings

T = TypeVar("T")

logger = logging.getLogger(__name__)

MISSING_BACKEND_CONFIG = (
    "Faltan variables de entorno: FITTRACK_APP_SCRIPT_URL y FITTRACK_API_KEY"
)


class SheetsClient:
    """Generic read/write access to the Apps Script web app."""

    def __init__(
        self,
        settings: Settings,
        http_client: Optional[httpx.Client] = None,
    ):
        """Initialize the client.

        Args:
            settings: Application settings (endpoint URL, API key, timeout)
            http_client: Pre-built httpx client. If None, one is created and
                owned by this instance.
        """
        self.settings = settings
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(
            timeout=settings.backend.timeout,
            follow_redirects=True,
        )

    def __enter__(self) -> "SheetsClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            self._http.close()

    @property
    def configured(self) -> bool:
        return bool(self.settings.backend.url and self.settings.backend.api_key)

    def get_data(
        self, path: str, decode: Optional[Callable[[Any], T]] = None
    ) -> ApiResponse[T]:
        """
        Read a resource.

        Args:
            path: Logical resource path, e.g. "dashboard" or "photos/recent?limit=5"
            decode: Optional converter applied to ``data`` on success

        Returns:
            ApiResponse envelope
        """
        if not self.configured:
            return self._config_error("get_data")

        params = {"path": path, "api_key": self.settings.backend.api_key}
        logger.debug("GET path=%s", path)
        return self._send(
            "get_data",
            lambda: self._http.get(
                self.settings.backend.url,  # type: ignore[arg-type]
                params=params,
                headers={"Content-Type": "application/json"},
            ),
            decode,
        )

    def post_data(
        self,
        path: str,
        body: Any,
        decode: Optional[Callable[[Any], T]] = None,
    ) -> ApiResponse[T]:
        """
        Write a resource.

        The request body is ``{"path": path, "api_key": key, "data": body}``.

        Args:
            path: Logical resource path, e.g. "weight"
            body: JSON-serializable payload
            decode: Optional converter applied to ``data`` on success

        Returns:
            ApiResponse envelope
        """
        if not self.configured:
            return self._config_error("post_data")

        payload = {
            "path": path,
            "api_key": self.settings.backend.api_key,
            "data": body,
        }
        logger.debug("POST path=%s", path)
        return self._send(
            "post_data",
            lambda: self._http.post(
                self.settings.backend.url,  # type: ignore[arg-type]
                json=payload,
            ),
            decode,
        )

    def _send(
        self,
        operation: str,
        request: Callable[[], httpx.Response],
        decode: Optional[Callable[[Any], T]],
    ) -> ApiResponse[T]:
        try:
            response = request()
        except (httpx.RequestError, httpx.InvalidURL) as e:
            error = ApiError.network(str(e) or type(e).__name__)
            logger.error("Error en %s: %s", operation, error)
            return ApiResponse.fail(error)

        if not response.is_success:
            error = ApiError.http_status(response.status_code, response.reason_phrase)
            logger.error("Error en %s: %s", operation, error)
            return ApiResponse.fail(error)

        try:
            payload = response.json()
        except ValueError as e:
            error = ApiError.decode(f"Respuesta no es JSON válido: {e}")
            logger.error("Error en %s: %s", operation, error)
            return ApiResponse.fail(error)

        result = parse_envelope(payload, decode)
        if not result.success:
            logger.error("Error en %s: %s", operation, result.error)
        return result

    def _config_error(self, operation: str) -> ApiResponse[Any]:
        error = ApiError.config(MISSING_BACKEND_CONFIG)
        logger.error("Error en %s: %s", operation, error)
        return ApiResponse.fail(error)
