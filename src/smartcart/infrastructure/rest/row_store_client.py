"""HTTP client for the hosted Postgres REST surface (PostgREST dialect).

Each method is one independent request; there are no client-side
transactions.  Transport failures and HTTP error statuses are turned into
domain exceptions here, by type and status code, so nothing above this
module has to look at error messages.
"""

from __future__ import annotations

from typing import Any, Mapping

import requests
import structlog

from smartcart.domain.exceptions import RemoteRejected, RemoteUnavailable, ServiceNotConfigured
from smartcart.infrastructure.config import Settings

log = structlog.get_logger(__name__)

RESOURCES = frozenset(
    {
        "carts",
        "shopping_sessions",
        "products",
        "session_items",
        "orders",
        "order_items",
        "users",
    }
)

Row = dict[str, Any]
Filters = Mapping[str, Any]


def eq_params(filters: Filters) -> dict[str, str]:
    """Render ``{"cartId": "C1"}`` as ``{"cartId": "eq.C1"}``."""
    return {field: f"eq.{value}" for field, value in filters.items()}


class RowStoreClient:

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        self._settings = settings
        self._http = session if session is not None else requests.Session()

    # --- Operations -------------------------------------------------------------

    def query(self, resource: str, filters: Filters | None = None) -> list[Row]:
        """Return all rows of *resource* matching every equality filter."""
        params = {"select": "*", **eq_params(filters or {})}
        response = self._request("GET", resource, params=params)
        try:
            rows = response.json() if response.content else []
        except ValueError as exc:
            raise RemoteRejected(
                f"Response from '{resource}' is not JSON",
                status_code=response.status_code,
                body=response.text,
            ) from exc
        if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
            raise RemoteRejected(
                f"Expected a list of rows from '{resource}', got {type(rows).__name__}",
                status_code=response.status_code,
            )
        return rows

    def insert(self, resource: str, row: Row) -> None:
        self._request(
            "POST",
            resource,
            json=row,
            headers={"Prefer": "return=representation"},
        )

    def patch(self, resource: str, filters: Filters, fields: Row) -> None:
        if not filters:
            raise ValueError("patch requires at least one filter")
        self._request("PATCH", resource, params=eq_params(filters), json=fields)

    def delete(self, resource: str, filters: Filters) -> None:
        if not filters:
            raise ValueError("delete requires at least one filter")
        self._request("DELETE", resource, params=eq_params(filters))

    # --- Transport --------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        key = self._settings.supabase_key
        return {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def _request(
        self,
        method: str,
        resource: str,
        params: dict[str, str] | None = None,
        json: Row | None = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        if not self._settings.is_configured:
            raise ServiceNotConfigured(
                "Supabase URL or API key is empty; set SMARTCART_SUPABASE_URL "
                "and SMARTCART_SUPABASE_KEY"
            )
        if resource not in RESOURCES:
            raise ValueError(f"Unknown resource '{resource}'")

        url = f"{self._settings.rest_url}/{resource}"
        try:
            response = self._http.request(
                method,
                url,
                params=params,
                json=json,
                headers={**self._headers(), **(headers or {})},
                timeout=self._settings.timeout,
            )
        except requests.Timeout as exc:
            raise RemoteUnavailable(f"{method} {resource} timed out") from exc
        except requests.ConnectionError as exc:
            raise RemoteUnavailable(f"Cannot reach the store for {method} {resource}") from exc
        except requests.RequestException as exc:
            raise RemoteUnavailable(f"{method} {resource} failed: {exc}") from exc

        log.debug("rest_call", method=method, resource=resource, status=response.status_code)

        if response.status_code >= 500:
            raise RemoteUnavailable(
                f"{method} {resource} returned {response.status_code}"
            )
        if response.status_code >= 400:
            raise RemoteRejected(
                f"{method} {resource} rejected with {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )
        return response
