"""Consultant Directory API client.

This module defines a small client wrapper around the REST API served
by ``consultant_directory_api``.  It uses the ``requests`` library and
exposes one method per endpoint:

* :meth:`list_consultants` – filtered listing (service, region, search).
* :meth:`get_consultant` – fetch a single consultant by its identifier.
* :meth:`create_consultant` / :meth:`update_consultant` /
  :meth:`delete_consultant` – mutations.
* :meth:`list_services`, :meth:`list_regions`, :meth:`get_stats` –
  catalogs and statistics.
* :meth:`health` – liveness check.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is ``None`` (or an empty list for
listings) and ``error`` is a dictionary with ``status_code`` and
``message`` keys.  The message comes from the server's ``{"error": ...}``
body when there is one.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class ConsultantDirectoryClient:
    """Client for interacting with the consultant directory API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:3001``.
                The ``/api`` prefix is added by the client.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds applied to every request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path below ``/api`` (e.g. ``/consultants``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request (for POST/PUT).
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}/api{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Consultant operations
    # ------------------------------------------------------------------
    def list_consultants(
        self,
        *,
        service: Optional[str] = None,
        region: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve consultants, optionally filtered; empty list on failure."""
        params = {
            key: value
            for key, value in {"service": service, "region": region, "search": search}.items()
            if value
        }
        data, error = self._request("GET", "/consultants", params=params or None)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def get_consultant(self, consultant_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/consultants/{consultant_id}")

    def create_consultant(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a consultant.

        Args:
            payload: ``firm``, ``contact``, ``email``, ``service``,
                ``regions`` and optionally ``phone``.
        """
        return self._request("POST", "/consultants", json_body=payload)

    def update_consultant(
        self, consultant_id: int, payload: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Replace a consultant's editable fields (same payload as create)."""
        return self._request("PUT", f"/consultants/{consultant_id}", json_body=payload)

    def delete_consultant(self, consultant_id: int) -> Tuple[bool, Optional[Error]]:
        """Delete a custom consultant.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("DELETE", f"/consultants/{consultant_id}")
        return error is None, error

    # ------------------------------------------------------------------
    # Catalogs and statistics
    # ------------------------------------------------------------------
    def list_services(self) -> Tuple[List[str], Optional[Error]]:
        data, error = self._request("GET", "/services")
        return (data or []), error

    def list_regions(self) -> Tuple[List[str], Optional[Error]]:
        data, error = self._request("GET", "/regions")
        return (data or []), error

    def get_stats(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/stats")

    def health(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/health")
