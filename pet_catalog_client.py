"""Pet Catalog API client.

A thin wrapper around the ``/api/v1/pets`` routes served by
``pet_catalog.app.main``.  It uses the ``requests`` library and
returns ``(data, error)`` tuples instead of raising, so callers such
as scripts or bots can report failures without handling HTTP
exceptions themselves:

* :meth:`PetCatalogAPI.list_pets` – all pets, optionally sorted.
* :meth:`PetCatalogAPI.get_pet` – one pet by id.
* :meth:`PetCatalogAPI.create_pet` – add a pet.
* :meth:`PetCatalogAPI.update_pet` – change some fields of a pet.
* :meth:`PetCatalogAPI.delete_pet` – remove a pet.

On failure ``error`` is a dictionary with keys ``status_code`` and
``message``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

PETS_PATH = "/api/v1/pets"


class PetCatalogAPI:
    """Client for the pet catalog HTTP API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:8000``.
            api_key: Optional token sent as ``Authorization: Bearer <api_key>``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds for every request.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Dict[str, Any]]]:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(data, error)``.  ``data`` contains the parsed JSON
            response on success and ``error`` is ``None``.  On failure,
            ``data`` is ``None`` and ``error`` describes the issue.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
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
                    detail = err_json.get("detail") if isinstance(err_json, dict) else None
                    message = detail if isinstance(detail, str) else str(detail or err_json)
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
    # Pet operations
    # ------------------------------------------------------------------
    def list_pets(
        self, sort_by: Optional[str] = None, order: Optional[str] = None
    ) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve all pets.  ``pets`` is empty on failure."""
        params = {k: v for k, v in (("sort_by", sort_by), ("order", order)) if v}
        data, error = self._request("GET", f"{PETS_PATH}/", params=params or None)
        if error:
            return [], error
        return (data if isinstance(data, list) else []), None

    def get_pet(self, pet_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        return self._request("GET", f"{PETS_PATH}/{pet_id}")

    def create_pet(
        self, name: str, breed: str = "", gender: int = 0, weight: int = 0
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        payload = {"name": name, "breed": breed, "gender": gender, "weight": weight}
        return self._request("POST", f"{PETS_PATH}/", json_body=payload)

    def update_pet(self, pet_id: int, **fields: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Update only the given fields (``name``, ``breed``, ``gender``, ``weight``)."""
        return self._request("PUT", f"{PETS_PATH}/{pet_id}", json_body=fields)

    def delete_pet(self, pet_id: int) -> Tuple[bool, Optional[Dict[str, Any]]]:
        _, error = self._request("DELETE", f"{PETS_PATH}/{pet_id}")
        return error is None, error
