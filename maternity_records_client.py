"""Maternity records API client.

This module defines a small client wrapper around the JSON API of the
maternity records service (``/api/v1``).  It lets scripts and other
services register patients, submit service forms and read back
patient summaries without going through the HTML forms.  The client
uses the ``requests`` library internally.

The client exposes high‑level methods:

* :meth:`list_services` – return the catalog of service forms.
* :meth:`get_service_order` – the order of services after registration.
* :meth:`register_patient` – store a ``PatientRegistration`` record.
* :meth:`submit` – store a record for any service and get the next step.
* :meth:`next_step` – ask where the flow goes after a service.
* :meth:`get_patient` – patient registration plus all service records.
* :meth:`list_records`, :meth:`get_record`, :meth:`update_record`,
  :meth:`delete_record` – generic record CRUD.

Every method returns a tuple ``(data, error)``.  On success ``error`` is
``None``; on failure ``data`` is empty and ``error`` is a dictionary with
``status_code`` and ``message``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]

REGISTRATION = "PatientRegistration"


class MaternityRecordsAPI:
    """Client for interacting with the maternity records JSON API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_prefix: str = "/api/v1",
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the service, e.g. ``http://localhost:10000``.
            api_prefix: Path prefix of the JSON API.
            timeout: Timeout in seconds for each request.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
        """
        self.base_url = base_url.rstrip("/") + api_prefix
        self.timeout = timeout
        self.session = session or requests.Session()

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
            path: Path relative to the API prefix (e.g. ``/services/``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` with the parsed JSON response or
            an error dictionary.
        """
        url = f"{self.base_url}{path}"
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
                    message = err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _service_path(service: str) -> str:
        return f"/services/{quote(service, safe='')}"

    # ------------------------------------------------------------------
    # Catalog and flow
    # ------------------------------------------------------------------
    def list_services(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve every service definition (name, fields, position)."""
        data, error = self._request("GET", "/services/")
        if error:
            return [], error
        return data or [], None

    def get_service_order(self) -> Tuple[List[str], Optional[Error]]:
        data, error = self._request("GET", "/services/order")
        if error:
            return [], error
        return data or [], None

    def next_step(self, current: str, personal_number: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Ask which step follows ``current`` for a patient, without storing anything."""
        return self._request(
            "GET", "/flow/next", params={"current": current, "personal_number": personal_number}
        )

    # ------------------------------------------------------------------
    # Submissions
    # ------------------------------------------------------------------
    def submit(
        self, service: str, personal_number: str, data: Mapping[str, str]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Store a record for ``service``.

        Returns:
            A tuple ``(result, error)``.  ``result`` has the stored
            ``record`` and the ``next`` routing decision.
        """
        payload = {"personal_number": personal_number, "data": dict(data)}
        return self._request("POST", f"{self._service_path(service)}/records", json_body=payload)

    def register_patient(
        self, personal_number: str, data: Mapping[str, str]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self.submit(REGISTRATION, personal_number, data)

    def get_patient(self, personal_number: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve the registration and all service records of a patient."""
        return self._request("GET", f"/patients/{quote(personal_number, safe='')}")

    # ------------------------------------------------------------------
    # Record operations
    # ------------------------------------------------------------------
    def list_records(
        self, service: str, personal_number: Optional[str] = None
    ) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        params = {"personal_number": personal_number} if personal_number else None
        data, error = self._request("GET", f"{self._service_path(service)}/records", params=params)
        if error:
            return [], error
        return data or [], None

    def get_record(self, service: str, record_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"{self._service_path(service)}/records/{quote(record_id, safe='')}")

    def update_record(
        self, service: str, record_id: str, data: Mapping[str, str]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request(
            "PUT",
            f"{self._service_path(service)}/records/{quote(record_id, safe='')}",
            json_body={"data": dict(data)},
        )

    def delete_record(self, service: str, record_id: str) -> Tuple[bool, Optional[Error]]:
        """Delete a record.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("DELETE", f"{self._service_path(service)}/records/{quote(record_id, safe='')}")
        if error:
            return False, error
        return True, None
