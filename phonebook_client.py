"""Phone book API client.

A thin wrapper around the phone book HTTP API using the ``requests``
library.  Each method maps to one route and returns a tuple
``(data, error)``: ``data`` holds the decoded JSON on success and
``error`` is ``None``; on failure ``data`` is empty and ``error`` is a
dictionary with ``status_code`` and ``message``.

* :meth:`add_company` / :meth:`list_companies` / :meth:`delete_company`
* :meth:`add_person` / :meth:`list_persons` / :meth:`random_person`
* :meth:`update_person` / :meth:`delete_person`
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class PhoneBookAPI:
    """Client for the phone book API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_prefix: str = "/PhoneBook",
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Scheme and host of the service, e.g. ``http://localhost:8000``.
            api_prefix: Prefix the routes are mounted under.
            timeout: Seconds to wait for each response.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
        """
        prefix = api_prefix.strip("/")
        self.base_url = base_url.rstrip("/") + (f"/{prefix}" if prefix else "")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request and decode the JSON response, if any."""
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
                    body = exc.response.json()
                    message = str(body.get("detail") or "") if isinstance(body, dict) else str(body)
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
    # Companies
    # ------------------------------------------------------------------
    def add_company(self, name: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/Company/Add", params={"Name": name})

    def list_companies(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/Company/GetAll")
        return data or [], error

    def delete_company(self, company_id: int) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("GET", "/Company/Delete", params={"id": company_id})
        return error is None, error

    # ------------------------------------------------------------------
    # Persons
    # ------------------------------------------------------------------
    def add_person(
        self,
        full_name: str,
        company_name: str,
        phone_number: Optional[str] = None,
        address: Optional[str] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        params = {"FullName": full_name, "CompanyName": company_name}
        if phone_number is not None:
            params["PhoneNumber"] = phone_number
        if address is not None:
            params["Address"] = address
        return self._request("GET", "/Person/Add", params=params)

    def list_persons(self, search_term: Optional[str] = None) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve all persons, or only those matching ``search_term``."""
        params = {"searchTerm": search_term} if search_term else None
        data, error = self._request("GET", "/Person/GetAll", params=params)
        return data or [], error

    def random_person(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/Person/WildCard")

    def update_person(self, person: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Send the full desired state of a person, as returned by the API."""
        return self._request("POST", "/Person/Update", json_body=person)

    def delete_person(self, person_id: int) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("GET", "/Person/Delete", params={"id": person_id})
        return error is None, error
