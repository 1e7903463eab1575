"""Lesson Hub API client.

This module defines a small client wrapper around the Lesson Hub REST
API.  It uses the ``requests`` library internally and exposes one
method per operation:

* :meth:`list_lessons` – return the lessons, optionally filtered.
* :meth:`get_lesson` – fetch a single lesson by its identifier.
* :meth:`create_lesson` – add a lesson to the catalogue.
* :meth:`adjust_space` – add or release seats on a lesson.
* :meth:`list_orders` – return the orders, newest first.
* :meth:`get_order` – fetch a single order.
* :meth:`create_order` – place an order for one or more lessons.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is ``None`` (or an empty list for the
list operations) and ``error`` is a dictionary with the keys
``status_code`` and ``message``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class LessonHubAPI:
    """Client for interacting with the Lesson Hub API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:3000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds applied to every request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Result:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``).
            path: Path relative to :attr:`base_url` (e.g. ``/api/lessons``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
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
                    message = err_json.get("message") or err_json.get("detail") or str(err_json)
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
    # Lesson operations
    # ------------------------------------------------------------------
    def list_lessons(self, search: Optional[str] = None) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve all lessons, optionally filtered by ``search``."""
        params = {"search": search} if search else None
        data, error = self._request("GET", "/api/lessons", params=params)
        if error:
            return [], error
        return (data if isinstance(data, list) else []), None

    def get_lesson(self, lesson_id: str) -> Result:
        return self._request("GET", f"/api/lessons/{lesson_id}")

    def create_lesson(self, payload: Dict[str, Any]) -> Result:
        """Create a lesson.

        Args:
            payload: Mapping with ``topic``, ``location``, ``price`` and
                ``space`` plus any optional descriptive fields.
        """
        return self._request("POST", "/api/lessons", json_body=payload)

    def adjust_space(self, lesson_id: str, change: int) -> Result:
        """Add ``change`` seats to a lesson (negative values remove seats)."""
        return self._request("PUT", f"/api/lessons/{lesson_id}/space", json_body={"change": change})

    # ------------------------------------------------------------------
    # Order operations
    # ------------------------------------------------------------------
    def list_orders(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", "/api/orders")
        if error:
            return [], error
        return (data if isinstance(data, list) else []), None

    def get_order(self, order_id: str) -> Result:
        return self._request("GET", f"/api/orders/{order_id}")

    def create_order(
        self,
        *,
        name: str,
        phone_number: str,
        lesson_ids: List[str],
        number_of_spaces: int,
        email: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Result:
        """Place an order.

        The server computes the total price and stores the order as
        ``pending``.  Seats are not reserved; call :meth:`adjust_space`
        for each lesson to do so.
        """
        payload: Dict[str, Any] = {
            "name": name,
            "phoneNumber": phone_number,
            "lessonIDs": list(lesson_ids),
            "numberOfSpaces": number_of_spaces,
        }
        if email:
            payload["email"] = email
        if notes:
            payload["notes"] = notes
        return self._request("POST", "/api/orders", json_body=payload)
