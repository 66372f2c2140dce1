"""Club directory API client.

This module defines a small client wrapper around the ``/members``
REST resource of the Club Directory API.  It uses the ``requests``
library internally and exposes one method per operation:

* :meth:`MembersAPI.list_members` – search, filter and sort members.
* :meth:`MembersAPI.create_member` – add a member.
* :meth:`MembersAPI.update_member` – partially update a member.
* :meth:`MembersAPI.delete_member` – remove a member.

Every method returns a ``(data, error)`` tuple instead of raising.
On failure ``error`` is a dictionary with ``status_code`` and
``message`` keys; the service reports client errors as plain text
(``Name is required``, ``Member not found``), which becomes the
message verbatim.

:func:`collect_facets` derives the activity and rating choices found
in a listing, as used to populate filter menus.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class MembersAPI:
    """Client for the ``/members`` resource.

    ``base_url`` should include any version prefix, e.g.
    ``http://localhost:4444`` or ``http://localhost:4444/api/v1``.
    """

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
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

        Returns:
            A tuple ``(data, error)``.  ``data`` is the parsed JSON body,
            or the text body for plain‑text responses.
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
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = exc.response.text if exc.response is not None else ""
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}
        if not response.content:
            return None, None
        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            return response.json(), None
        return response.text, None

    # ------------------------------------------------------------------
    # Member operations
    # ------------------------------------------------------------------
    def list_members(
        self,
        query: Optional[str] = None,
        rating: Optional[Any] = None,
        activities: Optional[str] = None,
        sort_by: Optional[str] = None,
        order: Optional[str] = None,
    ) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve members matching the given filters.

        Parameters left as ``None`` or empty are not sent.
        """
        params = {
            "query": query,
            "rating": rating,
            "activities": activities,
            "sortBy": sort_by,
            "order": order,
        }
        params = {key: value for key, value in params.items() if value not in (None, "")}
        data, error = self._request("GET", "/members", params=params)
        if error:
            return [], error
        if isinstance(data, list):
            return data, None
        return [], None

    def create_member(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a member and return it with its assigned ``id``."""
        return self._request("POST", "/members", json_body=payload)

    def update_member(
        self, member_id: Any, patch: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Apply a partial update.

        The service echoes the accepted patch, not the merged member.
        """
        return self._request("PATCH", f"/members/{member_id}", json_body=patch)

    def delete_member(self, member_id: Any) -> Tuple[bool, Optional[Error]]:
        """Delete a member.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("DELETE", f"/members/{member_id}")
        return error is None, error


def collect_facets(members: Iterable[Dict[str, Any]]) -> Tuple[List[str], List[int]]:
    """Return the distinct activities and ratings present in ``members``.

    Both lists keep first‑seen order.  Unrated members contribute no
    rating.
    """
    activities: Dict[str, None] = {}
    ratings: Dict[int, None] = {}
    for member in members:
        for activity in member.get("activities") or []:
            activities.setdefault(activity, None)
        if member.get("rating"):
            ratings.setdefault(member["rating"], None)
    return list(activities), list(ratings)
