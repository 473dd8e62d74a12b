"""TaskMaster Pro API client.

This module defines a small client wrapper around the TaskMaster REST
API, the Python counterpart of the front-end's fetch layer.  It uses the
``requests`` library internally and exposes one method per endpoint:

* :meth:`health` – server status and time.
* :meth:`login` / :meth:`register` – obtain a bearer token.
* :meth:`list_tasks`, :meth:`create_task`, :meth:`update_task`,
  :meth:`complete_task`, :meth:`delete_task` – task operations.
* :meth:`get_profile` – the current user's public profile.

Every method returns a tuple ``(data, error)``.  On success ``data`` is
the decoded JSON body and ``error`` is ``None``; on failure ``data`` is
``None`` and ``error`` is a dictionary with ``status_code`` and
``message`` (the server's ``error`` field when present).

A successful login or registration stores the returned token, which is
then sent in the ``Authorization`` header of later requests.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class TaskMasterAPI:
    """Client for interacting with the TaskMaster Pro API."""

    def __init__(
        self,
        *,
        base_url: str = "http://localhost:3001",
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Server root, e.g. ``http://localhost:3001``.  API
                paths (``/api/...``) are appended to it.
            token: Optional bearer token from an earlier login.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, *, json_body: Any | None = None) -> Result:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/api/tasks``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
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
                    message = exc.response.json().get("error", "")
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
    # Service
    # ------------------------------------------------------------------
    def health(self) -> Result:
        """Return ``{"status": "OK", "timestamp": ...}`` from ``/health``."""
        return self._request("GET", "/health")

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def _authenticate(self, path: str, username: str, password: str) -> Result:
        data, error = self._request("POST", path, json_body={"username": username, "password": password})
        if data and data.get("token"):
            self.token = data["token"]
        return data, error

    def login(self, username: str, password: str) -> Result:
        """Log in and remember the returned token.

        Note that the server rejects every login until its login
        comparison defect has been hotfixed.
        """
        return self._authenticate("/api/auth/login", username, password)

    def register(self, username: str, password: str) -> Result:
        """Create an account and remember the returned token."""
        return self._authenticate("/api/auth/register", username, password)

    def logout(self) -> None:
        """Forget the stored token."""
        self.token = None

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------
    def list_tasks(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve the current user's tasks.

        Returns:
            A tuple ``(tasks, error)``; ``tasks`` is an empty list on
            failure.
        """
        data, error = self._request("GET", "/api/tasks")
        if error:
            return [], error
        return data.get("tasks", []), None

    def create_task(self, title: str) -> Result:
        return self._request("POST", "/api/tasks", json_body={"title": title})

    def update_task(self, task_id: int, *, title: Optional[str] = None, completed: Optional[bool] = None) -> Result:
        """Send a partial update; only the arguments given are included."""
        body: Dict[str, Any] = {}
        if title is not None:
            body["title"] = title
        if completed is not None:
            body["completed"] = completed
        return self._request("PUT", f"/api/tasks/{task_id}", json_body=body)

    def complete_task(self, task_id: int) -> Result:
        """Mark a task as completed.

        While the server's complete-deletes-task defect is active the
        response is ``{"message": "Task completed and removed"}`` and the
        task is gone afterwards.
        """
        return self.update_task(task_id, completed=True)

    def delete_task(self, task_id: int) -> Result:
        return self._request("DELETE", f"/api/tasks/{task_id}")

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def get_profile(self) -> Result:
        return self._request("GET", "/api/users/profile")
