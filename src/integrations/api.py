"""Content backend integration — config and REST client.

Every request carries the bearer token from session storage when one is
available.  The client never validates or refreshes it; an expired
token simply comes back as an APIError like any other failed request.
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from contentdesk.errors import APIError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:4001/api"
SESSION_FILENAME = "session.json"
DEFAULT_SESSION_PATH = Path.home() / ".config" / "contentdesk" / SESSION_FILENAME


def load_session_token(path: Path | None = None) -> str:
    """Read the bearer token saved by the login flow.

    The session file is a JSON object with a ``token`` key.  Returns an
    empty string when the file is missing or unreadable.
    """
    session_path = path or DEFAULT_SESSION_PATH
    if not session_path.exists():
        return ""
    try:
        data = json.loads(session_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        logger.warning("Unreadable session file at %s, continuing without a token", session_path)
        return ""
    token = data.get("token") if isinstance(data, dict) else None
    return token if isinstance(token, str) else ""


class ApiConfig(BaseModel):
    """Connection settings for the content backend."""

    base_url: str = DEFAULT_BASE_URL
    token: str = ""
    timeout: int = 30


def _error_message(exc: urllib.error.HTTPError) -> str:
    """Prefer the backend's own message, then the HTTP reason."""
    try:
        body = json.loads(exc.read().decode("utf-8") or "{}")
    except (json.JSONDecodeError, UnicodeDecodeError, OSError):
        body = {}
    message = body.get("message") if isinstance(body, dict) else None
    if isinstance(message, str) and message:
        return message
    return exc.reason if isinstance(exc.reason, str) and exc.reason else "Request failed"


class ContentAPIClient:
    """Client for the content endpoints of the REST backend.

    JSON over urllib, with ``Authorization: Bearer`` when a token is set.
    """

    def __init__(self, config: ApiConfig) -> None:
        self.config = config
        self.base_url = config.base_url.rstrip("/")

    def _request(self, method: str, endpoint: str, data: dict | None = None) -> Any:
        """Make a request and return the decoded JSON response.

        Raises:
            APIError: On a non-2xx status, when no complete response arrives,
                or when the body is not UTF-8 JSON.
        """
        url = f"{self.base_url}{endpoint}"
        headers = {"Content-Type": "application/json"}
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"

        body = json.dumps(data).encode("utf-8") if data is not None else None
        req = urllib.request.Request(url, data=body, method=method, headers=headers)

        logger.debug("%s %s", method, url)
        try:
            with urllib.request.urlopen(req, timeout=self.config.timeout) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as exc:
            raise APIError(_error_message(exc), status=exc.code) from exc
        except (
            urllib.error.URLError,
            http.client.HTTPException,
            TimeoutError,
            ConnectionError,
        ) as exc:
            raise APIError("No response from server") from exc

        try:
            text = raw.decode("utf-8")
            return json.loads(text) if text.strip() else {}
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise APIError("Malformed response from server") from exc

    @staticmethod
    def _quote(content_id: str | int) -> str:
        return urllib.parse.quote(str(content_id), safe="")

    def get_content(self, content_id: str | int) -> dict[str, Any]:
        """Fetch one generated content record."""
        result = self._request("GET", f"/v2/campaign-content/{self._quote(content_id)}")
        if not isinstance(result, dict):
            raise APIError("Unexpected content record shape")
        return result

    def update_content(self, content_id: str | int, payload: dict[str, Any]) -> Any:
        """PUT a partial channel update; the id travels in the path only."""
        return self._request("PUT", f"/content/{self._quote(content_id)}", payload)
