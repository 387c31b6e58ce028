"""HTTP client for the document repository module."""

import logging
from typing import Any

import requests

from docrepo_browser.config import MODULE_PATH, REQUEST_TIMEOUT, SESSION_COOKIE_NAME


class DocumentRepositoryApi:
    """Session-backed access to the document repository endpoints."""

    def __init__(
        self,
        base_url: str,
        *,
        session_token: str | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.module_url = f"{base_url.rstrip('/')}/{MODULE_PATH}"
        self.timeout = timeout
        self.sess = requests.Session()
        self.logger = logging.getLogger("api")

        # Same-origin credentials: the browser would send the session cookie.
        if session_token:
            self.sess.cookies.set(SESSION_COOKIE_NAME, session_token)

        self.logger.debug(
            f"API ready: module_url {self.module_url!r}, "
            f"authenticated {session_token is not None!r}"
        )

    def url(self, path: str) -> str:
        """Absolute URL of a module endpoint."""
        if not path:
            return self.module_url + "/"
        return f"{self.module_url}/{path.lstrip('/')}"

    def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET an endpoint, return json."""
        self.logger.debug(f"GET {path!r} {params!r}")
        r = self.sess.get(self.url(path), params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete(self, path: str) -> Any:
        """DELETE an endpoint, return json."""
        self.logger.debug(f"DELETE {path!r}")
        r = self.sess.delete(
            self.url(path),
            headers={"Cache-Control": "no-cache"},
            timeout=self.timeout,
        )
        r.raise_for_status()
        return r.json()
