"""Configuration constants for docrepo-browser."""

import os
from pathlib import Path

# Base URL of the hosting site. Overridden by --base-url / DOCREPO_BASE_URL.
DEFAULT_BASE_URL: str = "http://localhost"

# Module mount point below the base URL.
MODULE_PATH: str = "document_repository"

# Session token location. First file found is used.
SESSION_TOKEN_FILES: list[Path] = [
    Path("~/.config/docrepo-session.txt").expanduser(),
    Path("~/.config/secret/docrepo-session.txt").expanduser(),
    Path(f"/run/user/{os.getuid()}/docrepo-session"),
]

# Name of the cookie carrying the session token.
SESSION_COOKIE_NAME: str = "PHPSESSID"

# Seconds before an HTTP request is abandoned.
REQUEST_TIMEOUT: float = 30.0

# Synthetic root of the category tree.
ROOT_NODE_ID: int = 0
ROOT_NODE_LABEL: str = "Root"


def resolve_session_token() -> str | None:
    """Return the session token from the first existing token file, if any."""
    for token_path in SESSION_TOKEN_FILES:
        try:
            return token_path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            continue
    return None
