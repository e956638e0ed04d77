"""Scoped Copernicus Marine credentials and the one-time login.

Credentials are passed explicitly to ``copernicusmarine.login``; they are
never written into ``os.environ`` and are wiped when their scope ends.
"""

from __future__ import annotations

import importlib
import os
import warnings
from contextlib import contextmanager
from typing import Any, Callable, Iterator

from .errors import AuthenticationSkipped
from .logging_config import get_logger

logger = get_logger(__name__)

USERNAME_ENV = "COPERNICUSMARINE_SERVICE_USERNAME"
PASSWORD_ENV = "COPERNICUSMARINE_SERVICE_PASSWORD"


class CopernicusCredentials:
    """Username/password pair for Copernicus Marine.

    Use the real password; do not URL-encode characters such as "@".
    """

    def __init__(self, username: str = "", password: str = "") -> None:
        self._username = username or ""
        self._password = password or ""

    @classmethod
    def from_env(cls) -> "CopernicusCredentials":
        """Read credentials from the Copernicus Marine environment variables."""
        return cls(os.getenv(USERNAME_ENV, ""), os.getenv(PASSWORD_ENV, ""))

    @property
    def username(self) -> str:
        return self._username

    @property
    def password(self) -> str:
        return self._password

    @property
    def is_blank(self) -> bool:
        return not self._username.strip() or not self._password.strip()

    def clear(self) -> None:
        self._username = ""
        self._password = ""

    def __repr__(self) -> str:
        masked = "***" if self._password else "''"
        return f"CopernicusCredentials(username={self._username!r}, password={masked})"


@contextmanager
def scoped_credentials(credentials: CopernicusCredentials) -> Iterator[CopernicusCredentials]:
    """Yield credentials and clear them on exit, error included."""
    try:
        yield credentials
    finally:
        credentials.clear()


def copernicus_login(
    credentials: CopernicusCredentials,
    login: Callable[..., Any] | None = None,
) -> bool:
    """Log in to Copernicus Marine once so later downloads reuse cached credentials.

    Args:
        credentials: Username/password pair.
        login: Login function; defaults to ``copernicusmarine.login``.

    Returns:
        True when the login call was made and not rejected, False when skipped
        or rejected.
    """
    if credentials.is_blank:
        warnings.warn(
            "Copernicus Marine credentials are blank; skipping login. "
            f"Set {USERNAME_ENV}/{PASSWORD_ENV} to avoid interactive prompts.",
            AuthenticationSkipped,
            stacklevel=2,
        )
        logger.warning("copernicus_login_skipped", reason="blank credentials")
        return False

    if login is None:
        login = importlib.import_module("copernicusmarine").login

    result = login(username=credentials.username, password=credentials.password)
    # older clients return None; newer ones return False for rejected credentials
    if result is False:
        logger.error("copernicus_login_rejected", username=credentials.username)
        return False
    logger.info("copernicus_login_ok", username=credentials.username)
    return True
