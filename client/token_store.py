"""
Token Store
Persists the bearer credential between client runs
"""

import os
from pathlib import Path
from typing import Optional, Union
from loguru import logger

from client.settings import client_settings


class TokenStore:
    """Single bearer token kept in a user-only file"""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        path = path or client_settings.CLIENT_TOKEN_FILE
        self.path = Path(os.path.expanduser(str(path)))

    def load(self) -> Optional[str]:
        try:
            token = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return token or None

    def save(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(token, encoding="utf-8")
        os.chmod(self.path, 0o600)
        logger.debug(f"Token saved to {self.path}")

    def clear(self) -> None:
        try:
            self.path.unlink()
            logger.debug(f"Token removed from {self.path}")
        except FileNotFoundError:
            pass


class MemoryTokenStore(TokenStore):
    """Process-local store for scripts and tests"""

    def __init__(self, token: Optional[str] = None):
        self.token = token

    def load(self) -> Optional[str]:
        return self.token

    def save(self, token: str) -> None:
        self.token = token

    def clear(self) -> None:
        self.token = None
