"""Client-side session: the bearer token and the signed-in user.

The session is an explicit object handed to the API client. Persistence
happens only through ``load``/``save``/``clear``, called at process or
sign-in/sign-out boundaries.
"""

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

if TYPE_CHECKING:
    from .api import CatalogApiClient

logger = logging.getLogger(__name__)


class ClientSession:
    """Token and user of the current client, optionally backed by a JSON file."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        self.token: Optional[str] = None
        self.user: Optional[Dict[str, Any]] = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def authenticate(self, token: str, user: Dict[str, Any]) -> None:
        """Adopt a freshly issued token and persist it."""
        self.token = token
        self.user = user
        self.save()

    def load(self) -> Optional[str]:
        """Read a previously saved token; returns it or None."""
        if self.path is None or not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return None
        self.token = data.get("token")
        self.user = data.get("user")
        return self.token

    def save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps({"token": self.token, "user": self.user}),
            encoding="utf-8",
        )

    def clear(self) -> None:
        """Forget the token (logout or rejected token)."""
        self.token = None
        self.user = None
        if self.path is not None and self.path.exists():
            self.path.unlink()

    async def restore(self, api: "CatalogApiClient") -> Optional[Dict[str, Any]]:
        """
        Load a saved token and confirm it with the server.

        A token the server rejects is cleared. Returns the current user or
        None when signed out.
        """
        from .api import ApiError

        if not self.load():
            return None
        try:
            self.user = await api.get_current_user()
        except ApiError as e:
            logger.warning(f"Saved session rejected ({e.status_code}); signing out")
            self.clear()
            return None
        return self.user
