"""
Explicit auth session for the API client.

The session holds the bearer token and the signed-in user. It is injected
into ``ApiClient`` instead of being read from ambient storage, and it
notifies listeners when it is cleared because the backend rejected the
token.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from jobportal.core.models import User

logger = logging.getLogger(__name__)


class SessionStore:
    """Persists a session as a small JSON file."""

    def __init__(self, path: str):
        self.path = Path(path).expanduser()

    def load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def save(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as fh:
            json.dump(data, fh)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


class AuthSession:
    """Token and user of the signed-in viewer."""

    def __init__(self, token: Optional[str] = None, user: Optional[User] = None,
                 store: Optional[SessionStore] = None):
        self.token = token
        self.user = user
        self.store = store
        self._expired_listeners: List[Callable[[], None]] = []

    @classmethod
    def from_store(cls, store: SessionStore) -> "AuthSession":
        """Restore a session previously saved to ``store``."""
        data = store.load()
        user = None
        if data.get("user"):
            user = User.model_validate(data["user"])
        return cls(token=data.get("token"), user=user, store=store)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def user_id(self) -> Optional[str]:
        return self.user.id if self.user else None

    def sign_in(self, token: str, user: User) -> None:
        self.token = token
        self.user = user
        if self.store:
            self.store.save({"token": token, "user": user.model_dump(by_alias=True, mode="json")})
        logger.info(f"Signed in as {user.email or user.id}")

    def clear(self) -> None:
        self.token = None
        self.user = None
        if self.store:
            self.store.clear()

    def on_expired(self, listener: Callable[[], None]) -> None:
        """Register a callback fired when the backend rejects the token."""
        self._expired_listeners.append(listener)

    def expire(self) -> None:
        """Clear credentials and notify listeners."""
        logger.warning("Session expired; clearing stored credentials")
        self.clear()
        for listener in list(self._expired_listeners):
            listener()
