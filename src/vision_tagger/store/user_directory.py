"""Registry of registered users keyed by normalized username."""

import logging

from vision_tagger.models import User, normalize_username

logger = logging.getLogger(__name__)


class UserDirectory:
    """Case-insensitive registry of registered users.

    Keys are ``normalize_username(user.username)``. Saving a registered user
    overwrites any entry under the same key (last write wins), which is how a
    profile update such as an email change is recorded. Guests are accepted by
    :meth:`save` but never stored.
    """

    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    def exists(self, username: str | None) -> bool:
        """True only if a registered user is stored under this username."""
        user = self.find(username)
        return user is not None and user.is_registered

    def find(self, username: str | None) -> User | None:
        if username is None or not username.strip():
            return None
        return self._users.get(normalize_username(username))

    def find_by_id(self, user_id: str | None) -> User | None:
        """Stored user whose id is ``user_id``, or None."""
        if user_id is None or not user_id.strip():
            return None
        user_id = user_id.strip()
        return next((user for user in self._users.values() if user.id == user_id), None)

    def save(self, user: User | None) -> User:
        if user is None:
            raise ValueError("User cannot be null")
        if not user.is_registered:
            logger.debug("Not storing guest user %s", user.id)
            return user
        key = normalize_username(user.username)
        if key in self._users:
            logger.debug("Replacing registered user %r", key)
        self._users[key] = user
        return user

    def clear(self) -> None:
        self._users.clear()

    def __len__(self) -> int:
        return len(self._users)
