"""
Local Storage

A small durable key/value store backed by one JSON file, used the way a
browser uses localStorage: values are JSON-serialized strings under fixed
keys.

Keys:
- "user": the signed-in session {_id, name, email, token}
- "darkMode": "true" / "false"
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from bookreview.client.models import SessionUser

logger = logging.getLogger(__name__)

USER_KEY = "user"
DARK_MODE_KEY = "darkMode"
STORAGE_FILENAME = "storage.json"


class LocalStorage:
    """JSON-file backed key/value storage."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory).expanduser()
        self.path = self.directory / STORAGE_FILENAME
        self._items: dict[str, str] = {}
        self.load()

    def load(self) -> None:
        """Load items from disk; a missing or unreadable file starts empty."""
        if not self.path.exists():
            self._items = {}
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read {self.path}, starting with empty storage: {e}")
            self._items = {}
            return

        self._items = {str(k): str(v) for k, v in data.items()} if isinstance(data, dict) else {}

    def _save(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._items, f, indent=2, ensure_ascii=False)

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value
        self._save()

    def remove_item(self, key: str) -> None:
        if self._items.pop(key, None) is not None:
            self._save()

    # -------------------------------------------------------------------------
    # Typed helpers
    # -------------------------------------------------------------------------
    def load_session(self) -> SessionUser | None:
        """Return the persisted session, or None if absent or malformed."""
        raw = self.get_item(USER_KEY)
        if raw is None:
            return None
        try:
            return SessionUser.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding malformed stored session: {e.error_count()} error(s)")
            return None

    def save_session(self, user: SessionUser) -> None:
        self.set_item(USER_KEY, user.model_dump_json(by_alias=True))

    def clear_session(self) -> None:
        self.remove_item(USER_KEY)

    def load_dark_mode(self) -> bool:
        raw = self.get_item(DARK_MODE_KEY)
        if raw is None:
            return False
        try:
            return bool(json.loads(raw))
        except json.JSONDecodeError:
            return False

    def save_dark_mode(self, enabled: bool) -> None:
        self.set_item(DARK_MODE_KEY, json.dumps(enabled))
