"""In-memory store of detection results.

Mimics a key-value table with a global secondary index:

- primary table: ``image_id -> DetectionResult`` (latest save wins)
- secondary index: ``user_id -> [image_id, ...]`` in insertion order

Stored results are kept by reference. Callers must not append labels to a
result after saving it.
"""

import logging

from vision_tagger.models import DetectionResult

logger = logging.getLogger(__name__)


def _require_key(value: str | None, what: str) -> str:
    if value is None or not value.strip():
        raise ValueError(f"{what} cannot be null or empty")
    return value.strip()


def _result_keys(result: DetectionResult | None) -> tuple[str, str]:
    """Validate a result for saving and return its (image_id, user_id)."""
    if result is None:
        raise ValueError("Result cannot be null")
    image = getattr(result, "image", None)
    if image is None:
        raise ValueError("Result must contain a non-null image")
    image_id = _require_key(image.id, "Image ID")
    user_id = _require_key(image.uploader_id, "Uploader ID")
    return image_id, user_id


class ResultStore:
    """Detection results by image id, with a per-user secondary index."""

    def __init__(self) -> None:
        self._results: dict[str, DetectionResult] = {}
        self._user_index: dict[str, list[str]] = {}

    def save(self, result: DetectionResult) -> None:
        """Insert or overwrite the result stored under ``result.image.id``.

        Re-saving an image id under a different uploader moves the id from the
        old owner's index entry to the new owner's.
        """
        image_id, user_id = _result_keys(result)
        existing = self._results.get(image_id)
        self._results[image_id] = result

        if existing is None:
            self._user_index.setdefault(user_id, []).append(image_id)
            logger.debug("Inserted result %s for user %s", image_id, user_id)
            return

        old_user_id = existing.image.uploader_id.strip()
        if old_user_id == user_id:
            logger.debug("Replaced result %s for user %s", image_id, user_id)
            return

        self._unindex(old_user_id, image_id)
        self._user_index.setdefault(user_id, []).append(image_id)
        logger.debug("Moved result %s from user %s to %s", image_id, old_user_id, user_id)

    def get_by_image_id(self, image_id: str) -> DetectionResult | None:
        return self._results.get(_require_key(image_id, "Image ID"))

    def get_by_user_id(self, user_id: str) -> list[DetectionResult]:
        """Results attributed to a user, in the order they were first indexed."""
        image_ids = self._user_index.get(_require_key(user_id, "User ID"), [])
        return [self._results[i] for i in image_ids if i in self._results]

    def exists(self, image_id: str) -> bool:
        return _require_key(image_id, "Image ID") in self._results

    def delete(self, image_id: str) -> bool:
        """Remove a result. Returns False if nothing was stored under the id."""
        key = _require_key(image_id, "Image ID")
        result = self._results.pop(key, None)
        if result is None:
            return False
        self._unindex(result.image.uploader_id.strip(), key)
        logger.debug("Deleted result %s", key)
        return True

    def count(self, user_id: str) -> int:
        return len(self._user_index.get(_require_key(user_id, "User ID"), []))

    def user_ids(self) -> list[str]:
        """Ids of users that own at least one stored result."""
        return list(self._user_index)

    def results(self) -> list[DetectionResult]:
        """Every stored result in insertion order."""
        return list(self._results.values())

    def clear(self) -> None:
        self._results.clear()
        self._user_index.clear()

    def __len__(self) -> int:
        return len(self._results)

    def _unindex(self, user_id: str, image_id: str) -> None:
        image_ids = self._user_index.get(user_id)
        if image_ids is None:
            return
        if image_id in image_ids:
            image_ids.remove(image_id)
        if not image_ids:
            del self._user_index[user_id]
