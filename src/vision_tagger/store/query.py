"""Search queries against a ResultStore."""

from datetime import UTC, datetime

from vision_tagger.config import LABEL_CONFIDENCE_RANGE
from vision_tagger.models import DetectionResult
from vision_tagger.store.result_store import ResultStore


def _as_utc(value: datetime | None) -> datetime | None:
    """Stored timestamps are UTC; read a naive bound as UTC too."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _candidates(store: ResultStore, user_id: str | None) -> list[DetectionResult]:
    """Use the per-user index when a user is given, otherwise scan everything."""
    if user_id is not None:
        return store.get_by_user_id(user_id)
    return store.results()


def get_label_names(store: ResultStore) -> list[str]:
    """Get distinct label names across all stored results."""
    return sorted({label.name for result in store.results() for label in result.labels})


def search_by_label(
    store: ResultStore,
    name: str,
    min_confidence: float = 0.0,
    user_id: str | None = None,
) -> list[DetectionResult]:
    """Results with a label named ``name`` (case-insensitive) at or above ``min_confidence``."""
    if name is None or not name.strip():
        raise ValueError("Label name cannot be null or empty")
    if min_confidence is None:
        raise ValueError("Minimum confidence cannot be null")
    low, high = LABEL_CONFIDENCE_RANGE
    if not low <= min_confidence <= high:
        raise ValueError(f"Minimum confidence must be between {low} and {high}")

    wanted = name.strip().lower()
    return [
        result
        for result in _candidates(store, user_id)
        if any(
            label.name.lower() == wanted and label.confidence >= min_confidence
            for label in result.labels
        )
    ]


def search_by_date(
    store: ResultStore,
    start: datetime | None = None,
    end: datetime | None = None,
    user_id: str | None = None,
) -> list[DetectionResult]:
    """Results detected within ``[start, end]``. Either bound may be omitted."""
    start, end = _as_utc(start), _as_utc(end)
    if start is not None and end is not None and start > end:
        raise ValueError("Start of the date range must not be after its end")
    return [
        result
        for result in _candidates(store, user_id)
        if (start is None or result.detected_at >= start)
        and (end is None or result.detected_at <= end)
    ]
