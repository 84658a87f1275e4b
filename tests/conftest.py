"""Shared test fixtures."""

from datetime import UTC, datetime

import pytest

from vision_tagger.models import DetectionResult, Image, Label, User
from vision_tagger.store import ResultStore, UserDirectory


@pytest.fixture
def store() -> ResultStore:
    """Empty result store."""
    return ResultStore()


@pytest.fixture
def directory() -> UserDirectory:
    """Empty user directory."""
    return UserDirectory()


@pytest.fixture
def anna() -> User:
    """A registered user."""
    return User.registered("Anna", "anna@example.com")


def make_result(
    uploader_id: str,
    path: str = "cat.jpg",
    labels: list[tuple[str, float]] | None = None,
    image_id: str | None = None,
) -> DetectionResult:
    """Helper to create a DetectionResult with a fresh (or given) image id."""
    if image_id is None:
        image = Image(uploader_id, path)
    else:
        image = Image(uploader_id, path, id=image_id)
    result = DetectionResult(image)
    for name, confidence in labels if labels is not None else [("Cat", 95.0)]:
        result.add_label(Label(name, confidence))
    return result


def raw_image(**fields) -> Image:
    """Build an Image without validation, for feeding invalid data to the store."""
    values = {
        "uploader_id": "user_raw",
        "storage_path": "raw.jpg",
        "description": "",
        "id": "raw-image",
        "uploaded_at": datetime(2024, 1, 1, tzinfo=UTC),
    }
    values.update(fields)
    image = object.__new__(Image)
    for name, value in values.items():
        object.__setattr__(image, name, value)
    return image


def raw_result(image: Image | None) -> DetectionResult:
    """Build a DetectionResult without validation (``image`` may be None)."""
    result = object.__new__(DetectionResult)
    result.image = image
    result.detected_at = datetime(2024, 1, 1, tzinfo=UTC)
    result._labels = []
    return result
