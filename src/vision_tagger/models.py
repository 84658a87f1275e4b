"""Data models for users, images and detection results."""

import dataclasses
import re
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from vision_tagger.config import LABEL_CONFIDENCE_RANGE, REGISTERED_ID_PREFIX

_WHITESPACE_RE = re.compile(r"\s")


def _require_text(value: str | None, what: str) -> str:
    """Return ``value`` trimmed, or raise ValueError if it is None or blank."""
    if value is None or not value.strip():
        raise ValueError(f"{what} cannot be null or empty")
    return value.strip()


def _now() -> datetime:
    return datetime.now(UTC)


def normalize_username(username: str) -> str:
    """Directory key for a username: trimmed and lowercased."""
    return username.strip().lower()


def registered_user_id(username: str) -> str:
    """Deterministic id for a registered user, e.g. ``" Anna Lee"`` -> ``"user_anna_lee"``.

    Each whitespace character maps to one ``_``, so ids are exactly as
    distinct as directory keys.
    """
    return REGISTERED_ID_PREFIX + _WHITESPACE_RE.sub("_", normalize_username(username))


class UserKind(Enum):
    GUEST = "guest"
    REGISTERED = "registered"


@dataclass(frozen=True)
class User:
    """A guest or registered user.

    Equality and hashing use ``id`` only. Guests get a random id so two guests
    with the same username are distinct; registered users get an id derived
    from the normalized username so equivalent usernames collide.
    """

    id: str
    username: str = field(compare=False)
    email: str = field(compare=False)
    kind: UserKind = field(compare=False)

    def __post_init__(self) -> None:
        _require_text(self.id, "User ID")
        _require_text(self.username, "Username")
        if self.kind is UserKind.REGISTERED:
            _require_text(self.email, "Email")
        elif self.email != "":
            raise ValueError("Guest users cannot have an email")

    @classmethod
    def guest(cls, username: str | None) -> "User":
        name = _require_text(username, "Username")
        return cls(id=str(uuid.uuid4()), username=name, email="", kind=UserKind.GUEST)

    @classmethod
    def registered(cls, username: str | None, email: str | None) -> "User":
        name = _require_text(username, "Username")
        address = _require_text(email, "Email")
        return cls(
            id=registered_user_id(name),
            username=name,
            email=address,
            kind=UserKind.REGISTERED,
        )

    @property
    def is_registered(self) -> bool:
        return self.kind is UserKind.REGISTERED

    def __str__(self) -> str:
        return (
            f"User[id={self.id}, username={self.username}, email={self.email}, "
            f"type={self.kind.name}]"
        )


def create_guest(username: str | None) -> User:
    """Create a transient guest user. Never touches a directory."""
    return User.guest(username)


def create_registered(username: str | None, email: str | None) -> User:
    """Create a registered user.

    Uniqueness is not checked here; that is the job of
    :class:`vision_tagger.store.user_directory.UserDirectory`.
    """
    return User.registered(username, email)


@dataclass(frozen=True)
class Image:
    """A single upload event.

    Every instance gets a fresh ``id`` unless one is passed explicitly, so
    analysing the same file twice yields two distinct images. ``uploader_id``
    is a plain reference to ``User.id``.
    """

    uploader_id: str = field(compare=False)
    storage_path: str = field(compare=False)
    description: str | None = field(default="", compare=False)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    uploaded_at: datetime = field(default_factory=_now, compare=False)

    def __post_init__(self) -> None:
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "uploader_id", _require_text(self.uploader_id, "Uploader ID"))
        object.__setattr__(self, "storage_path", _require_text(self.storage_path, "Storage path"))
        object.__setattr__(self, "description", (self.description or "").strip())
        object.__setattr__(self, "id", _require_text(self.id, "Image ID"))

    def reassigned_to(self, uploader_id: str) -> "Image":
        """Return a copy of this image, same id, attributed to another user."""
        return dataclasses.replace(self, uploader_id=uploader_id)

    def __str__(self) -> str:
        return (
            f"Image[id={self.id}, uploaderId={self.uploader_id}, "
            f"storagePath={self.storage_path}, uploadedAt={self.uploaded_at.isoformat()}, "
            f"description={self.description}]"
        )


@dataclass(frozen=True)
class Label:
    """A detected label with a confidence percentage in [0, 100]."""

    name: str
    confidence: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", _require_text(self.name, "Label name"))
        if self.confidence is None:
            raise ValueError("Confidence cannot be null")
        confidence = float(self.confidence)
        low, high = LABEL_CONFIDENCE_RANGE
        # NaN fails this comparison too
        if not low <= confidence <= high:
            raise ValueError(
                f"Confidence must be between {low} and {high}, got {self.confidence}"
            )
        object.__setattr__(self, "confidence", confidence)

    def __str__(self) -> str:
        return f"{self.name} ({self.confidence:.2f}%)"


@dataclass(eq=False)
class DetectionResult:
    """Labels detected for one image, in detection order.

    Labels can only be appended through :meth:`add_label`; :attr:`labels`
    returns a tuple snapshot. Equality is identity.
    """

    image: Image
    detected_at: datetime = field(default_factory=_now)
    _labels: list[Label] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.image is None:
            raise ValueError("Detection result requires an image")

    @property
    def labels(self) -> tuple[Label, ...]:
        return tuple(self._labels)

    def add_label(self, label: Label) -> None:
        if label is None:
            raise ValueError("Label cannot be null")
        self._labels.append(label)

    @property
    def top_label(self) -> Label | None:
        """Highest-confidence label; the earliest one wins a tie."""
        return max(self._labels, key=lambda label: label.confidence, default=None)

    def sorted_labels(self) -> list[Label]:
        return sorted(self._labels, key=lambda label: label.confidence, reverse=True)

    def __str__(self) -> str:
        labels = ", ".join(str(label) for label in self._labels)
        return f"Recognition result for {self.image.storage_path}:\n[{labels}]"
