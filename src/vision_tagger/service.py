"""User management and the upload/analyze/store workflow."""

import logging

from vision_tagger.analyzer import ImageAnalyzer
from vision_tagger.config import ANONYMOUS_UPLOADER_ID
from vision_tagger.models import (
    DetectionResult,
    Image,
    User,
    create_guest,
    create_registered,
    registered_user_id,
)
from vision_tagger.render import Renderer
from vision_tagger.store.result_store import ResultStore
from vision_tagger.store.user_directory import UserDirectory

logger = logging.getLogger(__name__)


class UserService:
    """Create guests, register and look up users against a UserDirectory."""

    def __init__(self, directory: UserDirectory) -> None:
        if directory is None:
            raise ValueError("User directory cannot be null")
        self.directory = directory

    def create_guest_user(self, username: str | None) -> User:
        return create_guest(username)

    def create_registered_user(self, username: str | None, email: str | None) -> User:
        """Register a new user. Raises ValueError if the username is taken."""
        user = create_registered(username, email)
        if not self.is_username_available(user.username):
            raise ValueError(f"Username already exists: {user.username}")
        logger.info("Registered user %s", user.id)
        return self.directory.save(user)

    def is_username_available(self, username: str | None) -> bool:
        """False if the username or its derived id is already taken.

        "bob_smith" and "bob smith" are different directory keys but share an id.
        """
        if username is None or not username.strip():
            return False
        if self.directory.exists(username):
            return False
        return self.directory.find_by_id(registered_user_id(username)) is None

    def find_by_username(self, username: str | None) -> User | None:
        if username is None or not username.strip():
            return None
        return self.directory.find(username)

    def login(self, username: str | None) -> User | None:
        """Return the stored registered user, or None."""
        user = self.find_by_username(username)
        if user is None or not user.is_registered:
            return None
        return user


class ImageController:
    """Coordinate the analyzer, the result store and a renderer.

    ``store`` and ``renderer`` are optional; operations that need a missing
    collaborator raise RuntimeError.
    """

    def __init__(
        self,
        analyzer: ImageAnalyzer,
        store: ResultStore | None = None,
        renderer: Renderer | None = None,
    ) -> None:
        if analyzer is None:
            raise ValueError("Analyzer cannot be null")
        self.analyzer = analyzer
        self.store = store
        self.renderer = renderer

    def _require_store(self) -> ResultStore:
        if self.store is None:
            raise RuntimeError("No result store configured")
        return self.store

    def _require_renderer(self) -> Renderer:
        if self.renderer is None:
            raise RuntimeError("No renderer configured")
        return self.renderer

    def _analyze(
        self, uploader_id: str, path: str | None, description: str | None
    ) -> DetectionResult:
        if path is None or not path.strip():
            raise ValueError("File path cannot be null or empty")
        image = Image(uploader_id, path, description)
        return self.analyzer.detect(image)

    def upload_and_analyze(
        self, user: User, path: str, description: str | None = None
    ) -> DetectionResult:
        """Analyze an image for ``user`` and always persist the result."""
        if user is None:
            raise ValueError("User cannot be null")
        store = self._require_store()
        result = self._analyze(user.id, path, description)
        store.save(result)
        return result

    def process(
        self,
        path: str,
        description: str | None = None,
        uploader_id: str = ANONYMOUS_UPLOADER_ID,
    ) -> DetectionResult:
        """Analyze and display without persisting."""
        renderer = self._require_renderer()
        result = self._analyze(uploader_id, path, description)
        renderer.display(result)
        return result

    def process_for_user(
        self, user: User, path: str, description: str | None = None
    ) -> DetectionResult:
        """Analyze for ``user``; persist only registered users' results."""
        if user is None:
            raise ValueError("User cannot be null")
        result = self._analyze(user.id, path, description)
        if user.is_registered and self.store is not None:
            self.store.save(result)
            logger.info("Saved result %s for %s", result.image.id, user.id)
        else:
            logger.info("Result %s not saved (guest or no store)", result.image.id)
        if self.renderer is not None:
            self.renderer.display(result)
        return result

    def get_detection_result(self, image_id: str) -> DetectionResult | None:
        if image_id is None or not image_id.strip():
            raise ValueError("Image ID cannot be null or empty")
        return self._require_store().get_by_image_id(image_id)

    def list_user_results(self, user: User) -> list[DetectionResult]:
        if user is None:
            raise ValueError("User cannot be null")
        return self._require_store().get_by_user_id(user.id)

    def display_user_history(self, user: User) -> list[DetectionResult]:
        """Render every stored result for ``user`` and return them."""
        results = self.list_user_results(user)
        renderer = self._require_renderer()
        for result in results:
            renderer.display(result)
        return results
