"""In-memory stores for registered users and detection results."""

from vision_tagger.store.result_store import ResultStore
from vision_tagger.store.user_directory import UserDirectory

__all__ = ["ResultStore", "UserDirectory"]
