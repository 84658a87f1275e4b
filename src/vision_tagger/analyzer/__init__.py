"""Image analyzers that turn an Image into a DetectionResult."""

from typing import Protocol

from vision_tagger.models import DetectionResult, Image


class ImageAnalyzer(Protocol):
    """Anything that can detect labels for an image."""

    def detect(self, image: Image) -> DetectionResult: ...
