"""Random label generator standing in for a recognition service."""

import logging

import numpy as np

from vision_tagger.config import (
    ANALYZER_SEED,
    MAX_CONFIDENCE,
    MAX_LABELS,
    MIN_CONFIDENCE,
    MIN_LABELS,
    SAMPLE_LABELS,
)
from vision_tagger.models import DetectionResult, Image, Label

logger = logging.getLogger(__name__)


class MockAnalyzer:
    """Produce between ``min_labels`` and ``max_labels`` unique random labels.

    Confidences are drawn uniformly from [MIN_CONFIDENCE, MAX_CONFIDENCE).
    Pass ``seed`` (or set VISION_TAGGER_SEED) for reproducible output.
    """

    def __init__(
        self,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
        labels: tuple[str, ...] = SAMPLE_LABELS,
        min_labels: int = MIN_LABELS,
        max_labels: int = MAX_LABELS,
    ) -> None:
        if not labels:
            raise ValueError("At least one sample label is required")
        if min_labels < 0 or max_labels < min_labels:
            raise ValueError("Label count bounds must satisfy 0 <= min_labels <= max_labels")
        self.rng = rng or np.random.default_rng(seed if seed is not None else ANALYZER_SEED)
        self.labels = labels
        self.min_labels = min_labels
        self.max_labels = max_labels

    def detect(self, image: Image) -> DetectionResult:
        if image is None:
            raise ValueError("Image cannot be null")
        result = DetectionResult(image)

        count = int(self.rng.integers(self.min_labels, self.max_labels + 1))
        count = min(count, len(self.labels))
        picks = self.rng.choice(len(self.labels), size=count, replace=False)
        for index in picks:
            confidence = float(self.rng.uniform(MIN_CONFIDENCE, MAX_CONFIDENCE))
            result.add_label(Label(self.labels[int(index)], confidence))

        logger.info("Detected %d labels for image %s", len(result.labels), image.id)
        return result
