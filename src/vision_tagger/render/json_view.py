"""Structured (JSON) renderer."""

import json
from typing import IO, Any

from vision_tagger.models import DetectionResult


def to_dict(result: DetectionResult) -> dict[str, Any]:
    """Convert a detection result into JSON-serialisable primitives."""
    return {
        "image": result.image.storage_path,
        "image_id": result.image.id,
        "uploader_id": result.image.uploader_id,
        "description": result.image.description,
        "detected_at": result.detected_at.isoformat(),
        "labels": [
            {"name": label.name, "confidence": round(label.confidence, 2)}
            for label in result.labels
        ],
    }


class JsonRenderer:
    def __init__(self, stream: IO[str] | None = None, indent: int = 2) -> None:
        self.stream = stream
        self.indent = indent

    def display(self, result: DetectionResult) -> None:
        print(json.dumps(to_dict(result), indent=self.indent, ensure_ascii=False), file=self.stream)
