"""Renderers that display a DetectionResult."""

import importlib
from typing import Any, Protocol

from vision_tagger.models import DetectionResult


class Renderer(Protocol):
    """Anything that can display a detection result."""

    def display(self, result: DetectionResult) -> None: ...


def get_renderer(name: str, **kwargs: Any) -> Renderer:
    """Build the renderer registered under ``name`` in RENDERER_CHOICES."""
    from vision_tagger.config import RENDERER_CHOICES

    target = RENDERER_CHOICES.get((name or "").strip().lower())
    if target is None:
        choices = ", ".join(sorted(RENDERER_CHOICES))
        raise ValueError(f"Unknown renderer {name!r} (choose from: {choices})")
    module_name, class_name = target.split(":")
    renderer_cls = getattr(importlib.import_module(module_name), class_name)
    return renderer_cls(**kwargs)
