"""Gradio page showing one detection result."""

import logging
from pathlib import Path

import gradio as gr
from PIL import Image

from vision_tagger.config import GUI_PORT, GUI_TITLE
from vision_tagger.models import DetectionResult

logger = logging.getLogger(__name__)

PREVIEW_SIZE = (450, 350)


def label_confidences(result: DetectionResult) -> dict[str, float]:
    """Map label names to 0-1 scores for ``gr.Label``, highest first."""
    return {label.name: round(label.confidence / 100.0, 4) for label in result.sorted_labels()}


def load_preview(storage_path: str, max_size: tuple[int, int] = PREVIEW_SIZE) -> Image.Image | None:
    """Open the image as an RGB thumbnail, or None if it is missing or unreadable."""
    path = Path(storage_path)
    if not path.is_file():
        return None
    try:
        with Image.open(path) as img:
            preview = img.convert("RGB")
    except OSError as exc:
        logger.warning("Cannot open %s for preview: %s", path, exc)
        return None
    preview.thumbnail(max_size)
    return preview


def create_app(result: DetectionResult) -> gr.Blocks:
    """Build the result page without launching it."""
    preview = load_preview(result.image.storage_path)
    detected = result.detected_at.strftime("%Y-%m-%d %H:%M:%S")

    with gr.Blocks(title=GUI_TITLE) as app:
        gr.Markdown(f"# {GUI_TITLE}")
        with gr.Row():
            if preview is not None:
                gr.Image(
                    value=preview,
                    type="pil",
                    label=result.image.storage_path,
                    interactive=False,
                )
            else:
                gr.Markdown(f"Image not found: `{result.image.storage_path}`")
            gr.Label(value=label_confidences(result), label="Detected Labels")
        gr.Markdown(f"{len(result.labels)} labels, detected at {detected}")
    return app


class GradioRenderer:
    """Open the result page in a browser."""

    def __init__(self, server_port: int | None = GUI_PORT, inbrowser: bool = True) -> None:
        self.server_port = server_port
        self.inbrowser = inbrowser

    def display(self, result: DetectionResult) -> None:
        app = create_app(result)
        app.launch(server_port=self.server_port, inbrowser=self.inbrowser)
