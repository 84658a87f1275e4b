"""Project-wide configuration."""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(os.environ.get("VISION_TAGGER_PROJECT_ROOT", Path.cwd()))

load_dotenv(PROJECT_ROOT / ".env")

LOG_LEVEL = os.environ.get("VISION_TAGGER_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(message)s"

# Rendering
DEFAULT_RENDERER = os.environ.get("VISION_TAGGER_RENDERER", "console")
GUI_TITLE = "VisionTagger Detection Result"
_gui_port = os.environ.get("VISION_TAGGER_GUI_PORT")
GUI_PORT = int(_gui_port) if _gui_port else None

# Identity
REGISTERED_ID_PREFIX = "user_"
ANONYMOUS_UPLOADER_ID = "anonymous"

# Labels – confidence is a percentage
LABEL_CONFIDENCE_RANGE = (0.0, 100.0)

# Mock analyzer
_seed = os.environ.get("VISION_TAGGER_SEED")
ANALYZER_SEED = int(_seed) if _seed else None
MIN_LABELS = 3
MAX_LABELS = 15
MIN_CONFIDENCE = 30.0
MAX_CONFIDENCE = 100.0

SAMPLE_LABELS: tuple[str, ...] = (
    # Animals
    "Animal", "Dog", "Cat", "Bird", "Horse", "Otter", "Fish", "Elephant", "Lion", "Bear",
    # Nature & environment
    "Plant", "Flower", "Tree", "Sea", "Ocean", "Beach", "Mountain", "Forest", "Sky", "Water",
    # Food & dining
    "Food", "Pizza", "Coffee", "Fruit", "Vegetable", "Dessert", "Restaurant", "Dining",
    # People & activities
    "Person", "People", "Child", "Adult", "Sports", "Exercise", "Dancing", "Running",
    # Objects & technology
    "Vehicle", "Car", "Bicycle", "Phone", "Computer", "Book", "Furniture", "Clothing",
    # Scenes & settings
    "Indoor", "Outdoor", "Urban", "Nature", "Building", "Room", "Street", "Park",
)

# Renderer name -> "module:ClassName" lookup, resolved lazily so gradio is only
# imported when the graphical renderer is requested.
RENDERER_CHOICES: dict[str, str] = {
    "console": "vision_tagger.render.console:ConsoleRenderer",
    "json": "vision_tagger.render.json_view:JsonRenderer",
    "gui": "vision_tagger.render.graphical:GradioRenderer",
}
