"""Terminal renderer built on rich."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vision_tagger.models import DetectionResult


class ConsoleRenderer:
    """Print the image path and a table of labels in detection order."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def display(self, result: DetectionResult) -> None:
        self.console.print("[bold]VisionTagger Detection Result[/bold]")
        self.console.print(f"Image: {escape(result.image.storage_path)}")
        if result.image.description:
            self.console.print(f"Description: {escape(result.image.description)}")

        if not result.labels:
            self.console.print("No labels detected.")
            return

        table = Table(title="Detected Labels")
        table.add_column("Label")
        table.add_column("Confidence", justify="right")
        for label in result.labels:
            table.add_row(escape(label.name), f"{label.confidence:.2f}%")
        self.console.print(table)
