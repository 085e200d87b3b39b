"""Find form definition files by ID."""
from pathlib import Path
from typing import Optional


class FormDefinitionFinder:
    """Search form definition files under the given base directory."""

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir

    def find_by_id(self, form_id: str) -> Optional[Path]:
        """
        Find a form definition file by form ID.

        Args:
            form_id: Form ID (e.g., "author")

        Returns:
            The Path if found, otherwise None.
        """
        if not self.base_dir.is_dir():
            return None

        priority = [".yaml", ".yml"]
        candidates: list[Path] = []
        for ext in priority:
            for file_path in self.base_dir.rglob(f"{form_id}{ext}"):
                if file_path.is_file():
                    candidates.append(file_path)

        if not candidates:
            return None

        # .yaml wins over .yml, then shallowest path
        candidates.sort(key=lambda path: (priority.index(path.suffix), len(path.parts), str(path)))
        return candidates[0]
