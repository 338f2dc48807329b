import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from services.storefront_service.exceptions import StorageFailureError

logger = logging.getLogger(__name__)


class JsonDocumentStore:
    """A single JSON list document, always read and written whole."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> Optional[List[Dict[str, Any]]]:
        """Return the stored list, or None if the document has never been written."""
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read {self.path}: {e}")
            raise StorageFailureError(f"Failed to read {self.path.name}") from e

        if not isinstance(data, list):
            logger.error(f"Document {self.path} is not a JSON list")
            raise StorageFailureError(f"Document {self.path.name} is not a list")

        return data

    def write(self, documents: List[Dict[str, Any]]) -> None:
        """
        Atomic write: write to temp file then rename.

        Readers see either the previous document or the new one, never a partial file.
        On failure the previous document is left untouched.
        """
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # Temp file in the same directory so the rename stays on one filesystem
            with tempfile.NamedTemporaryFile(
                "w",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
                encoding="utf-8",
            ) as tmp:
                tmp_path = tmp.name
                json.dump(documents, tmp, indent=2)
                tmp.flush()
                os.fsync(tmp.fileno())

            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write {self.path}: {e}")
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StorageFailureError(f"Failed to write {self.path.name}") from e
