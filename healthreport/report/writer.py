"""
Report writer.

Persists the rendered document (and optionally the raw snapshot as JSON),
overwriting any existing file. A failed write is logged and reported to the
caller; it is never retried.
"""

import json
import logging
from pathlib import Path

from ..core.models import HealthSnapshot


logger = logging.getLogger(__name__)


class ReportWriter:
    """Writes report artifacts to disk."""

    def __init__(self, output_path: str = "SystemHealthReport.html"):
        self.output_path = Path(output_path)

    def write(self, html: str) -> bool:
        """Write *html* to the output path. Returns False if the write failed."""
        try:
            self.output_path.write_text(html, encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to write report to {self.output_path}: {e}")
            return False

        logger.debug(f"Wrote {len(html)} characters to {self.output_path}")
        return True

    def write_json(self, snapshot: HealthSnapshot, path: str) -> bool:
        """Write the snapshot as JSON to *path*. Returns False if the write failed."""
        json_path = Path(path)
        try:
            with open(json_path, "w", encoding="utf-8") as f:
                json.dump(snapshot.to_dict(), f, indent=2, default=str)
        except OSError as e:
            logger.error(f"Failed to write snapshot to {json_path}: {e}")
            return False

        logger.info(f"Snapshot saved to {json_path}")
        return True
