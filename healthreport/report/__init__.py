"""Report rendering and output."""

from .renderer import ReportRenderer
from .writer import ReportWriter

__all__ = ["ReportRenderer", "ReportWriter"]
