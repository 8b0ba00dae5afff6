"""Workstation health snapshot rendered as a static HTML report."""

__version__ = "1.0.0"
