"""Rule-based resume scoring with history tracking."""

__version__ = "0.3.0"
