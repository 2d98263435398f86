"""Task Assistant - issue triage automation engine."""

__version__ = "0.1.0"
