"""docsync: Markdown document sync and version history for a personal dashboard."""

__version__ = "0.1.0"
