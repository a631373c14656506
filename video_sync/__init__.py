"""Video Sync - keeps a local, deduplicated feed of a YouTube channel's uploads."""

__version__ = "0.2.0"
