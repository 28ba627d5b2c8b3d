"""setlist-relay: audio track identification relay."""

__version__ = "0.1.0"
