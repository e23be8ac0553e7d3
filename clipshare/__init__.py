"""clipshare: backend for a short-video sharing app."""

__version__ = "0.1.0"
