
from __future__ import annotations

class MediaHostError(Exception):
    """Base class for media host adapter errors."""

class MediaConflict(MediaHostError):
    pass

class MediaValidation(MediaHostError):
    pass

class MediaUpstream(MediaHostError):
    pass
