"""LogiTrack package registry service."""

__version__ = "0.1.0"
