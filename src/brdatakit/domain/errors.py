from __future__ import annotations

"""Domain exception hierarchy."""


class BrDataError(Exception):
    """Base class for all brdatakit failures."""


class SnapshotError(BrDataError):
    """Raised when the build-time snapshot cannot be produced completely."""
