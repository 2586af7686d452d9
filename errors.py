class RaycastError(Exception):
    """Base exception for the raycaster."""


class MapError(RaycastError):
    """Raised when a grid map or a spawn position is invalid."""


class PresentError(RaycastError):
    """Raised when the frame buffer could not be shown on screen."""
