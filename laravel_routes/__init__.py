"""Laravel Route Paths: resolve the full URL of every route in a routes file."""

__version__ = "0.1.0"

from .route_extractor import resolve  # noqa: E402

__all__ = ["resolve", "__version__"]
