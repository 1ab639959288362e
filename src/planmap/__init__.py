"""PLANMAP — viewport-synchronized feature drawing for urban planning scenarios."""

from planmap.session import MapSession

__version__ = "0.1.0"

__all__ = ["MapSession", "__version__"]
