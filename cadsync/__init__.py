"""Geometry hand-off between CAD applications through a shared sync folder."""

__version__ = "0.1.0"
