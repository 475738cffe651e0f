"""Camera module for view and ray generation.

Components:
    camera: Thin-lens camera with depth of field and a shutter interval

Ray generation uses normalized image coordinates:
    s in [0, 1]: left to right across image
    t in [0, 1]: bottom to top across image
"""

from .camera import Camera

__all__ = ["Camera"]
