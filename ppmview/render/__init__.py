from .surface import Surface
from .surface_photoimage import PhotoSurface

__all__ = ["Surface", "PhotoSurface"]
