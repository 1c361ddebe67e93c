from .errors import (
    DecodeError,
    InvalidMaxColorValue,
    MalformedHeader,
    TruncatedPixelData,
    UnsupportedFormat,
)
from .io.ppm import DecodeResult, decode_ppm, read_ppm, try_decode_ppm
from .raster import RasterImage

__version__ = "0.1.0"

__all__ = [
    "DecodeError",
    "DecodeResult",
    "InvalidMaxColorValue",
    "MalformedHeader",
    "RasterImage",
    "TruncatedPixelData",
    "UnsupportedFormat",
    "decode_ppm",
    "read_ppm",
    "try_decode_ppm",
]
