from .ppm import (
    DecodeResult,
    Header,
    decode_ppm,
    detect_format,
    read_ppm,
    read_ppm_header,
    try_decode_ppm,
)

__all__ = [
    "DecodeResult",
    "Header",
    "decode_ppm",
    "detect_format",
    "read_ppm",
    "read_ppm_header",
    "try_decode_ppm",
]
