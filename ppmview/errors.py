# ppmview/errors.py


class DecodeError(ValueError):
    """Błąd dekodowania PPM. Każdy przerywa pojedyncze wywołanie dekodera."""


class UnsupportedFormat(DecodeError):
    """Brak lub zły magic number (oczekiwano P3/P6)."""


class MalformedHeader(DecodeError):
    """Nie da się odczytać szerokości, wysokości albo maxval."""


class InvalidMaxColorValue(DecodeError):
    """maxval równe 0 albo poza obsługiwanym zakresem."""


class TruncatedPixelData(DecodeError):
    """Za mało danych pikseli (tylko w trybie strict)."""
