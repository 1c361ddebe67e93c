# ppmview/io/ppm.py
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional

from ..constants import MAX_COLOR_VALUE
from ..errors import (
    DecodeError,
    InvalidMaxColorValue,
    MalformedHeader,
    TruncatedPixelData,
    UnsupportedFormat,
)
from ..raster import Color, RasterImage

log = logging.getLogger(__name__)

WHITESPACE = b" \t\n\v\f\r"
HASH = 35  # '#'
EOL = (10, 13)


# ---------- normalizacja próbek ----------


def normalize(raw: int, maxval: int) -> int:
    """Skaluje próbkę z [0, maxval] do [0, 255] (zaokrąglenie połówek w górę)."""
    if maxval <= 0:
        raise InvalidMaxColorValue(f"Nieprawidłowy maxval: {maxval}")
    # uszkodzone dane: przycinamy do zakresu z nagłówka
    if raw < 0:
        raw = 0
    elif raw > maxval:
        raw = maxval
    if maxval == 255:
        return raw
    return (raw * 510 + maxval) // (2 * maxval)


def _scale_table(maxval: int, top: Optional[int] = None) -> List[int]:
    # top: największa surowa wartość, jaką może mieć próbka (P6: 255)
    if top is None:
        top = maxval
    return [normalize(v, maxval) for v in range(top + 1)]


# ---------- autodetekcja ----------


def detect_format(data: bytes) -> str:
    magic = bytes(data[:2])
    if magic == b"P3":
        return "P3"
    if magic == b"P6":
        return "P6"
    raise UnsupportedFormat("Nieznany format PPM (magic nie P3/P6).")


# ---------- nagłówek ----------

SKIP_WHITESPACE = "skip_whitespace"
SKIP_COMMENT = "skip_comment"
READ_TOKEN = "read_token"


class HeaderTokenizer:
    """Automat: SKIP_WHITESPACE -> SKIP_COMMENT / READ_TOKEN -> SKIP_WHITESPACE.

    Po zwróceniu tokenu kursor stoi na bajcie, który go zakończył
    (albo na końcu danych).
    """

    def __init__(self, data: bytes, pos: int = 2):
        self.data = data
        self.pos = pos
        self.state = SKIP_WHITESPACE

    def next_token(self) -> Optional[bytes]:
        data, n = self.data, len(self.data)
        self.state = SKIP_WHITESPACE
        start = self.pos
        while self.pos < n:
            b = data[self.pos]
            if self.state == SKIP_WHITESPACE:
                if b == HASH:
                    self.state = SKIP_COMMENT
                elif b not in WHITESPACE:
                    self.state = READ_TOKEN
                    start = self.pos
            elif self.state == SKIP_COMMENT:
                if b in EOL:
                    self.state = SKIP_WHITESPACE
            elif b in WHITESPACE:
                self.state = SKIP_WHITESPACE
                return bytes(data[start : self.pos])
            self.pos += 1
        if self.state == READ_TOKEN:
            self.state = SKIP_WHITESPACE
            return bytes(data[start:n])
        return None

    def next_int(self, name: str) -> int:
        tok = self.next_token()
        if tok is None:
            raise MalformedHeader(f"Niepełny nagłówek: brak pola {name}.")
        if not tok.isdigit():
            raise MalformedHeader(f"Pole {name} nie jest liczbą: {tok!r}")
        return int(tok)

    def skip_terminator(self):
        # dokładnie jeden bajt białego znaku po maxval (jeśli w ogóle jest)
        if self.pos < len(self.data):
            self.pos += 1


@dataclass(frozen=True)
class Header:
    format: str
    width: int
    height: int
    max_color_value: int
    data_offset: int

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


def read_ppm_header(data: bytes) -> Header:
    fmt = detect_format(data)
    if len(data) > 2 and data[2] not in WHITESPACE and data[2] != HASH:
        raise MalformedHeader(f"Brak separatora po magic number {fmt}.")
    ts = HeaderTokenizer(data, 2)
    w = ts.next_int("width")
    h = ts.next_int("height")
    maxval = ts.next_int("maxval")
    if w <= 0 or h <= 0:
        raise MalformedHeader(f"Nieprawidłowe wymiary {fmt}: {w}x{h}")
    if maxval <= 0 or maxval > MAX_COLOR_VALUE:
        raise InvalidMaxColorValue(f"Nieprawidłowy maxval {fmt}: {maxval}")
    if fmt == "P6" and maxval > 255:
        raise InvalidMaxColorValue(
            f"P6 z maxval {maxval} (próbki 16-bitowe) nie jest obsługiwany."
        )
    ts.skip_terminator()
    return Header(fmt, w, h, maxval, ts.pos)


# ---------- dekodery pikseli ----------


class PixelDecoder:
    """Wspólny kontrakt: dane + nagłówek -> piksele 0..255, wierszami od góry."""

    format = ""

    def decode(self, data: bytes, header: Header) -> List[Color]:
        raise NotImplementedError


class AsciiPixelDecoder(PixelDecoder):
    format = "P3"

    @staticmethod
    def samples(data: bytes, offset: int) -> Iterator[int]:
        # tokeny nieliczbowe (np. słowa komentarza) pomijamy
        for tok in data[offset:].split():
            if tok.isdigit():
                yield int(tok)

    def decode(self, data: bytes, header: Header) -> List[Color]:
        expected = header.pixel_count
        maxval = header.max_color_value
        table = _scale_table(maxval)
        px: List[Color] = []
        triple: List[int] = []
        for v in self.samples(data, header.data_offset):
            triple.append(table[v] if v <= maxval else 255)
            if len(triple) == 3:
                px.append((triple[0], triple[1], triple[2]))
                triple = []
                if len(px) >= expected:
                    break
        # niepełna trójka na końcu przepada
        return px


class BinaryPixelDecoder(PixelDecoder):
    format = "P6"

    def decode(self, data: bytes, header: Header) -> List[Color]:
        start = header.data_offset
        count = min((len(data) - start) // 3, header.pixel_count)
        table = _scale_table(header.max_color_value, 255)
        it = iter(data[start : start + count * 3])
        return [(table[r], table[g], table[b]) for r, g, b in zip(it, it, it)]


DECODERS = {d.format: d for d in (AsciiPixelDecoder(), BinaryPixelDecoder())}


# ---------- API ----------


def decode_ppm(data: bytes, strict: bool = False) -> RasterImage:
    """Dekoduje P3/P6 z bajtów. Błędy: podklasy DecodeError.

    strict=False: obcięte dane dają obraz z mniejszą liczbą pikseli.
    strict=True: obcięte dane -> TruncatedPixelData.
    """
    data = bytes(data)
    header = read_ppm_header(data)
    pixels = DECODERS[header.format].decode(data, header)
    expected = header.pixel_count
    if len(pixels) < expected:
        msg = f"Za mało pikseli {header.format}: {len(pixels)} < {expected}"
        if strict:
            raise TruncatedPixelData(msg)
        log.warning("%s, obraz obcięty do pełnych pikseli.", msg)
    return RasterImage(header.width, header.height, tuple(pixels))


@dataclass(frozen=True)
class DecodeResult:
    image: Optional[RasterImage] = None
    error: Optional[DecodeError] = None

    def __post_init__(self):
        # dokładnie jedno z: obraz albo błąd
        if (self.image is None) == (self.error is None):
            raise ValueError("DecodeResult wymaga albo image, albo error.")

    @property
    def ok(self) -> bool:
        return self.error is None


def try_decode_ppm(data: bytes, strict: bool = False) -> DecodeResult:
    try:
        return DecodeResult(image=decode_ppm(data, strict=strict))
    except DecodeError as e:
        return DecodeResult(error=e)


def read_ppm(path: str, strict: bool = False) -> RasterImage:
    with open(path, "rb") as f:
        data = f.read()
    return decode_ppm(data, strict=strict)
