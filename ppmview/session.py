# ppmview/session.py
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .io.ppm import DecodeResult, try_decode_ppm
from .raster import Color, RasterImage

log = logging.getLogger(__name__)


@dataclass
class ViewState:
    """Stan prezentacji (wymiary, flaga wczytania, kursor) – poza dekoderem."""

    width: int = 0
    height: int = 0
    loaded: bool = False
    cursor: Optional[Tuple[int, int]] = None
    source: Optional[str] = None

    def status_text(self) -> str:
        if not self.loaded:
            return "Brak obrazu."
        txt = f"{self.width}x{self.height}"
        if self.source:
            txt += f" | {self.source}"
        if self.cursor is not None:
            txt += f" | x={self.cursor[0]}, y={self.cursor[1]}"
        return txt


class LoadSession:
    """Numeruje żądania wczytania; wynik przyjmujemy tylko od najnowszego."""

    def __init__(self, strict: bool = False):
        self.strict = strict
        self.image: Optional[RasterImage] = None
        self.state = ViewState()
        self._seq = 0

    @property
    def current(self) -> int:
        return self._seq

    def begin(self) -> int:
        self._seq += 1
        return self._seq

    def is_current(self, seq: int) -> bool:
        return seq == self._seq

    def decode(self, data: bytes) -> Tuple[int, DecodeResult]:
        seq = self.begin()
        return seq, try_decode_ppm(data, strict=self.strict)

    def commit(self, seq: int, result: DecodeResult, source: Optional[str] = None) -> bool:
        """True, jeśli obraz został przyjęty. Błąd lub stary wynik nie zmienia stanu."""
        if not self.is_current(seq):
            log.debug("Pomijam nieaktualne wczytanie #%d (bieżące #%d)", seq, self._seq)
            return False
        if not result.ok:
            return False
        img = result.image
        self.image = img
        self.state = ViewState(img.width, img.height, True, None, source)
        return True

    def inspect(self, x: int, y: int) -> Optional[Color]:
        """RGB piksela (x,y) obrazu albo None (brak obrazu / poza obrazem)."""
        if self.image is None:
            return None
        try:
            px = self.image.pixel_at(x, y)
        except IndexError:
            self.state.cursor = None
            return None
        self.state.cursor = (x, y)
        return px
