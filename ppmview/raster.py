# ppmview/raster.py
from dataclasses import dataclass
from typing import List, Tuple

from .constants import MAX_IMAGE_PIXELS

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class RasterImage:
    """Zdekodowany obraz: wymiary z nagłówka + piksele wierszami od góry.

    Po pełnym dekodowaniu len(pixels) == width * height. Obcięte dane
    (tryb tolerancyjny) dają mniej pikseli, wtedy complete == False.
    """

    width: int
    height: int
    pixels: Tuple[Color, ...]

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Wymiary obrazu muszą być dodatnie.")
        if len(self.pixels) > self.width * self.height:
            raise ValueError("Więcej pikseli niż width*height.")
        if not isinstance(self.pixels, tuple):
            # frozen – stąd object.__setattr__
            object.__setattr__(self, "pixels", tuple(self.pixels))

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def complete(self) -> bool:
        return len(self.pixels) == self.width * self.height

    def pixel_at(self, x: int, y: int) -> Color:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Piksel ({x},{y}) poza obrazem {self.width}x{self.height}")
        i = y * self.width + x
        if i >= len(self.pixels):
            raise IndexError(f"Piksel ({x},{y}) nie został zdekodowany (obcięte dane)")
        return self.pixels[i]

    def rows(self) -> List[Tuple[Color, ...]]:
        """Wiersze pikseli; ostatni może być krótszy, kolejnych może brakować."""
        w = self.width
        return [self.pixels[base : base + w] for base in range(0, len(self.pixels), w)]

    def to_rgba(self) -> bytes:
        """Bufor [r,g,b,255] na piksel; brakujące piksele to [0,0,0,0]."""
        self.check_pixel_limit()
        buf = bytearray(self.width * self.height * 4)
        i = 0
        for r, g, b in self.pixels:
            buf[i] = r
            buf[i + 1] = g
            buf[i + 2] = b
            buf[i + 3] = 255
            i += 4
        return bytes(buf)

    def check_pixel_limit(self, limit: int = MAX_IMAGE_PIXELS):
        """ValueError, jeśli pełny bufor width*height byłby za duży."""
        if self.width * self.height > limit:
            raise ValueError(
                f"Obraz {self.width}x{self.height} przekracza limit {limit} pikseli."
            )

    def padded_pixels(self, fill: Color = (0, 0, 0)) -> List[Color]:
        self.check_pixel_limit()
        missing = self.width * self.height - len(self.pixels)
        return list(self.pixels) + [fill] * missing
