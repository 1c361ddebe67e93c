from typing import Optional, Tuple

from ..raster import RasterImage


class Surface:
    """Interfejs powierzchni wyświetlającej zdekodowany obraz."""

    def show(self, image: RasterImage):
        raise NotImplementedError

    def clear(self):
        raise NotImplementedError

    def canvas_to_image(self, cx: int, cy: int) -> Optional[Tuple[int, int]]:
        raise NotImplementedError
