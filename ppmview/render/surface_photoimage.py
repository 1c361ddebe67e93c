import logging
import math
import tkinter as tk
from typing import Callable, Optional, Tuple

from ..raster import RasterImage
from .surface import Surface

log = logging.getLogger(__name__)


def _row_hex(row) -> str:
    return "{" + " ".join(f"#{r:02x}{g:02x}{b:02x}" for (r, g, b) in row) + "}"


class PhotoSurface(Surface):
    """
    Raster PhotoImage na Canvas. Piksele trafiają na ekran dopiero w after_idle,
    po tym jak Tk odświeży okno. Brakujące piksele (obcięte dane) zostają przezroczyste.
    """

    def __init__(self, canvas: tk.Canvas, x: int = 0, y: int = 0):
        self.canvas = canvas
        self.x = x
        self.y = y
        self.zoom = 1
        self.image: Optional[RasterImage] = None
        self._photo: Optional[tk.PhotoImage] = None
        self._shown: Optional[tk.PhotoImage] = None
        self._item: Optional[int] = None

    def _photo_from_image(self, image: RasterImage) -> tk.PhotoImage:
        """Buduje PhotoImage wierszami (put() na wiersz)."""
        image.check_pixel_limit()
        img = tk.PhotoImage(width=image.width, height=image.height)
        for y, row in enumerate(image.rows()):
            img.put(_row_hex(row), to=(0, y))
        return img

    def show(self, image: RasterImage, on_done: Optional[Callable[[], None]] = None):
        photo = self._photo_from_image(image)

        def commit():
            self.image = image
            self._photo = photo
            self._redraw()
            log.debug("Narysowano obraz %dx%d", image.width, image.height)
            if on_done is not None:
                on_done()

        self.canvas.after_idle(commit)

    def _redraw(self):
        if self._photo is None:
            return
        self._shown = self._photo.zoom(self.zoom) if self.zoom > 1 else self._photo
        if self._item is None:
            self._item = self.canvas.create_image(
                self.x, self.y, image=self._shown, anchor="nw", tags=("image",)
            )
        else:
            self.canvas.itemconfigure(self._item, image=self._shown)
        w = self.image.width * self.zoom
        h = self.image.height * self.zoom
        self.canvas.configure(scrollregion=(0, 0, self.x + w, self.y + h))

    def set_zoom(self, zoom: int):
        self.zoom = max(1, int(zoom))
        self._redraw()

    def clear(self):
        if self._item is not None:
            self.canvas.delete(self._item)
        self._item = None
        self._photo = None
        self._shown = None
        self.image = None

    def canvas_to_image(self, cx: int, cy: int) -> Optional[Tuple[int, int]]:
        if self.image is None:
            return None
        ix = (math.floor(cx) - self.x) // self.zoom
        iy = (math.floor(cy) - self.y) // self.zoom
        if 0 <= ix < self.image.width and 0 <= iy < self.image.height:
            return ix, iy
        return None
