# ppmview/io/jpeg_io.py
import io

try:
    from PIL import Image
except ImportError as e:
    raise ImportError("Brak biblioteki Pillow. Zainstaluj: pip install Pillow") from e

from ..raster import RasterImage


def _pil_quality(quality: float) -> int:
    # 0.0..1.0 -> 1..100 (skala Pillow)
    q = float(quality)
    if not 0.0 <= q <= 1.0:
        raise ValueError(f"Jakość JPEG poza zakresem 0.0–1.0: {quality}")
    return max(1, int(round(q * 100)))


def to_pil(image: RasterImage) -> "Image.Image":
    image.check_pixel_limit()
    img = Image.new("RGB", (image.width, image.height))
    # brakujące piksele (obcięte dane) eksportujemy jako czarne
    img.putdata(image.padded_pixels())
    return img


def encode_jpeg(image: RasterImage, quality: float) -> bytes:
    out = io.BytesIO()
    # subsampling=0 → najlepsza jakość, optimize=True → mniejsze pliki
    to_pil(image).save(
        out, format="JPEG", quality=_pil_quality(quality), optimize=True, subsampling=0
    )
    return out.getvalue()


def write_jpeg(path: str, image: RasterImage, quality: float):
    data = encode_jpeg(image, quality)
    with open(path, "wb") as f:
        f.write(data)
