# palette_quant/image_io.py
from __future__ import annotations

import io
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from .image_grid import RGBAImage

"""
Image I/O helpers: load any Pillow-readable file as sRGB RGBA, save PNG.
Alpha is kept as-is; it takes part in colour matching.
"""

try:
    from PIL import ImageCms  # ICC conversion if profile present
except Exception:  # pragma: no cover
    ImageCms = None  # type: ignore[assignment]


def _convert_to_srgb_rgba(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    icc_bytes = im.info.get("icc_profile")

    if icc_bytes and ImageCms is not None:
        try:
            src_prof = ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes))
            dst_prof = ImageCms.createProfile("sRGB")
            im2 = ImageCms.profileToProfile(
                im.convert("RGBA"),
                src_prof,
                dst_prof,
                renderingIntent=ImageCms.Intent.PERCEPTUAL,
                outputMode="RGBA",
            )
            if im2 is None:
                return im.convert("RGBA")
            return im2
        except (ImageCms.PyCMSError, OSError, ValueError):
            return im.convert("RGBA")

    return im.convert("RGBA")


def load_image(path: Path) -> RGBAImage:
    """Decode path into an RGBAImage with origin (0, 0)."""
    with Image.open(path) as im0:
        im = _convert_to_srgb_rgba(im0)
        im.load()
    return RGBAImage.from_pil(im)


def save_image(path: Path, image: RGBAImage) -> Path:
    """Write image as PNG. A non-.png suffix is replaced. Returns the path written."""
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    path.parent.mkdir(parents=True, exist_ok=True)
    image.to_pil().save(path, format="PNG")
    return path


def is_image_file(path: Path) -> bool:
    try:
        with Image.open(path) as im:
            im.seek(0)
            im.load()
        return True
    except (UnidentifiedImageError, OSError):
        return False


__all__ = ["load_image", "save_image", "is_image_file"]
