"""File I/O -- read BLP bytes, write decoded pixels as PNG/TGA."""

import logging
import os
import threading
from pathlib import Path

import numpy as np
from PIL import Image

logger = logging.getLogger("blp_converter")

OUTPUT_FORMATS = {
    "png": "PNG",
    "tga": "TGA",
}


def read_blp(path: str) -> bytes:
    """Read a whole BLP file into memory."""
    with open(path, "rb") as f:
        data = f.read()
    logger.debug("Read %d bytes from %s", len(data), path)
    return data


def bgra_to_rgba(pixels: np.ndarray) -> np.ndarray:
    """Reorder an (H, W, 4) BGRA array into RGBA."""
    if pixels.ndim != 3 or pixels.shape[-1] != 4:
        raise ValueError(f"pixels must be HxWx4, got shape {pixels.shape}")
    return np.ascontiguousarray(pixels[:, :, [2, 1, 0, 3]])


def save_pixels(pixels: np.ndarray, path: str, output_format: str = "png"):
    """Save canonical BGRA pixels as a 32-bit PNG or TGA image.

    Row 0 of *pixels* becomes the top row of the image. Uses atomic write
    (temp file + ``os.replace``) so a crash never leaves a truncated image.
    """
    pil_format = OUTPUT_FORMATS.get(output_format.lower())
    if pil_format is None:
        raise ValueError(
            f"output_format must be one of {sorted(OUTPUT_FORMATS)}, "
            f"got '{output_format}'"
        )
    if pixels.size == 0:
        raise ValueError(
            f"Cannot save empty image (shape={pixels.shape}) to {path}"
        )

    rgba = bgra_to_rgba(pixels)

    parent_dir = os.path.dirname(path) or "."
    os.makedirs(parent_dir, exist_ok=True)

    ext = Path(path).suffix
    tmp_path = f"{path}.tmp.{os.getpid()}.{threading.get_ident()}{ext}"
    try:
        with Image.fromarray(rgba) as img:
            if pil_format == "PNG":
                img.save(tmp_path, format=pil_format, optimize=True)
            else:
                img.save(tmp_path, format=pil_format)
        os.replace(tmp_path, path)
        logger.debug("Saved: %s (%dx%d, %s)", path, rgba.shape[1], rgba.shape[0],
                     pil_format)
    finally:
        if os.path.exists(tmp_path):
            try:
                os.remove(tmp_path)
            except OSError:
                pass
