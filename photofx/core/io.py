"""Image file I/O utilities."""

from pathlib import Path

import numpy as np
from PIL import Image

from ..exceptions import InvalidImage
from .image import ImageResource, ResourceTracker, ensure_valid


IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tif", ".tiff", ".webp"}

# Formats that cannot store an alpha channel.
OPAQUE_EXTENSIONS = {".jpg", ".jpeg", ".bmp"}


def is_image_file(filename: str) -> bool:
    """Check if filename has a supported image extension.

    Args:
        filename: Path to file.

    Returns:
        True if file has an image extension.
    """
    return Path(filename).suffix.lower() in IMAGE_EXTENSIONS


def load_image(path: str, tracker: ResourceTracker | None = None) -> ImageResource:
    """Decode an image file into an RGBA resource.

    Args:
        path: Path to image file.
        tracker: Optional tracker for the new resource.

    Returns:
        Owned image resource.

    Raises:
        InvalidImage: If the file cannot be decoded.
    """
    try:
        with Image.open(path) as img:
            pixels = np.array(img.convert("RGBA"))
    except (OSError, ValueError) as exc:
        raise InvalidImage(f"Cannot read image file: {path}") from exc
    return ImageResource(pixels, tracker=tracker)


def save_image(image: ImageResource, path: str, quality: int = 90) -> None:
    """Encode an image resource to ``path``.

    The format follows the file suffix; alpha is dropped for formats that
    cannot store it.

    Args:
        image: Image to write. Ownership stays with the caller.
        path: Output path.
        quality: JPEG/WebP quality.
    """
    ensure_valid(image)
    output = Image.fromarray(image.pixels)
    if Path(path).suffix.lower() in OPAQUE_EXTENSIONS:
        output = output.convert("RGB")
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    output.save(path, quality=quality)
