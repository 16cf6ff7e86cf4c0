"""Owned RGBA image buffers."""

from __future__ import annotations

import threading

import numpy as np

from ..exceptions import InvalidImage


class ResourceTracker:
    """Counts live image resources for one processing run.

    Every resource created with a tracker, or derived from one that has a
    tracker, is counted until it is disposed.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._live = 0
        self._allocated = 0

    def _acquire(self) -> None:
        with self._lock:
            self._live += 1
            self._allocated += 1

    def _release(self) -> None:
        with self._lock:
            self._live -= 1

    @property
    def live(self) -> int:
        """Number of resources currently allocated."""
        return self._live

    @property
    def allocated(self) -> int:
        """Total number of resources ever allocated."""
        return self._allocated


def _as_rgba(pixels: np.ndarray) -> np.ndarray:
    array = np.asarray(pixels)
    if array.dtype != np.uint8:
        raise InvalidImage(f"Expected uint8 pixels, got {array.dtype}")
    if array.ndim == 2:
        array = np.stack([array, array, array], axis=-1)
    if array.ndim != 3 or array.shape[2] not in (3, 4):
        raise InvalidImage(f"Unsupported pixel shape: {array.shape}")
    if array.shape[2] == 3:
        alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
        array = np.concatenate([array, alpha], axis=2)
    return np.ascontiguousarray(array)


class ImageResource:
    """Mutable RGBA raster owned by exactly one effect step at a time."""

    def __init__(self, pixels: np.ndarray, tracker: ResourceTracker | None = None):
        """Wrap a pixel array.

        Args:
            pixels: ``uint8`` array shaped (H, W), (H, W, 3) or (H, W, 4).
                Greyscale and RGB inputs are promoted to RGBA.
            tracker: Optional tracker counting live resources.
        """
        self._pixels = _as_rgba(pixels)
        self.tracker = tracker
        self._disposed = False
        if tracker is not None:
            tracker._acquire()

    @property
    def pixels(self) -> np.ndarray:
        """RGBA pixel array of shape (H, W, 4)."""
        if self._disposed:
            raise InvalidImage("Image resource has been disposed")
        return self._pixels

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def disposed(self) -> bool:
        return self._disposed

    def derive(self, pixels: np.ndarray) -> "ImageResource":
        """Allocate a new resource sharing this one's tracker."""
        return ImageResource(pixels, tracker=self.tracker)

    def dispose(self) -> None:
        """Release the pixel buffer. Disposing twice is a no-op."""
        if self._disposed:
            return
        self._disposed = True
        self._pixels = None
        if self.tracker is not None:
            self.tracker._release()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.dispose()

    def __repr__(self) -> str:
        if self._disposed:
            return "ImageResource(disposed)"
        return f"ImageResource(width={self.width}, height={self.height})"


def ensure_valid(image: ImageResource | None) -> ImageResource:
    """Raise ``InvalidImage`` unless ``image`` is a live, non-empty resource."""
    if image is None:
        raise InvalidImage("No image supplied")
    if not isinstance(image, ImageResource):
        raise InvalidImage(f"Expected ImageResource, got {type(image).__name__}")
    if image.disposed:
        raise InvalidImage("Image resource has been disposed")
    if image.width == 0 or image.height == 0:
        raise InvalidImage(f"Image has zero size ({image.width}x{image.height})")
    return image


def dispose_quietly(image: ImageResource | None) -> None:
    """Dispose ``image`` if it is still allocated."""
    if image is not None and not image.disposed:
        image.dispose()
