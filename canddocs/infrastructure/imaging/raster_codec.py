"""Raster primitives used by OCR preprocessing.

The preprocessor only talks to the ``RasterCodec`` protocol; ``OpenCvRasterCodec``
implements it with OpenCV and numpy.
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

import cv2
import numpy as np

from .otsu import apply_threshold

logger = logging.getLogger(__name__)


class RasterCodec(Protocol):
    def decode(self, data: bytes) -> Optional[np.ndarray]: ...

    def encode_png(self, image: np.ndarray) -> bytes: ...

    def resize(self, image: np.ndarray, width: int, height: int) -> np.ndarray: ...

    def to_grayscale(self, image: np.ndarray) -> np.ndarray: ...

    def contrast(self, gray: np.ndarray, strength: float) -> np.ndarray: ...

    def blur(self, gray: np.ndarray, sigma: float) -> np.ndarray: ...

    def convolve(self, gray: np.ndarray, kernel: Sequence[Sequence[float]]) -> np.ndarray: ...

    def threshold(self, gray: np.ndarray, value: int) -> np.ndarray: ...


class OpenCvRasterCodec:
    """``RasterCodec`` backed by OpenCV."""

    def decode(self, data: bytes) -> Optional[np.ndarray]:
        """Decode PNG/JPEG bytes to a BGR or grayscale array; ``None`` if undecodable."""
        if not data:
            return None
        buffer = np.frombuffer(data, dtype=np.uint8)
        try:
            image = cv2.imdecode(buffer, cv2.IMREAD_UNCHANGED)
        except cv2.error as exc:
            logger.warning("Unable to decode image: %s", exc)
            return None
        if image is None or image.size == 0:
            return None
        if image.dtype != np.uint8:
            image = cv2.convertScaleAbs(image, alpha=255.0 / max(float(image.max()), 1.0))
        return image

    def encode_png(self, image: np.ndarray) -> bytes:
        # PNG is lossless; compression level only trades size for speed.
        ok, encoded = cv2.imencode(".png", image, [cv2.IMWRITE_PNG_COMPRESSION, 3])
        if not ok:
            raise ValueError("PNG encoding failed")
        return encoded.tobytes()

    def resize(self, image: np.ndarray, width: int, height: int) -> np.ndarray:
        return cv2.resize(image, (width, height), interpolation=cv2.INTER_AREA)

    def to_grayscale(self, image: np.ndarray) -> np.ndarray:
        """Luminance 0.299 R + 0.587 G + 0.114 B; alpha is dropped."""
        if image.ndim == 2:
            return image
        channels = image.shape[2]
        if channels == 1:
            return image[:, :, 0]
        if channels == 4:
            return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)

    def contrast(self, gray: np.ndarray, strength: float) -> np.ndarray:
        """Stretch around mid-gray by ``(1 + s) / (1 - s)`` without inverting."""
        s = min(max(strength, -0.999), 0.999)
        factor = (1.0 + s) / (1.0 - s)
        normalized = gray.astype(np.float32) / 255.0
        stretched = (normalized - 0.5) * factor + 0.5
        return np.clip(stretched * 255.0 + 0.5, 0, 255).astype(np.uint8)

    def blur(self, gray: np.ndarray, sigma: float) -> np.ndarray:
        return cv2.GaussianBlur(gray, (0, 0), sigmaX=sigma, sigmaY=sigma, borderType=cv2.BORDER_REPLICATE)

    def convolve(self, gray: np.ndarray, kernel: Sequence[Sequence[float]]) -> np.ndarray:
        """3x3 (or any odd) convolution, divisor 1, no bias, edges clamped, saturated to uint8."""
        matrix = np.asarray(kernel, dtype=np.float32)
        # filter2D correlates; flip so asymmetric kernels convolve.
        matrix = cv2.flip(matrix, -1)
        return cv2.filter2D(gray, -1, matrix, delta=0, borderType=cv2.BORDER_REPLICATE)

    def threshold(self, gray: np.ndarray, value: int) -> np.ndarray:
        return apply_threshold(gray, value)
