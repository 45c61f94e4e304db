"""Condition a rendered page for OCR: bound, gray, contrast, blur, sharpen, binarize."""
from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from canddocs import constants
from .otsu import histogram, otsu_threshold
from .raster_codec import OpenCvRasterCodec, RasterCodec

logger = logging.getLogger(__name__)


class ImagePreprocessor:
    """Fixed preprocessing chain producing a bilevel PNG for Tesseract.

    Degradation never blocks OCR: empty or undecodable input is returned as-is.
    """

    def __init__(
        self,
        codec: Optional[RasterCodec] = None,
        *,
        max_dimension: int = constants.MAX_IMAGE_DIMENSION,
        contrast_strength: float = constants.CONTRAST_STRENGTH,
        blur_sigma: float = constants.BLUR_SIGMA,
        sharpen_kernel=constants.SHARPEN_KERNEL,
    ) -> None:
        self._codec = codec or OpenCvRasterCodec()
        self._max_dimension = max_dimension
        self._contrast_strength = contrast_strength
        self._blur_sigma = blur_sigma
        self._sharpen_kernel = sharpen_kernel

    def preprocess(self, image_bytes: bytes) -> bytes:
        if not image_bytes:
            return image_bytes

        image = self._codec.decode(image_bytes)
        if image is None:
            logger.warning("Preprocessing skipped: input (%s bytes) is not a decodable image", len(image_bytes))
            return image_bytes

        image = self._bound_dimensions(image)
        gray = self._codec.to_grayscale(image)
        gray = self._enhance_contrast(gray)
        gray = self._codec.blur(gray, self._blur_sigma)
        gray = self._codec.convolve(gray, self._sharpen_kernel)

        threshold = otsu_threshold(histogram(gray))
        binary = self._codec.threshold(gray, threshold)
        logger.debug("Binarized %sx%s page at threshold %s", binary.shape[1], binary.shape[0], threshold)
        return self._codec.encode_png(binary)

    def _bound_dimensions(self, image: np.ndarray) -> np.ndarray:
        height, width = image.shape[:2]
        if width <= self._max_dimension and height <= self._max_dimension:
            return image
        scale = min(self._max_dimension / width, self._max_dimension / height)
        new_width = max(1, int(round(width * scale)))
        new_height = max(1, int(round(height * scale)))
        logger.debug("Downscaling %sx%s -> %sx%s", width, height, new_width, new_height)
        return self._codec.resize(image, new_width, new_height)

    def _enhance_contrast(self, gray: np.ndarray) -> np.ndarray:
        # Optional stage: codecs without a contrast primitive leave the image as is.
        try:
            return self._codec.contrast(gray, self._contrast_strength)
        except NotImplementedError:
            logger.info("Contrast enhancement unavailable; skipping")
            return gray
