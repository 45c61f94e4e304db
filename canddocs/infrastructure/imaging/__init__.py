"""Raster preprocessing for OCR."""

from .image_processor import ImagePreprocessor
from .otsu import apply_threshold, binarize, histogram, otsu_threshold
from .raster_codec import OpenCvRasterCodec, RasterCodec

__all__ = [
    "ImagePreprocessor",
    "OpenCvRasterCodec",
    "RasterCodec",
    "apply_threshold",
    "binarize",
    "histogram",
    "otsu_threshold",
]
