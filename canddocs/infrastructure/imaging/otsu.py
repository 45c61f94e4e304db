"""Otsu's global threshold for 8-bit grayscale images."""
from __future__ import annotations

from typing import Sequence

import numpy as np

BINS = 256


def histogram(gray: np.ndarray) -> np.ndarray:
    """256-bucket intensity histogram of an 8-bit single-channel image."""
    if gray.ndim != 2:
        raise ValueError(f"expected a single-channel image, got shape {gray.shape}")
    return np.bincount(gray.astype(np.uint8, copy=False).ravel(), minlength=BINS)


def otsu_threshold(hist: Sequence[int]) -> int:
    """Return the threshold maximizing between-class variance.

    Pixels strictly below the returned value form the background class. Ties
    keep the first maximum; a histogram with a single populated bucket yields 0.
    """
    counts = [int(c) for c in hist]
    if len(counts) != BINS:
        raise ValueError(f"histogram must have {BINS} buckets, got {len(counts)}")

    total = sum(counts)
    total_sum = float(sum(i * c for i, c in enumerate(counts)))

    sum_b = 0.0
    w_b = 0
    best = 0.0
    threshold = 0
    for i, count in enumerate(counts):
        w_b += count
        if w_b == 0:
            continue
        w_f = total - w_b
        if w_f == 0:
            break

        sum_b += i * count
        m_b = sum_b / w_b
        m_f = (total_sum - sum_b) / w_f
        between = float(w_b) * w_f * (m_b - m_f) ** 2
        if between > best:
            best = between
            # Bucket i closes the background class.
            threshold = i + 1
    return threshold


def apply_threshold(gray: np.ndarray, threshold: int) -> np.ndarray:
    """Map pixels below ``threshold`` to 0 and everything else to 255."""
    return np.where(gray < threshold, 0, 255).astype(np.uint8)


def binarize(gray: np.ndarray) -> np.ndarray:
    """Otsu-binarize a grayscale image into a {0, 255} image of the same shape."""
    return apply_threshold(gray, otsu_threshold(histogram(gray)))
