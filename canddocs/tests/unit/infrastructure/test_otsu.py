import numpy as np
import pytest

from canddocs.infrastructure.imaging.otsu import apply_threshold, binarize, histogram, otsu_threshold


def bimodal_histogram(low=10, high=240, count=1000):
    hist = np.zeros(256, dtype=np.int64)
    hist[low] = count
    hist[high] = count
    return hist


def test_bimodal_threshold_lies_between_modes():
    threshold = otsu_threshold(bimodal_histogram())
    assert 10 < threshold < 240


def test_threshold_is_deterministic():
    rng = np.random.default_rng(7)
    hist = rng.integers(0, 500, size=256)
    assert otsu_threshold(hist) == otsu_threshold(hist.copy())


def test_bimodal_image_separates_classes():
    gray = np.array([[10, 10, 240, 240]] * 4, dtype=np.uint8)
    binary = binarize(gray)
    assert binary[:, :2].tolist() == [[0, 0]] * 4
    assert binary[:, 2:].tolist() == [[255, 255]] * 4


def test_uniform_image_is_all_white():
    gray = np.full((5, 5), 128, dtype=np.uint8)
    assert otsu_threshold(histogram(gray)) == 0
    assert set(np.unique(binarize(gray))) == {255}


def test_binarized_output_is_bilevel():
    gray = np.random.default_rng(0).integers(0, 256, size=(64, 48), dtype=np.uint8)
    binary = binarize(gray)
    assert binary.shape == gray.shape
    assert binary.dtype == np.uint8
    assert set(np.unique(binary)) <= {0, 255}


def test_apply_threshold_is_strictly_less_than():
    gray = np.array([[99, 100, 101]], dtype=np.uint8)
    assert apply_threshold(gray, 100).tolist() == [[0, 255, 255]]


def test_histogram_validation():
    with pytest.raises(ValueError):
        histogram(np.zeros((2, 2, 3), dtype=np.uint8))
    with pytest.raises(ValueError):
        otsu_threshold([0] * 10)
    assert histogram(np.array([[0, 255, 255]], dtype=np.uint8))[255] == 2


def test_ties_keep_the_first_maximum():
    hist = np.zeros(256, dtype=np.int64)
    hist[0] = hist[128] = hist[255] = 100
    assert otsu_threshold(hist) == 1
