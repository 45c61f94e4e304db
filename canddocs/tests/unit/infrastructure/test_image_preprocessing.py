"""Unit tests for the raster codec and the OCR preprocessing chain."""
from unittest.mock import MagicMock

import cv2
import numpy as np
import pytest

from canddocs.infrastructure.imaging.image_processor import ImagePreprocessor
from canddocs.infrastructure.imaging.raster_codec import OpenCvRasterCodec


@pytest.fixture
def codec():
    return OpenCvRasterCodec()


def decode(data):
    return cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_UNCHANGED)


class TestOpenCvRasterCodec:
    def test_decode_rejects_garbage(self, codec):
        assert codec.decode(b"not an image") is None
        assert codec.decode(b"") is None

    def test_grayscale_weights(self, codec):
        bgr = np.zeros((1, 3, 3), dtype=np.uint8)
        bgr[0, 0] = (0, 0, 255)  # red
        bgr[0, 1] = (0, 255, 0)  # green
        bgr[0, 2] = (255, 0, 0)  # blue
        gray = codec.to_grayscale(bgr)
        assert gray.shape == (1, 3)
        assert gray[0].tolist() == pytest.approx([76, 150, 29], abs=1)

    def test_contrast_pushes_away_from_mid_gray(self, codec):
        gray = np.array([[64, 128, 192]], dtype=np.uint8)
        out = codec.contrast(gray, 0.45)
        assert out[0, 0] < 64
        assert abs(int(out[0, 1]) - 128) <= 1
        assert out[0, 2] > 192

    def test_identity_kernel_leaves_image_unchanged(self, codec):
        gray = np.random.default_rng(1).integers(0, 256, size=(8, 8), dtype=np.uint8)
        identity = ((0, 0, 0), (0, 1, 0), (0, 0, 0))
        assert np.array_equal(codec.convolve(gray, identity), gray)

    def test_sharpen_on_flat_region_is_a_no_op(self, codec):
        gray = np.full((6, 6), 90, dtype=np.uint8)
        sharpen = ((0, -1, 0), (-1, 5, -1), (0, -1, 0))
        assert np.array_equal(codec.convolve(gray, sharpen), gray)

    def test_encode_png_round_trips(self, codec):
        gray = np.array([[0, 255], [255, 0]], dtype=np.uint8)
        assert np.array_equal(decode(codec.encode_png(gray)), gray)


class TestImagePreprocessor:
    def test_empty_input_returned_unchanged(self):
        assert ImagePreprocessor().preprocess(b"") == b""

    def test_undecodable_input_returned_unchanged(self):
        data = b"\x00\x01garbage"
        assert ImagePreprocessor().preprocess(data) == data

    def test_output_is_bilevel_png(self, text_page_png):
        result = decode(ImagePreprocessor().preprocess(text_page_png))
        assert result.ndim == 2
        assert result.shape == (120, 200)
        assert set(np.unique(result)) == {0, 255}

    def test_large_images_are_bounded(self):
        image = np.full((300, 100, 3), 200, dtype=np.uint8)
        image[100:200, 20:80] = 10
        ok, encoded = cv2.imencode(".png", image)
        assert ok

        result = decode(ImagePreprocessor(max_dimension=150).preprocess(encoded.tobytes()))

        assert result.shape == (150, 50)

    def test_missing_contrast_stage_is_skipped(self, text_page_png):
        real = OpenCvRasterCodec()
        codec = MagicMock(wraps=real)
        codec.contrast.side_effect = NotImplementedError

        result = ImagePreprocessor(codec).preprocess(text_page_png)

        codec.contrast.assert_called_once()
        codec.blur.assert_called_once()
        codec.convolve.assert_called_once()
        assert set(np.unique(decode(result))) <= {0, 255}
