"""
Unit tests for pixel sampling.
"""

import numpy as np
import pytest

from palettelab.errors import EmptyImage
from palettelab.services.colors.sampling import (
    ImageBuffer, analysis_dimensions, resize_pixels, sample_pixels, sample_stride
)


class TestImageBuffer:
    """Test raw buffer handling"""

    def test_from_array_rgb(self, red_blue_pixels):
        image = ImageBuffer.from_array(red_blue_pixels)
        assert (image.width, image.height, image.channels) == (2, 2, 3)
        np.testing.assert_array_equal(image.to_array(), red_blue_pixels)

    def test_from_array_rejects_grayscale(self):
        with pytest.raises(ValueError):
            ImageBuffer.from_array(np.zeros((4, 4), dtype=np.uint8))

    def test_length_mismatch(self):
        image = ImageBuffer(data=bytes(10), width=2, height=2, channels=3)
        with pytest.raises(ValueError) as exc_info:
            image.to_array()
        assert not isinstance(exc_info.value, EmptyImage)

    def test_unsupported_channels(self):
        with pytest.raises(ValueError):
            ImageBuffer(data=bytes(8), width=2, height=2, channels=2).to_array()


class TestSamplingGeometry:
    """Test analysis canvas size and stride selection"""

    def test_downscale_longest_side(self):
        assert analysis_dimensions(400, 300, 200) == (200, 150)
        assert analysis_dimensions(300, 1200, 200) == (50, 200)

    def test_never_upscales(self):
        assert analysis_dimensions(2, 2, 200) == (2, 2)
        assert analysis_dimensions(200, 10, 200) == (200, 10)

    def test_stride(self):
        assert sample_stride(10000, 4, 12500) == 1
        assert sample_stride(40000, 4, 12500) == 4
        assert sample_stride(100000, 4, 12500) == 8


class TestSamplePixels:
    """Test sample set construction"""

    def test_small_image_reads_every_pixel_row_major(self, red_blue_pixels):
        samples = sample_pixels(ImageBuffer.from_array(red_blue_pixels))

        assert len(samples) == 4
        assert samples.stride == 1
        np.testing.assert_array_equal(
            samples.pixels,
            [[255, 0, 0], [255, 0, 0], [0, 0, 255], [0, 0, 255]]
        )

    def test_raw_bytes_input(self):
        data = bytes([10, 20, 30, 40, 50, 60])
        samples = sample_pixels(ImageBuffer(data=data, width=2, height=1, channels=3))
        np.testing.assert_array_equal(samples.pixels, [[10, 20, 30], [40, 50, 60]])

    def test_samples_are_read_only(self, red_blue_pixels):
        samples = sample_pixels(ImageBuffer.from_array(red_blue_pixels))
        assert samples.pixels.dtype == np.uint8
        assert not samples.pixels.flags.writeable

    def test_large_image_is_downscaled_and_strided(self):
        img = np.full((300, 400, 3), (31, 78, 121), dtype=np.uint8)
        samples = sample_pixels(ImageBuffer.from_array(img))

        assert samples.source_size == (400, 300)
        assert samples.analysis_size == (200, 150)
        assert samples.stride == 4
        assert len(samples) == 200 * 150 // 4
        assert np.all(samples.pixels == [31, 78, 121])

    def test_sample_count_is_bounded(self):
        img = np.zeros((200, 200, 3), dtype=np.uint8)
        samples = sample_pixels(ImageBuffer.from_array(img), max_samples=1000)
        assert len(samples) <= 1000

    def test_transparent_pixels_are_dropped(self):
        rgba = np.array([
            [[255, 0, 0, 255], [0, 255, 0, 0]],
            [[0, 0, 255, 1], [9, 9, 9, 0]],
        ], dtype=np.uint8)
        samples = sample_pixels(ImageBuffer.from_array(rgba))

        np.testing.assert_array_equal(samples.pixels, [[255, 0, 0], [0, 0, 255]])

    def test_fully_transparent_image(self):
        rgba = np.zeros((4, 4, 4), dtype=np.uint8)
        with pytest.raises(EmptyImage):
            sample_pixels(ImageBuffer.from_array(rgba))

    def test_zero_pixels(self):
        with pytest.raises(EmptyImage):
            sample_pixels(ImageBuffer(data=b"", width=0, height=0, channels=3))
        with pytest.raises(EmptyImage):
            sample_pixels(ImageBuffer(data=b"", width=5, height=0, channels=4))


class TestTransparentDownscale:
    """Test alpha handling when the image is downscaled"""

    def test_checkerboard_keeps_only_opaque_color(self):
        rgba = np.zeros((400, 400, 4), dtype=np.uint8)
        rgba[:, :] = (0, 0, 255, 0)
        checker = (np.indices((400, 400)).sum(axis=0) % 2) == 0
        rgba[checker] = (255, 0, 0, 255)

        samples = sample_pixels(ImageBuffer.from_array(rgba))

        assert samples.analysis_size == (200, 200)
        np.testing.assert_array_equal(np.unique(samples.pixels, axis=0), [[255, 0, 0]])

    def test_transparent_half_is_dropped(self):
        rgba = np.zeros((400, 400, 4), dtype=np.uint8)
        rgba[:, :200] = (255, 0, 0, 255)
        rgba[:, 200:] = (0, 255, 0, 0)

        samples = sample_pixels(ImageBuffer.from_array(rgba))

        assert samples.stride == 4
        assert len(samples) == 200 * 200 // 4 // 2
        assert np.all(samples.pixels == [255, 0, 0])

    def test_resize_pixels_rgba(self):
        rgba = np.array([
            [[200, 100, 0, 255], [0, 0, 255, 0]],
            [[0, 0, 255, 0], [0, 0, 255, 0]],
        ], dtype=np.uint8)

        small = resize_pixels(rgba, (1, 1))

        assert small.shape == (1, 1, 4)
        assert small[0, 0].tolist() == [200, 100, 0, 64]

    def test_samples_do_not_alias_input(self):
        img = np.full((2, 2, 3), 10, dtype=np.uint8)
        samples = sample_pixels(ImageBuffer.from_array(img))

        img[:] = 99
        assert np.all(samples.pixels == 10)
