import numpy as np
import pytest
from PIL import Image as PILImage

from hlabgfx.image import Image


def _uniform(height, width, value):
    pixels = np.ones((height, width, 4), dtype=np.float32)
    pixels[..., :3] = value
    return Image(pixels, channels=3)


def _impulse(size=11):
    pixels = np.zeros((size, size, 4), dtype=np.float32)
    pixels[..., 3] = 1.0
    pixels[size // 2, size // 2, :3] = 1.0
    return Image(pixels, channels=3)


def test_read_sets_dimensions_channels_and_alpha(tmp_path):
    path = tmp_path / "in.png"
    data = np.zeros((3, 5, 3), dtype=np.uint8)
    data[1, 2] = (255, 0, 255)
    PILImage.fromarray(data).save(path)

    image = Image()
    image.read_from_file(path)

    assert (image.width, image.height, image.channels) == (5, 3, 3)
    assert np.all(image.pixels[..., 3] == 1.0)
    assert image.pixels[1, 2, :3].tolist() == [1.0, 0.0, 1.0]
    assert image.pixels[0, 0, :3].tolist() == [0.0, 0.0, 0.0]


def test_round_trip_preserves_extreme_values(tmp_path):
    source = tmp_path / "in.png"
    target = tmp_path / "out.png"
    rng = np.random.default_rng(3)
    data = (rng.integers(0, 2, size=(6, 4, 3)) * 255).astype(np.uint8)
    PILImage.fromarray(data).save(source)

    image = Image()
    image.read_from_file(source)
    image.write_png(target)

    with PILImage.open(target) as written:
        assert written.mode == "RGB"
        assert np.array_equal(np.asarray(written), data)


def test_rgba_input_keeps_four_channels(tmp_path):
    path = tmp_path / "rgba.png"
    data = np.zeros((2, 2, 4), dtype=np.uint8)
    data[..., 0] = 255
    data[..., 3] = 10
    PILImage.fromarray(data).save(path)

    image = Image()
    image.read_from_file(path)

    assert image.channels == 4
    assert np.all(image.pixels[..., 0] == 1.0)
    assert np.all(image.pixels[..., 3] == 1.0)


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        Image().read_from_file(tmp_path / "missing.jpg")


def test_write_without_channels_raises(tmp_path):
    image = Image(np.zeros((2, 2, 4), dtype=np.float32))
    with pytest.raises(ValueError):
        image.write_png(tmp_path / "out.png")


def test_constructor_rejects_bad_shape():
    with pytest.raises(ValueError):
        Image(np.zeros((2, 2, 3)))


def test_get_pixel_clamps_to_edges():
    rng = np.random.default_rng(0)
    image = Image(rng.random((4, 6, 4)), channels=3)
    assert np.array_equal(image.get_pixel(-3, -7), image.pixels[0, 0])
    assert np.array_equal(image.get_pixel(100, 100), image.pixels[3, 5])
    assert np.array_equal(image.get_pixel(2, 1), image.pixels[1, 2])


def test_get_pixel_returns_writable_view():
    image = _uniform(3, 3, 0.0)
    image.get_pixel(1, 2)[0] = 0.75
    assert image.pixels[2, 1, 0] == np.float32(0.75)


def test_box_blur_keeps_uniform_image():
    image = _uniform(7, 9, 0.5)
    image.box_blur5()
    assert np.allclose(image.pixels[..., :3], 0.5, atol=1e-6)
    assert np.all(image.pixels[..., 3] == 1.0)


def test_box_blur_conserves_interior_energy_and_symmetry():
    image = _impulse()
    image.box_blur5()
    red = image.pixels[..., 0]
    assert red.sum() == pytest.approx(1.0, abs=1e-5)
    assert np.allclose(red, red.T)
    assert np.allclose(red, red[::-1, ::-1])
    assert red[0, 0] == 0.0


def test_gaussian_blur_keeps_uniform_image():
    image = _uniform(5, 8, 0.3)
    image.gaussian_blur5()
    assert np.allclose(image.pixels[..., :3], 0.3, atol=1e-5)
    assert np.all(image.pixels[..., 3] == 1.0)


def test_gaussian_blur_impulse_centre_and_symmetry():
    image = _impulse()
    image.gaussian_blur5()
    red = image.pixels[..., 0]
    assert red[5, 5] == pytest.approx(0.4026 * 0.4026, rel=1e-5)
    assert np.allclose(red, red.T)
    assert red.sum() == pytest.approx(1.0, abs=1e-3)


def test_blur_on_empty_image_is_noop():
    image = Image()
    image.gaussian_blur5()
    image.box_blur5()
    assert image.pixels.shape == (0, 0, 4)


def test_bloom_dark_image_adds_original_only():
    rng = np.random.default_rng(1)
    pixels = np.ones((6, 6, 4), dtype=np.float32)
    pixels[..., :3] = rng.random((6, 6, 3)) * 0.05
    image = Image(pixels, channels=3)
    image.bloom(0.5, 3)
    assert np.allclose(image.pixels[..., :3], pixels[..., :3], atol=1e-7)


def test_bloom_bright_uniform_image_adds_weighted_original():
    image = _uniform(6, 6, 0.5)
    image.bloom(0.1, 2, 0.5)
    assert np.allclose(image.pixels[..., :3], 0.75, atol=1e-4)


def test_bloom_result_is_clamped():
    image = _uniform(4, 4, 0.8)
    image.bloom(0.1, 1, 1.0)
    assert np.all(image.pixels[..., :3] <= 1.0)
    assert np.allclose(image.pixels[..., :3], 1.0)