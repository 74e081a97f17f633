import numpy as np
import pytest
from PIL import Image

from tsoax.image import (
    ImageData,
    image_center,
    image_diagonal,
    image_dimension,
    image_gradient,
    image_intensity,
    is_index_inside,
    is_point_inside,
    maximum_intensity,
    minimum_intensity,
    read_meta_image,
    write_jpeg_image,
    write_meta_image,
    write_tiff_image,
)


def _volume(dtype=np.uint16):
    return ImageData(np.arange(4 * 3 * 2, dtype=dtype).reshape(4, 3, 2))


def test_dimension_counts_axes_longer_than_one():
    assert image_dimension(ImageData(np.zeros((4, 3)))) == 2
    assert image_dimension(_volume()) == 3
    assert image_dimension(ImageData(np.zeros((4, 1, 1)))) == 1


def test_dimensions_and_extent():
    image = ImageData(np.zeros((4, 3)))
    assert image.dimensions() == (4, 3, 1)
    assert image.extent() == (0, 3, 0, 2, 0, 0)


def test_components_axis():
    data = np.zeros((4, 3, 2, 3))
    image = ImageData(data, components=3)
    assert image.number_of_components() == 3
    assert image.dimensions() == (4, 3, 2)


def test_component_mismatch_raises():
    with pytest.raises(ValueError):
        ImageData(np.zeros((4, 3, 2)), components=3)


def test_empty_image_raises():
    with pytest.raises(ValueError):
        ImageData(np.zeros((0, 3)))


@pytest.mark.parametrize("dtype", [np.uint8, np.uint16, np.float64])
def test_intensity_for_supported_types(dtype):
    image = _volume(dtype)
    assert image_intensity(image, 2, 1, 1) == float(image.array[2, 1, 1, 0])


def test_intensity_rejects_unknown_type():
    with pytest.raises(TypeError):
        image_intensity(_volume(np.int32), 0, 0, 0)


def test_voxel_outside_raises():
    with pytest.raises(IndexError):
        _volume().voxel(4, 0, 0)
    with pytest.raises(IndexError):
        _volume().voxel(-1, 0, 0)


def test_scalar_range_matches_data():
    image = _volume()
    assert minimum_intensity(image) == float(image.array.min())
    assert maximum_intensity(image) == float(image.array.max())


def test_gradient_returns_all_components():
    data = np.random.default_rng(1).normal(size=(3, 3, 2))
    image = ImageData(data, components=2)
    assert image_gradient(image, 1, 2, 0) == tuple(data[1, 2])


def test_center_of_2d_image():
    center = image_center(ImageData(np.zeros((4, 3))))
    assert center.tolist() == [1.5, 1.0]


def test_diagonal_of_2d_image():
    assert image_diagonal(ImageData(np.zeros((3, 4)))) == pytest.approx(5.0)


def test_index_inside():
    image = _volume()
    assert is_index_inside(image, (0, 0, 0))
    assert is_index_inside(image, (3, 2, 1))
    assert not is_index_inside(image, (4, 0, 0))
    assert not is_index_inside(image, (0, -1, 0))


def test_point_inside_without_padding():
    image = _volume()
    assert is_point_inside(image, (3.0, 2.0, 1.0), 0.0)
    assert not is_point_inside(image, (3.5, 0.0, 0.0), 0.0)


def test_point_inside_padding_shifts_upper_bound():
    image = _volume()
    assert not is_point_inside(image, (3.0, 0.0, 0.0), 1.0)
    assert is_point_inside(image, (-0.5, 0.0, 0.0), 1.0)


def test_point_needs_three_components():
    with pytest.raises(ValueError):
        is_point_inside(_volume(), (1.0, 1.0), 0.0)


def test_meta_round_trip_3d(tmp_path):
    image = ImageData(np.arange(60, dtype=np.uint16).reshape(5, 4, 3), spacing=(1, 1, 2))
    header = tmp_path / "volume.mhd"
    write_meta_image(image, header)
    assert (tmp_path / "volume.raw").exists()
    loaded = read_meta_image(header)
    assert loaded.dtype == np.uint16
    assert np.array_equal(loaded.array, image.array)
    assert loaded.spacing == (1.0, 1.0, 2.0)


def test_meta_round_trip_multi_component(tmp_path):
    data = np.random.default_rng(0).normal(size=(4, 3, 2))
    image = ImageData(data, components=2)
    header = tmp_path / "grad.mhd"
    write_meta_image(image, header)
    loaded = read_meta_image(header)
    assert loaded.number_of_components() == 2
    assert np.array_equal(loaded.array, image.array)


def test_meta_raw_file_is_x_fastest(tmp_path):
    data = np.array([[1, 2], [3, 4]], dtype=np.uint8)  # data[x, y]
    write_meta_image(ImageData(data), tmp_path / "a.mhd")
    assert (tmp_path / "a.raw").read_bytes() == bytes([1, 3, 2, 4])


def test_meta_requires_extension(tmp_path):
    with pytest.raises(ValueError):
        write_meta_image(_volume(), tmp_path / "noext")


def test_read_local_meta_image(tmp_path):
    path = tmp_path / "inline.mha"
    header = (
        b"ObjectType = Image\nNDims = 2\nDimSize = 2 2\n"
        b"ElementType = MET_UCHAR\nElementDataFile = LOCAL\n"
    )
    path.write_bytes(header + bytes([1, 3, 2, 4]))
    loaded = read_meta_image(path)
    assert loaded.array[..., 0, 0].tolist() == [[1, 2], [3, 4]]


def test_read_meta_missing_key(tmp_path):
    path = tmp_path / "bad.mha"
    path.write_bytes(b"ObjectType = Image\nElementDataFile = LOCAL\n")
    with pytest.raises(ValueError):
        read_meta_image(path)


@pytest.mark.parametrize("dtype", [np.uint8, np.uint16])
def test_tiff_round_trip(tmp_path, dtype):
    data = np.arange(20, dtype=dtype).reshape(5, 4) * 3
    path = tmp_path / "plane.tif"
    write_tiff_image(ImageData(data), path)
    with Image.open(path) as img:
        assert img.size == (5, 4)
        assert np.array_equal(np.asarray(img).T, data)


def test_tiff_writes_one_page_per_slice(tmp_path):
    path = tmp_path / "stack.tif"
    write_tiff_image(_volume(np.uint8), path)
    with Image.open(path) as img:
        assert img.n_frames == 2


def test_jpeg_round_trip_constant(tmp_path):
    data = np.full((8, 6), 100, dtype=np.uint8)
    path = tmp_path / "plane.jpg"
    write_jpeg_image(ImageData(data), path)
    with Image.open(path) as img:
        pixels = np.asarray(img).T.astype(int)
    assert pixels.shape == data.shape
    assert np.abs(pixels - 100).max() <= 2


def test_jpeg_rejects_16_bit(tmp_path):
    with pytest.raises(ValueError):
        write_jpeg_image(ImageData(np.zeros((4, 4), dtype=np.uint16)), tmp_path / "x.jpg")


def test_jpeg_rejects_volume(tmp_path):
    with pytest.raises(ValueError):
        write_jpeg_image(_volume(np.uint8), tmp_path / "x.jpg")