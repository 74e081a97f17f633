"""Regular image volumes and helpers for reading values and writing files."""

from __future__ import annotations

import math
import zlib
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from PIL import Image

PathLike = Union[str, Path]

_META_TYPES = {
    np.dtype(np.uint8): "MET_UCHAR",
    np.dtype(np.int8): "MET_CHAR",
    np.dtype(np.uint16): "MET_USHORT",
    np.dtype(np.int16): "MET_SHORT",
    np.dtype(np.uint32): "MET_UINT",
    np.dtype(np.int32): "MET_INT",
    np.dtype(np.float32): "MET_FLOAT",
    np.dtype(np.float64): "MET_DOUBLE",
}
_META_DTYPES = {name: dtype for dtype, name in _META_TYPES.items()}

_INTENSITY_TYPES = (np.dtype(np.uint8), np.dtype(np.uint16), np.dtype(np.float64))


class ImageData:
    """A 1-, 2- or 3-D image whose voxels hold one or more components.

    ``data`` is indexed as ``data[x, y, z]`` (missing trailing axes are
    treated as size one). When ``components`` is greater than one the last
    axis of ``data`` holds the components.
    """

    def __init__(
        self,
        data,
        spacing: Optional[Sequence[float]] = None,
        components: int = 1,
    ) -> None:
        array = np.array(data)
        if components < 1:
            raise ValueError("an image needs at least one component")
        if components > 1:
            if array.ndim < 2 or array.shape[-1] != components:
                raise ValueError(
                    f"last axis must hold {components} components, got shape {array.shape}"
                )
        else:
            array = array[..., np.newaxis]
        spatial = array.ndim - 1
        if not 1 <= spatial <= 3:
            raise ValueError(f"image must have 1 to 3 spatial axes, got {spatial}")
        if array.size == 0:
            raise ValueError("image must contain at least one voxel")
        shape = array.shape[:-1] + (1,) * (3 - spatial) + array.shape[-1:]
        self._array = array.reshape(shape)
        values = tuple(float(s) for s in (spacing or ()))
        if len(values) > 3 or any(s <= 0 for s in values):
            raise ValueError("spacing must be up to three positive numbers")
        self._spacing = values + (1.0,) * (3 - len(values))

    @property
    def array(self) -> np.ndarray:
        """The voxel values indexed as ``[x, y, z, component]``."""
        return self._array

    @property
    def spacing(self) -> Tuple[float, float, float]:
        """Physical size of a voxel along each axis."""
        return self._spacing

    @property
    def dtype(self) -> np.dtype:
        """The scalar type of the voxel values."""
        return self._array.dtype

    def dimensions(self) -> Tuple[int, int, int]:
        """Return the number of voxels along x, y and z."""
        nx, ny, nz, _ = self._array.shape
        return nx, ny, nz

    def dimension(self) -> int:
        """Return the number of axes that span more than one voxel."""
        return sum(1 for n in self.dimensions() if n > 1)

    def extent(self) -> Tuple[int, int, int, int, int, int]:
        """Return (x_min, x_max, y_min, y_max, z_min, z_max) voxel indices."""
        nx, ny, nz = self.dimensions()
        return 0, nx - 1, 0, ny - 1, 0, nz - 1

    def number_of_components(self) -> int:
        """Return the number of values stored per voxel."""
        return self._array.shape[-1]

    def scalar_range(self) -> Tuple[float, float]:
        """Return the (minimum, maximum) of the first component."""
        first = self._array[..., 0]
        return float(first.min()), float(first.max())

    def voxel(self, x: int, y: int, z: int) -> Tuple[float, ...]:
        """Return the component values of the voxel at (x, y, z)."""
        if not is_index_inside(self, (x, y, z)):
            raise IndexError(f"voxel ({x}, {y}, {z}) is outside the image")
        return tuple(float(v) for v in self._array[x, y, z])


def image_dimension(image: ImageData) -> int:
    """Return the data dimension of ``image``."""
    return image.dimension()


def image_intensity(image: ImageData, x: int, y: int, z: int) -> float:
    """Return the intensity at (x, y, z) of an 8-bit, 16-bit or double image."""
    if image.dtype not in _INTENSITY_TYPES:
        raise TypeError(f"unknown pixel type {image.dtype}")
    return image.voxel(x, y, z)[0]


def minimum_intensity(image: ImageData) -> float:
    """Return the smallest intensity in ``image``."""
    return image.scalar_range()[0]


def maximum_intensity(image: ImageData) -> float:
    """Return the largest intensity in ``image``."""
    return image.scalar_range()[1]


def image_gradient(image: ImageData, x: int, y: int, z: int) -> Tuple[float, ...]:
    """Return the gradient vector stored at (x, y, z) of a gradient image."""
    return image.voxel(x, y, z)


def image_center(image: ImageData) -> np.ndarray:
    """Return the centre point of the image's data axes."""
    extent = image.extent()
    return np.array([extent[2 * i + 1] / 2.0 for i in range(image.dimension())])


def image_diagonal(image: ImageData) -> float:
    """Return the length of the diagonal across the image's data axes."""
    size = image.dimensions()
    return math.sqrt(sum(size[i] * size[i] for i in range(image.dimension())))


def _three(values: Sequence[float], what: str) -> Tuple[float, float, float]:
    items = tuple(values)
    if len(items) < 3:
        raise ValueError(f"{what} needs three components, got {len(items)}")
    return items[0], items[1], items[2]


def is_index_inside(image: ImageData, index: Sequence[int]) -> bool:
    """Return True if the voxel index lies within the image extent."""
    extent = image.extent()
    return all(
        extent[2 * i] <= value <= extent[2 * i + 1]
        for i, value in enumerate(_three(index, "index"))
    )


def is_point_inside(image: ImageData, point: Sequence[float], padding: float) -> bool:
    """Return True if ``point`` lies within the extent shifted down by ``padding``."""
    extent = image.extent()
    return all(
        extent[2 * i] - padding <= value <= extent[2 * i + 1] - padding
        for i, value in enumerate(_three(point, "point"))
    )


# --- MetaImage --------------------------------------------------------------


def _raw_name(filename: str) -> str:
    dot = filename.rfind(".")
    if dot < 0:
        raise ValueError(f"MetaImage file name needs an extension: {filename!r}")
    return filename[: dot + 1] + "raw" + filename[dot + 4:]


def _file_order(image: ImageData) -> np.ndarray:
    """Return the voxels laid out with x varying fastest, components innermost."""
    return np.ascontiguousarray(image.array.transpose(2, 1, 0, 3))


def write_meta_image(image: ImageData, filename: PathLike) -> None:
    """Write ``image`` as a MetaImage header plus a separate raw data file."""
    header_path = Path(filename)
    raw_path = Path(_raw_name(str(header_path)))
    element_type = _META_TYPES.get(image.dtype)
    if element_type is None:
        raise TypeError(f"unsupported pixel type {image.dtype}")
    nx, ny, nz = image.dimensions()
    ndims = 3 if nz > 1 else 2
    sizes = (nx, ny, nz)[:ndims]
    spacing = image.spacing[:ndims]
    lines = [
        "ObjectType = Image",
        f"NDims = {ndims}",
        "BinaryData = True",
        "BinaryDataByteOrderMSB = False",
        "CompressedData = False",
        "Offset = " + " ".join("0" for _ in range(ndims)),
        "ElementSpacing = " + " ".join(format(s, "g") for s in spacing),
        "DimSize = " + " ".join(str(n) for n in sizes),
    ]
    if image.number_of_components() > 1:
        lines.append(f"ElementNumberOfChannels = {image.number_of_components()}")
    lines.append(f"ElementType = {element_type}")
    lines.append(f"ElementDataFile = {raw_path.name}")
    header_path.write_text("\n".join(lines) + "\n", encoding="ascii")
    little = image.dtype.newbyteorder("<")
    raw_path.write_bytes(_file_order(image).astype(little).tobytes())


def _parse_header(content: bytes) -> Tuple[dict, int]:
    header = {}
    pos = 0
    while pos < len(content):
        end = content.find(b"\n", pos)
        if end < 0:
            end = len(content)
        line = content[pos:end].decode("ascii").strip()
        pos = end + 1
        if not line:
            continue
        key, sep, value = line.partition("=")
        if not sep:
            raise ValueError(f"malformed MetaImage header line: {line!r}")
        key = key.strip()
        header[key] = value.strip()
        if key == "ElementDataFile":
            break
    return header, pos


def read_meta_image(filename: PathLike) -> ImageData:
    """Read a MetaImage file (.mhd with separate data or .mha with LOCAL data)."""
    header_path = Path(filename)
    content = header_path.read_bytes()
    header, data_start = _parse_header(content)
    try:
        sizes = [int(v) for v in header["DimSize"].split()]
        dtype = _META_DTYPES[header["ElementType"]]
        data_file = header["ElementDataFile"]
    except KeyError as err:
        raise ValueError(f"MetaImage header lacks or misstates {err}") from None
    if not 1 <= len(sizes) <= 3:
        raise ValueError(f"unsupported number of dimensions: {len(sizes)}")
    sizes += [1] * (3 - len(sizes))
    channels = int(header.get("ElementNumberOfChannels", "1"))
    spacing_text = header.get("ElementSpacing") or header.get("ElementSize")
    spacing = [float(v) for v in spacing_text.split()] if spacing_text else []
    big_endian = (
        header.get("BinaryDataByteOrderMSB", header.get("ElementByteOrderMSB", "False"))
        .lower() == "true"
    )
    if data_file == "LOCAL":
        payload = content[data_start:]
    else:
        payload = (header_path.parent / data_file).read_bytes()
    if header.get("CompressedData", "False").lower() == "true":
        payload = zlib.decompress(payload)
    nx, ny, nz = sizes
    count = nx * ny * nz * channels
    stored = dtype.newbyteorder(">" if big_endian else "<")
    values = np.frombuffer(payload, dtype=stored, count=count).astype(dtype)
    array = values.reshape(nz, ny, nx, channels).transpose(2, 1, 0, 3)
    if channels == 1:
        array = array[..., 0]
    return ImageData(array, spacing=spacing[:3], components=channels)


# --- raster formats ---------------------------------------------------------


def _frame(image: ImageData, z: int) -> Image.Image:
    plane = image.array[:, :, z, :]
    if image.number_of_components() == 1:
        plane = plane[:, :, 0].T
    else:
        plane = plane.transpose(1, 0, 2)
    if plane.dtype == np.float64:
        plane = plane.astype(np.float32)
    try:
        return Image.fromarray(np.ascontiguousarray(plane))
    except TypeError as err:
        raise ValueError(f"cannot store pixel type {image.dtype}: {err}") from None


def write_tiff_image(image: ImageData, filename: PathLike) -> None:
    """Write ``image`` as a TIFF file, one page per z slice."""
    frames = [_frame(image, z) for z in range(image.dimensions()[2])]
    frames[0].save(str(filename), format="TIFF", save_all=True, append_images=frames[1:])


def write_jpeg_image(image: ImageData, filename: PathLike) -> None:
    """Write a 2-D 8-bit grey or RGB image as a JPEG file."""
    if image.dimensions()[2] != 1:
        raise ValueError("JPEG output supports 2-D images only")
    if image.dtype != np.uint8:
        raise ValueError(f"JPEG output needs 8-bit pixels, got {image.dtype}")
    if image.number_of_components() not in (1, 3):
        raise ValueError("JPEG output needs one or three components")
    _frame(image, 0).save(str(filename), format="JPEG")