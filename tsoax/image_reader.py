"""Loading of single images, stacked frame files and time-lapse directories."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import numpy as np
from PIL import Image, ImageSequence

from .image import ImageData, read_meta_image

PathLike = Union[str, Path]

ALLOWED_FORMATS = frozenset({"tif", "tiff", "mhd", "mha", "png", "jpg", "jpeg", "bmp"})
_META_FORMATS = frozenset({"mhd", "mha"})
_DIGITS = re.compile(r"[0-9]+")


def _suffix(name: str) -> str:
    """Return the text after the last dot of the file name, lower-cased."""
    base = os.path.basename(name)
    dot = base.rfind(".")
    return base[dot + 1:].lower() if dot >= 0 else ""


def extract_index(filename: str) -> Optional[int]:
    """Return the last run of digits in ``filename`` as an integer, or None."""
    runs = _DIGITS.findall(filename)
    return int(runs[-1]) if runs else None


def sort_filenames(filenames: Iterable[str], allowed_formats: Iterable[str]) -> List[str]:
    """Order image file names by their sequence index.

    Names with an allowed suffix are kept. Names without an index come
    first, then names whose index was already taken, then the rest in
    ascending index order.
    """
    allowed = {fmt.lower() for fmt in allowed_formats}
    indexed: Dict[int, str] = {}
    no_index: List[str] = []
    collisions: List[str] = []
    for name in filenames:
        if _suffix(name) not in allowed:
            continue
        index = extract_index(name)
        if index is None:
            no_index.append(name)
        elif index in indexed:
            collisions.append(name)
        else:
            indexed[index] = name
    return no_index + collisions + [indexed[k] for k in sorted(indexed)]


def _frame_array(frame: Image.Image) -> np.ndarray:
    if frame.mode == "P":
        frame = frame.convert("RGBA" if "transparency" in frame.info else "RGB")
    elif frame.mode == "1":
        frame = frame.convert("L")
    elif frame.mode in ("CMYK", "YCbCr", "LAB", "HSV"):
        frame = frame.convert("RGB")
    plane = np.array(frame)
    if plane.ndim == 2:
        return plane.T
    return plane.transpose(1, 0, 2)


def _load_raster(filename: str) -> ImageData:
    with Image.open(filename) as img:
        planes = [_frame_array(frame) for frame in ImageSequence.Iterator(img)]
    if not planes:
        raise ValueError(f"no image data in {filename!r}")
    shape = planes[0].shape
    if any(p.shape != shape or p.dtype != planes[0].dtype for p in planes):
        raise ValueError(f"pages of {filename!r} differ in size or type")
    components = shape[2] if len(shape) == 3 else 1
    if len(planes) == 1:
        return ImageData(planes[0], components=components)
    volume = np.stack(planes, axis=2)
    return ImageData(volume, components=components)


def _load_image(filename: str) -> ImageData:
    suffix = _suffix(filename)
    if suffix in _META_FORMATS:
        return read_meta_image(filename)
    if suffix not in ALLOWED_FORMATS:
        raise ValueError(f"unsupported image format: {filename!r}")
    return _load_raster(filename)


class ImageReader:
    """Read 2-D/3-D images, or sequences of them, from files or a directory.

    A single file may hold several frames stacked along z; set
    ``nslices_per_frame`` before calling :meth:`read_file` to split it.
    """

    def __init__(self) -> None:
        self.path: str = ".."
        self.nslices_per_frame: int = 0
        self.allowed_formats = set(ALLOWED_FORMATS)
        self._paths: List[str] = []
        self._images: List[ImageData] = []

    @property
    def images(self) -> List[ImageData]:
        """The images read so far, in sequence order."""
        return list(self._images)

    def read_file(self, filename: PathLike) -> None:
        """Read one file holding one image or several stacked frames."""
        name = os.fspath(filename)
        image = _load_image(name)
        if self.nslices_per_frame > 0:
            self._load_frames(image)
        else:
            self._images.append(image)
        absolute = os.path.abspath(name)
        self.path = os.path.dirname(absolute)
        self._paths.append(absolute)

    def read_dir(self, directory: PathLike) -> None:
        """Read every allowed image in ``directory`` in sequence order."""
        folder = Path(directory)
        if not folder.is_dir():
            raise NotADirectoryError(f"not a directory: {os.fspath(directory)!r}")
        names = sorted(
            entry.name
            for entry in folder.iterdir()
            if entry.is_file() and not entry.name.startswith(".")
        )
        absolute_dir = os.path.abspath(os.fspath(folder))
        for name in sort_filenames(names, self.allowed_formats):
            file_path = os.path.join(absolute_dir, name)
            self._images.append(_load_image(file_path))
            self._paths.append(file_path)
        self.path = absolute_dir

    def get_image(self, index: int = 0) -> Optional[ImageData]:
        """Return the image at ``index``, or None if nothing has been read."""
        if not self._images:
            return None
        return self._images[index]

    def last_image(self) -> Optional[ImageData]:
        """Return the last image, or None if nothing has been read."""
        return self._images[-1] if self._images else None

    def find_image(self, image: ImageData) -> int:
        """Return the position of ``image`` in the sequence, or -1."""
        for position, candidate in enumerate(self._images):
            if candidate is image:
                return position
        return -1

    def number_of_images(self) -> int:
        """Return the number of images read."""
        return len(self._images)

    def file_path(self, index: int = 0) -> str:
        """Return the absolute path of the file at ``index``, or ""."""
        if not self._paths:
            return ""
        return self._paths[index]

    def file_name_without_suffix(self, index: int = 0) -> str:
        """Return the file name of a frame up to its first dot."""
        if self.nslices_per_frame:
            name = self._paths[0]
        else:
            name = self.file_path(index)
        return os.path.basename(name).partition(".")[0]

    def allowed_format_string(self) -> str:
        """Return a file-dialog filter listing the allowed formats."""
        patterns = "".join(f" *.{fmt}" for fmt in sorted(self.allowed_formats))
        return f"Image Files ({patterns})"

    def reset(self) -> None:
        """Forget all images and paths; ``path`` is kept."""
        self._paths.clear()
        self._images.clear()
        self.nslices_per_frame = 0

    def reverse_image_sequence(self) -> None:
        """Reverse the order of the images."""
        self._images.reverse()

    def _load_frames(self, image: ImageData) -> None:
        nz = image.dimensions()[2]
        if self.nslices_per_frame > nz:
            self.nslices_per_frame = nz
        step = self.nslices_per_frame
        components = image.number_of_components()
        for end in range(step, nz + 1, step):
            block = image.array[:, :, end - step:end, :]
            if components == 1:
                block = block[..., 0]
            self._images.append(
                ImageData(block.copy(), spacing=image.spacing, components=components)
            )