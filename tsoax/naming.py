"""File names derived from input image paths for saved curve results."""

from __future__ import annotations


def _stem(path: str) -> str:
    slash = max(path.rfind("/"), path.rfind("\\"))
    dot = path.rfind(".")
    if dot <= slash:
        return path[slash + 1:]
    return path[slash + 1:dot]


def construct_snake_filename(
    image_path: str, ridge_threshold: float, stretch: float
) -> str:
    """Return a result file name recording the ridge and stretch parameters."""
    return (
        f"{_stem(image_path)}--ridge{ridge_threshold:#.4g}"
        f"--stretch{stretch:#.4g}.txt"
    )


def image_suffix(image_path: str) -> str:
    """Return the text after the last dot, or the whole path if there is none."""
    return image_path[image_path.rfind(".") + 1:]


def output_name_for_directory(directory: str) -> str:
    """Return the result file name for a directory of frames."""
    slash = max(directory.rfind("/"), directory.rfind("\\"))
    return directory[slash + 1:] + ".txt"