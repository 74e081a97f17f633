"""Uniform spatial bin grid holding (snake index, vertex index) tags."""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Tuple

from .coordinate import Coordinate

Tag = Tuple[int, int]
GridPos = Tuple[int, int, int]


class Grid:
    """A box divided into equally sized bins, each holding a list of tags."""

    def __init__(
        self,
        size: Optional[Coordinate] = None,
        periodic_x: bool = False,
        periodic_y: bool = False,
        periodic_z: bool = False,
    ) -> None:
        self._size = size if size is not None else Coordinate(1.0, 1.0, 1.0)
        self._periodic = (periodic_x, periodic_y, periodic_z)
        self._bins: List[List[Tag]] = []
        self._tag_bins: List[List[GridPos]] = []
        self._nx = self._ny = self._nz = 0
        self._bin_size = Coordinate()
        self._entries = 0

    # --- configuration -------------------------------------------------

    def set_grid_dimensions(self, size: Coordinate) -> None:
        """Set the extent of the box covered by the grid."""
        self._size = size

    def grid_dimensions(self) -> Coordinate:
        """Return the extent of the box covered by the grid."""
        return self._size

    def largest_grid_dimension(self) -> int:
        """Return the largest box extent, truncated to an integer."""
        return int(max(self._size.x, self._size.y, self._size.z))

    def set_num_bins(self, nx: int, ny: int, nz: int) -> None:
        """Set the number of bins along each axis."""
        if nx < 1 or ny < 1 or nz < 1:
            raise ValueError(f"bin counts must be positive, got ({nx}, {ny}, {nz})")
        self._nx, self._ny, self._nz = nx, ny, nz
        total = nx * ny * nz
        if len(self._bins) < total:
            self._bins.extend([] for _ in range(total - len(self._bins)))
        else:
            del self._bins[total:]
        self._bin_size = Coordinate(
            self._size.x / nx, self._size.y / ny, self._size.z / nz
        )

    def set_bin_size(self, desired_bin_size: float) -> None:
        """Choose bin counts so each bin is at least ``desired_bin_size`` wide."""
        self.set_num_bins(
            math.floor(self._size.x / desired_bin_size),
            math.floor(self._size.y / desired_bin_size),
            math.floor(self._size.z / desired_bin_size),
        )

    def set_periodic(self, periodic_x: bool, periodic_y: bool, periodic_z: bool) -> None:
        """Set which axes wrap around when mapping positions to bins."""
        self._periodic = (periodic_x, periodic_y, periodic_z)

    # --- queries -------------------------------------------------------

    def num_bins(self) -> int:
        """Return the total number of bins."""
        return len(self._bins)

    def num_entries(self) -> int:
        """Return the number of tags inserted since the last clear."""
        return self._entries

    def _require_bins(self) -> None:
        if not self._bins:
            raise ValueError("grid bins are not configured")

    @staticmethod
    def _clamp(value: int, count: int) -> int:
        if value < 0:
            return 0
        if value >= count:
            return count - 1
        return value

    def pos_to_grid_positions(self, coordinate: Coordinate) -> GridPos:
        """Return the clamped (x, y, z) bin position containing ``coordinate``."""
        self._require_bins()
        bx = int(coordinate.x / self._bin_size.x)
        by = int(coordinate.y / self._bin_size.y)
        bz = int(coordinate.z / self._bin_size.z)
        return (
            self._clamp(bx, self._nx),
            self._clamp(by, self._ny),
            self._clamp(bz, self._nz),
        )

    def get_bin(self, coordinate: Coordinate) -> int:
        """Return the linear index of the bin containing ``coordinate``."""
        bx, by, bz = self.pos_to_grid_positions(coordinate)
        return bx * self._ny * self._nz + by * self._nz + bz

    def bin_to_grid_positions(self, bin_index: int) -> GridPos:
        """Convert a linear bin index to its (x, y, z) bin position."""
        gx = int(bin_index / self._ny / self._nz)
        bin_index -= gx * self._ny * self._nz
        gy = int(bin_index / self._nz)
        gz = bin_index - gy * self._nz
        return gx, gy, gz

    def grid_positions_to_bin(self, x: int, y: int, z: int) -> int:
        """Convert a bin position to a linear index, wrapping periodic axes."""
        px, py, pz = self._periodic
        if px:
            x %= self._nx
        if py:
            y %= self._ny
        if pz:
            z %= self._nz
        return x * self._ny * self._nz + y * self._nz + z

    # --- mutation ------------------------------------------------------

    def put_in_grid(self, tag: Tag, coordinate: Coordinate) -> int:
        """Store ``tag`` in the bin containing ``coordinate``; return that bin."""
        index = self.get_bin(coordinate)
        self._bins[index].append(tuple(tag))
        self._entries += 1
        return index

    def clear(self) -> None:
        """Remove all tags while keeping the bin layout."""
        for bucket in self._bins:
            bucket.clear()
        for row in self._tag_bins:
            row.clear()
        self._entries = 0

    def shift_first_index(self, shift: int) -> None:
        """Add ``shift`` to the first component of every stored tag."""
        self._bins = [[(a + shift, b) for a, b in bucket] for bucket in self._bins]

    def remove_element(self, index: int) -> None:
        """Drop tags whose first component is ``index``; decrement all others."""
        self._bins = [
            [(a - 1, b) for a, b in bucket if a != index] for bucket in self._bins
        ]

    # --- lookup --------------------------------------------------------

    def tags_in_bins(self, bins: Iterable[int]) -> List[Tag]:
        """Return the tags stored in the given bins, in order."""
        return [tag for b in bins for tag in self._bins[b]]

    def neighboring_tags(self, coordinate: Coordinate, level: Optional[int] = None) -> List[Tag]:
        """Return tags in bins near ``coordinate``.

        Without ``level`` all 27 bins of the surrounding 3x3x3 block are
        searched. With ``level`` only the shell of bins exactly ``level``
        steps away is searched (the centre bin is included for level 1).
        """
        gx, gy, gz = self.bin_to_grid_positions(self.get_bin(coordinate))
        reach = 1 if level is None else level
        found: List[Tag] = []
        for m in range(-reach, reach + 1):
            for n in range(-reach, reach + 1):
                for o in range(-reach, reach + 1):
                    if level is not None and not (
                        abs(m) == level
                        or abs(n) == level
                        or abs(o) == level
                        or (level == 1 and m == n == o == 0)
                    ):
                        continue
                    bx, by, bz = gx + m, gy + n, gz + o
                    if not (
                        0 <= bx < self._nx and 0 <= by < self._ny and 0 <= bz < self._nz
                    ):
                        continue
                    index = self.grid_positions_to_bin(bx, by, bz)
                    if index < len(self._bins):
                        found.extend(self._bins[index])
        return found

    def construct_tag_list(self) -> None:
        """Build the lookup from (snake, vertex) tags to bin positions."""
        for row in self._tag_bins:
            row.clear()
        for index, bucket in enumerate(self._bins):
            if not bucket:
                continue
            pos = self.bin_to_grid_positions(index)
            for snake, vertex in bucket:
                while len(self._tag_bins) <= snake:
                    self._tag_bins.append([])
                row = self._tag_bins[snake]
                while len(row) <= vertex:
                    row.append((-1, -1, -1))
                row[vertex] = pos

    def grid_pos_from_id(self, first: int, second: int) -> GridPos:
        """Return the bin position recorded for tag (first, second)."""
        return self._tag_bins[first][second]

    @staticmethod
    def _level(a: GridPos, b: GridPos) -> int:
        return max(1, max(abs(p - q) for p, q in zip(a, b)))

    def grid_level_dist_between_ids(self, a: Tag, b: Tag) -> int:
        """Return the Chebyshev bin distance between two tags, at least 1."""
        return self._level(self.grid_pos_from_id(*a), self.grid_pos_from_id(*b))

    def min_dist_between_ids(self, a: Tag, b: Tag) -> float:
        """Return a lower bound on the spatial distance between two tags."""
        level = self.grid_level_dist_between_ids(a, b)
        return (level - 1) * min(self._bin_size.x, self._bin_size.y)

    def min_dist_between_bins(self, a: GridPos, b: GridPos) -> float:
        """Return a lower bound on the spatial distance between two bins."""
        return (self._level(a, b) - 1) * min(self._bin_size.x, self._bin_size.y)