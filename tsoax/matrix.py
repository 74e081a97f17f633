"""Dense two-dimensional matrix with in-place arithmetic."""

from __future__ import annotations

from numbers import Real
from typing import Iterable, Iterator, List, Sequence, Tuple


def _format_value(value: object) -> str:
    if isinstance(value, float):
        return format(value, "g")
    return str(value)


class Matrix:
    """A rows x columns grid of numbers stored row by row."""

    def __init__(self, rows: int = 0, columns: int = 0, default: Real = 0) -> None:
        self._rows = 0
        self._columns = 0
        self._data: List[List[Real]] = []
        if rows or columns:
            self.resize(rows, columns, default)

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Real]]) -> Matrix:
        """Build a matrix from nested rows, which must all be equally long."""
        data = [list(row) for row in rows]
        matrix = cls()
        if not data:
            return matrix
        width = len(data[0])
        if any(len(row) != width for row in data):
            raise ValueError("all rows must have the same number of columns")
        matrix._rows = len(data)
        matrix._columns = width
        matrix._data = data
        return matrix

    # --- shape ---------------------------------------------------------

    def rows(self) -> int:
        """Return the number of rows."""
        return self._rows

    def columns(self) -> int:
        """Return the number of columns."""
        return self._columns

    def minsize(self) -> int:
        """Return the smaller of the row and column counts."""
        return min(self._rows, self._columns)

    def resize(self, rows: int, columns: int, default: Real = 0) -> None:
        """Change the shape, keeping the overlapping entries and filling the rest."""
        if rows <= 0 or columns <= 0:
            raise ValueError("rows and columns must be positive")
        keep_rows = min(rows, self._rows)
        keep_cols = min(columns, self._columns)
        new_data = [[default] * columns for _ in range(rows)]
        for r in range(keep_rows):
            new_data[r][:keep_cols] = self._data[r][:keep_cols]
        self._data = new_data
        self._rows = rows
        self._columns = columns

    def fill(self, value: Real) -> None:
        """Set every entry to ``value``."""
        if not self._data:
            raise ValueError("cannot fill an empty matrix")
        self._data = [[value] * self._columns for _ in range(self._rows)]

    # --- element access ------------------------------------------------

    def _check_key(self, key: Tuple[int, int]) -> Tuple[int, int]:
        try:
            row, column = key
        except (TypeError, ValueError):
            raise TypeError("matrix index must be a (row, column) pair") from None
        if not (0 <= row < self._rows and 0 <= column < self._columns):
            raise IndexError(f"index ({row}, {column}) out of range")
        return row, column

    def __getitem__(self, key: Tuple[int, int]) -> Real:
        row, column = self._check_key(key)
        return self._data[row][column]

    def __setitem__(self, key: Tuple[int, int], value: Real) -> None:
        row, column = self._check_key(key)
        self._data[row][column] = value

    def __iter__(self) -> Iterator[List[Real]]:
        return (list(row) for row in self._data)

    # --- in-place arithmetic -------------------------------------------

    def _apply(self, op) -> None:
        self._data = [[op(v) for v in row] for row in self._data]

    def __iadd__(self, other: object) -> Matrix:
        if isinstance(other, Matrix):
            if (other._rows, other._columns) != (self._rows, self._columns):
                raise ValueError("matrices must have the same size")
            self._data = [
                [a + b for a, b in zip(mine, theirs)]
                for mine, theirs in zip(self._data, other._data)
            ]
            return self
        if isinstance(other, Real):
            self._apply(lambda v: v + other)
            return self
        return NotImplemented

    def __isub__(self, other: object) -> Matrix:
        if isinstance(other, Real):
            self._apply(lambda v: v - other)
            return self
        return NotImplemented

    def __imul__(self, other: object) -> Matrix:
        if isinstance(other, Real):
            self._apply(lambda v: v * other)
            return self
        return NotImplemented

    def __itruediv__(self, other: object) -> Matrix:
        if isinstance(other, Real):
            self._apply(lambda v: v / other)
            return self
        return NotImplemented

    # --- comparison and copying ----------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return (
            self._rows == other._rows
            and self._columns == other._columns
            and self._data == other._data
        )

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> Matrix:
        """Return an independent copy."""
        duplicate = Matrix()
        duplicate._rows = self._rows
        duplicate._columns = self._columns
        duplicate._data = [list(row) for row in self._data]
        return duplicate

    # --- reductions ----------------------------------------------------

    def _values(self) -> List[Real]:
        if self._rows == 0 or self._columns == 0:
            raise ValueError("matrix is empty")
        return [v for row in self._data for v in row]

    def min(self) -> Real:
        """Return the smallest entry."""
        return min(self._values())

    def max(self) -> Real:
        """Return the largest entry."""
        return max(self._values())

    def __str__(self) -> str:
        return "".join(
            "".join(f"{_format_value(v)}," for v in row) + "\n" for row in self._data
        )

    def __repr__(self) -> str:
        return f"Matrix.from_rows({self._data!r})"