"""Named display colours for rendered curves and junctions."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class ActorColor(Enum):
    """Fixed RGB colours, each component in the range [0, 1]."""

    WHITE = (1.0, 1.0, 1.0)
    GRAY = (0.8, 0.8, 0.8)
    RED = (1.0, 0.0, 0.0)
    MAGENTA = (1.0, 0.0, 1.0)
    YELLOW = (1.0, 1.0, 0.0)
    GREEN = (0.0, 1.0, 0.0)
    CYAN = (0.0, 1.0, 1.0)
    BLUE = (0.0, 0.0, 1.0)

    def rgb(self) -> Tuple[float, float, float]:
        """Return the colour as a (red, green, blue) tuple."""
        return self.value