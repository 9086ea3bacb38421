"""Forbidden-edge ("no path") matrix over original node indices."""
from __future__ import annotations

from typing import Optional

import numpy as np


class NoPathMatrix:
    """Dense boolean matrix; ``True`` at ``[i, j]`` forbids committing ``i -> j``.

    Self loops are forbidden from the start. Cells without a finite cost can be
    folded in through ``initial``.
    """

    def __init__(self, size: int, initial: Optional[np.ndarray] = None):
        self.size = size
        if initial is None:
            self._mx = np.zeros((size, size), dtype=bool)
        else:
            self._mx = np.array(initial, dtype=bool)
        np.fill_diagonal(self._mx, True)

    def __getitem__(self, coords) -> bool:
        return bool(self._mx[coords])

    def forbid(self, src: int, dst: int) -> None:
        self._mx[src, dst] = True

    def row(self, src: int) -> np.ndarray:
        return self._mx[src]

    def column(self, dst: int) -> np.ndarray:
        return self._mx[:, dst]

    def as_array(self) -> np.ndarray:
        view = self._mx.view()
        view.flags.writeable = False
        return view
