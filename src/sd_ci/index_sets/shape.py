"""
Shape of a dense multi-index basis.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from ..errors import ConfigurationError


@dataclass(frozen=True)
class Shape:
    """
    Ordered sequence of positive dimension sizes ``d_0 ... d_{k-1}``.

    A shape is created once per problem and shared by every
    ``MultiIndexState`` and neighbour iterator built on it. It is never
    copied per state and has no mutating methods.

    Parameters
    ----------
    dims : iterable of int
        Dimension sizes, most significant first.

    Raises
    ------
    ConfigurationError
        If ``dims`` is empty or contains a non-positive size.
    """
    dims: tuple[int, ...]

    def __init__(self, dims: Iterable[int]):
        dims = tuple(int(d) for d in dims)
        if not dims:
            raise ConfigurationError("Shape needs at least one dimension")
        if any(d < 1 for d in dims):
            raise ConfigurationError(f"Shape dimensions must be positive, got {dims}")
        object.__setattr__(self, "dims", dims)

    def __len__(self) -> int:
        return len(self.dims)

    def __getitem__(self, i: int) -> int:
        return self.dims[i]

    def __iter__(self):
        return iter(self.dims)

    @property
    def size(self) -> int:
        """Number of states in the dense basis."""
        return math.prod(self.dims)

    @property
    def strides(self) -> tuple[int, ...]:
        """Place value of each position in the big-endian mixed-radix encoding."""
        strides = [1] * len(self.dims)
        for i in range(len(self.dims) - 2, -1, -1):
            strides[i] = strides[i + 1] * self.dims[i + 1]
        return tuple(strides)

    def variable_positions(self) -> tuple[int, ...]:
        """Positions with more than one allowed value, least significant first."""
        return tuple(i for i in reversed(range(len(self.dims))) if self.dims[i] > 1)
