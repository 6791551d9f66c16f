"""
Dense mixed-radix multi-index states and their neighbour enumerators.

A ``MultiIndexState`` holds one coordinate per dimension of a ``Shape``
together with its flat ("compound") index

    compound = sum_i indices[i] * prod_{j>i} shape[j]

The neighbour iterators walk every state that differs from a start state in
exactly one (``DenseOneBodyIterator``) or exactly two
(``DenseTwoBodyIterator``) coordinates. Dense states carry no exchange
antisymmetry, so every yielded sign is ``+1``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from ..errors import IndexOutOfRange
from .shape import Shape


@dataclass(frozen=True)
class MultiIndexState:
    """
    One basis state of a dense multi-index basis.

    ``indices`` must have one coordinate per dimension, each inside
    ``[0, shape[i])``, and ``compound`` must be their mixed-radix value.
    The ``from_*`` constructors build consistent states.

    Raises
    ------
    IndexOutOfRange
        If the coordinates do not fit ``shape`` or ``compound`` does not
        match them.
    """
    shape: Shape
    indices: tuple[int, ...]
    compound: int

    def __post_init__(self):
        indices = tuple(int(x) for x in self.indices)
        if len(indices) != len(self.shape):
            raise IndexOutOfRange(
                f"Expected {len(self.shape)} indices for shape {self.shape.dims}, got {len(indices)}"
            )
        for i, (x, d) in enumerate(zip(indices, self.shape)):
            if not 0 <= x < d:
                raise IndexOutOfRange(f"Index {x} at position {i} outside [0, {d})")
        compound = sum(x * s for x, s in zip(indices, self.shape.strides))
        if self.compound != compound:
            raise IndexOutOfRange(
                f"Compound index {self.compound} does not match indices {indices} ({compound})"
            )
        object.__setattr__(self, "indices", indices)

    @classmethod
    def from_zeros(cls, shape: Shape) -> MultiIndexState:
        return cls(shape, (0,) * len(shape), 0)

    @classmethod
    def from_indices(cls, indices: Sequence[int], shape: Shape) -> MultiIndexState:
        """
        Build a state from its coordinates.

        Raises
        ------
        IndexOutOfRange
            If the number of coordinates does not match ``shape`` or any
            ``indices[i]`` lies outside ``[0, shape[i])``.
        """
        indices = tuple(int(x) for x in indices)
        compound = sum(x * s for x, s in zip(indices, shape.strides))
        return cls(shape, indices, compound)

    @classmethod
    def from_compound(cls, compound: int, shape: Shape) -> MultiIndexState:
        """
        Decode a flat index into coordinates, least significant dimension first.

        Raises
        ------
        IndexOutOfRange
            If ``compound`` is negative or not below ``shape.size``.
        """
        compound = int(compound)
        if not 0 <= compound < shape.size:
            raise IndexOutOfRange(f"Compound index {compound} outside [0, {shape.size})")
        indices = [0] * len(shape)
        rest = compound
        for i in range(len(shape) - 1, -1, -1):
            rest, indices[i] = divmod(rest, shape[i])
        return cls(shape, tuple(indices), compound)

    @property
    def index(self) -> int:
        return self.compound

    def hamming(self, other: MultiIndexState) -> int:
        """Number of coordinates in which two states differ."""
        return sum(x != y for x, y in zip(self.indices, other.indices))

    def one_body_neighbors(self) -> DenseOneBodyIterator:
        return DenseOneBodyIterator(self)

    def two_body_neighbors(self) -> DenseTwoBodyIterator:
        return DenseTwoBodyIterator(self)


class DenseOneBodyIterator:
    """
    Iterate ``(1, state)`` over all states differing from ``start`` in one coordinate.

    Odometer order: the least significant variable position is advanced
    (modulo its size) until it wraps back to its start value, then the next
    more significant variable position takes over. The iterator is finite
    and cannot be restarted.

    Parameters
    ----------
    start : MultiIndexState
        State whose neighbours are enumerated.
    positions : sequence of int, optional
        Positions to sweep, least significant first. Defaults to every
        position with ``shape[i] > 1``.
    """

    def __init__(self, start: MultiIndexState, positions: Sequence[int] | None = None):
        self._start = start
        self._shape = start.shape
        if positions is None:
            positions = self._shape.variable_positions()
        self._positions = tuple(p for p in positions if self._shape[p] > 1)
        self._current = list(start.indices)
        self._cursor = 0
        self._exhausted = not self._positions

    def __iter__(self) -> Iterator[tuple[int, MultiIndexState]]:
        return self

    def __next__(self) -> tuple[int, MultiIndexState]:
        while not self._exhausted:
            pos = self._positions[self._cursor]
            self._current[pos] = (self._current[pos] + 1) % self._shape[pos]
            if self._current[pos] != self._start.indices[pos]:
                return 1, MultiIndexState.from_indices(self._current, self._shape)
            # Full cycle at this position: the coordinates are back at the
            # start tuple, move on to the next more significant position.
            self._cursor += 1
            self._exhausted = self._cursor == len(self._positions)
        raise StopIteration


class DenseTwoBodyIterator:
    """
    Iterate ``(1, state)`` over all states differing from ``start`` in two coordinates.

    An outer cursor holds one changed value at a more significant position
    while an inner ``DenseOneBodyIterator`` sweeps every less significant
    variable position. When the inner sweep is exhausted the outer value
    advances; when the outer value wraps, the outer cursor moves to the next
    more significant position and the inner range grows by one position.
    """

    def __init__(self, start: MultiIndexState):
        self._start = start
        self._shape = start.shape
        self._positions = self._shape.variable_positions()
        self._current = list(start.indices)
        self._outer = 1
        self._inner: Iterator[tuple[int, MultiIndexState]] = iter(())
        self._exhausted = len(self._positions) < 2

    def __iter__(self) -> Iterator[tuple[int, MultiIndexState]]:
        return self

    def __next__(self) -> tuple[int, MultiIndexState]:
        while not self._exhausted:
            item = next(self._inner, None)
            if item is not None:
                return item
            self._advance_outer()
        raise StopIteration

    def _advance_outer(self):
        pos = self._positions[self._outer]
        self._current[pos] = (self._current[pos] + 1) % self._shape[pos]
        if self._current[pos] == self._start.indices[pos]:
            self._outer += 1
            if self._outer == len(self._positions):
                self._exhausted = True
                return
            pos = self._positions[self._outer]
            self._current[pos] = (self._current[pos] + 1) % self._shape[pos]
        pivot = MultiIndexState.from_indices(self._current, self._shape)
        self._inner = DenseOneBodyIterator(pivot, self._positions[:self._outer])
