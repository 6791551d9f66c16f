"""
Interface shared by all basis state representations.
"""
from __future__ import annotations

from typing import Iterator, Protocol, runtime_checkable


@runtime_checkable
class IndexSet(Protocol):
    """
    A basis state that knows its coefficient-vector index and its neighbours.

    ``MultiIndexState`` and ``OccupationState`` both satisfy this protocol
    structurally, so operator evaluators can be written once against it.

    The neighbour methods return the complete, lazily generated sequence of
    ``(sign, state)`` pairs differing from ``self`` by one or two
    coordinates (orbitals). A fresh sequence is returned on every call.
    """

    @property
    def index(self) -> int:
        ...

    def one_body_neighbors(self) -> Iterator[tuple[int, IndexSet]]:
        ...

    def two_body_neighbors(self) -> Iterator[tuple[int, IndexSet]]:
        ...
