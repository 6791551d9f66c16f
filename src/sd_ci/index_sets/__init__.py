"""
Basis state representations and their neighbour enumerators.

Dense multi-index basis
-----------------------
Shape : shared dimension sizes
MultiIndexState : mixed-radix coordinates and compound index
DenseOneBodyIterator, DenseTwoBodyIterator : states one or two coordinates away

Occupation-number basis
-----------------------
SDSpace : shared ``(n, l)`` configuration
OccupationState : one Slater determinant, ranked in lexicographic order
init_sd_state, next_sd_state, sd_rank, sd_unrank : tuple-level enumeration

Both state types implement the ``IndexSet`` protocol.
"""

from .base import IndexSet
from .dense import DenseOneBodyIterator, DenseTwoBodyIterator, MultiIndexState
from .occupation import (
    OccupationState,
    SDSpace,
    excitation_sign,
    init_sd_state,
    next_sd_state,
    sd_rank,
    sd_unrank,
)
from .shape import Shape

__all__ = [
    "IndexSet",
    "Shape",
    "MultiIndexState",
    "DenseOneBodyIterator",
    "DenseTwoBodyIterator",
    "SDSpace",
    "OccupationState",
    "excitation_sign",
    "init_sd_state",
    "next_sd_state",
    "sd_rank",
    "sd_unrank",
]
