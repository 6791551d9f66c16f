"""
Occupation-number (Slater determinant) basis of ``n`` fermions in ``l`` orbitals.

A determinant is stored as the strictly increasing tuple of its occupied
orbitals ``q_1 < ... < q_n`` and stands for

    |D> = a†_{q_1} a†_{q_2} ... a†_{q_n} |0>

The ``C(l, n)`` determinants are totally ordered lexicographically. The
successor step and the closed-form rank below both follow that order, so
the rank of a determinant is its index in a CI coefficient vector:

    rank 0              -> (0, 1, ..., n-1)
    rank C(l, n) - 1    -> (l-n, ..., l-1)

Functions
---------
init_sd_state(start, n, l)
    First determinant ``(start, ..., start+n-1)``.
next_sd_state(state, n, l)
    Lexicographic successor, or ``None`` after the last determinant.
sd_rank(state, l), sd_unrank(rank, n, l)
    Combinatorial number system rank and its inverse.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from itertools import combinations
from math import comb
from typing import Iterator, Sequence

from ..errors import ConfigurationError, IndexOutOfRange

logger = logging.getLogger(__name__)


def init_sd_state(start: int, n: int, l: int) -> tuple[int, ...]:
    """
    Return the determinant ``(start, start+1, ..., start+n-1)``.

    Raises
    ------
    ConfigurationError
        If ``n`` is zero, ``start`` is negative, or ``start + n >= l``.
    """
    if n < 1:
        raise ConfigurationError("n must be greater than zero")
    if start < 0:
        raise ConfigurationError(f"start must be non-negative, got {start}")
    if start + n >= l:
        raise ConfigurationError(
            f"Too high start value ({start}) or too few orbitals l={l} for n={n} particles"
        )
    return tuple(range(start, start + n))


def next_sd_state(state: Sequence[int], n: int, l: int) -> tuple[int, ...] | None:
    """
    Return the next determinant in lexicographic order, or ``None`` if ``state`` is last.

    Scans from the last position backwards for the right-most orbital that is
    below its maximum ``l - 1 - distance_from_end``, increments it and resets
    every later position to consecutive orbitals above it.

    Raises
    ------
    ConfigurationError
        If ``n`` is zero or ``state`` does not hold ``n`` orbitals.
    """
    if n < 1:
        raise ConfigurationError("n must be greater than zero")
    if len(state) != n:
        raise ConfigurationError(f"State {tuple(state)} does not hold n={n} orbitals")
    new_state = list(state)
    cursor = n - 1
    dec = 0
    while new_state[cursor] >= l - 1 - dec:
        cursor -= 1
        dec += 1
        if cursor < 0:
            return None

    new_state[cursor] += 1
    for c in range(cursor + 1, n):
        new_state[c] = new_state[cursor] + c - cursor
    return tuple(new_state)


def sd_rank(state: Sequence[int], l: int) -> int:
    """
    Position of ``state`` in the order generated by ``next_sd_state``.

    Lexicographic order on ``state`` is reverse colexicographic order on the
    mirrored orbitals ``l-1-q``, whose colex rank is the combinatorial
    number system sum ``sum_i C(l-1-q_i, n-i)``.
    """
    n = len(state)
    colex = sum(comb(l - 1 - q, n - i) for i, q in enumerate(state))
    return comb(l, n) - 1 - colex


def sd_unrank(rank: int, n: int, l: int) -> tuple[int, ...]:
    """
    Inverse of ``sd_rank``.

    Raises
    ------
    IndexOutOfRange
        If ``rank`` is outside ``[0, C(l, n))``.
    """
    dim = comb(l, n)
    if not 0 <= rank < dim:
        raise IndexOutOfRange(f"Rank {rank} outside [0, {dim})")
    colex = dim - 1 - rank
    state = []
    top = l
    for i in range(n):
        k = n - i
        d = top - 1
        while comb(d, k) > colex:
            d -= 1
        colex -= comb(d, k)
        state.append(l - 1 - d)
        top = d
    return tuple(state)


def excitation_sign(indices: Sequence[int], p: int, q: int) -> int:
    """
    Fermionic sign of ``a†_p a_q`` acting on the determinant ``indices``.

    ``(-1)^m`` where ``m`` counts the occupied orbitals strictly between
    ``p`` and ``q``.
    """
    lo, hi = (p, q) if p < q else (q, p)
    m = sum(lo < i < hi for i in indices)
    return -1 if m % 2 else 1


def _ladder_phase(occupied: Sequence[int], site: int) -> int:
    """(-1)^(# occupied orbitals below ``site``)."""
    return -1 if sum(i < site for i in occupied) % 2 else 1


@dataclass(frozen=True)
class SDSpace:
    """
    Shared ``(n, l)`` configuration of a determinant basis.

    Every ``OccupationState`` refers to one ``SDSpace``; it is never copied
    or changed after construction.

    Raises
    ------
    ConfigurationError
        Unless ``1 <= n < l``.
    """
    n: int
    l: int

    def __post_init__(self):
        if self.n < 1:
            raise ConfigurationError("n must be greater than zero")
        if self.n >= self.l:
            raise ConfigurationError(f"Too few orbitals l={self.l} for n={self.n} particles")

    @property
    def dim(self) -> int:
        """Number of determinants, ``C(l, n)``."""
        return comb(self.l, self.n)

    def states(self, first: int = 0, stop: int | None = None) -> Iterator[OccupationState]:
        """
        Yield determinants with rank in ``[first, stop)`` in successor order.

        Only the first state is unranked; the rest follow by successor steps.
        """
        stop = self.dim if stop is None else min(stop, self.dim)
        if first >= stop:
            return
        logger.debug("Enumerating determinants %d..%d of C(%d,%d)", first, stop, self.l, self.n)
        indices = sd_unrank(first, self.n, self.l)
        for _ in range(first, stop):
            yield OccupationState(self, indices)
            indices = next_sd_state(indices, self.n, self.l)


@dataclass(frozen=True)
class OccupationState:
    """
    One Slater determinant: the occupied orbitals of ``space.n`` fermions.

    Parameters
    ----------
    space : SDSpace
        Shared ``(n, l)`` configuration.
    indices : tuple of int
        Strictly increasing occupied orbitals in ``[0, l)``.
    """
    space: SDSpace
    indices: tuple[int, ...]

    def __post_init__(self):
        indices = tuple(int(q) for q in self.indices)
        if len(indices) != self.space.n:
            raise IndexOutOfRange(f"Expected {self.space.n} orbitals, got {len(indices)}")
        if indices[0] < 0 or indices[-1] >= self.space.l:
            raise IndexOutOfRange(f"Orbitals {indices} outside [0, {self.space.l})")
        if any(a >= b for a, b in zip(indices, indices[1:])):
            raise IndexOutOfRange(f"Orbitals {indices} are not strictly increasing")
        object.__setattr__(self, "indices", indices)

    @classmethod
    def first(cls, space: SDSpace, start: int = 0) -> OccupationState:
        return cls(space, init_sd_state(start, space.n, space.l))

    @classmethod
    def from_rank(cls, space: SDSpace, rank: int) -> OccupationState:
        return cls(space, sd_unrank(rank, space.n, space.l))

    def successor(self) -> OccupationState | None:
        nxt = next_sd_state(self.indices, self.space.n, self.space.l)
        return None if nxt is None else OccupationState(self.space, nxt)

    @cached_property
    def rank(self) -> int:
        return sd_rank(self.indices, self.space.l)

    @property
    def index(self) -> int:
        return self.rank

    def to_bitstring(self) -> int:
        """Fock-space integer with bit ``q`` set for every occupied orbital ``q``."""
        bits = 0
        for q in self.indices:
            bits |= 1 << q
        return bits

    def unoccupied(self) -> tuple[int, ...]:
        occupied = set(self.indices)
        return tuple(p for p in range(self.space.l) if p not in occupied)

    def excitation(self, other: OccupationState) -> tuple[tuple[int, ...], tuple[int, ...]]:
        """
        Orbitals that differ between two determinants.

        Returns
        -------
        (particles, holes)
            Orbitals occupied in ``self`` but not in ``other``, and orbitals
            occupied in ``other`` but not in ``self``, both sorted.
        """
        mine, theirs = set(self.indices), set(other.indices)
        return tuple(sorted(mine - theirs)), tuple(sorted(theirs - mine))

    def one_body_neighbors(self) -> Iterator[tuple[int, OccupationState]]:
        """
        Yield ``(sign, state)`` for every single excitation ``a†_p a_q |D>``.

        ``q`` runs over occupied and ``p`` over empty orbitals, both
        ascending; ``sign`` is the reordering phase from ``excitation_sign``.
        """
        empty = self.unoccupied()
        for q in self.indices:
            for p in empty:
                sign = excitation_sign(self.indices, p, q)
                new = tuple(sorted(p if i == q else i for i in self.indices))
                yield sign, OccupationState(self.space, new)

    def two_body_neighbors(self) -> Iterator[tuple[int, OccupationState]]:
        """
        Yield ``(sign, state)`` for every double excitation.

        For occupied ``m < n`` and empty ``p < q`` the sign is defined by
        ``a†_p a†_q a_n a_m |D> = sign |D'>``.
        """
        empty = self.unoccupied()
        for m, n in combinations(self.indices, 2):
            for p, q in combinations(empty, 2):
                occ = list(self.indices)
                sign = 1
                for site in (m, n):
                    sign *= _ladder_phase(occ, site)
                    occ.remove(site)
                for site in (q, p):
                    sign *= _ladder_phase(occ, site)
                    occ.append(site)
                yield sign, OccupationState(self.space, tuple(sorted(occ)))
