"""
Apply one- and two-body operators to coefficient vectors.

The kernel ``apply_operator`` only relies on the ``IndexSet`` protocol: each
basis state provides its coefficient index and its one-/two-body neighbour
sequences. The ``eval_*`` functions supply the matrix elements for the
occupation-number (Slater determinant) and dense multi-index bases.

Conventions
-----------
One-body:   sum_{pq} h[p, q] a†_p a_q
Two-body:   1/2 sum_{pqrs} g[p, q, r, s] a†_p a†_q a_s a_r   (physicist order)

Coefficient vectors over determinants are indexed by ``sd_rank``; over a
dense basis by the compound index.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

import numpy as np
from line_profiler import profile

from .errors import ConfigurationError
from .index_sets import IndexSet, MultiIndexState, OccupationState, SDSpace, Shape

logger = logging.getLogger(__name__)

# Operator entries at or below this magnitude are skipped
DEFAULT_ZERO_TOL = 1e-16


@profile
def apply_operator(
    c: np.ndarray,
    states: Iterable[IndexSet],
    diagonal: Callable[[IndexSet], complex],
    coupling: Callable[[IndexSet, IndexSet], complex],
    max_order: int = 1,
    out: np.ndarray | None = None,
    zero_tol: float = DEFAULT_ZERO_TOL,
) -> np.ndarray:
    """
    Accumulate ``O c`` over the given ket states.

    For every ket ``state`` the diagonal element ``diagonal(state)`` and, for
    each neighbour pair ``(sign, bra)`` up to ``max_order``, the element
    ``sign * coupling(bra, state)`` are multiplied by ``c[state.index]`` and
    added into ``out``.

    Parameters
    ----------
    c : ndarray
        Input coefficient vector.
    states : iterable of IndexSet
        Ket states to visit. Passing a subset gives a partial result; partial
        results over a partition of the basis sum to the full one.
    diagonal : callable
        ``diagonal(state)`` -> ``<state|O|state>``.
    coupling : callable
        ``coupling(bra, ket)`` -> matrix element without the neighbour sign.
    max_order : {1, 2}
        Include one-body neighbours, or one- and two-body neighbours.
    out : ndarray, optional
        Accumulator; a new complex zero vector is allocated if omitted.
    zero_tol : float, optional
        Off-diagonal elements with magnitude at or below this are skipped.

    Returns
    -------
    ndarray
        ``out`` with the contributions added.
    """
    if max_order not in (1, 2):
        raise ConfigurationError(f"max_order must be 1 or 2, got {max_order}")
    c = np.asarray(c)
    if out is None:
        out = np.zeros(len(c), dtype=np.complex128)

    for state in states:
        i = state.index
        c_i = c[i]
        if c_i == 0:
            continue
        out[i] += diagonal(state) * c_i
        neighbors = [state.one_body_neighbors()]
        if max_order == 2:
            neighbors.append(state.two_body_neighbors())
        for sequence in neighbors:
            for sign, bra in sequence:
                element = coupling(bra, state)
                if abs(element) > zero_tol:
                    out[bra.index] += sign * element * c_i
    return out


def _sd_space(c: np.ndarray, l: int, n: int) -> SDSpace:
    space = SDSpace(n, l)
    if len(c) != space.dim:
        raise ConfigurationError(
            f"Coefficient vector has length {len(c)}, expected C({l},{n}) = {space.dim}"
        )
    return space


def _check_square(op: np.ndarray, ndim: int, name: str):
    if op.ndim != ndim or len(set(op.shape)) != 1:
        raise ConfigurationError(f"{name} must have {ndim} equal axes, got shape {op.shape}")


def _rank_slice(ranks: slice | range | None) -> slice:
    if ranks is None:
        return slice(None)
    if isinstance(ranks, range):
        return slice(ranks.start, ranks.stop, ranks.step)
    return ranks


def _ket_states(space: SDSpace, ranks: slice | range | None):
    if ranks is None:
        return space.states()
    selected = range(space.dim)[_rank_slice(ranks)]
    if selected.step == 1:
        return space.states(selected.start, selected.stop)
    return (OccupationState.from_rank(space, r) for r in selected)


@profile
def eval_sd_one_body_operator(
    c: np.ndarray,
    h: np.ndarray,
    n: int,
    ranks: slice | range | None = None,
    out: np.ndarray | None = None,
) -> np.ndarray:
    """
    Apply ``sum_{pq} h[p, q] a†_p a_q`` to a vector over ``n``-particle determinants.

    Parameters
    ----------
    c : ndarray
        Coefficients of length ``C(l, n)`` indexed by determinant rank.
    h : ndarray
        One-body coefficients of shape ``(l, l)``.
    n : int
        Number of particles.
    ranks : slice or range, optional
        Restrict the ket determinants to these ranks. Partial results over
        disjoint rank selections, contiguous or strided, sum to the full one.
    out : ndarray, optional
        Accumulator for the result.

    Returns
    -------
    ndarray
        New coefficient vector ``c_new``.

    Raises
    ------
    ConfigurationError
        If ``n == 0``, ``n >= l``, ``h`` is not square or ``c`` has the
        wrong length.
    """
    h = np.asarray(h)
    _check_square(h, 2, "h")
    space = _sd_space(c, h.shape[0], n)
    logger.debug("One-body operator on C(%d,%d) = %d determinants", space.l, space.n, space.dim)

    def diagonal(state):
        return sum(h[q, q] for q in state.indices)

    def coupling(bra, ket):
        (p,), (q,) = bra.excitation(ket)
        return h[p, q]

    return apply_operator(c, _ket_states(space, ranks), diagonal, coupling, out=out)


@profile
def eval_sd_two_body_operator(
    c: np.ndarray,
    g: np.ndarray,
    n: int,
    ranks: slice | range | None = None,
    out: np.ndarray | None = None,
) -> np.ndarray:
    """
    Apply ``1/2 sum_{pqrs} g[p, q, r, s] a†_p a†_q a_s a_r`` by Slater-Condon rules.

    No permutational symmetry of ``g`` is assumed; every ordering of the
    creation and annihilation pairs is summed explicitly.

    Parameters
    ----------
    c : ndarray
        Coefficients of length ``C(l, n)`` indexed by determinant rank.
    g : ndarray
        Two-body coefficients of shape ``(l, l, l, l)`` in physicist order.
    n : int
        Number of particles.
    """
    g = np.asarray(g)
    _check_square(g, 4, "g")
    space = _sd_space(c, g.shape[0], n)
    logger.debug("Two-body operator on C(%d,%d) = %d determinants", space.l, space.n, space.dim)

    def diagonal(state):
        occ = state.indices
        return 0.5 * sum(
            g[i, j, i, j] - g[i, j, j, i] for i in occ for j in occ if i != j
        )

    def coupling(bra, ket):
        particles, holes = bra.excitation(ket)
        if len(particles) == 1:
            (p,), (m,) = particles, holes
            return 0.5 * sum(
                g[p, j, m, j] + g[j, p, j, m] - g[p, j, j, m] - g[j, p, m, j]
                for j in ket.indices if j != m
            )
        (p, q), (r, s) = particles, holes
        return 0.5 * (g[p, q, r, s] - g[p, q, s, r] - g[q, p, r, s] + g[q, p, s, r])

    return apply_operator(
        c, _ket_states(space, ranks), diagonal, coupling, max_order=2, out=out
    )


def eval_sd_hamiltonian(
    c: np.ndarray,
    h1: np.ndarray,
    g2: np.ndarray,
    n: int,
    enuc: float = 0.0,
    ranks: slice | range | None = None,
    out: np.ndarray | None = None,
) -> np.ndarray:
    """
    Apply ``H = h1 + g2 + enuc`` to a vector over ``n``-particle determinants.

    Parameters
    ----------
    c : ndarray
        Coefficients indexed by determinant rank.
    h1 : ndarray
        One-body integrals ``(l, l)``.
    g2 : ndarray
        Two-body integrals ``(l, l, l, l)`` in physicist order.
    n : int
        Number of particles.
    enuc : float, optional
        Constant shift, e.g. nuclear repulsion.
    ranks : slice or range, optional
        Restrict the ket determinants to this rank range; the constant shift
        is applied to the same ranks.
    out : ndarray, optional
        Accumulator for the result.
    """
    c_new = eval_sd_one_body_operator(c, h1, n, ranks=ranks, out=out)
    eval_sd_two_body_operator(c, g2, n, ranks=ranks, out=c_new)
    if enuc != 0.0:
        selected = _rank_slice(ranks)
        c_new[selected] += enuc * np.asarray(c)[selected]
    return c_new


@profile
def eval_dense_one_body_operator(
    c: np.ndarray,
    ops: Sequence[np.ndarray],
    shape: Shape,
) -> np.ndarray:
    """
    Apply ``sum_k O_k`` where ``O_k`` acts on coordinate ``k`` of a dense basis.

    Parameters
    ----------
    c : ndarray
        Coefficients of length ``shape.size`` indexed by compound index.
    ops : sequence of ndarray
        One ``(shape[k], shape[k])`` matrix per coordinate.
    shape : Shape
        Dense basis shape.
    """
    if len(ops) != len(shape):
        raise ConfigurationError(f"Expected {len(shape)} operators, got {len(ops)}")
    ops = [np.asarray(op) for op in ops]
    for k, op in enumerate(ops):
        if op.shape != (shape[k], shape[k]):
            raise ConfigurationError(
                f"Operator {k} has shape {op.shape}, expected {(shape[k], shape[k])}"
            )
    if len(c) != shape.size:
        raise ConfigurationError(f"Coefficient vector has length {len(c)}, expected {shape.size}")
    logger.debug("Dense one-body operator on shape %s", shape.dims)

    def diagonal(state):
        return sum(op[x, x] for op, x in zip(ops, state.indices))

    def coupling(bra, ket):
        for k, (x, y) in enumerate(zip(bra.indices, ket.indices)):
            if x != y:
                return ops[k][x, y]

    states = (MultiIndexState.from_compound(i, shape) for i in range(shape.size))
    return apply_operator(c, states, diagonal, coupling)


__all__ = [
    "DEFAULT_ZERO_TOL",
    "apply_operator",
    "eval_sd_one_body_operator",
    "eval_sd_two_body_operator",
    "eval_sd_hamiltonian",
    "eval_dense_one_body_operator",
]
