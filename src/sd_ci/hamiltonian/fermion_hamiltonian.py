"""
Fock-space operators assembled from sparse ladder matrices.

These full ``2^N``-dimensional matrices are a reference for the matrix-free
evaluators in ``sd_ci.evaluator``: restricting them to the ``n``-particle
sector with ``sector_matrix`` gives the operator in the determinant basis,
rows and columns ordered by determinant rank.
"""
import numpy as np
from line_profiler import profile
from scipy.sparse import coo_matrix, csr_matrix, identity

from ..index_sets import SDSpace
from .fermion_ops import annihilate

# Integrals at or below this magnitude are dropped
DEFAULT_ZERO_TOL = 1e-16


def ladder_operators(N):
    """Generate annihilation and creation operator matrices for N spin orbitals.

    Parameters
    ----------
    N : int
        Number of spin orbitals.

    Returns
    -------
    tuple of lists
        ([a_p], [a_p†]) of sparse CSR matrices.
    """
    dim = 1 << N
    a_ops = []
    adag_ops = []
    for p in range(N):
        rows, cols, data = [], [], []
        for ket in range(dim):
            res = annihilate(ket, p)
            if res:
                ph, bra = res
                rows.append(bra)
                cols.append(ket)
                data.append(ph)
        A = coo_matrix((data, (rows, cols)), shape=(dim, dim), dtype=np.complex128).tocsr()
        a_ops.append(A)
        adag_ops.append(A.conjugate().transpose().tocsr())
    return a_ops, adag_ops


@profile
def fock_operator(h1, g2=None, enuc=0.0, zero_tol=DEFAULT_ZERO_TOL):
    """Build ``h1 + g2 + enuc`` on the full Fock space.

    Parameters
    ----------
    h1 : ndarray
        One-body coefficients of shape (N, N), term ``h1[p, q] a†_p a_q``.
    g2 : ndarray, optional
        Two-body coefficients of shape (N, N, N, N) in physicist order, term
        ``0.5 * g2[p, q, r, s] a†_p a†_q a_s a_r``.
    enuc : float, optional
        Constant shift.
    zero_tol : float, optional
        Entries with magnitude at or below this are skipped.

    Returns
    -------
    scipy.sparse.csr_matrix
        Operator of shape (2^N, 2^N).
    """
    N = h1.shape[0]
    a, adag = ladder_operators(N)
    dim = 1 << N
    H = csr_matrix((dim, dim), dtype=np.complex128)

    for p, q in np.argwhere(abs(h1) > zero_tol):
        H += h1[p, q] * adag[p] @ a[q]

    if g2 is not None:
        for p, q, r, s in np.argwhere(abs(g2) > zero_tol):
            H += 0.5 * g2[p, q, r, s] * (adag[p] @ adag[q] @ a[s] @ a[r])

    if enuc != 0.0:
        H += enuc * identity(dim, format="csr", dtype=np.complex128)

    return H


def sector_indices(n, l):
    """Fock-space index of every ``n``-particle determinant, in rank order."""
    return np.array([state.to_bitstring() for state in SDSpace(n, l).states()], dtype=np.int64)


def sector_matrix(H, n, l):
    """Restrict a Fock-space operator to the ``n``-particle determinant basis.

    Parameters
    ----------
    H : scipy.sparse matrix
        Operator on the ``2^l`` Fock space.
    n, l : int
        Particle and orbital counts.

    Returns
    -------
    scipy.sparse.csr_matrix
        Matrix of shape (C(l, n), C(l, n)) with rows and columns ordered by
        determinant rank.
    """
    idx = sector_indices(n, l)
    return csr_matrix(H[np.ix_(idx, idx)])
