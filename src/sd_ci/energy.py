import logging

import numpy as np
from pyscf import fci
from scipy.linalg import eigh
from scipy.sparse.linalg import LinearOperator, eigsh

from .evaluator import eval_sd_hamiltonian
from .index_sets import SDSpace

logger = logging.getLogger(__name__)

# Spaces up to this dimension are diagonalised densely
DENSE_CUTOFF = 256


def fci_energy(rhf):
    """
    Calculate the PySCF Full Configuration Interaction (FCI) energy.

    Parameters
    ----------
    rhf : scf.RHF
        Converged RHF calculation object.

    Returns
    -------
    float
        FCI ground state energy in Hartree.
    """
    ci_solver = fci.FCI(rhf)
    energy, _ = ci_solver.kernel()
    return energy


def expectation(c, h1, g2, n, enuc=0.0):
    """
    Compute ``<c|H|c> / <c|c>`` over ``n``-particle determinants.

    Raises
    ------
    ValueError
        If ``c`` has zero norm.
    """
    c = np.asarray(c, dtype=np.complex128)
    norm = np.vdot(c, c)
    if norm == 0:
        raise ValueError("Coefficient vector has zero norm.")
    return (np.vdot(c, eval_sd_hamiltonian(c, h1, g2, n, enuc)) / norm).real


def hamiltonian_operator(h1, g2, n, enuc=0.0):
    """
    Matrix-free ``LinearOperator`` applying ``H`` in the determinant basis.
    """
    dim = SDSpace(n, h1.shape[0]).dim
    return LinearOperator(
        (dim, dim),
        matvec=lambda v: eval_sd_hamiltonian(np.ravel(v), h1, g2, n, enuc),
        dtype=np.complex128,
    )


def ground_state(h1, g2, n, enuc=0.0, dense_cutoff=DENSE_CUTOFF):
    """
    Lowest eigenpair of ``H`` in the ``n``-particle determinant basis.

    Parameters
    ----------
    h1, g2 : ndarray
        Spin-orbital one- and two-body integrals (physicist order).
    n : int
        Number of electrons.
    enuc : float, optional
        Constant shift.
    dense_cutoff : int, optional
        Use a dense solver when the space is at most this large.

    Returns
    -------
    E0 : float
        Ground state energy.
    psi0 : np.ndarray
        Ground state coefficients indexed by determinant rank.

    Notes
    -----
    - Small spaces are built column by column and solved with ``eigh``
    - Larger spaces use ``eigsh`` on the matrix-free operator
    """
    H = hamiltonian_operator(h1, g2, n, enuc)
    dim = H.shape[0]
    logger.info("Ground state search in %d determinants", dim)

    if dim <= dense_cutoff:
        H_dense = H.matmat(np.eye(dim, dtype=np.complex128))
        eigenvalues, eigenvectors = eigh(H_dense)
        return eigenvalues[0], eigenvectors[:, 0]

    E0, psi0 = eigsh(H, k=1, which='SA')
    return E0[0], psi0[:, 0]
