"""
Spin-orbital expansion of spatial integrals.

BLOCK order puts all alpha spin orbitals first, ``[a0..a(n-1), b0..b(n-1)]``;
INTERLEAVED order alternates them, ``[a0, b0, a1, b1, ...]``.
"""
import numpy as np

ORDERS = ("block", "interleaved")


def spin_orbital_index(i: int, spin: int, n: int, order: str = "block") -> int:
    """Spin-orbital index of spatial orbital ``i`` with ``spin`` 0 (alpha) or 1 (beta)."""
    if order == "block":
        return i + spin * n
    if order == "interleaved":
        return 2 * i + spin
    raise ValueError(f"Unknown spin-orbital order {order!r}, expected one of {ORDERS}")


def _spin_slices(n: int, order: str):
    if order == "block":
        return slice(0, n), slice(n, 2 * n)
    if order == "interleaved":
        return slice(0, 2 * n, 2), slice(1, 2 * n, 2)
    raise ValueError(f"Unknown spin-orbital order {order!r}, expected one of {ORDERS}")


def spin_expand_1e(h1_spatial: np.ndarray, order: str = "block") -> np.ndarray:
    """
    Expand spatial 1e integrals (n,n) into spin-orbital (2n,2n).

    Only same-spin blocks are non-zero.
    """
    n = h1_spatial.shape[0]
    h = np.zeros((2*n, 2*n), dtype=h1_spatial.dtype)
    for s in _spin_slices(n, order):
        h[s, s] = h1_spatial
    return h


def spin_expand_2e_phys(g_phys: np.ndarray, order: str = "block") -> np.ndarray:
    """
    Expand spatial 2e integrals in physicist order into spin orbitals.

    ``G[P,Q,R,S]`` is non-zero only when spin(P)==spin(R) and
    spin(Q)==spin(S); shape (2n,2n,2n,2n).
    """
    n = g_phys.shape[0]
    G = np.zeros((2*n, 2*n, 2*n, 2*n), dtype=g_phys.dtype)
    for s1 in _spin_slices(n, order):
        for s2 in _spin_slices(n, order):
            G[s1, s2, s1, s2] = g_phys
    return G
