"""
Fock-space reference operators and molecular integrals.

Main Entry Points
-----------------
integrals_from_pyscf : Spin-orbital integrals from a PySCF RHF calculation
    Returns ``(h1, g2, enuc)`` ready for ``sd_ci.evaluator.eval_sd_hamiltonian``.

fock_operator : Sparse operator on the full ``2^N`` Fock space
    Built from ladder matrices; a reference for the matrix-free evaluators.

sector_matrix : Restrict a Fock-space operator to ``n`` particles
    Rows and columns follow determinant rank order.

Examples
--------
>>> from pyscf import gto, scf
>>> from sd_ci.hamiltonian import integrals_from_pyscf
>>> mol = gto.M(atom='H 0 0 0; H 0 0 1', basis='sto-3g')
>>> rhf = scf.RHF(mol).run()
>>> h1, g2, enuc = integrals_from_pyscf(mol, rhf)
"""

from .fermion_hamiltonian import fock_operator, ladder_operators, sector_indices, sector_matrix
from .fermion_ops import annihilate, create, double_excitation_phase, excitation_phase
from .pyscf_glue import integrals_from_pyscf, spatial_integrals_from_pyscf
from .spin_blocks import spin_expand_1e, spin_expand_2e_phys, spin_orbital_index

__all__ = [
    "annihilate",
    "create",
    "excitation_phase",
    "double_excitation_phase",
    "fock_operator",
    "ladder_operators",
    "sector_indices",
    "sector_matrix",
    "integrals_from_pyscf",
    "spatial_integrals_from_pyscf",
    "spin_expand_1e",
    "spin_expand_2e_phys",
    "spin_orbital_index",
]
