import numpy as np
from pyscf import ao2mo

from .spin_blocks import spin_expand_1e, spin_expand_2e_phys


def spatial_integrals_from_pyscf(mol, rhf):
    """
    Return ``(h1, g2)`` spatial MO integrals of an RHF calculation.

    ``g2`` is in physicist order, ``g2[p, q, r, s] = (pr|qs)``.
    """
    C = rhf.mo_coeff
    nmo = C.shape[1]

    h1 = C.T @ rhf.get_hcore() @ C

    # 2e AO->MO, chemist order -> restore -> physicist order (swap middle indices)
    eri_mo_packed = ao2mo.full(mol, C)
    eri_mo_chem = ao2mo.restore(1, eri_mo_packed, nmo)
    g2 = np.transpose(eri_mo_chem, (0, 2, 1, 3))
    return h1, g2


def integrals_from_pyscf(mol, rhf, order="block"):
    """
    Return spin-orbital ``(h1, g2, enuc)`` for the determinant evaluators.

    Spin orbitals are in BLOCK order ``[a0..a(n-1), b0..b(n-1)]`` unless
    ``order="interleaved"``. The closed-shell RHF determinant occupies
    spatial orbitals ``0..nocc-1`` in both spin blocks.
    """
    h1_spatial, g2_spatial = spatial_integrals_from_pyscf(mol, rhf)
    h1 = spin_expand_1e(h1_spatial, order=order)
    g2 = spin_expand_2e_phys(g2_spatial, order=order)
    return h1, g2, mol.energy_nuc()
