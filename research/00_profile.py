"""
Profile the matrix-free determinant Hamiltonian on an H4 chain.

Run with ``kernprof -l research/00_profile.py`` (or ``LINE_PROFILE=1``) to
get line timings of the evaluators.
"""

import numpy as np
from line_profiler import profile
from pyscf import gto, scf

from sd_ci import energy, evaluator
from sd_ci.hamiltonian import integrals_from_pyscf
from sd_ci.index_sets import OccupationState, SDSpace


@profile
def main():
    mol = h4_chain(bond_length=1.0)
    rhf = scf.RHF(mol).run()
    h1, g2, enuc = integrals_from_pyscf(mol, rhf)

    nmo = rhf.mo_coeff.shape[1]
    nocc = mol.nelectron // 2
    space = SDSpace(mol.nelectron, 2 * nmo)
    hf = OccupationState(space, tuple(range(nocc)) + tuple(range(nmo, nmo + nocc)))
    print(f"Determinants: {space.dim}, HF rank: {hf.rank}")

    c = np.zeros(space.dim, dtype=np.complex128)
    c[hf.rank] = 1.0
    sigma = evaluator.eval_sd_hamiltonian(c, h1, g2, mol.nelectron, enuc)
    hf_energy = np.vdot(c, sigma).real
    assert np.isclose(hf_energy, rhf.e_tot)

    e0, _ = energy.ground_state(h1, g2, mol.nelectron, enuc)
    print(f"RHF energy: {rhf.e_tot:.8f}")
    print(f"CI energy:  {e0:.8f}")
    print(f"FCI energy: {energy.fci_energy(rhf):.8f}")


def h4_chain(bond_length):
    """
    Build a linear chain of 4 hydrogen atoms.

    Parameters
    ----------
    bond_length : float
        Distance between adjacent hydrogen atoms in Angstroms.

    Returns
    -------
    mol : gto.Mole
    """
    geometry = '; '.join([f'H 0 0 {i * bond_length:.8f}' for i in range(4)])
    mol = gto.Mole()
    mol.build(
        atom=geometry,
        unit='Angstrom',
        basis='sto-3g',
        charge=0,
        spin=0,
        verbose=0,
    )
    return mol


if __name__ == "__main__":
    main()
