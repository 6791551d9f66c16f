from math import comb

import numpy as np
import pytest

from sd_ci.hamiltonian.spin_blocks import spin_expand_1e, spin_expand_2e_phys, spin_orbital_index
from sd_ci.hamiltonian.fermion_ops import create, annihilate, apply_string
from sd_ci.hamiltonian.fermion_hamiltonian import fock_operator, sector_indices, sector_matrix
from sd_ci.index_sets import SDSpace


def test_create_annihilate_roundtrip():
    # Start with |0101> over 4 modes => state integer with bits at {0,2}
    state = (1 << 0) | (1 << 2)

    # a_0 removes occupation at 0
    res = annihilate(state, 0); assert res is not None
    ph1, s1 = res
    # then a_0^† brings us back
    res2 = create(s1, 0); assert res2 is not None
    ph2, s2 = res2

    assert s2 == state
    assert ph1 * ph2 == 1

def test_annihilate_on_empty_is_none():
    state = 0  # |0000>
    assert annihilate(state, 1) is None

def test_create_on_filled_is_none():
    state = (1 << 1)  # |0010> -> bit 1 set
    assert create(state, 1) is None

def test_apply_string_order():
    # a†_2 a_0 |011> : a_0 gives +1, a†_2 passes orbital 1 -> -1
    assert apply_string(0b011, [("+", 2), ("-", 0)]) == (-1, 0b110)
    assert apply_string(0b011, [("-", 2)]) is None

def test_spin_expand_1e_blocks():
    h = np.array([[1.0, 0.2],[0.2, 0.5]])
    H = spin_expand_1e(h)
    n = h.shape[0]
    # αα and ββ match h; cross-spin are zero
    assert np.allclose(H[0:n, 0:n], h)
    assert np.allclose(H[n:2*n, n:2*n], h)
    assert np.allclose(H[0:n, n:2*n], 0.0)
    assert np.allclose(H[n:2*n, 0:n], 0.0)

def test_spin_expand_1e_interleaved():
    h = np.array([[1.0, 0.2],[0.2, 0.5]])
    H = spin_expand_1e(h, order="interleaved")
    assert np.allclose(H[0::2, 0::2], h)
    assert np.allclose(H[1::2, 1::2], h)
    assert np.allclose(H[0::2, 1::2], 0.0)
    assert H[spin_orbital_index(1, 1, 2, "interleaved"), spin_orbital_index(0, 1, 2, "interleaved")] == 0.2

def test_spin_expand_2e_phys_conserves_spin_per_electron():
    n = 2
    g = np.arange(1.0, n ** 4 + 1).reshape(n, n, n, n)
    G = spin_expand_2e_phys(g)
    idx = [[spin_orbital_index(i, s, n) for i in range(n)] for s in (0, 1)]

    # electron 1 keeps spin s, electron 2 keeps spin t
    for s in (0, 1):
        for t in (0, 1):
            assert np.allclose(G[np.ix_(idx[s], idx[t], idx[s], idx[t])], g)
    assert np.count_nonzero(G) == 4 * g.size

def test_spin_expand_orders_agree():
    n = 3
    g = np.random.default_rng(0).normal(size=(n, n, n, n))
    block = spin_expand_2e_phys(g)
    inter = spin_expand_2e_phys(g, order="interleaved")
    perm = [spin_orbital_index(i, s, n) for i in range(n) for s in (0, 1)]
    assert np.allclose(block[np.ix_(perm, perm, perm, perm)], inter)

def test_unknown_spin_order():
    with pytest.raises(ValueError):
        spin_expand_1e(np.eye(2), order="alternating")

def test_fermionic_h_one_body_coupling():
    # N=2 spin-orbitals; one-body hop between 0 and 1
    h1 = np.array([[0.0, 1.0],
                   [1.0, 0.0]])
    H = fock_operator(h1).toarray()

    ket_01 = 1 << 1  # occupies mode 1
    ket_10 = 1 << 0  # occupies mode 0
    assert abs(H[ket_10, ket_01]) == 1.0
    assert abs(H[ket_01, ket_10]) == 1.0

def test_sector_indices_follow_rank_order():
    assert list(sector_indices(1, 3)) == [0b001, 0b010, 0b100]
    assert list(sector_indices(2, 4)) == [0b0011, 0b0101, 0b1001, 0b0110, 0b1010, 0b1100]

def test_sector_matrix_shape():
    h1 = np.eye(5)
    H = sector_matrix(fock_operator(h1), 2, 5)
    assert H.shape == (comb(5, 2), comb(5, 2))
    # Number operator is 2 on every two-particle determinant
    assert np.allclose(H.diagonal(), 2.0)


@pytest.mark.slow
def test_h2_sto3g_rhf_energy_matches():
    pytest.importorskip("pyscf")
    from pyscf import gto, scf

    from sd_ci.energy import expectation
    from sd_ci.hamiltonian import integrals_from_pyscf
    from sd_ci.index_sets import OccupationState

    mol = gto.M(atom="H 0 0 0; H 0 0 1.0", basis="sto-3g", verbose=0)
    rhf = scf.RHF(mol).run()
    h1, g2, enuc = integrals_from_pyscf(mol, rhf)

    # BLOCK ordering HF determinant: occupy α0 and β0
    nmo = rhf.mo_coeff.shape[1]
    space = SDSpace(2, 2 * nmo)
    hf = OccupationState(space, (0, nmo))
    c = np.zeros(space.dim, dtype=np.complex128)
    c[hf.rank] = 1.0

    energy = expectation(c, h1, g2, 2, enuc)
    assert np.isclose(energy, rhf.e_tot, atol=1e-6), f"{energy=} vs {rhf.e_tot=}"


@pytest.mark.slow
@pytest.mark.parametrize("geometry", [
    "H 0 0 0; H 0 0 0.74",
    "H 0 0 0; H 0 0 1.0; H 0 0 2.0; H 0 0 3.0",
])
def test_ground_state_matches_pyscf_fci(geometry):
    pytest.importorskip("pyscf")
    from pyscf import gto, scf

    from sd_ci.energy import fci_energy, ground_state
    from sd_ci.hamiltonian import integrals_from_pyscf

    mol = gto.M(atom=geometry, basis="sto-3g", verbose=0)
    mf = scf.RHF(mol)
    mf.conv_tol = 1e-12
    rhf = mf.run()
    h1, g2, enuc = integrals_from_pyscf(mol, rhf)

    e0, psi0 = ground_state(h1, g2, mol.nelectron, enuc)
    assert np.isclose(e0, fci_energy(rhf), atol=1e-6)
    assert np.isclose(np.linalg.norm(psi0), 1.0)


@pytest.mark.slow
def test_ground_state_iterative_solver():
    pytest.importorskip("pyscf")
    from pyscf import gto, scf

    from sd_ci.energy import fci_energy, ground_state
    from sd_ci.hamiltonian import integrals_from_pyscf

    mol = gto.M(atom="H 0 0 0; H 0 0 0.74", basis="6-31g", verbose=0)
    rhf = scf.RHF(mol).run()
    h1, g2, enuc = integrals_from_pyscf(mol, rhf)

    # Force the matrix-free eigsh path
    e0, _ = ground_state(h1, g2, 2, enuc, dense_cutoff=0)
    assert np.isclose(e0, fci_energy(rhf), atol=1e-6)
