import itertools
from math import comb

import pytest

from sd_ci.errors import ConfigurationError, IndexOutOfRange
from sd_ci.hamiltonian.fermion_ops import double_excitation_phase, excitation_phase
from sd_ci.index_sets import (
    IndexSet,
    OccupationState,
    SDSpace,
    excitation_sign,
    init_sd_state,
    next_sd_state,
    sd_rank,
    sd_unrank,
)


def test_init_sd_state():
    assert init_sd_state(0, 4, 11) == (0, 1, 2, 3)
    assert init_sd_state(2, 3, 10) == (2, 3, 4)


@pytest.mark.parametrize("start, n, l", [(0, 3, 3), (8, 2, 10), (0, 0, 5), (-1, 2, 5)])
def test_init_sd_state_rejects_bad_config(start, n, l):
    with pytest.raises(ConfigurationError):
        init_sd_state(start, n, l)


def test_next_sd_state():
    n, l = 3, 10
    state = init_sd_state(0, n, l)
    seen = []
    for p in range(l):
        for q in range(p + 1, l):
            for r in range(q + 1, l):
                assert state == (p, q, r)
                seen.append(state)
                state = next_sd_state(state, n, l)

    # The last state has no successor
    assert state is None
    assert len(seen) == len(set(seen)) == comb(l, n)
    assert seen[0] == (0, 1, 2)
    assert seen[-1] == (7, 8, 9)


@pytest.mark.parametrize("n, l", [(1, 4), (2, 5), (3, 7), (4, 9)])
def test_successor_matches_combinations(n, l):
    state = init_sd_state(0, n, l)
    for expected in itertools.combinations(range(l), n):
        assert state == expected
        assert all(a < b for a, b in zip(state, state[1:]))
        state = next_sd_state(state, n, l)
    assert state is None


def test_next_sd_state_rejects_zero_particles():
    with pytest.raises(ConfigurationError):
        next_sd_state((), 0, 4)


@pytest.mark.parametrize("state", [(0, 1), (0, 1, 2, 3)])
def test_next_sd_state_rejects_wrong_length(state):
    with pytest.raises(ConfigurationError):
        next_sd_state(state, 3, 6)


def test_rank_unrank_bijection():
    n, l = 3, 10
    state = init_sd_state(0, n, l)
    k = 0
    while state is not None:
        assert sd_rank(state, l) == k
        assert sd_unrank(k, n, l) == state
        state = next_sd_state(state, n, l)
        k += 1
    assert k == comb(l, n)
    assert all(sd_rank(sd_unrank(k, n, l), l) == k for k in range(comb(l, n)))


def test_unrank_out_of_range():
    with pytest.raises(IndexOutOfRange):
        sd_unrank(comb(6, 2), 2, 6)
    with pytest.raises(IndexOutOfRange):
        sd_unrank(-1, 2, 6)


def test_sd_space():
    space = SDSpace(3, 10)
    assert space.dim == 120
    states = list(space.states())
    assert [s.rank for s in states] == list(range(120))
    assert states[0].indices == (0, 1, 2)
    assert states[-1].indices == (7, 8, 9)


@pytest.mark.parametrize("n, l", [(0, 4), (4, 4), (5, 4)])
def test_sd_space_rejects_bad_config(n, l):
    with pytest.raises(ConfigurationError):
        SDSpace(n, l)


def test_states_partition():
    space = SDSpace(2, 6)
    full = list(space.states())
    parts = list(space.states(0, 4)) + list(space.states(4, 11)) + list(space.states(11))
    assert parts == full
    assert list(space.states(5, 5)) == []


def test_occupation_state_validation():
    space = SDSpace(3, 6)
    with pytest.raises(IndexOutOfRange):
        OccupationState(space, (0, 1))
    with pytest.raises(IndexOutOfRange):
        OccupationState(space, (0, 2, 6))
    with pytest.raises(IndexOutOfRange):
        OccupationState(space, (2, 1, 3))
    with pytest.raises(IndexOutOfRange):
        OccupationState(space, (1, 1, 3))


def test_occupation_state_walk():
    space = SDSpace(2, 4)
    state = OccupationState.first(space)
    walked = []
    while state is not None:
        walked.append(state)
        assert OccupationState.from_rank(space, state.rank) == state
        state = state.successor()
    assert [s.indices for s in walked] == list(itertools.combinations(range(4), 2))


def test_to_bitstring():
    space = SDSpace(3, 6)
    assert OccupationState(space, (0, 2, 5)).to_bitstring() == 0b100101


def test_excitation_sign_counts_between():
    # a†_4 a_0 passes orbitals 1 and 2
    assert excitation_sign((0, 1, 2), 4, 0) == 1
    # a†_3 a_1 passes orbital 2
    assert excitation_sign((0, 1, 2), 3, 1) == -1
    # a†_0 a_2 on (1, 2, 5) passes orbital 1
    assert excitation_sign((1, 2, 5), 0, 2) == -1


@pytest.mark.parametrize("n, l", [(1, 3), (2, 5), (3, 6), (4, 7)])
def test_one_body_neighbors(n, l):
    space = SDSpace(n, l)
    for state in space.states():
        pairs = list(state.one_body_neighbors())
        assert len(pairs) == n * (l - n)
        assert len({nb for _, nb in pairs}) == len(pairs)
        for sign, nb in pairs:
            (p,), (q,) = nb.excitation(state)
            phase, bits = excitation_phase(state.to_bitstring(), p, q)
            assert bits == nb.to_bitstring()
            assert sign == phase


@pytest.mark.parametrize("n, l", [(2, 4), (2, 5), (3, 6), (4, 8)])
def test_two_body_neighbors(n, l):
    space = SDSpace(n, l)
    for state in space.states():
        pairs = list(state.two_body_neighbors())
        assert len(pairs) == comb(n, 2) * comb(l - n, 2)
        assert len({nb for _, nb in pairs}) == len(pairs)
        for sign, nb in pairs:
            (p, q), (m, r) = nb.excitation(state)
            phase, bits = double_excitation_phase(state.to_bitstring(), p, q, m, r)
            assert bits == nb.to_bitstring()
            assert sign == phase


def test_occupation_signs_are_not_all_positive():
    state = OccupationState(SDSpace(3, 6), (0, 1, 2))
    signs = {sign for sign, _ in state.one_body_neighbors()}
    assert signs == {1, -1}


def test_occupation_state_is_index_set():
    state = OccupationState.first(SDSpace(2, 4))
    assert isinstance(state, IndexSet)
    assert state.index == 0
