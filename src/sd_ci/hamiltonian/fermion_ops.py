"""
Fermionic ladder operators on Fock-space bitstrings.

A Fock state is an integer whose bit ``i`` is the occupation of orbital
``i``. Phases follow the ordering ``a†_{q_1} ... a†_{q_n} |0>`` with
``q_1 < ... < q_n``, the same convention as ``OccupationState``, so a
determinant and its bitstring carry no relative sign.

Functions
---------
annihilate(state, q)
    Apply ``a_q``.
create(state, p)
    Apply ``a†_p``.
excitation_phase(state, p, q)
    Phase of ``a†_p a_q``.
double_excitation_phase(state, p, q, r, s)
    Phase of ``a†_p a†_q a_s a_r``.
"""


def _is_occupied(state: int, i: int) -> bool:
    return (state >> i) & 1


def _phase_for(site: int, state: int) -> int:
    """Return (-1)^(# of occupied modes with index < site)."""
    mask = (1 << site) - 1
    return -1 if ((state & mask).bit_count() % 2) else 1


def annihilate(state: int, q: int):
    """
    Apply the fermionic annihilation operator ``a_q`` to ``|state>``.

    Returns
    -------
    (phase, new_state) or ``None``
        ``None`` if mode ``q`` is empty.
    """
    if not _is_occupied(state, q):
        return None
    return _phase_for(q, state), state & ~(1 << q)


def create(state: int, p: int):
    """
    Apply the fermionic creation operator ``a†_p`` to ``|state>``.

    Returns
    -------
    (phase, new_state) or ``None``
        ``None`` if mode ``p`` is already occupied.
    """
    if _is_occupied(state, p):
        return None
    return _phase_for(p, state), state | (1 << p)


def apply_string(state: int, ops):
    """
    Apply a product of ladder operators, rightmost first.

    Parameters
    ----------
    state : int
        Fock-space bitstring.
    ops : sequence of (str, int)
        ``("+", p)`` for ``a†_p`` and ``("-", q)`` for ``a_q``, written in
        operator order (left to right).

    Returns
    -------
    (phase, new_state) or ``None``
    """
    phase = 1
    for kind, site in reversed(ops):
        res = create(state, site) if kind == "+" else annihilate(state, site)
        if res is None:
            return None
        ph, state = res
        phase *= ph
    return phase, state


def excitation_phase(state: int, p: int, q: int):
    """Phase and result of ``a†_p a_q |state>``, or ``None`` if it vanishes."""
    return apply_string(state, [("+", p), ("-", q)])


def double_excitation_phase(state: int, p: int, q: int, r: int, s: int):
    """Phase and result of ``a†_p a†_q a_s a_r |state>``, or ``None`` if it vanishes."""
    return apply_string(state, [("+", p), ("+", q), ("-", s), ("-", r)])
