"""
Exceptions raised by the basis enumerators and operator evaluators.

Reaching the end of a neighbour or successor sequence is not an error: the
iterators stop and ``next_sd_state`` returns ``None``.
"""


class ConfigurationError(ValueError):
    """Invalid problem configuration, e.g. too few orbitals for ``n`` particles."""


class IndexOutOfRange(IndexError):
    """Indices, compound values or ranks outside the bounds of a shape or space."""
