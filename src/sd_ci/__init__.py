"""
Combinatorial core of a determinant-based configuration interaction engine.

Basis states (``sd_ci.index_sets``) enumerate their one- and two-body
neighbours; the evaluators (``sd_ci.evaluator``) fold operator matrix
elements into coefficient vectors without building the basis or the matrix.
"""

from .errors import ConfigurationError, IndexOutOfRange
from .evaluator import (
    apply_operator,
    eval_dense_one_body_operator,
    eval_sd_hamiltonian,
    eval_sd_one_body_operator,
    eval_sd_two_body_operator,
)
from .index_sets import IndexSet, MultiIndexState, OccupationState, SDSpace, Shape

__all__ = [
    "ConfigurationError",
    "IndexOutOfRange",
    "IndexSet",
    "Shape",
    "MultiIndexState",
    "SDSpace",
    "OccupationState",
    "apply_operator",
    "eval_sd_one_body_operator",
    "eval_sd_two_body_operator",
    "eval_sd_hamiltonian",
    "eval_dense_one_body_operator",
]
