"""
mindnf: exact two-level minimization of single-output boolean functions.

Enumerates all prime implicants of a truth table with don't cares and
finds every minimum-size sum of products covering its minterms.
"""

from mindnf.config import DEFAULT_LIMITS, Limits
from mindnf.cover import MinimalCoverResult, solve_minimal_cover
from mindnf.cube import Cube, covers, weight
from mindnf.errors import (
    InvariantViolationError,
    LimitExceededError,
    MindnfError,
    TruthTableFormatError,
)
from mindnf.implicants import derive_prime_implicants, iter_cubes
from mindnf.main import Minimization, minimize
from mindnf.truth_table import TruthTable, load_truth_table, parse_truth_table

__version__ = "0.1.0"

__all__ = [
    'Cube',
    'covers',
    'weight',
    'Limits',
    'DEFAULT_LIMITS',
    'TruthTable',
    'load_truth_table',
    'parse_truth_table',
    'iter_cubes',
    'derive_prime_implicants',
    'MinimalCoverResult',
    'solve_minimal_cover',
    'Minimization',
    'minimize',
    'MindnfError',
    'LimitExceededError',
    'InvariantViolationError',
    'TruthTableFormatError',
]
