"""
optimization module

This module builds and solves the facility location LP with truck limits.
"""

from .adapter import (
    PulpAdapter,
    Relation,
    Sense,
    SolveState,
    SolveStatus,
    SolverAdapter
)
from .builder import BuiltModel, ModelBuilder, VariableIndex, build_model
from .core import (
    Solution,
    rounded_objective,
    solve_problem,
    _extract_assignments,
    _validate_solution,
    _calculate_solution_statistics
)

__all__ = [
    'PulpAdapter',
    'Relation',
    'Sense',
    'SolveState',
    'SolveStatus',
    'SolverAdapter',
    'BuiltModel',
    'ModelBuilder',
    'VariableIndex',
    'build_model',
    'Solution',
    'rounded_objective',
    'solve_problem',
    '_extract_assignments',
    '_validate_solution',
    '_calculate_solution_statistics'
]
