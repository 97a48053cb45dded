"""
data module

Problem instance model, text format reader/writer and random instance generator.
"""

from .problem import (
    ProblemData,
    parse_problem,
    read_problem,
    format_problem,
    write_problem,
    generate_problem
)

__all__ = [
    'ProblemData',
    'parse_problem',
    'read_problem',
    'format_problem',
    'write_problem',
    'generate_problem'
]
