"""
fleetsite - capacitated facility location with truck distance limits.

The package turns a problem instance into a linear program and hands it to an
external LP engine through PuLP:

1. **Data** - parse, validate, write and generate instances (`fleetsite.data`).
2. **Optimization** - the solver adapter, the model builder and the solve
   pipeline (`fleetsite.optimization`).
3. **Reporting** - the ceiling-rounded objective or a no-solution message
   (`fleetsite.reporting`).

Typical high-level workflow
--------------------------
>>> from fleetsite import read_problem, solve_problem, ResultReporter
>>> problem  = read_problem('instance.txt')
>>> solution = solve_problem(problem)
>>> ResultReporter().report(solution)
"""

from fleetsite.data.problem import ProblemData, read_problem, parse_problem
from fleetsite.optimization.core import Solution, solve_problem
from fleetsite.reporting import ResultReporter

__all__ = [
    'ProblemData',
    'read_problem',
    'parse_problem',
    'Solution',
    'solve_problem',
    'ResultReporter'
]

__version__ = '0.1.0'
