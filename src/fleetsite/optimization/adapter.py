"""
Solver adapter layer.

The model builder only talks to ``SolverAdapter``; the concrete
``PulpAdapter`` hands the model to an external LP engine through PuLP. Engine
failures are caught here and reported as ``SolveStatus.ERROR`` so no
PuLP-specific exception reaches the builder or the reporter.
"""

import logging
import time
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence, Tuple

import pulp

from fleetsite.exceptions import SolverError
from fleetsite.utils.solver import pick_solver

logger = logging.getLogger(__name__)

VariableHandle = Any
Term = Tuple[float, VariableHandle]


class Relation(Enum):
    LE = '<='
    GE = '>='
    EQ = '=='


class Sense(Enum):
    MINIMIZE = 'minimize'
    MAXIMIZE = 'maximize'


class SolveStatus(Enum):
    OPTIMAL = 'Optimal'
    INFEASIBLE = 'Infeasible'
    ERROR = 'Error'


class SolveState(Enum):
    """Lifecycle of an adapter: BUILT -> SOLVING -> terminal status."""
    BUILT = 'Built'
    SOLVING = 'Solving'
    OPTIMAL = 'Optimal'
    INFEASIBLE = 'Infeasible'
    ERROR = 'Error'


_TERMINAL_STATES = {
    SolveStatus.OPTIMAL: SolveState.OPTIMAL,
    SolveStatus.INFEASIBLE: SolveState.INFEASIBLE,
    SolveStatus.ERROR: SolveState.ERROR,
}


class SolverAdapter(ABC):
    """
    Engine-independent interface for building and solving a linear program.

    An adapter holds one model for one solve. Variables and constraints may
    only be added while the adapter is in the BUILT state; ``solve`` may be
    called once, and values can only be read after an OPTIMAL solve.
    """

    def __init__(self):
        self.state = SolveState.BUILT
        self.solve_time = 0.0

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def new_variable(self, lower_bound: float, upper_bound: float, name: Optional[str] = None) -> VariableHandle:
        """Create a continuous variable with the given bounds."""

    @abstractmethod
    def add_linear_constraint(
        self,
        terms: Sequence[Term],
        relation: Relation,
        rhs: float,
        name: Optional[str] = None
    ) -> None:
        """Register ``sum(coef * var) <relation> rhs``."""

    @abstractmethod
    def set_objective(self, terms: Sequence[Term], sense: Sense = Sense.MINIMIZE) -> None:
        """Register the linear objective."""

    @abstractmethod
    def _solve(self) -> SolveStatus:
        """Run the engine and translate its status."""

    @abstractmethod
    def _objective_value(self) -> float:
        pass

    @abstractmethod
    def _variable_value(self, handle: VariableHandle) -> float:
        pass

    def solve(self) -> SolveStatus:
        """Solve the model once; the resulting state is final."""
        self._require_built('solve')
        self.state = SolveState.SOLVING
        start_time = time.time()
        status = self._solve()
        self.solve_time = time.time() - start_time
        self.state = _TERMINAL_STATES[status]
        logger.debug(f"{self.name} finished in {self.solve_time:.3f}s with status {status.value}")
        return status

    def objective_value(self) -> float:
        self._require_optimal('objective value')
        return self._objective_value()

    def variable_value(self, handle: VariableHandle) -> float:
        self._require_optimal('variable value')
        return self._variable_value(handle)

    def variable_values(self, handles: Iterable[VariableHandle]) -> List[float]:
        self._require_optimal('variable values')
        return [self._variable_value(h) for h in handles]

    def _require_built(self, action: str) -> None:
        if self.state is not SolveState.BUILT:
            raise SolverError(f"Cannot {action}: adapter is already in state {self.state.value}")

    def _require_optimal(self, what: str) -> None:
        if self.state is not SolveState.OPTIMAL:
            raise SolverError(f"No {what} available in state {self.state.value}")


class PulpAdapter(SolverAdapter):
    """SolverAdapter backed by a ``pulp.LpProblem``."""

    def __init__(self, model_name: str = 'FacilityLocation', solver=None, verbose: bool = False):
        super().__init__()
        self.model = pulp.LpProblem(model_name, pulp.LpMinimize)
        self.solver = solver or pick_solver(verbose=verbose)
        self._var_count = 0
        self._con_count = 0

    @property
    def name(self) -> str:
        return self.solver.name

    def new_variable(self, lower_bound, upper_bound, name=None):
        self._require_built('add variables')
        if name is None:
            name = f"v_{self._var_count}"
        self._var_count += 1
        return pulp.LpVariable(name, lowBound=lower_bound, upBound=upper_bound, cat=pulp.LpContinuous)

    def add_linear_constraint(self, terms, relation, rhs, name=None):
        self._require_built('add constraints')
        if name is None:
            name = f"c_{self._con_count}"
        self._con_count += 1

        expr = pulp.lpSum(float(coef) * var for coef, var in terms)
        if relation is Relation.LE:
            constraint = expr <= rhs
        elif relation is Relation.GE:
            constraint = expr >= rhs
        elif relation is Relation.EQ:
            constraint = expr == rhs
        else:
            raise ValueError(f"Unknown relation: {relation}")
        self.model.addConstraint(constraint, name)

    def set_objective(self, terms, sense=Sense.MINIMIZE):
        self._require_built('set the objective')
        self.model.sense = pulp.LpMinimize if sense is Sense.MINIMIZE else pulp.LpMaximize
        self.model.setObjective(pulp.lpSum(float(coef) * var for coef, var in terms))

    def _solve(self) -> SolveStatus:
        try:
            self.model.solve(self.solver)
        except (pulp.PulpError, OSError) as e:
            logger.exception(f"Solver {self.name} failed: {e}")
            return SolveStatus.ERROR

        pulp_status = self.model.status
        if pulp_status == pulp.LpStatusOptimal:
            return SolveStatus.OPTIMAL
        if pulp_status == pulp.LpStatusInfeasible:
            return SolveStatus.INFEASIBLE
        logger.warning(f"Solver {self.name} returned status {pulp.LpStatus[pulp_status]}")
        return SolveStatus.ERROR

    def _objective_value(self) -> float:
        value = pulp.value(self.model.objective)
        return float(value) if value is not None else 0.0

    def _variable_value(self, handle) -> float:
        return float(handle.varValue or 0.0)
