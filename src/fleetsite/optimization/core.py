"""
Facility location optimizer.
Builds the LP for a problem instance, solves it through a SolverAdapter and
extracts, checks and summarizes the solution.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from fleetsite.config.parameters import Parameters
from fleetsite.data.problem import ProblemData
from fleetsite.optimization.adapter import PulpAdapter, SolveStatus, SolverAdapter
from fleetsite.optimization.builder import BuiltModel, ModelBuilder
from fleetsite.utils.solver import pick_solver

logger = logging.getLogger(__name__)

ASSIGNMENT_COLUMNS = ['Facility_ID', 'Vehicle_ID', 'Customer_ID', 'Fraction']


def rounded_objective(value: float) -> int:
    """Round an objective upwards; reported costs are never understated."""
    return math.ceil(value)


@dataclass
class Solution:
    """Outcome of one solve. Values other than status are only set when optimal."""
    status: SolveStatus
    solver_name: str
    solver_runtime_sec: float = 0.0
    objective_value: Optional[float] = None
    assignments: pd.DataFrame = field(default_factory=lambda: pd.DataFrame(columns=ASSIGNMENT_COLUMNS))
    facility_open: Optional[np.ndarray] = None
    vehicle_used: Optional[np.ndarray] = None
    statistics: Dict[str, float] = field(default_factory=dict)
    violations: List[str] = field(default_factory=list)

    @property
    def is_optimal(self) -> bool:
        return self.status is SolveStatus.OPTIMAL

    @property
    def rounded_objective(self) -> Optional[int]:
        if self.objective_value is None:
            return None
        return rounded_objective(self.objective_value)


def solve_problem(
    problem: ProblemData,
    parameters: Optional[Parameters] = None,
    solver=None,
    adapter: Optional[SolverAdapter] = None
) -> Solution:
    """
    Solve the facility location LP for a problem instance.

    Args:
        problem: Parsed problem instance
        parameters: Run parameters; defaults to ``Parameters()``
        solver: Optional PuLP solver to use instead of pick_solver
        adapter: Optional pre-built SolverAdapter (takes precedence over solver)

    Returns:
        Solution with status and, if optimal, extracted values and statistics
    """
    parameters = parameters or Parameters()
    if adapter is None:
        solver = solver or pick_solver(parameters.solver, parameters.verbose)
        adapter = PulpAdapter(solver=solver)
    logger.info(f"Using solver: {adapter.name}")

    model = ModelBuilder(problem, adapter).build()
    logger.info(
        f"Model has {model.index.num_assign + model.index.num_vehicle_slots + model.index.num_facilities} "
        f"variables and {model.num_constraints} constraints"
    )

    status = adapter.solve()
    solution = Solution(
        status=status,
        solver_name=adapter.name,
        solver_runtime_sec=adapter.solve_time,
    )

    if status is not SolveStatus.OPTIMAL:
        logger.warning(f"Optimization status: {status.value}")
        return solution

    solution.objective_value = adapter.objective_value()
    assign, solution.facility_open, solution.vehicle_used = _extract_values(adapter, model)
    solution.assignments = _extract_assignments(assign, problem, parameters.tolerance)
    solution.violations = _validate_solution(
        assign, solution.facility_open, solution.vehicle_used, problem, parameters.tolerance
    )
    solution.statistics = _calculate_solution_statistics(
        assign, solution.facility_open, solution.vehicle_used, problem, parameters.tolerance
    )
    return solution


def _extract_values(adapter: SolverAdapter, model: BuiltModel):
    """Read variable values into numpy arrays shaped (F, V, C), (F,) and (F, V)."""
    idx = model.index
    assign = np.array(adapter.variable_values(model.assign), dtype=float).reshape(
        idx.num_facilities, idx.num_vehicles, idx.num_customers
    )
    facility_open = np.array(adapter.variable_values(model.facility_open), dtype=float)
    vehicle_used = np.array(adapter.variable_values(model.facility_vehicle_used), dtype=float).reshape(
        idx.num_facilities, idx.num_vehicles
    )
    return assign, facility_open, vehicle_used


def _extract_assignments(assign: np.ndarray, problem: ProblemData, tolerance: float) -> pd.DataFrame:
    """List the non-zero assignment fractions, one row per (facility, vehicle, customer)."""
    f_ids, v_ids, c_ids = np.nonzero(assign > tolerance)
    return pd.DataFrame({
        'Facility_ID': f_ids,
        'Vehicle_ID': v_ids,
        'Customer_ID': c_ids,
        'Fraction': assign[f_ids, v_ids, c_ids],
    }, columns=ASSIGNMENT_COLUMNS)


def _validate_solution(
    assign: np.ndarray,
    facility_open: np.ndarray,
    vehicle_used: np.ndarray,
    problem: ProblemData,
    tolerance: float
) -> List[str]:
    """
    Re-check every constraint family on the solved values.
    Returns a description per violated constraint; an empty list means the
    solution is consistent within tolerance.
    """
    violations = []

    coverage = assign.sum(axis=(0, 1))
    for c in np.flatnonzero(coverage < 1.0 - tolerance):
        violations.append(f"Coverage_{c}: {coverage[c]:.6f} < 1")

    load = np.einsum('fvc,c->f', assign, problem.demand)
    for f in np.flatnonzero(load > problem.capacity + tolerance):
        violations.append(f"Capacity_{f}: {load[f]:.6f} > {problem.capacity[f]:.6f}")

    driven = np.einsum('fvc,cf->v', assign, problem.distance)
    for v in np.flatnonzero(driven > problem.truck_dist_limit + tolerance):
        violations.append(f"Distance_{v}: {driven[v]:.6f} > {problem.truck_dist_limit:.6f}")

    open_gap = assign - facility_open[:, None, None]
    for f, v, c in zip(*np.nonzero(open_gap > tolerance)):
        violations.append(f"Open_Link_{f}_{v}_{c}: assignment exceeds facility open level")

    used_gap = assign - vehicle_used[:, :, None]
    for f, v, c in zip(*np.nonzero(used_gap > tolerance)):
        violations.append(f"Vehicle_Link_{f}_{v}_{c}: assignment exceeds vehicle usage level")

    for violation in violations:
        logger.warning(f"Constraint violated: {violation}")
    return violations


def _calculate_solution_statistics(
    assign: np.ndarray,
    facility_open: np.ndarray,
    vehicle_used: np.ndarray,
    problem: ProblemData,
    tolerance: float
) -> Dict[str, float]:
    """Split the objective into its three cost terms and count what is in use."""
    facility_cost = float(facility_open @ problem.opening_cost)
    allocation_cost = float(np.einsum('fvc,cf->', assign, problem.alloc_cost))
    vehicle_cost = float(problem.truck_usage_cost * vehicle_used.sum())

    return {
        'total_facility_cost': facility_cost,
        'total_allocation_cost': allocation_cost,
        'total_vehicle_cost': vehicle_cost,
        'total_cost': facility_cost + allocation_cost + vehicle_cost,
        'facilities_open': int(np.count_nonzero(facility_open > tolerance)),
        'vehicles_used': int(np.count_nonzero(vehicle_used > tolerance)),
        'total_demand_served': float(np.einsum('fvc,c->', assign, problem.demand)),
    }
