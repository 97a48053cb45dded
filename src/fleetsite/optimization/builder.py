"""
Linear program construction for the facility-location model with trucks.

Decision variables, all continuous in [0, 1]:

    assign[f][v][c]              share of customer c served by vehicle slot v of facility f
    facility_open[f]             facility f is open
    facility_vehicle_used[f][v]  vehicle slot v of facility f is used

The binary decisions are relaxed on purpose; the model is an LP.

Constraints:

    Capacity_f      sum_{v,c} demand[c] * assign[f][v][c] <= capacity[f]
    Coverage_c      sum_{f,v} assign[f][v][c] >= 1
    Distance_v      sum_{f,c} distance[c][f] * assign[f][v][c] <= truck_dist_limit
    Open_Link       facility_open[f] >= assign[f][v][c]
    Vehicle_Link    facility_vehicle_used[f][v] >= assign[f][v][c]

The distance family indexes vehicle slots across all facilities at once:
slot v of every facility shares one distance budget.

Objective (minimize):

    sum_f opening_cost[f] * facility_open[f]
    + sum_{f,v,c} alloc_cost[c][f] * assign[f][v][c]
    + truck_usage_cost * sum_{f,v} facility_vehicle_used[f][v]
"""

import logging
from dataclasses import dataclass
from typing import List

from fleetsite.data.problem import ProblemData
from fleetsite.optimization.adapter import Relation, Sense, SolverAdapter, VariableHandle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VariableIndex:
    """Linear positions of the (f, v, c) and (f, v) variables in flat lists."""
    num_facilities: int
    num_vehicles: int
    num_customers: int

    @property
    def num_assign(self) -> int:
        return self.num_facilities * self.num_vehicles * self.num_customers

    @property
    def num_vehicle_slots(self) -> int:
        return self.num_facilities * self.num_vehicles

    def assign_index(self, f: int, v: int, c: int) -> int:
        return (f * self.num_vehicles + v) * self.num_customers + c

    def vehicle_index(self, f: int, v: int) -> int:
        return f * self.num_vehicles + v

    def unravel_assign(self, index: int):
        """Inverse of assign_index: returns (f, v, c)."""
        fv, c = divmod(index, self.num_customers)
        f, v = divmod(fv, self.num_vehicles)
        return f, v, c


@dataclass
class BuiltModel:
    """Variables registered with an adapter, in flat index order."""
    index: VariableIndex
    assign: List[VariableHandle]
    facility_open: List[VariableHandle]
    facility_vehicle_used: List[VariableHandle]
    num_constraints: int = 0


class ModelBuilder:
    """Populate a SolverAdapter with the variables, constraints and objective of a ProblemData."""

    def __init__(self, problem: ProblemData, adapter: SolverAdapter):
        self.problem = problem
        self.adapter = adapter
        self.index = VariableIndex(
            num_facilities=problem.num_facilities,
            num_vehicles=problem.num_vehicles,
            num_customers=problem.num_customers,
        )
        self._num_constraints = 0
        # Plain Python floats; pulp expressions do not mix well with numpy scalars
        self._demand = problem.demand.tolist()
        self._capacity = problem.capacity.tolist()
        self._opening_cost = problem.opening_cost.tolist()
        self._alloc_cost = problem.alloc_cost.tolist()
        self._distance = problem.distance.tolist()

    def build(self) -> BuiltModel:
        model = self._create_variables()
        self._add_capacity_constraints(model)
        self._add_coverage_constraints(model)
        self._add_distance_constraints(model)
        self._add_linking_constraints(model)
        self._set_objective(model)
        model.num_constraints = self._num_constraints

        logger.debug(
            f"Built model: {len(model.assign) + len(model.facility_open) + len(model.facility_vehicle_used)} "
            f"variables, {model.num_constraints} constraints"
        )
        return model

    def _add(self, terms, relation: Relation, rhs: float, name: str) -> None:
        self.adapter.add_linear_constraint(terms, relation, rhs, name=name)
        self._num_constraints += 1

    def _create_variables(self) -> BuiltModel:
        idx = self.index
        F, V, C = idx.num_facilities, idx.num_vehicles, idx.num_customers
        new_variable = self.adapter.new_variable

        assign: List[VariableHandle] = [None] * idx.num_assign
        facility_vehicle_used: List[VariableHandle] = [None] * idx.num_vehicle_slots
        facility_open: List[VariableHandle] = [None] * F

        for f in range(F):
            for v in range(V):
                base = idx.assign_index(f, v, 0)
                for c in range(C):
                    assign[base + c] = new_variable(0, 1, name=f"assign_{f}_{v}_{c}")
                facility_vehicle_used[idx.vehicle_index(f, v)] = new_variable(0, 1, name=f"vehicle_used_{f}_{v}")
            facility_open[f] = new_variable(0, 1, name=f"open_{f}")

        return BuiltModel(
            index=idx,
            assign=assign,
            facility_open=facility_open,
            facility_vehicle_used=facility_vehicle_used,
        )

    def _facility_block(self, model: BuiltModel, f: int) -> List[VariableHandle]:
        """Flat slice of assign[f][v][c] for every (v, c), in index order."""
        start = self.index.assign_index(f, 0, 0)
        return model.assign[start:start + self.index.num_vehicles * self.index.num_customers]

    def _vehicle_row(self, model: BuiltModel, f: int, v: int) -> List[VariableHandle]:
        """Flat slice of assign[f][v][c] for every c."""
        start = self.index.assign_index(f, v, 0)
        return model.assign[start:start + self.index.num_customers]

    def _add_capacity_constraints(self, model: BuiltModel) -> None:
        idx = self.index
        C = idx.num_customers
        for f in range(idx.num_facilities):
            terms = [
                (self._demand[i % C], x)
                for i, x in enumerate(self._facility_block(model, f))
                if self._demand[i % C]
            ]
            self._add(terms, Relation.LE, self._capacity[f], f"Capacity_{f}")

    def _add_coverage_constraints(self, model: BuiltModel) -> None:
        idx = self.index
        for c in range(idx.num_customers):
            terms = [
                (1.0, model.assign[idx.assign_index(f, v, c)])
                for f in range(idx.num_facilities)
                for v in range(idx.num_vehicles)
            ]
            self._add(terms, Relation.GE, 1.0, f"Coverage_{c}")

    def _add_distance_constraints(self, model: BuiltModel) -> None:
        idx = self.index
        limit = self.problem.truck_dist_limit
        for v in range(idx.num_vehicles):
            terms = [
                (self._distance[c][f], x)
                for f in range(idx.num_facilities)
                for c, x in enumerate(self._vehicle_row(model, f, v))
                if self._distance[c][f]
            ]
            self._add(terms, Relation.LE, limit, f"Distance_{v}")

    def _add_linking_constraints(self, model: BuiltModel) -> None:
        idx = self.index
        for f in range(idx.num_facilities):
            is_open = model.facility_open[f]
            for v in range(idx.num_vehicles):
                used = model.facility_vehicle_used[idx.vehicle_index(f, v)]
                for c, x in enumerate(self._vehicle_row(model, f, v)):
                    self._add([(1.0, is_open), (-1.0, x)], Relation.GE, 0.0, f"Open_Link_{f}_{v}_{c}")
                    self._add([(1.0, used), (-1.0, x)], Relation.GE, 0.0, f"Vehicle_Link_{f}_{v}_{c}")

    def _set_objective(self, model: BuiltModel) -> None:
        idx = self.index
        C = idx.num_customers
        terms = [
            (self._opening_cost[f], model.facility_open[f])
            for f in range(idx.num_facilities)
            if self._opening_cost[f]
        ]
        terms += [
            (self._alloc_cost[i % C][f], x)
            for f in range(idx.num_facilities)
            for i, x in enumerate(self._facility_block(model, f))
            if self._alloc_cost[i % C][f]
        ]

        usage_cost = self.problem.truck_usage_cost
        if usage_cost:
            terms.extend((usage_cost, used) for used in model.facility_vehicle_used)

        self.adapter.set_objective(terms, Sense.MINIMIZE)


def build_model(problem: ProblemData, adapter: SolverAdapter) -> BuiltModel:
    """Convenience wrapper around ModelBuilder(problem, adapter).build()."""
    return ModelBuilder(problem, adapter).build()
