import logging

import pulp
import pytest

from fleetsite.exceptions import SolverError
from fleetsite.optimization.adapter import PulpAdapter, Relation, SolveState, SolveStatus
from tests.utils.stubs import RaisingSolver, RecordingAdapter, StatusSolver


def _tiny_lp(adapter):
    x = adapter.new_variable(0, 1, name="x")
    y = adapter.new_variable(0, 1, name="y")
    adapter.add_linear_constraint([(1.0, x), (1.0, y)], Relation.GE, 1.0, name="cover")
    adapter.add_linear_constraint([(1.0, x)], Relation.LE, 0.25, name="cap_x")
    adapter.set_objective([(2.0, x), (3.0, y)])
    return x, y


def test_pulp_adapter_optimal(cbc_solver):
    adapter = PulpAdapter(solver=cbc_solver)
    x, y = _tiny_lp(adapter)
    assert adapter.state is SolveState.BUILT
    assert adapter.solve() is SolveStatus.OPTIMAL
    assert adapter.state is SolveState.OPTIMAL
    assert adapter.variable_value(x) == pytest.approx(0.25)
    assert adapter.variable_value(y) == pytest.approx(0.75)
    assert adapter.objective_value() == pytest.approx(2.75)
    assert adapter.solve_time >= 0.0


def test_pulp_adapter_equality_constraint(cbc_solver):
    adapter = PulpAdapter(solver=cbc_solver)
    x = adapter.new_variable(0, 1)
    adapter.add_linear_constraint([(2.0, x)], Relation.EQ, 1.0)
    adapter.set_objective([(1.0, x)])
    assert adapter.solve() is SolveStatus.OPTIMAL
    assert adapter.variable_value(x) == pytest.approx(0.5)


def test_pulp_adapter_infeasible(cbc_solver):
    adapter = PulpAdapter(solver=cbc_solver)
    x = adapter.new_variable(0, 1, name="x")
    adapter.add_linear_constraint([(1.0, x)], Relation.GE, 2.0, name="impossible")
    adapter.set_objective([(1.0, x)])
    assert adapter.solve() is SolveStatus.INFEASIBLE
    assert adapter.state is SolveState.INFEASIBLE
    with pytest.raises(SolverError):
        adapter.objective_value()


def test_engine_exception_becomes_error_status(caplog):
    adapter = PulpAdapter(solver=RaisingSolver())
    x, _ = _tiny_lp(adapter)
    caplog.set_level(logging.ERROR)
    assert adapter.solve() is SolveStatus.ERROR
    assert adapter.state is SolveState.ERROR
    assert any(
        rec[0] == 'fleetsite.optimization.adapter' and
        rec[1] == logging.ERROR and
        'engine crashed' in rec[2]
        for rec in caplog.record_tuples
    )
    with pytest.raises(SolverError):
        adapter.variable_value(x)


@pytest.mark.parametrize("pulp_status", [
    pulp.LpStatusUnbounded,
    pulp.LpStatusNotSolved,
    pulp.LpStatusUndefined,
])
def test_other_engine_statuses_map_to_error(pulp_status):
    adapter = PulpAdapter(solver=StatusSolver(pulp_status))
    _tiny_lp(adapter)
    assert adapter.solve() is SolveStatus.ERROR


def test_terminal_state_is_final(cbc_solver):
    adapter = PulpAdapter(solver=cbc_solver)
    x, _ = _tiny_lp(adapter)
    adapter.solve()
    with pytest.raises(SolverError):
        adapter.solve()
    with pytest.raises(SolverError):
        adapter.new_variable(0, 1)
    with pytest.raises(SolverError):
        adapter.add_linear_constraint([(1.0, x)], Relation.LE, 1.0)


def test_values_unavailable_before_solve():
    adapter = RecordingAdapter()
    x = adapter.new_variable(0, 1, name="x")
    with pytest.raises(SolverError, match="Built"):
        adapter.variable_value(x)


def test_recording_adapter_scripted_values():
    adapter = RecordingAdapter(values={"x": 0.5}, objective=1.5)
    x = adapter.new_variable(0, 1, name="x")
    assert adapter.solve() is SolveStatus.OPTIMAL
    assert adapter.variable_values([x]) == [0.5]
    assert adapter.objective_value() == 1.5
