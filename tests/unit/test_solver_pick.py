import pulp

from fleetsite.utils.solver import pick_solver


def test_explicit_cbc():
    assert isinstance(pick_solver('cbc'), pulp.PULP_CBC_CMD)


def test_explicit_gurobi_is_returned_without_probing():
    assert isinstance(pick_solver('gurobi'), pulp.GUROBI_CMD)


def test_auto_honours_environment(monkeypatch):
    monkeypatch.setenv('FLEETSITE_SOLVER', 'cbc')
    assert isinstance(pick_solver('auto'), pulp.PULP_CBC_CMD)


def test_auto_falls_back_to_cbc(monkeypatch):
    monkeypatch.setenv('FLEETSITE_SOLVER', 'auto')
    monkeypatch.setattr(pulp.GUROBI_CMD, 'available', lambda self: False)
    assert isinstance(pick_solver(), pulp.PULP_CBC_CMD)


def test_verbose_sets_solver_messages():
    assert pick_solver('cbc', verbose=True).msg
    assert not pick_solver('cbc', verbose=False).msg
