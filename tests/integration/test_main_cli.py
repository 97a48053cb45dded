import pytest

import fleetsite.cli.main as main_mod
from tests.utils.stubs import RaisingSolver, stub_solver


def test_main_reports_objective(small_instance_path, capsys):
    value = main_mod.main([str(small_instance_path), '--solver', 'cbc', '--no-progress'])
    out = capsys.readouterr().out.splitlines()
    assert out[:3] == ["numCustomers: 4", "numFacilities: 2", "numVehicle: 4"]
    assert out[-1] == f"Objective value: {value}"
    assert isinstance(value, int) and value > 0


def test_main_toy_instance(toy_instance_path, capsys):
    value = main_mod.main([str(toy_instance_path), '--no-progress'])
    assert value == 5
    assert "Objective value: 5" in capsys.readouterr().out


def test_main_no_solution(tmp_path, capsys):
    path = tmp_path / 'overloaded.txt'
    path.write_text("1 1\n0\n20\n5\n10\n100 0\n0\n")
    value = main_mod.main([str(path), '--no-progress'])
    assert value is None
    out = capsys.readouterr().out
    assert out.rstrip().endswith("No Solution found!")
    assert "Objective value" not in out


def test_main_solver_error_is_not_fatal(small_instance_path, monkeypatch, capsys):
    with stub_solver(monkeypatch, RaisingSolver()):
        value = main_mod.main([str(small_instance_path), '--no-progress'])
    assert value is None
    assert "No Solution found!" in capsys.readouterr().out


def test_main_missing_file_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main_mod.main([str(tmp_path / 'missing.txt'), '--no-progress'])
    assert excinfo.value.code == -1
    assert 'missing.txt' in capsys.readouterr().out


def test_main_malformed_file_exits(tmp_path, capsys):
    path = tmp_path / 'short.txt'
    path.write_text("2 2\n1 2 3\n")
    with pytest.raises(SystemExit) as excinfo:
        main_mod.main([str(path), '--no-progress'])
    assert excinfo.value.code == -1
    assert 'Premature end of data' in capsys.readouterr().out

def test_main_oversized_header_exits(tmp_path, capsys):
    path = tmp_path / 'big.txt'
    path.write_text("100000000 100000000\n1 2 3\n")
    with pytest.raises(SystemExit) as excinfo:
        main_mod.main([str(path), '--no-progress'])
    assert excinfo.value.code == -1
    out = capsys.readouterr().out
    assert 'Error: in read_problem()' in out
    assert 'Premature end of data' in out



def test_main_requires_input_file():
    with pytest.raises(SystemExit) as excinfo:
        main_mod.main(['--no-progress'])
    assert excinfo.value.code == 2


def test_main_help_params(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main_mod.main(['--help-params'])
    assert excinfo.value.code == 0
    assert 'Facility Location Parameters' in capsys.readouterr().out
