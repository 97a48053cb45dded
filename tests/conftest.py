import pytest
from pathlib import Path

from tests.utils.factories import make_problem

# Define project root for path fixtures
repo_root = Path(__file__).resolve().parent.parent


@pytest.fixture(autouse=True)
def force_cbc(monkeypatch):
    """Keep solver selection deterministic: always use PuLP's bundled CBC."""
    monkeypatch.setenv("FLEETSITE_SOLVER", "cbc")


@pytest.fixture
def cbc_solver():
    import pulp
    return pulp.PULP_CBC_CMD(msg=0)


@pytest.fixture(scope="session")
def small_instance_path():
    """Path to a 4-customer, 2-facility instance file"""
    return repo_root / "tests" / "_assets" / "small.txt"


# Toy data fixtures for scenario tests
@pytest.fixture
def single_site_problem():
    """One customer, one facility: the facility must open, nothing else costs."""
    return make_problem()


@pytest.fixture
def overloaded_problem():
    """Total demand exceeds total capacity."""
    return make_problem(
        num_customers=2,
        num_facilities=1,
        alloc_cost=[[1.0], [1.0]],
        demand=[8.0, 7.0],
        capacity=[10.0],
        distance=[[1.0], [1.0]],
    )


@pytest.fixture
def tight_distance_problem():
    """Two customers, one facility; one truck cannot drive to both."""
    return make_problem(
        num_customers=2,
        num_facilities=1,
        alloc_cost=[[0.0], [0.0]],
        demand=[1.0, 1.0],
        opening_cost=[0.0],
        capacity=[10.0],
        truck_dist_limit=10.0,
        truck_usage_cost=10.0,
        distance=[[6.0], [6.0]],
    )


@pytest.fixture
def two_by_two_problem():
    return make_problem(
        num_customers=2,
        num_facilities=2,
        alloc_cost=[[1.0, 4.0], [3.0, 2.0]],
        demand=[4.0, 6.0],
        opening_cost=[10.0, 12.0],
        capacity=[8.0, 8.0],
        truck_dist_limit=50.0,
        truck_usage_cost=3.0,
        distance=[[5.0, 9.0], [7.0, 4.0]],
    )


@pytest.fixture(scope="session")
def toy_instance_path():
    """Path to the one-customer, one-facility example shipped in data/"""
    return repo_root / "data" / "instances" / "toy_single.txt"


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; undo it after each test."""
    import logging
    from fleetsite.utils.logging import SimpleFormatter
    root = logging.getLogger()
    saved_level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, SimpleFormatter):
            root.removeHandler(handler)
    root.setLevel(saved_level)
