import numpy as np

from fleetsite.data.problem import ProblemData


def make_problem(**overrides) -> ProblemData:
    """Build a ProblemData from plain lists, filling unspecified fields for a 1x1 instance."""
    data = dict(
        num_customers=1,
        num_facilities=1,
        alloc_cost=[[0.0]],
        demand=[10.0],
        opening_cost=[5.0],
        capacity=[10.0],
        truck_dist_limit=100.0,
        truck_usage_cost=0.0,
        distance=[[0.0]],
    )
    data.update(overrides)
    return ProblemData(**{
        k: (np.asarray(v, dtype=float) if isinstance(v, list) else v)
        for k, v in data.items()
    })
