"""
Problem instance model and its plain-text format.

An instance file is a flat stream of whitespace separated tokens::

    numCustomers numFacilities
    allocCost[c][f]     (C*F values, one row per customer)
    demand[c]           (C values)
    openingCost[f]      (F values)
    capacity[f]         (F values)
    truckDistLimit truckUsageCost
    distance[c][f]      (C*F values, one row per customer)

The number of vehicle slots per facility is not part of the file: in the worst
case every customer gets its own vehicle, so it always equals the number of
customers.
"""

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

import numpy as np

from fleetsite.exceptions import DataError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ProblemData:
    """Immutable facility-location instance with truck parameters."""
    num_customers: int
    num_facilities: int
    alloc_cost: np.ndarray  # (C, F)
    demand: np.ndarray  # (C,)
    opening_cost: np.ndarray  # (F,)
    capacity: np.ndarray  # (F,)
    truck_dist_limit: float
    truck_usage_cost: float
    distance: np.ndarray  # (C, F)

    def __post_init__(self):
        """Validate shapes and values, then freeze the arrays."""
        if self.num_customers < 0 or self.num_facilities < 0:
            raise DataError(
                f"Counts must be non-negative. Got: "
                f"numCustomers={self.num_customers}, numFacilities={self.num_facilities}"
            )

        shapes = {
            'alloc_cost': (self.num_customers, self.num_facilities),
            'demand': (self.num_customers,),
            'opening_cost': (self.num_facilities,),
            'capacity': (self.num_facilities,),
            'distance': (self.num_customers, self.num_facilities),
        }
        for name, shape in shapes.items():
            array = np.array(getattr(self, name), dtype=float)
            if array.shape != shape:
                raise DataError(f"{name} must have shape {shape}. Got: {array.shape}")
            _check_values(name, array)
            array.flags.writeable = False
            # Frozen dataclass: bypass __setattr__ to store the read-only copy
            object.__setattr__(self, name, array)

        for name in ('truck_dist_limit', 'truck_usage_cost'):
            value = float(getattr(self, name))
            _check_values(name, np.array([value]))
            object.__setattr__(self, name, value)

    @property
    def num_vehicles(self) -> int:
        """Vehicle slots per facility; one per customer in the worst case."""
        return self.num_customers

    @property
    def total_demand(self) -> float:
        return float(self.demand.sum())

    @property
    def total_capacity(self) -> float:
        return float(self.capacity.sum())

    def __eq__(self, other):
        if not isinstance(other, ProblemData):
            return NotImplemented
        return (
            self.num_customers == other.num_customers
            and self.num_facilities == other.num_facilities
            and self.truck_dist_limit == other.truck_dist_limit
            and self.truck_usage_cost == other.truck_usage_cost
            and all(
                np.array_equal(getattr(self, name), getattr(other, name))
                for name in ('alloc_cost', 'demand', 'opening_cost', 'capacity', 'distance')
            )
        )


def _check_values(name: str, array: np.ndarray) -> None:
    if not np.all(np.isfinite(array)):
        raise DataError(f"{name} contains non-finite values")
    if np.any(array < 0):
        raise DataError(f"{name} contains negative values")


class _TokenReader:
    """Sequential reader over the whitespace separated tokens of an instance."""

    def __init__(self, text: str):
        self._tokens = text.split()
        self._pos = 0

    def _next(self, what: str) -> str:
        if self._pos >= len(self._tokens):
            raise DataError(f"Premature end of data while reading {what}")
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def next_int(self, what: str) -> int:
        token = self._next(what)
        try:
            return int(token)
        except ValueError:
            raise DataError(f"Expected an integer for {what}, got {token!r}") from None

    def next_float(self, what: str) -> float:
        token = self._next(what)
        try:
            return float(token)
        except ValueError:
            raise DataError(f"Expected a number for {what}, got {token!r}") from None

    def next_floats(self, count: int, what: str) -> np.ndarray:
        # Declared counts come from the file; never allocate past the data present
        if count > self.remaining():
            raise DataError(
                f"Premature end of data while reading {what}: "
                f"expected {count} values, {self.remaining()} tokens left"
            )
        values = np.empty(count, dtype=float)
        for i in range(count):
            values[i] = self.next_float(f"{what}[{i}]")
        return values

    def remaining(self) -> int:
        return len(self._tokens) - self._pos


def parse_problem(text: str) -> ProblemData:
    """
    Parse an instance from its textual token stream.

    Args:
        text: Full contents of an instance file.

    Returns:
        The parsed ProblemData.

    Raises:
        DataError: If the stream ends early or holds invalid values.
    """
    reader = _TokenReader(text)

    num_customers = reader.next_int('numCustomers')
    num_facilities = reader.next_int('numFacilities')
    if num_customers < 0 or num_facilities < 0:
        raise DataError(
            f"Counts must be non-negative. Got: "
            f"numCustomers={num_customers}, numFacilities={num_facilities}"
        )
    cells = num_customers * num_facilities

    alloc_cost = reader.next_floats(cells, 'allocCost').reshape(num_customers, num_facilities)
    demand = reader.next_floats(num_customers, 'demand')
    opening_cost = reader.next_floats(num_facilities, 'openingCost')
    capacity = reader.next_floats(num_facilities, 'capacity')
    truck_dist_limit = reader.next_float('truckDistLimit')
    truck_usage_cost = reader.next_float('truckUsageCost')
    distance = reader.next_floats(cells, 'distance').reshape(num_customers, num_facilities)

    if reader.remaining():
        raise DataError(f"Unexpected {reader.remaining()} trailing tokens after distance matrix")

    return ProblemData(
        num_customers=num_customers,
        num_facilities=num_facilities,
        alloc_cost=alloc_cost,
        demand=demand,
        opening_cost=opening_cost,
        capacity=capacity,
        truck_dist_limit=truck_dist_limit,
        truck_usage_cost=truck_usage_cost,
        distance=distance,
    )


def read_problem(path) -> ProblemData:
    """Read and parse an instance file, wrapping I/O failures in DataError."""
    path = Path(path)
    try:
        text = path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise DataError(f"Cannot read instance file {path}: {e}") from e

    problem = parse_problem(text)
    logger.info(
        f"Parsed instance {path.name}: {problem.num_customers} customers, "
        f"{problem.num_facilities} facilities, {problem.num_vehicles} vehicle slots"
    )
    return problem


def _format_float(value: float) -> str:
    # repr round-trips exactly; drop the trailing '.0' for integral values
    value = float(value)
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def _format_rows(matrix: np.ndarray) -> Iterator[str]:
    for row in matrix:
        yield ' '.join(_format_float(v) for v in row)


def format_problem(problem: ProblemData) -> str:
    """Serialize an instance back to the textual format read by parse_problem."""
    lines: List[str] = [f"{problem.num_customers} {problem.num_facilities}"]
    lines.extend(_format_rows(problem.alloc_cost))
    lines.append(' '.join(_format_float(v) for v in problem.demand))
    lines.append(' '.join(_format_float(v) for v in problem.opening_cost))
    lines.append(' '.join(_format_float(v) for v in problem.capacity))
    lines.append(
        f"{_format_float(problem.truck_dist_limit)} {_format_float(problem.truck_usage_cost)}"
    )
    lines.extend(_format_rows(problem.distance))
    return '\n'.join(line for line in lines if line) + '\n'


def write_problem(problem: ProblemData, path) -> Path:
    """Write an instance file and return its path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_problem(problem))
    logger.debug(f"Wrote instance with {problem.num_customers} customers to {path}")
    return path


def generate_problem(
    num_customers: int,
    num_facilities: int,
    seed: Optional[int] = None,
    capacity_slack: float = 1.5,
    max_demand: float = 20.0,
    max_distance: float = 100.0,
) -> ProblemData:
    """
    Generate a random instance.

    Total capacity is ``capacity_slack`` times total demand, split evenly
    across facilities, and the truck distance limit is large enough for any
    single vehicle to reach the farthest customer.

    Args:
        num_customers: Number of customers.
        num_facilities: Number of facilities.
        seed: Seed for numpy's random generator.
        capacity_slack: Ratio of total capacity to total demand.
        max_demand: Upper bound of customer demand.
        max_distance: Upper bound of round-trip distances.

    Returns:
        A ProblemData with integral costs, demands and distances.
    """
    if num_customers <= 0 or num_facilities <= 0:
        raise ValueError("num_customers and num_facilities must be positive")

    rng = np.random.default_rng(seed)
    demand = rng.integers(1, int(max_demand) + 1, size=num_customers).astype(float)
    distance = rng.integers(1, int(max_distance) + 1, size=(num_customers, num_facilities)).astype(float)
    alloc_cost = np.ceil(distance / 10.0)
    opening_cost = rng.integers(50, 200, size=num_facilities).astype(float)
    capacity = np.full(
        num_facilities, math.ceil(demand.sum() * capacity_slack / num_facilities), dtype=float
    )

    return ProblemData(
        num_customers=num_customers,
        num_facilities=num_facilities,
        alloc_cost=alloc_cost,
        demand=demand,
        opening_cost=opening_cost,
        capacity=capacity,
        truck_dist_limit=float(distance.max()),
        truck_usage_cost=float(rng.integers(5, 30)),
        distance=distance,
    )
