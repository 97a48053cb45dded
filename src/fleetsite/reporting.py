"""
Console reporting of instance sizes and solve results.
"""

import logging
import sys
from typing import Optional, TextIO

from fleetsite.data.problem import ProblemData
from fleetsite.optimization.core import Solution, rounded_objective
from fleetsite.utils.logging import Colors, Symbols

logger = logging.getLogger(__name__)

NO_SOLUTION_MESSAGE = "No Solution found!"


class ResultReporter:
    """Write the final answer of a run to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def _print(self, text: str) -> None:
        print(text, file=self.stream)

    def print_instance_sizes(self, problem: ProblemData) -> None:
        self._print(f"numCustomers: {problem.num_customers}")
        self._print(f"numFacilities: {problem.num_facilities}")
        self._print(f"numVehicle: {problem.num_vehicles}")

    def report(self, solution: Solution) -> Optional[int]:
        """
        Print the ceiling of the objective for an optimal solution, otherwise
        the no-solution message.

        Returns:
            The reported integer objective, or None when nothing was solved.
        """
        if not solution.is_optimal:
            self._print(NO_SOLUTION_MESSAGE)
            return None

        value = rounded_objective(solution.objective_value)
        self._print(f"Objective value: {value}")
        return value


def log_solution_details(solution: Solution) -> None:
    """Log a summary of the cost terms and resources in use."""
    if not solution.is_optimal:
        logger.warning(
            f"{Symbols.CROSS} No solution: solver {solution.solver_name} "
            f"ended with status {solution.status.value}"
        )
        return

    stats = solution.statistics
    logger.info(f"\n{Symbols.CHART} Solution Summary")
    logger.info("=" * 50)
    logger.info(
        f"{Colors.CYAN}Facility Cost:   {Colors.BOLD}"
        f"{stats['total_facility_cost']:>12,.2f}{Colors.RESET}"
    )
    logger.info(
        f"{Colors.CYAN}Allocation Cost: {Colors.BOLD}"
        f"{stats['total_allocation_cost']:>12,.2f}{Colors.RESET}"
    )
    logger.info(
        f"{Colors.CYAN}Vehicle Cost:    {Colors.BOLD}"
        f"{stats['total_vehicle_cost']:>12,.2f}{Colors.RESET}"
    )
    logger.info(
        f"{Colors.CYAN}Total Cost:      {Colors.BOLD}"
        f"{stats['total_cost']:>12,.2f}{Colors.RESET}"
    )

    logger.info(f"\n{Symbols.FACTORY} Facilities open: {Colors.BOLD}{stats['facilities_open']}{Colors.RESET}")
    logger.info(f"{Symbols.TRUCK} Vehicles used:    {Colors.BOLD}{stats['vehicles_used']}{Colors.RESET}")
    logger.info(
        f"{Colors.GRAY}Solver {solution.solver_name} took "
        f"{solution.solver_runtime_sec:.2f}s{Colors.RESET}"
    )

    if solution.violations:
        logger.warning(
            f"{Symbols.CROSS} {len(solution.violations)} constraints violated beyond tolerance!"
        )
