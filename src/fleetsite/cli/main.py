"""
Command line entry point: read an instance, solve the LP, report the objective.
"""
import logging
import sys

from fleetsite.data.problem import read_problem
from fleetsite.exceptions import ConfigError, DataError
from fleetsite.optimization.core import solve_problem
from fleetsite.reporting import ResultReporter, log_solution_details
from fleetsite.utils.cli import parse_args, load_parameters, print_parameter_help
from fleetsite.utils.logging import setup_logging, ProgressTracker, Colors

def main(argv=None):
    """Run the facility location pipeline."""
    parser = parse_args()
    args = parser.parse_args(argv)

    if args.help_params:
        print_parameter_help()

    if not args.input_file:
        parser.error("the following arguments are required: input_file")

    try:
        params = load_parameters(args)
    except (ConfigError, OSError) as e:
        parser.error(str(e))

    setup_logging(params.log_level)
    logger = logging.getLogger(__name__)

    steps = ['Load Instance', 'Build & Solve', 'Report']
    progress = ProgressTracker(steps, disable=not params.show_progress)
    reporter = ResultReporter()

    # Step 1: Load instance
    try:
        problem = read_problem(args.input_file)
    except DataError as e:
        progress.advance(f"Failed to load {args.input_file}", status='error')
        progress.pbar.close()
        print(f"Error: in read_problem() {args.input_file}\n{e}")
        sys.exit(-1)
    reporter.print_instance_sizes(problem)
    progress.advance(
        f"Loaded {Colors.BOLD}{problem.num_customers}{Colors.RESET} customers and "
        f"{Colors.BOLD}{problem.num_facilities}{Colors.RESET} facilities"
    )

    # Step 2: Build and solve the LP
    solution = solve_problem(problem, params)
    progress.advance(
        f"Solver finished with status {Colors.BOLD}{solution.status.value}{Colors.RESET}",
        status='success' if solution.is_optimal else 'warning'
    )

    # Step 3: Report
    log_solution_details(solution)
    value = reporter.report(solution)
    progress.advance("Reported result")
    progress.close()

    logger.debug(f"Reported objective: {value}")
    return value

if __name__ == "__main__":
    main()
