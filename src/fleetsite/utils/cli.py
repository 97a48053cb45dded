from argparse import ArgumentParser, RawTextHelpFormatter
from typing import Dict, Any
import sys

from fleetsite.config.parameters import Parameters, SOLVER_CHOICES, LOG_LEVELS
from fleetsite.utils.logging import Colors

def print_parameter_help():
    """Display detailed help information about parameters"""
    help_text = f"""
{Colors.BOLD}Facility Location Parameters{Colors.RESET}
{Colors.CYAN}════════════════════════════{Colors.RESET}

{Colors.YELLOW}Input:{Colors.RESET}
  INPUT_FILE               Instance file: whitespace separated tokens
                           numCustomers numFacilities
                           allocCost[c][f] demand[c] openingCost[f] capacity[f]
                           truckDistLimit truckUsageCost distance[c][f]

{Colors.YELLOW}Solver:{Colors.RESET}
  --solver STR             LP engine to use
                           Options: auto, cbc, gurobi
                           'auto' reads FLEETSITE_SOLVER, then tries gurobi_cl
                           and falls back to CBC
                           Default: auto
                           Example: --solver cbc

  --tolerance FLOAT        Tolerance used when re-checking the solution
                           Default: 1e-6
                           Example: --tolerance 1e-5

{Colors.YELLOW}Other Options:{Colors.RESET}
  --config PATH            Path to custom config file
                           Default: src/fleetsite/config/default_config.yaml
                           Example: --config my_config.yaml

  --log-level STR          Logging level
                           Default: INFO

  --verbose                Show solver output
                           Default: False

{Colors.CYAN}Examples:{Colors.RESET}
  # Solve an instance with the default solver
  fleetsite data/instances/small.txt

  # Force CBC and show its log
  fleetsite data/instances/small.txt --solver cbc --verbose
"""
    print(help_text)
    sys.exit(0)

def parse_args() -> ArgumentParser:
    """Build the command line parser"""
    parser = ArgumentParser(
        description='Capacitated facility location with truck distance limits',
        formatter_class=RawTextHelpFormatter
    )

    parser.add_argument(
        '--help-params',
        action='store_true',
        help='Show detailed parameter information and exit'
    )

    parser.add_argument('input_file', nargs='?', help='Path to the instance file')
    parser.add_argument('--config', type=str, help='Path to custom config file')
    parser.add_argument('--solver', type=str, choices=SOLVER_CHOICES, help='LP engine to use')
    parser.add_argument('--tolerance', type=float, help='Tolerance for solution checks')
    parser.add_argument('--log-level', type=str, choices=LOG_LEVELS, help='Logging level')
    parser.add_argument('--verbose', action='store_true', default=None, help='Show solver output')
    parser.add_argument(
        '--no-progress',
        dest='show_progress',
        action='store_false',
        default=None,
        help='Disable the progress bar'
    )

    return parser

def get_parameter_overrides(args) -> Dict[str, Any]:
    """Extract parameter overrides from command line arguments"""
    overrides = {k: v for k, v in vars(args).items() if v is not None}

    # Remove non-parameter arguments
    for key in ['config', 'input_file', 'help_params']:
        overrides.pop(key, None)

    return overrides

def load_parameters(args) -> Parameters:
    """Load parameters with optional command line overrides"""
    if args.config:
        params = Parameters.from_yaml(args.config)
    else:
        params = Parameters.from_yaml()

    overrides = get_parameter_overrides(args)
    if overrides:
        data = params.__dict__.copy()
        data.update(overrides)
        params = Parameters(**data)

    return params
