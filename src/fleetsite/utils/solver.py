import os
import pulp

def pick_solver(choice: str = 'auto', verbose: bool = False):
    """
    Return a PuLP solver instance.
    Priority
    1. Explicit choice: 'gurobi' | 'cbc'
    2. If 'auto' (default): FLEETSITE_SOLVER env-var, then try GUROBI_CMD,
       fall back to PULP_CBC_CMD.
    """
    choice = (choice or 'auto').lower()
    if choice == 'auto':
        choice = os.getenv("FLEETSITE_SOLVER", "auto").lower()
    msg = 1 if verbose else 0

    if choice == "gurobi":
        return pulp.GUROBI_CMD(msg=msg)
    if choice == "cbc":
        return pulp.PULP_CBC_CMD(msg=msg)

    # auto
    try:
        s = pulp.GUROBI_CMD(msg=msg)
        if not s.available():
            raise pulp.PulpError("gurobi_cl not found")
        return s
    except (pulp.PulpError, OSError):
        return pulp.PULP_CBC_CMD(msg=msg)
