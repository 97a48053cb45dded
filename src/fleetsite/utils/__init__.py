"""
Utility helpers for fleetsite.

Components that are orthogonal to the model itself:

• Command-line interface helpers (`cli.py`).
• Logging colour codes and progress bars (`logging.py`).
• Solver picker (`solver.py`) - chooses CBC or Gurobi based on the runtime environment.
"""
