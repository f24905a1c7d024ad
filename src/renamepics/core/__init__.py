"""Core functionality for renamepics.

This package exposes the planning and execution entry points:
- create_rename_plan: assign sequence numbers and validate new names for one
  directory, raising a PlanningError if the batch cannot be renamed safely.
- execute_plan: apply (or dry-run) a validated plan and report the outcome.
- run: process directories one after another and collect their reports.
"""

from renamepics.core.apply import execute_plan
from renamepics.core.planner import RenamePlanBuildContext, create_rename_plan
from renamepics.core.runner import Collaborators, run

__all__ = [
    "Collaborators",
    "RenamePlanBuildContext",
    "create_rename_plan",
    "execute_plan",
    "run",
]
