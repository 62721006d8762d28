"""
reposync sync module.

Provides the reconciler that plans a one-way sync and the executors that
apply the plan to a local or remote target.
"""

from reposync.sync.executor import (
    LocalTargetExecutor,
    PlanExecutor,
    RemoteTargetExecutor,
    apply_plan,
    get_executor,
)
from reposync.sync.reconciler import reconcile

__all__ = [
    "LocalTargetExecutor",
    "PlanExecutor",
    "RemoteTargetExecutor",
    "apply_plan",
    "get_executor",
    "reconcile",
]
