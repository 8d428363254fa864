"""Data models for dirpurge.

This module exports the configuration, candidate, plan and outcome
structures shared by the scanning and deletion pipeline.
"""

from dirpurge.models.candidate import Candidate, ScanWarning
from dirpurge.models.config import (
    DEFAULT_CONFIRM_PHRASE,
    DEFAULT_TARGETS,
    DeletionConfig,
    ScanConfig,
)
from dirpurge.models.outcome import Outcome, OutcomeStatus, RunSummary, StepResult, StepStatus
from dirpurge.models.plan import ActionPlan, ActionType, PlannedAction

__all__ = [
    "DEFAULT_CONFIRM_PHRASE",
    "DEFAULT_TARGETS",
    "ActionPlan",
    "ActionType",
    "Candidate",
    "DeletionConfig",
    "Outcome",
    "OutcomeStatus",
    "PlannedAction",
    "RunSummary",
    "ScanConfig",
    "ScanWarning",
    "StepResult",
    "StepStatus",
]
