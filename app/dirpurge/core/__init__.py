"""Core run pipeline: selection, planning, execution and reporting."""
