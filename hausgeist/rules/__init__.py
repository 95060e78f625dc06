"""Reminder rules: loading, evaluation, weekly heartbeat and scheduler entry points."""
