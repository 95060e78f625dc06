"""Household task assistant: chat commands, chore rules and weekly reports."""
