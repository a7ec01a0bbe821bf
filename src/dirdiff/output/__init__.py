"""Reporters — terminal, JSON, CSV export."""
