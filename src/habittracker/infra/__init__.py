"""Persistence infrastructure: engine/session wiring and store implementations."""
