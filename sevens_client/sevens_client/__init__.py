"""Sevens client: renders host snapshots and sends move requests."""
