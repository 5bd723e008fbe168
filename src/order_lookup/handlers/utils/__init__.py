"""Shared handler utilities: observability, errors and response helpers."""
