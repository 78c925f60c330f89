"""Shared utilities used across layers (time, identifiers, request context, logging)."""
