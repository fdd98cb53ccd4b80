"""Shared runtime primitives: errors, exit codes, run context and logging."""
