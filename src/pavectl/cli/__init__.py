"""Command-line surface for pavectl."""
