__version__ = "0.1.0"

__all__ = [
    "__version__",
    "checks",
    "cli",
    "config",
    "contracts",
    "core",
    "discovery",
    "docs",
    "reporting",
    "verify",
]
