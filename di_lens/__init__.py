"""di-lens: structural analysis of dependency-injection graphs."""

__version__ = "0.1.0"
