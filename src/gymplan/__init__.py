"""gymplan: gym equipment scanning and weekly workout plan generation."""

__version__ = "0.1.0"
