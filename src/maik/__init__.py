"""MAIK - German freelance contracts, drafted step by step."""

__version__ = "1.0.0"
