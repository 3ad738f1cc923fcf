"""Ski day checker: grades nearby ski resorts for a chosen day."""

__version__ = "1.0.0"
