"""Steady-state nodal analysis and equation-text preprocessing."""

__version__ = "0.1.0"