"""Inflation Lens: portfolio value history against inflation benchmarks."""

__version__ = "0.1.0"
