"""Inflation series normalization: period keys, index building, reconciliation and expansion."""
