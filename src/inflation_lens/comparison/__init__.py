"""Portfolio vs. inflation alignment and derived performance views.

The pipeline module is the entrypoint; align/metrics are pure and importable
on their own.
"""
