"""Typer command groups for `inflation-lens`.

Each module exposes `register(app)`; `inflation_lens.cli` wires them onto the
root app.
"""
