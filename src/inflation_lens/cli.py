from __future__ import annotations

import typer

app = typer.Typer(add_completion=False, help="Inflation Lens CLI: portfolio value vs. inflation benchmarks")

_COMMANDS_REGISTERED = False


@app.callback()
def _root(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log provider requests and pipeline steps."),
):
    from inflation_lens.config import safe_load_settings
    from inflation_lens.utils.logging import configure_logging

    settings = safe_load_settings()
    level = "DEBUG" if verbose else (settings.log_level if settings is not None else "WARNING")
    configure_logging(level)


def _register_commands() -> None:
    global _COMMANDS_REGISTERED
    if _COMMANDS_REGISTERED:
        return
    # Import here to keep `inflation_lens.cli` lightweight at import time.
    from inflation_lens.cli_commands.metrics_cmd import register as register_metrics
    from inflation_lens.cli_commands.compare_cmd import register as register_compare

    register_metrics(app)
    register_compare(app)
    _COMMANDS_REGISTERED = True


def main():
    _register_commands()
    app()

# Register commands when imported as a console-script entrypoint (`pyproject.toml` uses `inflation_lens.cli:app`).
_register_commands()


if __name__ == "__main__":
    main()
