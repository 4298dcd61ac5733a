from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table


def register(app: typer.Typer) -> None:
    @app.command("metrics")
    def metrics_cmd(
        source: str = typer.Option("", "--source", help="worldBank|imf|dbnomics (default: all sources)."),
    ):
        """List the built-in inflation metrics per provider."""
        from inflation_lens.inflation.models import InflationSource
        from inflation_lens.inflation.sources import METRICS

        if source:
            try:
                sources = [InflationSource(source)]
            except ValueError:
                raise typer.BadParameter(f"Unknown source '{source}'. Expected worldBank, imf or dbnomics.")
        else:
            sources = list(InflationSource)

        tbl = Table(title="Inflation metrics")
        tbl.add_column("source", style="bold")
        tbl.add_column("id")
        tbl.add_column("kind")
        tbl.add_column("freq", justify="center")
        tbl.add_column("label")
        for s in sources:
            for m in METRICS[s]:
                tbl.add_row(s.value, m.id, m.kind.value, m.frequency or "A", m.label)
        Console().print(tbl)
