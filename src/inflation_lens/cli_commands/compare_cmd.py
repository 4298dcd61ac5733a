from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from inflation_lens.comparison.ranges import RangeSpec
    from inflation_lens.inflation.models import FetchRequest, Granularity, MetricDefinition
    from inflation_lens.inflation.sources.base import InflationProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Selection:
    provider: InflationProvider
    request: FetchRequest
    metric: MetricDefinition
    granularity: Granularity
    range_spec: RangeSpec
    resolution: str


def _select(
    *,
    source: str,
    country: str,
    metric: str,
    kind: str,
    frequency: str,
    range_: str,
    resolution: str,
) -> _Selection:
    from inflation_lens.comparison.pipeline import RESOLUTIONS
    from inflation_lens.comparison.ranges import resolve_range
    from inflation_lens.config import fetch_config_from, safe_load_settings
    from inflation_lens.inflation.models import FetchRequest, InflationSource, ValueKind
    from inflation_lens.inflation.sources import granularity_for, make_provider, resolve_metric

    settings = safe_load_settings()
    source = source or (settings.source if settings is not None else "worldBank")
    country = country or (settings.country if settings is not None else "US")
    metric = metric or (settings.metric if settings is not None else None) or ""

    try:
        src = InflationSource(source)
    except ValueError:
        raise typer.BadParameter(f"Unknown source '{source}'. Expected worldBank, imf or dbnomics.")
    if kind and kind not in {k.value for k in ValueKind}:
        raise typer.BadParameter(f"Unknown kind '{kind}'. Expected index or percent.")
    if resolution not in RESOLUTIONS:
        raise typer.BadParameter(f"Unknown resolution '{resolution}'. Expected monthly or daily.")
    try:
        metric_def = resolve_metric(src, metric or None, kind or None)
    except KeyError as e:
        raise typer.BadParameter(str(e.args[0]))
    try:
        rng = resolve_range(range_)
    except ValueError as e:
        raise typer.BadParameter(str(e))

    freq = (frequency or metric_def.frequency or "A").upper()
    if freq not in {"A", "M"}:
        raise typer.BadParameter(f"Unknown frequency '{frequency}'. Expected A or M.")

    request = FetchRequest(
        country=country,
        indicator=metric_def.id,
        frequency=freq,
        start_year=rng.start_year,
        end_year=rng.end_year,
    )
    return _Selection(
        provider=make_provider(src, fetch_config_from(settings)),
        request=request,
        metric=metric_def,
        granularity=granularity_for(metric_def, freq),
        range_spec=rng,
        resolution=resolution,
    )


def _fail(c: Console, title: str, err: Exception) -> None:
    logger.error("%s: %s", title, err)
    c.print(Panel(f"[red]{err}[/red]", title=title, expand=False))
    raise typer.Exit(code=1)


def register(app: typer.Typer) -> None:
    @app.command("index")
    def index_cmd(
        source: str = typer.Option("", "--source", help="worldBank|imf|dbnomics (default: INFLATION_SOURCE)."),
        country: str = typer.Option("", "--country", help="ISO country code (default: INFLATION_COUNTRY)."),
        metric: str = typer.Option("", "--metric", help="Indicator id (default: first catalog metric)."),
        kind: str = typer.Option("", "--kind", help="index|percent; required for custom metric ids."),
        frequency: str = typer.Option("", "--frequency", help="A|M (DBnomics series frequency)."),
        range_: str = typer.Option("5Y", "--range", help="1Y|3Y|5Y|10Y|ALL"),
        resolution: str = typer.Option("monthly", "--resolution", help="monthly|daily"),
        tail: int = typer.Option(24, "--tail", help="Show last N index rows."),
    ):
        """Fetch an inflation series and show it as an index rebased to 100."""
        from inflation_lens.comparison.pipeline import build_inflation_index
        from inflation_lens.inflation.sources import ProviderError
        from inflation_lens.utils.formatting import fmt_index, fmt_period_label

        c = Console()
        sel = _select(
            source=source, country=country, metric=metric, kind=kind,
            frequency=frequency, range_=range_, resolution=resolution,
        )
        try:
            observations = sel.provider.fetch(sel.request)
        except ProviderError as e:
            _fail(c, "Inflation fetch failed", e)

        index = build_inflation_index(observations, sel.metric, sel.granularity, sel.resolution)
        if not index:
            c.print(Panel("No inflation data for this selection.", title="Inflation index", expand=False))
            raise typer.Exit(code=0)

        tbl = Table(title=f"{sel.metric.label} ({sel.request.country.upper()})")
        tbl.add_column("period", style="bold")
        tbl.add_column("index", justify="right")
        for p in index[-max(1, int(tail)):]:
            tbl.add_row(fmt_period_label(p.date), fmt_index(p.value))
        c.print(tbl)

    @app.command("compare")
    def compare_cmd(
        valuations_csv: str = typer.Argument(..., help="CSV with valuationDate,totalValue[,netContribution]."),
        source: str = typer.Option("", "--source", help="worldBank|imf|dbnomics (default: INFLATION_SOURCE)."),
        country: str = typer.Option("", "--country", help="ISO country code (default: INFLATION_COUNTRY)."),
        metric: str = typer.Option("", "--metric", help="Indicator id (default: first catalog metric)."),
        kind: str = typer.Option("", "--kind", help="index|percent; required for custom metric ids."),
        frequency: str = typer.Option("", "--frequency", help="A|M (DBnomics series frequency)."),
        range_: str = typer.Option("5Y", "--range", help="1Y|3Y|5Y|10Y|ALL"),
        resolution: str = typer.Option("monthly", "--resolution", help="monthly|daily"),
        view: str = typer.Option("comparison", "--view", help="comparison|excess|interest"),
        as_json: bool = typer.Option(False, "--json", help="Emit the full result as JSON."),
        tail: int = typer.Option(24, "--tail", help="Show last N rows."),
    ):
        """Compare portfolio value against inflation (nominal vs real, excess return)."""
        from inflation_lens.comparison.pipeline import run_comparison
        from inflation_lens.inflation.sources import ProviderError
        from inflation_lens.portfolio.valuations import read_valuations
        from inflation_lens.utils.formatting import fmt_index, fmt_money, fmt_period_label, fmt_signed_pct
        from inflation_lens.utils.logging import log_event

        if view not in {"comparison", "excess", "interest"}:
            raise typer.BadParameter(f"Unknown view '{view}'. Expected comparison, excess or interest.")

        c = Console()
        sel = _select(
            source=source, country=country, metric=metric, kind=kind,
            frequency=frequency, range_=range_, resolution=resolution,
        )
        if logger.isEnabledFor(logging.DEBUG):
            log_event("compare_request", {"request": sel.request, "range": sel.range_spec, "resolution": resolution})

        try:
            result = run_comparison(
                provider=sel.provider,
                request=sel.request,
                metric=sel.metric,
                granularity=sel.granularity,
                load_valuations=lambda: read_valuations(valuations_csv),
                resolution=sel.resolution,
                range_spec=sel.range_spec,
            )
        except ProviderError as e:
            _fail(c, "Inflation fetch failed", e)
        except (FileNotFoundError, ValueError) as e:
            _fail(c, "Valuations unreadable", e)

        if as_json:
            payload = {
                "metric": asdict(result.metric),
                "granularity": result.granularity.value,
                "resolution": result.resolution,
                "points": [asdict(p) for p in result.points],
                "excess": [asdict(p) for p in result.excess],
                "interest": [asdict(p) for p in result.interest],
                "summary": asdict(result.summary) if result.summary is not None else None,
            }
            c.print_json(json.dumps(payload, default=str))
            raise typer.Exit(code=0)

        if not result.has_data:
            c.print(Panel("No comparable data: portfolio and inflation series do not overlap.", title="Inflation comparison", expand=False))
            raise typer.Exit(code=0)

        s = result.summary
        if s is None:
            summary_txt = "Insufficient data (need at least two periods)."
        else:
            summary_txt = (
                f"nominal {fmt_signed_pct(s.nominal_change)}  real {fmt_signed_pct(s.real_change)}  "
                f"inflation {fmt_signed_pct(s.inflation_change)}\n"
                f"latest nominal={fmt_money(s.latest_nominal)}  real={fmt_money(s.latest_real)}  "
                f"index={fmt_index(s.latest_inflation_index)}"
            )
        c.print(Panel(summary_txt, title=f"{result.metric.label} | {sel.request.country.upper()} | {resolution}", expand=False))

        n = max(1, int(tail))
        if view == "excess":
            tbl = Table(title="Excess return over inflation", min_width=40)
            tbl.add_column("period", style="bold")
            tbl.add_column("excess", justify="right")
            for p in result.excess[-n:]:
                tbl.add_row(fmt_period_label(p.period), fmt_signed_pct(p.outperformance))
        elif view == "interest":
            tbl = Table(title="Return vs inflation", min_width=40)
            tbl.add_column("period", style="bold")
            tbl.add_column("return", justify="right")
            tbl.add_column("inflation", justify="right")
            for p in result.interest[-n:]:
                tbl.add_row(fmt_period_label(p.period), fmt_signed_pct(p.interest), fmt_signed_pct(p.inflation))
        else:
            tbl = Table(title="Nominal vs inflation-adjusted value")
            tbl.add_column("period", style="bold")
            tbl.add_column("nominal", justify="right")
            tbl.add_column("real", justify="right")
            tbl.add_column("index", justify="right")
            tbl.add_column("contributed", justify="right")
            for p in result.points[-n:]:
                tbl.add_row(
                    fmt_period_label(p.period),
                    fmt_money(p.nominal),
                    fmt_money(p.real),
                    fmt_index(p.inflation_index),
                    fmt_money(p.net_contribution),
                )
        c.print(tbl)
