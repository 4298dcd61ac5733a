"""Provider adapters and metric catalogs.

Each provider normalizes its payload into `Observation` rows before anything
downstream sees it; the rest of the pipeline never branches on provider.
"""
from __future__ import annotations

from inflation_lens.config import FetchConfig
from inflation_lens.inflation.models import Granularity, InflationSource, MetricDefinition, ValueKind
from inflation_lens.inflation.sources.base import InflationProvider, ProviderError, build_proxied_url
from inflation_lens.inflation.sources.dbnomics import DBNOMICS_METRICS, DbnomicsClient
from inflation_lens.inflation.sources.imf import IMF_METRICS, ImfClient, is_dual_rate
from inflation_lens.inflation.sources.world_bank import WORLD_BANK_METRICS, WorldBankClient

METRICS: dict[InflationSource, list[MetricDefinition]] = {
    InflationSource.WORLD_BANK: WORLD_BANK_METRICS,
    InflationSource.IMF: IMF_METRICS,
    InflationSource.DBNOMICS: DBNOMICS_METRICS,
}

_CLIENTS = {
    InflationSource.WORLD_BANK: WorldBankClient,
    InflationSource.IMF: ImfClient,
    InflationSource.DBNOMICS: DbnomicsClient,
}


def make_provider(source: InflationSource | str, config: FetchConfig | None = None) -> InflationProvider:
    return _CLIENTS[InflationSource(source)](config)


def resolve_metric(
    source: InflationSource | str,
    metric_id: str | None,
    kind: ValueKind | str | None = None,
) -> MetricDefinition:
    """
    Look up a catalog metric; unknown ids need an explicit `kind` and become a
    custom definition. `metric_id=None` picks the first catalog entry.
    """
    source = InflationSource(source)
    catalog = METRICS[source]
    if not metric_id:
        return catalog[0]
    for m in catalog:
        if m.id == metric_id:
            if kind is not None and ValueKind(kind) != m.kind:
                return MetricDefinition(m.id, m.label, ValueKind(kind), m.source, m.frequency, m.notes)
            return m
    if kind is None:
        raise KeyError(f"Unknown {source.value} metric '{metric_id}' (pass a value kind for custom metrics)")
    return MetricDefinition(metric_id.strip(), f"Custom: {metric_id.strip()}", ValueKind(kind), source)


def granularity_for(metric: MetricDefinition, frequency: str = "A") -> Granularity:
    """Monthly only where the provider actually yields monthly periods."""
    if metric.source == InflationSource.IMF and is_dual_rate(metric.id):
        return Granularity.MONTH
    if metric.source == InflationSource.DBNOMICS and frequency.upper() == "M":
        return Granularity.MONTH
    return Granularity.YEAR


__all__ = [
    "METRICS",
    "InflationProvider",
    "ProviderError",
    "build_proxied_url",
    "granularity_for",
    "make_provider",
    "resolve_metric",
]
