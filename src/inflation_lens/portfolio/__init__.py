"""Portfolio valuation snapshots and their dense daily/monthly series."""
