"""Static summary plots."""

__all__ = [
    "participants",
    "timeseries",
]
