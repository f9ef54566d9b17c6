"""Testing support – data-source fakes and Hypothesis strategies.

The strategies live in :mod:`pagequery.testing.strategies` and need the
``testing`` extra.
"""

from pagequery.testing.fakes import DataSourceCall, FailingDataSource, RecordingDataSource

__all__ = ["DataSourceCall", "FailingDataSource", "RecordingDataSource"]
