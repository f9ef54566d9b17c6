"""Testing fakes – data-source doubles."""
from pagequery.testing.fakes.data_source import DataSourceCall, FailingDataSource, RecordingDataSource

__all__ = ["DataSourceCall", "FailingDataSource", "RecordingDataSource"]
