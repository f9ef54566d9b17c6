"""In-memory adapter – list-backed data source."""
from pagequery.adapters.memory.data_source import InMemoryDataSource

__all__ = ["InMemoryDataSource"]
