"""SQLAlchemy adapter – async session factory and predicate-tree data source."""
from pagequery.adapters.sqlalchemy.session import SqlAlchemySessionFactory
from pagequery.adapters.sqlalchemy.data_source import SqlAlchemyDataSource

__all__ = ["SqlAlchemyDataSource", "SqlAlchemySessionFactory"]
