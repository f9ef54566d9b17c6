"""
pagequery – whitelisted filter, sort and pagination core for search endpoints.

Import path convention::

    from pagequery.application.whitelist import FieldSpec, FieldWhitelist, FilterKind
    from pagequery.application.search import EntityDefinition, SearchService
    from pagequery.adapters.sqlalchemy import SqlAlchemyDataSource
    from pagequery.kernel.errors import InvalidFilterField
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
