"""Observability – structured logging helpers."""
from pagequery.observability.logging.factory import JsonLoggerFactory
from pagequery.observability.logging.logger import get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
