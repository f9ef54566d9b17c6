"""Adapters – data sources and framework integrations.

Each subpackage needs its extra installed (``pagequery[sqlalchemy]``,
``pagequery[fastapi]``); ``memory`` has no extra requirements.
"""
