"""Database module for the task tracker."""

from .pool import Database, close_database, open_database

__all__ = ["Database", "close_database", "open_database"]
