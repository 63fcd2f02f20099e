"""Command line interface for the task tracker."""
