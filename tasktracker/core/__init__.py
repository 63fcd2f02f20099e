"""Core configuration for the task tracker."""
