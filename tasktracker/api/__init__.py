"""HTTP API for the task tracker."""
