"""Command line interface."""

EXIT_SUCCESS = 0
EXIT_ERROR = 2  # Invalid configuration or arguments
