"""Service layer for CLI/API reuse."""
