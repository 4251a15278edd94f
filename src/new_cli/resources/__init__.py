"""Packaged resources: telemetry schema and bundled templates."""
