"""Biometric attendance text ingestion service."""

__version__ = "0.1.0"
