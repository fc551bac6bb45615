"""Logging infrastructure module."""

from rosetta_llm.infrastructure.logging.logger import JsonFormatter, StructuredLogger, setup_logging

__all__ = ["JsonFormatter", "StructuredLogger", "setup_logging"]
