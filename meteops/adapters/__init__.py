"""
Adapters for MeteOps hexagonal architecture.

This module contains the concrete implementations of port interfaces
that handle external I/O and infrastructure concerns.
"""

from .mock_data import MockDataSource
from .genai.client import JustificationClient

__all__ = ["MockDataSource", "JustificationClient"]
