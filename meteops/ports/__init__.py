"""
Port interfaces for MeteOps hexagonal architecture.

This module defines the port interfaces (Protocols) that define
the contracts between the core domain and external adapters.
"""

from .reference_data import ReferenceDataPort
from .justification import JustificationPort

__all__ = ["ReferenceDataPort", "JustificationPort"]
