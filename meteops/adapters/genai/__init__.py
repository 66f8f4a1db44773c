"""
Language-model adapters for MeteOps.

This module contains the client that drafts alert justifications
and suggests alert edits through an OpenAI-compatible endpoint.
"""

from .client import JustificationClient

__all__ = ["JustificationClient"]
