"""
MeteOps weather-alert dashboard service.
"""

__version__ = "0.1.0"
