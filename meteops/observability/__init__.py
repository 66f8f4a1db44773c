"""
Observability for MeteOps: logging, metrics and HTTP endpoints.
"""
