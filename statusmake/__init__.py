"""Aggregated health-check endpoint for load balancers and monitoring."""

__version__ = "0.1.0"
