"""Marketplace API - RBAC, configuration, account security and vehicle data."""

__version__ = "0.1.0"
