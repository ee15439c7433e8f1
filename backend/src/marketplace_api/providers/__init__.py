"""External provider integrations package."""
