"""Authentication and authorization package."""
