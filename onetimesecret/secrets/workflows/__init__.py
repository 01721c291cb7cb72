"""Workflows built on top of the API client."""
