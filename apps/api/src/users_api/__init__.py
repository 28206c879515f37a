"""User service HTTP API."""
