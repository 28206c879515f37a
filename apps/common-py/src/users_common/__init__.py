"""Shared user models, storage adapters and services."""
