"""Core layer: models, storage, repositories, and services."""
