"""Core server application package."""
