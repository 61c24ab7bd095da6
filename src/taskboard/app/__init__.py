"""FastAPI application package for the taskboard service."""
