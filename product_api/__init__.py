"""Product API: a small FastAPI + MongoDB CRUD service for products."""

__version__ = "1.0.0"
