"""
Backend package for the Lokality API.

This package provides a FastAPI application for property reels, search,
chat and ironing orders, with storage, database and presence abstractions
so the same service runs against in-memory backends locally and managed
backends in production.
"""
