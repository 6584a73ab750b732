"""
In-memory CRUD core: entity stores, a dependency registry and an operation handler
"""

__version__ = "1.0.0"
