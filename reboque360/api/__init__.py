# reboque360/api/__init__.py
"""
HTTP API (FastAPI).
"""

__all__: list[str] = []
