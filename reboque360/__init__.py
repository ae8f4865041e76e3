# reboque360/__init__.py
"""
Reboque360: заявки, выезды, финансы и автопарк для эвакуаторов.
"""

__version__ = "1.0.0"
