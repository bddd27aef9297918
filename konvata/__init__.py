# konvata/__init__.py
"""Konvata: live and historical cryptocurrency rates and conversion API."""

__version__ = "0.1.0"
