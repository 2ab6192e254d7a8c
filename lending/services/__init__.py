"""
Services Package

- Library: aggregate root coordinating loans, returns and reservations
"""

from .library_service import Library

__all__ = ['Library']
