"""
Logistics Core.

Django project package for the yard logistics coordination service:
settings, URL routing, the response envelope and the shared error types.
"""

__version__ = '0.1.0'
