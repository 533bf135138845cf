"""
Utility modules for Bucko.
"""

from .query import encode_parameters, query_components

__all__ = ["encode_parameters", "query_components"]
