"""
Utilities Package
Logging setup shared by the entry points
"""

from .logging_config import configure_logging

__all__ = ['configure_logging']
