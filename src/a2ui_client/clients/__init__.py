"""
Client modules for agent server communication
"""

from .transport import HttpTransport, Transport

__all__ = ["HttpTransport", "Transport"]
