"""
connectfour.interfaces - User interfaces for Connect Four

This package contains the front ends that drive a networked client.
"""

# Don't import anything here to avoid circular imports
__all__ = []
