"""
connectfour.client - Client side of networked Connect Four
"""

from connectfour.client.board import ClientBoard, ClientStatus
from connectfour.client.network import NetworkClient, apply_message

__all__ = ['ClientBoard', 'ClientStatus', 'NetworkClient', 'apply_message']
