"""
Dotdash Web Package
===================

HTTP and WebSocket interface for the Morse service, providing:
- FastAPI REST endpoints under /morse
- In-process metrics and health reporting
- Real-time chat rooms with Morse rendering
"""

from .api import create_app
from .websocket import RoomConnection, RoomManager

__all__ = [
    "create_app",
    "RoomConnection",
    "RoomManager",
]
