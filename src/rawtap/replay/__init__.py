"""
RawTap Replay Module

Sends parsed raw requests to a live server.

This module provides:
- Request building from parsed request files
- A transport session with fixed TLS, cookie and redirect policy
- YAML replay configuration
- Response and request dumping
"""

from .builder import RequestBuilder
from .transport import TransportSession
from .replay_config import ReplayConfig
from .replayer import RawRequestReplayer, ReplayResult

__all__ = [
    'RequestBuilder',
    'TransportSession',
    'ReplayConfig',
    'RawRequestReplayer',
    'ReplayResult',
]
