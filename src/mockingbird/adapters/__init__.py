"""
MockingBird Host Adapters

Bindings that register MockingBird in front of real HTTP stacks.
"""

from .requests_adapter import MockingBirdAdapter, ResponseCollector, register_in_session
from .httpx_transport import MockingBirdTransport, create_client

__all__ = [
    'MockingBirdAdapter',
    'ResponseCollector',
    'register_in_session',
    'MockingBirdTransport',
    'create_client',
]
