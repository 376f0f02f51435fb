"""Match domain services: slot registry, inactivity timers and the relay.

This package holds the two-player match state and its forwarding rules.
Socket handlers import from here so transport concerns stay separated
from slot bookkeeping.
"""

from .slots import SlotRegistry, SlotState, SlotView
from .timer import InactivityTimer
from .relay import Connection, ConnectionState, MatchRelay

__all__ = [
    'Connection',
    'ConnectionState',
    'InactivityTimer',
    'MatchRelay',
    'SlotRegistry',
    'SlotState',
    'SlotView',
]
