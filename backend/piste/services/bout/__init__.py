"""Bout domain services: fencer state, event log, clock and controller.

HTTP routes and socket handlers import from here, keeping transport
concerns separated from the bout rules themselves.
"""

from .fencer import Card, CardOutcome, FencerState, Side
from .events import BoutEvent, EventLog
from .clock import Clock
from .controller import BoutConfigError, BoutController

__all__ = [
    'BoutConfigError',
    'BoutController',
    'BoutEvent',
    'Card',
    'CardOutcome',
    'Clock',
    'EventLog',
    'FencerState',
    'Side',
]
