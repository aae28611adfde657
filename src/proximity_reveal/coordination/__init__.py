"""Coordination module: single writer, debouncing, host events."""

from .participants import current_writer, is_current_writer
from .debounce import Debouncer
from .hooks import HookRegistry
from .channel import RecomputeRequest, HttpWriterChannel
from .service import VisibilityService

__all__ = [
    'current_writer',
    'is_current_writer',
    'Debouncer',
    'HookRegistry',
    'RecomputeRequest',
    'HttpWriterChannel',
    'VisibilityService',
]
