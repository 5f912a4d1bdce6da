"""
Dispatching of transport units to pending missions.
"""

from .dispatcher import Dispatcher
from .models import Assignment, DispatchResult, DispatchUnavailable
from .strategies import (
    DispatchStrategy,
    FirstAvailableDispatch,
    UserDefinedDispatch,
    is_busy,
)

__all__ = [
    "Dispatcher",
    "Assignment",
    "DispatchResult",
    "DispatchUnavailable",
    "DispatchStrategy",
    "FirstAvailableDispatch",
    "UserDefinedDispatch",
    "is_busy",
]
