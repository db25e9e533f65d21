"""
Core support module.

Exports:
- CompilerConfig: Capacities and tag conventions
- BoundedBuffer: Fixed-capacity ordered buffer
- EventBus, Event, CompilerEvent, DropKind: Compile diagnostics
- DialogScriptError, GraphFormatError: Error types
"""

from dialogscript.core.config import CompilerConfig
from dialogscript.core.buffers import BoundedBuffer
from dialogscript.core.events import EventBus, Event, CompilerEvent, DropKind
from dialogscript.core.errors import DialogScriptError, GraphFormatError

__all__ = [
    "CompilerConfig",
    "BoundedBuffer",
    "EventBus",
    "Event",
    "CompilerEvent",
    "DropKind",
    "DialogScriptError",
    "GraphFormatError",
]
