"""Asynchronous scanning engine of pathlength.

This package contains the filesystem adapter, the error policies, the
result collector, the event system and the PathLength engine that ties
them together. All filesystem I/O is non-blocking.
"""

# Filesystem access
from .node import PathNode
from .adapter import AsyncPathAdapter, FileSystemAdapter

# Error handling
from .error_policies import (
    ErrorPolicy,
    FailFastPolicy,
    ContinueOnErrorsPolicy,
)
from .error_handling import ErrorHandlingAdapter, create_resilient_adapter

# Collection and events
from .collector import ResultCollector
from .events import (
    EventDispatcher,
    EventType,
    CheckStartedEvent,
    PathCheckingEvent,
    PathFoundEvent,
    ScanEndedEvent,
)

# Engine
from .scanner import PathLength, ScanState

# High-level API
from .api import (
    check_path_lengths,
    find_paths,
    find_long_paths,
)

__all__ = [
    # Filesystem access
    'PathNode',
    'AsyncPathAdapter',
    'FileSystemAdapter',
    # Error handling
    'ErrorPolicy',
    'FailFastPolicy',
    'ContinueOnErrorsPolicy',
    'ErrorHandlingAdapter',
    'create_resilient_adapter',
    # Collection and events
    'ResultCollector',
    'EventDispatcher',
    'EventType',
    'CheckStartedEvent',
    'PathCheckingEvent',
    'PathFoundEvent',
    'ScanEndedEvent',
    # Engine
    'PathLength',
    'ScanState',
    # High-level API
    'check_path_lengths',
    'find_paths',
    'find_long_paths',
]
