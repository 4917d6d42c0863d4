"""
api-specs Runner Module

Executes collection requests against live servers.

This module provides:
- Variable scope merging and {{placeholder}} substitution
- Single request execution with timing
- Sequential collection runs with skip-and-continue failures
"""

from .config import RunConfig
from .executor import RequestExecutor, SUPPORTED_METHODS
from .runner import CollectionRunner, RequestFailure, RunResult
from .variables import VariableScope, VariableSubstitutor, merge_scopes, substitute

__all__ = [
    'RunConfig',
    'RequestExecutor',
    'SUPPORTED_METHODS',
    'CollectionRunner',
    'RequestFailure',
    'RunResult',
    'VariableScope',
    'VariableSubstitutor',
    'merge_scopes',
    'substitute',
]
