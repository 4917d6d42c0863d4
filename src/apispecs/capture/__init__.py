"""
api-specs Capture Module

Trace recording and HAR import/export.
"""

from .trace import PostData, TraceEntry, TraceRecorder, TraceRequest, TraceResponse
from .exporters import HarExporter

__all__ = [
    'PostData',
    'TraceEntry',
    'TraceRecorder',
    'TraceRequest',
    'TraceResponse',
    'HarExporter',
]
