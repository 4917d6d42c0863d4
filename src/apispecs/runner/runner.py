"""
api-specs Collection Runner

Runs every request of a collection in document order, one at a time, and
records the successful exchanges as a trace.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from ..capture import TraceRecorder
from ..collection import Collection, Environment
from ..errors import ExecutionError
from .config import RunConfig
from .executor import RequestExecutor
from .variables import VariableScope, merge_scopes

logger = logging.getLogger("apispecs.runner")


@dataclass
class RequestFailure:
    """A request that was skipped because it could not be executed."""

    name: str
    error_type: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {'name': self.name, 'error_type': self.error_type, 'message': self.message}


@dataclass
class RunResult:
    """Results from a collection run."""

    trace: TraceRecorder
    total_requests: int
    total_duration_sec: float
    failures: List[RequestFailure] = field(default_factory=list)

    @property
    def successful_requests(self) -> int:
        return len(self.trace)

    @property
    def failed_requests(self) -> int:
        return len(self.failures)

    @property
    def success_rate(self) -> float:
        """Calculate success rate percentage."""
        if self.total_requests == 0:
            return 0.0
        return (self.successful_requests / self.total_requests) * 100

    @property
    def avg_duration_ms(self) -> float:
        """Calculate average response time."""
        if not self.trace.entries:
            return 0.0
        return sum(e.time_ms for e in self.trace.entries) / len(self.trace.entries)

    def to_dict(self) -> Dict[str, Any]:
        """Summary without the trace itself."""
        return {
            'total_requests': self.total_requests,
            'successful_requests': self.successful_requests,
            'failed_requests': self.failed_requests,
            'success_rate': round(self.success_rate, 2),
            'avg_duration_ms': round(self.avg_duration_ms, 2),
            'total_duration_sec': round(self.total_duration_sec, 2),
            'failures': [f.to_dict() for f in self.failures]
        }


class CollectionRunner:
    """
    Execute a collection against live servers and capture the traffic.

    Requests run sequentially in collection order. A request that can't be
    executed (bare URL form, unsupported method, transport failure) is
    logged and skipped; the run always continues.

    Example:
        runner = CollectionRunner(collection, environment)
        result = runner.run()
        HarExporter.export(result.trace, 'api-run.har')
    """

    def __init__(
        self,
        collection: Collection,
        environment: Optional[Environment] = None,
        config: Optional[RunConfig] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize runner.

        Args:
            collection: Parsed collection
            environment: Optional environment whose values override collection variables
            config: Run configuration
            session: Optional requests session (mainly for tests)
        """
        self.collection = collection
        self.environment = environment
        self.config = config or RunConfig()
        self.session = session

        logger.setLevel(getattr(logging, self.config.log_level.upper(), logging.INFO))

        self.variables: VariableScope = merge_scopes(
            collection.variables(),
            environment.variables() if environment else None
        )

    def run(self) -> RunResult:
        """
        Run all requests.

        Returns:
            RunResult holding the trace and a summary
        """
        requests_to_run = self.collection.get_all_requests()
        total = len(requests_to_run)
        trace = TraceRecorder()
        failures: List[RequestFailure] = []

        logger.info("Running %d requests from '%s'", total, self.collection.info.name)
        start_time = time.time()

        executor = RequestExecutor(self.config, session=self.session)
        try:
            for i, item in enumerate(requests_to_run, 1):
                try:
                    entry = executor.execute(item.request, self.variables, name=item.name)
                except ExecutionError as e:
                    logger.warning("[%d/%d] %s failed: %s", i, total, item.name, e)
                    failures.append(RequestFailure(item.name, type(e).__name__, str(e)))
                    continue

                trace.record(entry)
                logger.info(
                    "[%d/%d] %s %s → %d %s (%.0fms)",
                    i, total, entry.request.method, entry.request.url,
                    entry.response.status, entry.response.status_text, entry.time_ms
                )
        finally:
            if self.session is None:
                executor.close()

        result = RunResult(
            trace=trace,
            total_requests=total,
            total_duration_sec=time.time() - start_time,
            failures=failures
        )
        logger.info(
            "Run finished: %d/%d succeeded in %.2fs",
            result.successful_requests, total, result.total_duration_sec
        )
        return result
