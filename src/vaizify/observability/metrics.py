"""Metrics hook protocol and no-op default implementation.

The transport reports counters and timings for every API call.  Without a
backend a :class:`NoopMetricsHook` absorbs them; pass any object that
satisfies :class:`MetricsHook` as ``VaizifyConfig.metrics`` to forward
them to StatsD, Prometheus, Datadog and the like.

Emitted metric names:

* ``vaizify.requests_total``       -- counter, tagged ``endpoint`` / ``status``
* ``vaizify.retries_total``        -- counter, tagged ``endpoint`` / ``reason``
* ``vaizify.request_duration_ms``  -- timing, tagged ``endpoint`` / ``status``
* ``vaizify.nodes_written_total``  -- counter, tagged ``op``
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    *tags* is an optional ``str -> str`` mapping that implementations
    translate into their backend's labels.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment the counter *name* by *value*."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration of *ms* milliseconds under *name*."""
        ...


class NoopMetricsHook:
    """Metrics backend that discards every data point."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
