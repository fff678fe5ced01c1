"""Metrics hook protocol and its no-op default.

The converters report counters and timings through whatever object is set
as :attr:`ConverterConfig.metrics`.  Anything with ``increment``, ``timing``
and ``gauge`` methods works; when nothing is configured a
:class:`NoopMetricsHook` absorbs the calls.

Emitted metric names:

* ``drafthtml.blocks_exported_total``      -- counter
* ``drafthtml.export_duration_ms``         -- timing
* ``drafthtml.blocks_imported_total``      -- counter
* ``drafthtml.entities_imported_total``    -- counter
* ``drafthtml.import_duration_ms``         -- timing
* ``drafthtml.conversion_warnings_total``  -- counter
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol a metrics backend must satisfy.

    *tags* are string key/value pairs the backend may map onto its own
    labelling scheme.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment counter *name* by *value*."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration of *ms* milliseconds."""
        ...

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Set gauge *name* to *value*."""
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

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
