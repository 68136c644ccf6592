"""
Metric registry.

Wraps a prometheus_client CollectorRegistry so every metric the process
exports lives in one explicitly constructed object. The registry is built
once during start-up and handed to the updater and the exporter; nothing
reaches it through module globals, so tests can build as many as they like.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union

from prometheus_client import CollectorRegistry, Gauge

from nodepulse.errors import MetricRegistrationError

logger = logging.getLogger(__name__)

Number = Union[int, float]

# Names the 0.0.4 text format can carry without quoting
METRIC_NAME_RE = re.compile(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")

# Largest magnitude a float64 gauge value holds exactly
MAX_EXACT_INT = 2 ** 53


@dataclass(frozen=True)
class SampleSnapshot:
    """One exported sample line."""

    name: str
    labels: Dict[str, str] = field(default_factory=dict)
    value: Number = 0


@dataclass(frozen=True)
class MetricFamilySnapshot:
    """
    Read of one metric family at snapshot time.

    For an unlabelled gauge there is exactly one sample and ``value`` is the
    gauge value.
    """

    name: str
    help: str
    kind: str
    samples: Tuple[SampleSnapshot, ...] = ()

    @property
    def value(self) -> Number:
        if not self.samples:
            return 0
        return self.samples[0].value


class IntGauge:
    """
    Handle on an integer gauge owned by a MetricsRegistry.

    Writes and reads go through prometheus_client's value lock, so a reader
    never sees a half-written value.
    """

    def __init__(self, gauge: Gauge, name: str, help: str):
        self._gauge = gauge
        self._name = name
        self._help = help

    @property
    def name(self) -> str:
        return self._name

    @property
    def help(self) -> str:
        return self._help

    def set(self, value: int) -> None:
        """
        Set the gauge. Last writer wins.

        Raises:
            TypeError: If value is not an int
            ValueError: If abs(value) exceeds 2**53 and would lose precision
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(
                f"Gauge {self._name} only accepts integers, got {type(value).__name__}"
            )
        if abs(value) > MAX_EXACT_INT:
            raise ValueError(
                f"Gauge {self._name} cannot hold {value} exactly (limit is 2**53)"
            )
        self._gauge.set(value)

    @property
    def value(self) -> int:
        """Current gauge value."""
        samples = self._gauge.collect()[0].samples
        return int(samples[0].value)

    def __repr__(self) -> str:
        return f"IntGauge(name={self._name!r}, value={self.value})"


def _normalize_value(value: float) -> Number:
    """Return integral sample values as int, everything else untouched."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class MetricsRegistry:
    """
    Collection of named metrics for one process.

    Usage:
        registry = MetricsRegistry()
        gauge = registry.register_gauge("service_health_score", "Current health score (0-100)")
        gauge.set(100)

        for family in registry.snapshot():
            print(family.name, family.value)

    Registration is meant for the single-threaded start-up phase. Updates and
    snapshots may then run concurrently from any thread.
    """

    def __init__(self, collector_registry: Optional[CollectorRegistry] = None):
        """
        Initialize metric registry.

        Args:
            collector_registry: Underlying prometheus registry (a fresh one if omitted)
        """
        # auto_describe makes the registry learn the names of collectors that
        # do not implement describe(), so clashes with them are detected too.
        if collector_registry is None:
            collector_registry = CollectorRegistry(auto_describe=True)
        self._registry = collector_registry
        self._gauges: Dict[str, IntGauge] = {}

    @property
    def collector_registry(self) -> CollectorRegistry:
        """The underlying prometheus_client registry."""
        return self._registry

    def register_gauge(self, name: str, help: str) -> IntGauge:
        """
        Create and register an integer gauge.

        Args:
            name: Metric name (stable, part of the scrape contract)
            help: Human readable description

        Returns:
            Handle used to set and read the gauge

        Raises:
            MetricRegistrationError: If the name is invalid or already registered
        """
        if not METRIC_NAME_RE.fullmatch(name):
            raise MetricRegistrationError(f"Invalid metric name: {name!r}")
        if name in self._gauges:
            raise MetricRegistrationError(f"Metric already registered: {name}")

        try:
            gauge = Gauge(name, help, registry=self._registry)
        except ValueError as e:
            raise MetricRegistrationError(f"Cannot register metric {name}: {e}") from e

        handle = IntGauge(gauge, name, help)
        self._gauges[name] = handle
        logger.info(f"Registered gauge {name}")
        return handle

    def register_collector(self, collector) -> None:
        """
        Register an additional prometheus_client collector.

        Args:
            collector: Collector instance (e.g. ProcessCollector(registry=None))

        Raises:
            MetricRegistrationError: If any of its metric names is taken
        """
        try:
            self._registry.register(collector)
        except ValueError as e:
            raise MetricRegistrationError(
                f"Cannot register collector {type(collector).__name__}: {e}"
            ) from e
        logger.debug(f"Registered collector {type(collector).__name__}")

    def get_gauge(self, name: str) -> IntGauge:
        """Return the gauge registered under ``name``."""
        try:
            return self._gauges[name]
        except KeyError:
            raise KeyError(f"No gauge registered under {name!r}") from None

    @property
    def names(self) -> List[str]:
        """Names of the gauges registered through this registry."""
        return list(self._gauges)

    def snapshot(self) -> List[MetricFamilySnapshot]:
        """
        Read every metric in the registry.

        Each metric is read atomically; different metrics may be read at
        slightly different moments relative to concurrent updates.

        Returns:
            One MetricFamilySnapshot per metric family, in registration order
        """
        families = []
        for metric in self._registry.collect():
            samples = tuple(
                SampleSnapshot(
                    name=sample.name,
                    labels=dict(sample.labels),
                    value=_normalize_value(sample.value),
                )
                for sample in metric.samples
            )
            families.append(
                MetricFamilySnapshot(
                    name=metric.name,
                    help=metric.documentation,
                    kind=metric.type,
                    samples=samples,
                )
            )
        return families

    def __contains__(self, name: str) -> bool:
        return name in self._gauges

    def __len__(self) -> int:
        return len(self._gauges)

    def __iter__(self) -> Iterator[IntGauge]:
        return iter(list(self._gauges.values()))
