"""
Instrumentation module for sequence-container benchmarking.

Provides timing utilities and tracing integration.
"""

from .timing import (
    Timer,
    TimingResult,
    timed,
)

from .traces import (
    Tracer,
    TracingConfig,
    get_tracer,
    init_tracing,
    shutdown_tracing,
    OTEL_AVAILABLE,
)

__all__ = [
    # Timing
    "Timer",
    "TimingResult",
    "timed",
    # Tracing
    "Tracer",
    "TracingConfig",
    "get_tracer",
    "init_tracing",
    "shutdown_tracing",
    "OTEL_AVAILABLE",
]
