"""Latency measurement for external calls."""

import logging
import time
from typing import Callable, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def timeit(label: str, fn: Callable[[], T], enabled: bool = True) -> Tuple[float, T]:
    """
    Run `fn` and measure how long it took.

    Args:
        label: Name shown in the log line
        fn: Zero-argument callable to run
        enabled: Log the measurement when True

    Returns:
        (elapsed milliseconds, return value of fn)
    """
    start = time.perf_counter()
    value = fn()
    elapsed_ms = (time.perf_counter() - start) * 1000
    if enabled:
        logger.info(f"[Perf] {label}: {elapsed_ms:.2f} ms")
    return elapsed_ms, value
