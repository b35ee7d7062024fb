"""Kernel time – Clock port + implementations."""
from ratekeeper.kernel.time.clock import Clock, FrozenClock, SystemClock

__all__ = ["Clock", "FrozenClock", "SystemClock"]
