"""Testing fakes – in-memory doubles for the clock and the shared store."""
from ratekeeper.testing.fakes.clock import FAKE_CLOCK_START, FakeClock
from ratekeeper.testing.fakes.store import FailingAtomicStore, InMemoryAtomicStore

__all__ = ["FAKE_CLOCK_START", "FailingAtomicStore", "FakeClock", "InMemoryAtomicStore"]
