"""Testing – in-memory doubles for the shared store and the clock."""
from ratekeeper.testing.fakes import FailingAtomicStore, FakeClock, InMemoryAtomicStore

__all__ = ["FailingAtomicStore", "FakeClock", "InMemoryAtomicStore"]
