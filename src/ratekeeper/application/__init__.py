"""Application layer – rate-decision engine."""
