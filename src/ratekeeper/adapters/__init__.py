"""Adapters – concrete shared stores and framework integrations."""
