"""Shared test support modules."""
