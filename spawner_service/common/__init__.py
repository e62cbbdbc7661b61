"""Shared AWS helpers."""
