"""Curve sampling helpers."""
