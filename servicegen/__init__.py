"""Kotlin binding generator for remote-service declarations."""
