"""Utility helpers for the service charges engine."""
