"""Descriptive statistics over a library's lending history."""
