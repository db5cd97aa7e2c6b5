"""
Module: utils
Description: Package initialization for utility functions.

This package contains shared helpers used throughout the dashboard:
- logger: Structured logging configuration and helpers
- activity: Bounded activity feed mirrored into the structured log
"""

__all__ = []
