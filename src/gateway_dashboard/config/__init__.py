"""
Package: config
Description: Dashboard configuration loaded with pydantic-settings.
"""
