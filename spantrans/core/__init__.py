"""
Core module - Settings persistence

This module provides:
- database: app_config key/value operations
- schema: Database initialization and migrations
"""
