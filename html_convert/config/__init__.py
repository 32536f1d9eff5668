"""
Configuration Management
=======================

Environment-based configuration using Pydantic Settings.

Components:
- settings: Conversion, browser and logging settings
- logging: Structured logging configuration
"""
