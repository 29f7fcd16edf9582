"""
Configuration Management
=======================

Environment-based configuration using Pydantic Settings.

Components:
- settings: Process-wide renderer settings and environment configuration
- logging: Structured logging configuration
"""
