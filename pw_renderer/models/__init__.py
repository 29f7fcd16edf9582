"""
Data Models
===========

Pydantic models for renderer configuration and per-call render jobs.
"""
