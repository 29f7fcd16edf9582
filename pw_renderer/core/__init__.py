"""
Core Rendering Logic
====================

Modules:
- rendering: browser lifecycle, template caching and screenshot capture
"""
