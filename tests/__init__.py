"""
Test Suite
==========

Test suite matching the pw_renderer/ package structure.

Test Categories:
- unit: Unit tests for individual components, with Playwright mocked out
"""
