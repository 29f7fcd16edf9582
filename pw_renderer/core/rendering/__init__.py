"""
Rendering Module
===============

HTML template rendering and screenshot capture with browser automation.

Components:
- browser_manager: Lazy Playwright browser launch, disconnect handling and recycling
- template_cache: Jinja2 template cache invalidated by watchdog file watches
- renderer: Screenshot orchestration and pagination
"""

from pw_renderer.core.rendering.errors import BrowserLaunchError, RenderError, TemplateError

__all__ = ["RenderError", "BrowserLaunchError", "TemplateError"]
