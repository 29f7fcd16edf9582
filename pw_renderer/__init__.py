"""
Playwright Image Renderer
=========================

An HTML-to-image rendering plugin. Templates are rendered with Jinja2,
loaded in a headless browser driven by Playwright, and captured as
screenshots (optionally paginated for tall content).

This package provides:
- A plugin factory exposing an async ``render(name, data)`` entry point
- Lazy, single-flight browser lifecycle management with periodic recycling
- A template cache invalidated by filesystem watches
"""

from pw_renderer.plugin import RendererPlugin, create_renderer

__version__ = "1.0.0"

__all__ = ["RendererPlugin", "create_renderer", "__version__"]
