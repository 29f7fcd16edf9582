"""
Renderer Plugin
===============

Factory consumed by the host plugin framework. The returned object exposes a
fixed ``id`` and ``type`` and an async ``render(name, data)`` entry point.
"""

from typing import Any, Dict, Mapping, Optional

from pw_renderer.core.rendering.renderer import PlaywrightRenderer, RenderResult


class RendererPlugin:
    """Host-facing wrapper around ``PlaywrightRenderer``."""

    id = "playwright"
    type = "image"

    def __init__(self, renderer: PlaywrightRenderer):
        self.renderer = renderer

    async def render(self, name: str, data: Optional[Dict[str, Any]] = None) -> RenderResult:
        """Render ``data['tplFile']`` and return image bytes, a list of them, or False."""
        return await self.renderer.screenshot(name, data)

    async def close(self) -> None:
        await self.renderer.close()


def create_renderer(config: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> RendererPlugin:
    """
    Create the renderer plugin.

    Args:
        config: Host configuration with optional ``browserType``, ``headless``,
            ``args`` and ``executablePath`` keys
        **kwargs: Passed to ``PlaywrightRenderer`` (``settings``, ``logger``)

    Returns:
        Plugin object with ``id``, ``type`` and ``render``
    """
    return RendererPlugin(PlaywrightRenderer(config, **kwargs))
