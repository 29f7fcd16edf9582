"""Exceptions raised inside the rendering pipeline."""


class RenderError(Exception):
    """Exception raised when an image render fails."""

    pass


class BrowserLaunchError(RenderError):
    """Exception raised when the browser process cannot be launched."""

    pass


class TemplateError(RenderError):
    """Exception raised when a template cannot be loaded, rendered or saved."""

    pass
