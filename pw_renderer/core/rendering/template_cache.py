"""
Template Cache
==============

Loads HTML templates from disk, renders them with Jinja2 and writes the result
to the temp HTML directory. Template text is cached per template path and evicted
by a watchdog observer when the file changes on disk.
"""

from typing import Any, Callable, Dict, Mapping, Optional, Union
from pathlib import Path
import os
import threading

import jinja2
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver, ObservedWatch

from pw_renderer.config.logging import get_logger
from pw_renderer.config.settings import Settings, get_settings
from pw_renderer.core.rendering.errors import TemplateError


class TemplateChangeHandler(FileSystemEventHandler):
    """Calls ``on_change`` when events in a watched directory touch one template."""

    def __init__(self, tpl_file: str, on_change: Callable[[str], None]):
        super().__init__()
        self.tpl_file = tpl_file
        self._target = os.path.abspath(tpl_file)
        self._on_change = on_change

    def _matches(self, path: Union[str, bytes, None]) -> bool:
        if not path:
            return False
        return os.path.abspath(os.fsdecode(path)) == self._target

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._matches(event.src_path):
            self._on_change(self.tpl_file)

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._matches(event.src_path):
            self._on_change(self.tpl_file)

    def on_moved(self, event: FileSystemEvent) -> None:
        # editors that save atomically rename a temp file over the template
        if not event.is_directory and self._matches(getattr(event, "dest_path", None)):
            self._on_change(self.tpl_file)


class TemplateCache:
    """Template text cache with file-watch invalidation."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        observer: Optional[BaseObserver] = None,
        logger: Any = None,
    ):
        self.settings = settings or get_settings()
        self.logger: Any = (logger or get_logger(__name__)).bind(component="template_cache")
        self.html: Dict[str, str] = {}
        self.watcher: Dict[str, ObservedWatch] = {}
        self._observer = observer
        self._lock = threading.Lock()
        self.env = jinja2.Environment(
            autoescape=jinja2.select_autoescape(["html", "xml"], default_for_string=True),
        )

    @property
    def observer(self) -> BaseObserver:
        """File observer, created and started on first use."""
        if self._observer is None:
            self._observer = Observer()
        if not self._observer.is_alive():
            self._observer.start()
        return self._observer

    def save_path(self, name: str, save_id: str) -> Path:
        """Output HTML path for a render name and save id."""
        return self.settings.temp_html_path / name / f"{save_id}.html"

    def load(self, tpl_file: str) -> str:
        """
        Return the template text, reading it from disk when not cached.

        Raises:
            TemplateError: If the template file cannot be read
        """
        with self._lock:
            cached = self.html.get(tpl_file)
        if cached is not None:
            return cached

        try:
            text = Path(tpl_file).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateError(f"Failed to load template {tpl_file}: {e}") from e

        with self._lock:
            self.html[tpl_file] = text
        try:
            self.watch(tpl_file)
        except Exception as e:
            # served from cache without change detection
            self.logger.warning("Failed to watch html template", tpl_file=tpl_file, error=str(e))
        return text

    def invalidate(self, tpl_file: str) -> None:
        """Evict a cached template so the next render re-reads it."""
        with self._lock:
            self.html.pop(tpl_file, None)
        self.logger.info("Template changed", tpl_file=tpl_file)

    def watch(self, tpl_file: str) -> None:
        """Register a single filesystem watch for ``tpl_file``."""
        if tpl_file in self.watcher:
            return

        directory = os.path.dirname(os.path.abspath(tpl_file))
        handler = TemplateChangeHandler(tpl_file, self.invalidate)
        self.watcher[tpl_file] = self.observer.schedule(handler, directory, recursive=False)

    def deal_tpl(self, name: str, data: Mapping[str, Any]) -> Union[Path, bool]:
        """
        Render a template to an HTML file under the temp directory.

        Args:
            name: Render name, used as the output subdirectory
            data: Job data; ``tplFile`` is required, ``saveId`` defaults to ``name``

        Returns:
            Path of the written HTML file, or False if the template could not be
            loaded, rendered or saved
        """
        tpl_file = data.get("tplFile") or data.get("tpl_file")
        save_id = data.get("saveId") or data.get("save_id") or name
        save_path = self.save_path(name, str(save_id))

        if not tpl_file:
            self.logger.error("Render job has no template file", name=name)
            return False

        try:
            text = self.load(tpl_file)
        except TemplateError as e:
            self.logger.error("Failed to load html template", tpl_file=tpl_file, error=str(e))
            return False

        context = dict(data)
        context["resPath"] = f"{self.settings.resources_path.resolve().as_posix()}/"

        try:
            html = self.env.from_string(text).render(context)
            save_path.parent.mkdir(parents=True, exist_ok=True)
            save_path.write_text(html, encoding="utf-8")
        except Exception as e:
            self.logger.error("Failed to render html template", tpl_file=tpl_file, error=str(e))
            return False

        self.logger.debug("Rendered html template", save_path=str(save_path))
        return save_path

    def close(self) -> None:
        """Stop the file observer and drop all watches."""
        if self._observer is not None and self._observer.is_alive():
            self._observer.unschedule_all()
            self._observer.stop()
            self._observer.join(timeout=1)
        self._observer = None
        self.watcher.clear()
        with self._lock:
            self.html.clear()
