"""Development server for Statue.

Serves the built site for local authoring:
- Serves ``index.html`` for directory URLs and extensionless routes.
- Rejects directory listings and missing paths with a 404.
- Watches content, templates, static files and statue.yaml and rebuilds.

Rebuild requests that arrive while a build is running are queued: one
more build runs once the current one finishes, so two builds never touch
the output directory at the same time.

Key classes:
- DevServer: Main class for running the development server.
- _SiteHandler: HTTP request handler resolving clean URLs.
- _ChangeHandler: File system event handler for triggering rebuilds.
"""

from __future__ import annotations

import functools
import logging
import os
import shutil
import threading
import time
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from urllib.parse import quote

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .build import BuildError, build_site
from .cache import ContentCache
from .config import CONFIG_FILENAME, ConfigError, load_config
from .extractors import ContentError

logger = logging.getLogger(__name__)


class _SiteHandler(SimpleHTTPRequestHandler):
    """HTTP request handler serving the build directory with clean URLs."""

    def end_headers(self):
        self.send_header("Cache-Control", "no-cache, no-store, must-revalidate")
        super().end_headers()

    def list_directory(self, path):  # pragma: no cover - exercised via send_head
        self.send_error(404, "Not found")
        return None

    def send_head(self):
        path_obj = Path(self.translate_path(self.path))
        if not path_obj.suffix:
            path_obj = path_obj / "index.html"
        if not path_obj.is_file():
            self.send_error(404, "Not found")
            return None
        self.path = "/" + quote(path_obj.relative_to(Path(self.directory)).as_posix())
        return super().send_head()

    def log_message(self, format, *args):  # noqa: A002 - stdlib signature
        logger.debug("%s - %s", self.address_string(), format % args)


class DevServer:
    """Development server rebuilding the site on changes.

    Attributes:
        project_root: Root directory of the project.
        config: Site configuration.
        output_dir: Directory where built site is served.
        http_port: Port for HTTP server.
        cache: Development-mode content cache shared by every rebuild.
    """

    def __init__(self, project_root: Path, http_port: int | None = None):
        """Initialize the development server.

        Args:
            project_root: Root directory of the project.
            http_port: Optional override for HTTP port.
        """
        self.project_root = project_root
        self.config = load_config(project_root)
        self.output_dir = project_root / self.config.get("output_dir", "build")
        self._staging_dir = self.output_dir.with_name(self.output_dir.name + ".staging")
        self.http_port = int(http_port or self.config.get("port", 3000))
        self.cache = ContentCache(development=True)
        self._observer: Observer | None = None
        self._httpd: ThreadingHTTPServer | None = None
        self._lock = threading.Lock()
        self._building = False
        self._pending = False

    def start(self) -> None:  # pragma: no cover - integration path
        self.rebuild()
        threading.Thread(target=self._start_http, daemon=True).start()
        self._start_watcher()
        logger.info("Watching for changes")
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            self.stop()

    def stop(self) -> None:
        if self._observer:
            self._observer.stop()
            self._observer.join()
        if self._httpd:
            self._httpd.shutdown()

    def _start_http(self) -> None:  # pragma: no cover - integration path
        handler = functools.partial(_SiteHandler, directory=str(self.output_dir))
        self._httpd = ThreadingHTTPServer(("", self.http_port), handler)
        logger.info("Server running at http://localhost:%d", self.http_port)
        self._httpd.serve_forever()

    def _start_watcher(self) -> None:
        handler = _ChangeHandler(self)
        observer = Observer()
        for key, default in (
            ("content_dir", "content"),
            ("templates_dir", "templates"),
            ("static_dir", "static"),
        ):
            watch_path = self.project_root / self.config.get(key, default)
            if watch_path.exists():
                observer.schedule(handler, str(watch_path), recursive=True)
        # statue.yaml lives in the project root
        observer.schedule(handler, str(self.project_root), recursive=False)
        observer.start()
        self._observer = observer

    def request_rebuild(self) -> bool:
        """Queue a rebuild, running it now unless one is in progress.

        Returns:
            True if this call ran the build, False if it was queued.
        """
        with self._lock:
            if self._building:
                self._pending = True
                return False
            self._building = True
        try:
            while True:
                self.rebuild()
                with self._lock:
                    if not self._pending:
                        self._building = False
                        return True
                    self._pending = False
        except BaseException:
            with self._lock:
                self._building = False
            raise

    def rebuild(self) -> bool:
        """Build into a staging directory and swap it into place.

        Config, content and template errors are logged and leave the
        previous output untouched.

        Returns:
            True if the build succeeded.
        """
        logger.info("Building...")
        staging = self._prepare_staging_dir()
        try:
            build_site(
                self.project_root,
                development=True,
                output_dir_override=staging,
                cache=self.cache,
            )
        except (ConfigError, ContentError, BuildError) as exc:
            logger.error("Build failed: %s", exc)
            return False
        self._activate_staging(staging)
        logger.info("Build complete")
        return True

    def _prepare_staging_dir(self) -> Path:
        staging = self._staging_dir
        if staging.exists():
            shutil.rmtree(staging)
        staging.mkdir(parents=True, exist_ok=True)
        return staging

    def _activate_staging(self, staging: Path) -> None:
        target = self.output_dir
        if target.exists():
            shutil.rmtree(target)
        os.replace(staging, target)


class _ChangeHandler(FileSystemEventHandler):
    def __init__(self, server: DevServer):
        super().__init__()
        self.server = server

    def on_any_event(self, event):
        if event.is_directory:
            return
        path = Path(os.fsdecode(event.src_path))
        for ignored in (self.server.output_dir, self.server._staging_dir):
            try:
                path.relative_to(ignored)
                return
            except ValueError:
                pass
        if path.parent == self.server.project_root and path.name != CONFIG_FILENAME:
            return
        logger.info("Changed: %s", path.name)
        self.server.request_rebuild()
