"""Filesystem helpers for devdb."""

import logging
import os
import shutil
import tempfile

from rich.console import Console

from devdb.errors import DevDBError


class FileSystemService:
    """Encapsulates file and directory side effects."""

    def __init__(self, logger: logging.Logger, console: Console):
        self.logger = logger
        self.console = console

    def make_temp_dir(self, prefix: str = "devdb-") -> str:
        path = tempfile.mkdtemp(prefix=prefix)
        self.logger.debug("Created directory: %s", path)
        return path

    def write_text(self, path: str, content: str):
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        try:
            with open(path, "w", encoding="utf-8", newline="\n") as file_obj:
                file_obj.write(content)
        except OSError as exc:
            raise DevDBError(f"Could not write {path}: {exc}") from exc

    def copy_file(self, source: str, destination: str):
        os.makedirs(os.path.dirname(destination) or ".", exist_ok=True)
        try:
            shutil.copy2(source, destination)
        except OSError as exc:
            raise DevDBError(f"Could not copy {source} to {destination}: {exc}") from exc

    def cleanup_dir(self, path: str):
        if os.path.exists(path):
            try:
                shutil.rmtree(path)
                self.logger.debug("Removed directory: %s", path)
            except Exception as exc:
                message = f"Warning: Could not remove {path}: {exc}"
                self.console.print(f"[yellow]{message}[/yellow]")
                self.logger.warning(message)
