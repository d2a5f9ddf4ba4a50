"""Database engine detection from SQL dump headers."""

from itertools import islice
from typing import Optional

from devdb.constants import DETECTION_LINES
from devdb.errors import InvalidInputError
from devdb.errors_catalog import actionable_error
from devdb.models import Engine


class EngineDetector:
    """Guesses the engine that produced a dump by scanning its first lines."""

    def __init__(self, logger, max_lines: int = DETECTION_LINES):
        self.logger = logger
        self.max_lines = max_lines

    def read_header(self, path: str) -> str:
        try:
            with open(path, "r", encoding="utf-8", errors="ignore") as file_obj:
                return "".join(islice(file_obj, self.max_lines))
        except OSError as exc:
            raise InvalidInputError(actionable_error("dump_not_found", path=path)) from exc

    def detect(self, path: str) -> Optional[Engine]:
        header = self.read_header(path).lower()
        for engine in Engine:
            if engine.keyword in header:
                self.logger.debug("Detected %s keyword in %s", engine.value, path)
                return engine

        self.logger.debug("No engine keyword in the first %s lines of %s", self.max_lines, path)
        return None

    def resolve(self, path: str, explicit: Optional[str] = None) -> Engine:
        if explicit:
            return Engine.parse(explicit)

        engine = self.detect(path)
        if engine is None:
            raise InvalidInputError(
                actionable_error(
                    "engine_not_detected",
                    path=path,
                    engines=", ".join(Engine.names()),
                )
            )
        return engine
