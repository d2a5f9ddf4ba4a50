"""Shared domain models for devdb."""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from .constants import (
    DEFAULT_DATABASE,
    HEALTH_INTERVAL_SECONDS,
    HEALTH_MAX_ATTEMPTS,
    ROOT_USER,
    SERVER_NAME_PREFIX,
)
from .errors import InvalidInputError
from .errors_catalog import actionable_error


class Engine(Enum):
    """Supported database engines, in detection priority order."""

    MYSQL = "mysql"
    MARIADB = "mariadb"
    POSTGRES = "postgres"

    @classmethod
    def names(cls) -> List[str]:
        return [engine.value for engine in cls]

    @classmethod
    def parse(cls, name: str) -> "Engine":
        clean_name = (name or "").strip().lower()
        for engine in cls:
            if engine.value == clean_name:
                return engine
        raise InvalidInputError(
            actionable_error("unsupported_engine", engine=name, engines=", ".join(cls.names()))
        )

    @property
    def keyword(self) -> str:
        return self.value

    @property
    def server_name(self) -> str:
        return f"{SERVER_NAME_PREFIX}_{self.value}"

    @property
    def base_image(self) -> str:
        return {
            Engine.MYSQL: "mysql:8.0",
            Engine.MARIADB: "mariadb:11",
            Engine.POSTGRES: "postgres:16",
        }[self]

    @property
    def internal_port(self) -> int:
        return 5432 if self is Engine.POSTGRES else 3306

    @property
    def url_scheme(self) -> str:
        return "postgresql" if self is Engine.POSTGRES else "mysql"

    def environment(self, user: str, password: str, database: str) -> Dict[str, str]:
        """Credential variables understood by the engine's official image."""
        if self is Engine.POSTGRES:
            return {
                "POSTGRES_USER": user,
                "POSTGRES_PASSWORD": password,
                "POSTGRES_DB": database,
            }

        prefix = "MARIADB" if self is Engine.MARIADB else "MYSQL"
        env = {f"{prefix}_ROOT_PASSWORD": password}
        # The images refuse to create "root" as an extra user; it already exists.
        if user != ROOT_USER:
            env[f"{prefix}_USER"] = user
            env[f"{prefix}_PASSWORD"] = password
        env[f"{prefix}_DATABASE"] = database
        return env

    def healthcheck_command(self) -> str:
        # Probes go over TCP so they only pass once the init scripts have run
        # and the real server is listening.
        if self is Engine.MYSQL:
            return (
                "mysqladmin ping -h 127.0.0.1 "
                '-u "${MYSQL_USER:-root}" -p"${MYSQL_PASSWORD:-$MYSQL_ROOT_PASSWORD}" --silent'
            )
        if self is Engine.MARIADB:
            return "healthcheck.sh --connect --innodb_initialized"
        return 'pg_isready -h 127.0.0.1 -U "$POSTGRES_USER" -d "$POSTGRES_DB"'


@dataclass(frozen=True)
class DevDBConfig:
    """Configuration for a single invocation."""

    engine: Engine
    port: int
    user: str
    password: str
    dump_file: str
    force: bool = False
    detached: bool = False
    database: str = DEFAULT_DATABASE
    to_docker: Optional[str] = None
    to_compose: Optional[str] = None

    @property
    def internal_port(self) -> int:
        return self.engine.internal_port

    @property
    def server_name(self) -> str:
        return self.engine.server_name

    @property
    def export_requested(self) -> bool:
        return bool(self.to_docker or self.to_compose)

    @property
    def connection_url(self) -> str:
        return (
            f"{self.engine.url_scheme}://{self.user}:{self.password}"
            f"@localhost:{self.port}/{self.database}"
        )


@dataclass(frozen=True)
class CommandResult:
    """Outcome of an external command."""

    command: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        parts = [part.strip() for part in (self.stdout, self.stderr) if part and part.strip()]
        return "\n".join(parts)


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed-count polling with a constant interval between attempts."""

    max_attempts: int = HEALTH_MAX_ATTEMPTS
    interval: float = HEALTH_INTERVAL_SECONDS

    def wait_until(
        self,
        predicate: Callable[[], bool],
        sleep: Optional[Callable[[float], None]] = None,
    ) -> bool:
        sleep = sleep or time.sleep
        for attempt in range(1, self.max_attempts + 1):
            if predicate():
                return True
            if attempt < self.max_attempts:
                sleep(self.interval)
        return False
