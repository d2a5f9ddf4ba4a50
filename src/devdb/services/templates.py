"""Dockerfile and compose rendering for devdb."""

import json

from devdb.constants import BUILD_DIR_NAME, HEALTH_MAX_ATTEMPTS
from devdb.models import DevDBConfig, Engine


class TemplateService:
    """Builds the text of the generated Docker files. Pure string rendering."""

    INIT_DIR = "/docker-entrypoint-initdb.d"
    SEED_BASENAME = "00-seed"
    # The official images only run init files with these suffixes.
    SEED_SUFFIXES = (".sql.gz", ".sql.xz", ".sql.zst", ".sql")

    def seed_filename(self, dump_filename: str) -> str:
        lowered = dump_filename.lower()
        for suffix in self.SEED_SUFFIXES:
            if lowered.endswith(suffix):
                return f"{self.SEED_BASENAME}{suffix}"
        return f"{self.SEED_BASENAME}.sql"

    @staticmethod
    def quote_env_value(value: str) -> str:
        escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")
        return f'"{escaped}"'

    def build_dockerfile(
        self,
        engine: Engine,
        user: str,
        password: str,
        dump_filename: str,
        database: str,
    ) -> str:
        env_lines = "\n".join(
            f"ENV {key}={self.quote_env_value(value)}"
            for key, value in engine.environment(user, password, database).items()
        )
        copy_args = json.dumps(
            [dump_filename, f"{self.INIT_DIR}/{self.seed_filename(dump_filename)}"]
        )

        return f"""
FROM {engine.base_image}

{env_lines}

COPY {copy_args}

EXPOSE {engine.internal_port}

HEALTHCHECK --interval=5s --timeout=5s --retries={HEALTH_MAX_ATTEMPTS} \\
  CMD {engine.healthcheck_command()}
""".strip() + "\n"

    def build_dockerfile_for(self, config: DevDBConfig, dump_filename: str) -> str:
        return self.build_dockerfile(
            engine=config.engine,
            user=config.user,
            password=config.password,
            dump_filename=dump_filename,
            database=config.database,
        )

    def build_compose(self, config: DevDBConfig) -> str:
        return f"""
services:
  db:
    build: ./{BUILD_DIR_NAME}
    image: {config.server_name}
    container_name: {config.server_name}
    ports:
      - "{config.port}:{config.internal_port}"
""".strip() + "\n"
