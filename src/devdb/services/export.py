"""Export of generated Docker build files as an archive."""

import os
from typing import Callable, List, Optional, Tuple

from devdb.constants import BUILD_DIR_NAME, COMPOSE_FILE_NAME, DOCKERFILE_NAME
from devdb.errors import InvalidInputError, MissingDependencyError, NamingConflictError
from devdb.errors_catalog import actionable_error
from devdb.models import DevDBConfig


class ExportService:
    """Writes the build context to a temp directory and archives it."""

    TAR_GZ_SUFFIXES = (".tar.gz", ".tgz")

    def __init__(self, logger, console, filesystem_service, template_service):
        self.logger = logger
        self.console = console
        self.filesystem_service = filesystem_service
        self.template_service = template_service

    def targets(self, config: DevDBConfig) -> List[Tuple[str, bool]]:
        """Requested archive paths, each paired with whether it carries a compose file."""
        requested = []
        if config.to_docker:
            requested.append((config.to_docker, False))
        if config.to_compose:
            requested.append((config.to_compose, True))
        return requested

    def ensure_targets_available(self, archive_paths: List[str]):
        resolved = [os.path.abspath(path) for path in archive_paths]
        if len(set(resolved)) != len(resolved):
            raise InvalidInputError("`--to-docker` and `--to-compose` must use different archive paths.")

        for archive_path in archive_paths:
            if os.path.exists(archive_path):
                raise NamingConflictError(actionable_error("archive_exists", path=archive_path))

    def archive_command(self, archive_path: str) -> List[str]:
        lowered = archive_path.lower()
        if lowered.endswith(self.TAR_GZ_SUFFIXES):
            return ["tar", "-czf", archive_path, "."]
        if lowered.endswith(".tar"):
            return ["tar", "-cf", archive_path, "."]
        return ["zip", "-qr", archive_path, "."]

    def stage(self, config: DevDBConfig, include_compose: bool) -> str:
        staging_dir = self.filesystem_service.make_temp_dir(prefix=f"{config.server_name}-")
        build_dir = os.path.join(staging_dir, BUILD_DIR_NAME)
        dump_filename = os.path.basename(config.dump_file)

        self.filesystem_service.write_text(
            os.path.join(build_dir, DOCKERFILE_NAME),
            self.template_service.build_dockerfile_for(config, dump_filename),
        )
        self.filesystem_service.copy_file(config.dump_file, os.path.join(build_dir, dump_filename))

        if include_compose:
            self.filesystem_service.write_text(
                os.path.join(staging_dir, COMPOSE_FILE_NAME),
                self.template_service.build_compose(config),
            )
        return staging_dir

    def export_archive(
        self,
        config: DevDBConfig,
        archive_path: str,
        include_compose: bool,
        run_cmd: Callable,
    ) -> str:
        archive_path = os.path.abspath(archive_path)
        command = self.archive_command(archive_path)
        label = "compose bundle" if include_compose else "Docker build files"
        self.console.print(f"[blue]Exporting {label} to {archive_path}...[/blue]")

        staging_dir: Optional[str] = None
        try:
            staging_dir = self.stage(config, include_compose)
            try:
                run_cmd(command, cwd=staging_dir)
            except MissingDependencyError as exc:
                raise MissingDependencyError(
                    actionable_error("archiver_missing", tool=command[0])
                ) from exc
        finally:
            if staging_dir:
                self.filesystem_service.cleanup_dir(staging_dir)

        self.logger.info("Exported %s to %s", label, archive_path)
        self.console.print(f"[green]Created {archive_path}[/green]")
        return archive_path

    def export(self, config: DevDBConfig, run_cmd: Callable) -> List[str]:
        requested = self.targets(config)
        self.ensure_targets_available([path for path, _ in requested])
        return [
            self.export_archive(config, path, include_compose, run_cmd)
            for path, include_compose in requested
        ]
