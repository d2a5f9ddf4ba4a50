import logging
import os
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .constants import DEFAULT_PASSWORD, DEFAULT_USER, DOCKERFILE_NAME
from .errors import DevDBError, InvalidInputError, NamingConflictError
from .errors_catalog import actionable_error
from .models import CommandResult, DevDBConfig, Engine, RetryPolicy
from .services.command_runner import CommandRunner
from .services.detection import EngineDetector
from .services.docker_runtime import DockerRuntimeService
from .services.export import ExportService
from .services.filesystem import FileSystemService
from .services.templates import TemplateService

console = Console()
logger = logging.getLogger("devdb")


class DevDB:
    SUPPORTED_ENGINES = Engine.names()

    def __init__(
        self,
        dump_file: Optional[str] = None,
        port: Optional[int] = None,
        user: str = DEFAULT_USER,
        password: str = DEFAULT_PASSWORD,
        base: Optional[str] = None,
        force: bool = False,
        detached: bool = False,
        to_docker: Optional[str] = None,
        to_compose: Optional[str] = None,
        health_policy: Optional[RetryPolicy] = None,
    ):
        self.dump_file = dump_file
        self.port = port
        self.user = user
        self.password = password
        self.base = base
        self.force = force
        self.detached = detached
        self.to_docker = to_docker
        self.to_compose = to_compose
        self.health_policy = health_policy or RetryPolicy()

        self.command_runner = CommandRunner(logger=logger)
        self.filesystem_service = FileSystemService(logger=logger, console=console)
        self.template_service = TemplateService()
        self.engine_detector = EngineDetector(logger=logger)
        self.docker_runtime_service = DockerRuntimeService(logger=logger, console=console)
        self.export_service = ExportService(
            logger=logger,
            console=console,
            filesystem_service=self.filesystem_service,
            template_service=self.template_service,
        )

    def _run_cmd(
        self,
        cmd: List[str],
        check: bool = True,
        capture_output: bool = True,
        cwd: Optional[str] = None,
    ) -> CommandResult:
        return self.command_runner.run(cmd, check=check, capture_output=capture_output, cwd=cwd)

    def _stream_cmd(self, cmd: List[str]) -> CommandResult:
        return self.command_runner.stream(cmd)

    def build_config(self) -> DevDBConfig:
        if not self.dump_file or not os.path.isfile(self.dump_file):
            raise InvalidInputError(actionable_error("dump_not_found", path=str(self.dump_file)))

        engine = self.engine_detector.resolve(self.dump_file, explicit=self.base)
        logger.info("Using %s engine", engine.value)

        return DevDBConfig(
            engine=engine,
            port=self.port if self.port is not None else engine.internal_port,
            user=self.user,
            password=self.password,
            dump_file=self.dump_file,
            force=self.force,
            detached=self.detached,
            to_docker=self.to_docker,
            to_compose=self.to_compose,
        )

    def export(self, config: DevDBConfig) -> List[str]:
        return self.export_service.export(config, self._run_cmd)

    def prepare_build_context(self, config: DevDBConfig) -> str:
        context_dir = self.filesystem_service.make_temp_dir(prefix=f"{config.server_name}-build-")
        dump_filename = os.path.basename(config.dump_file)
        self.filesystem_service.write_text(
            os.path.join(context_dir, DOCKERFILE_NAME),
            self.template_service.build_dockerfile_for(config, dump_filename),
        )
        self.filesystem_service.copy_file(config.dump_file, os.path.join(context_dir, dump_filename))
        return context_dir

    def start(self, config: DevDBConfig):
        runtime = self.docker_runtime_service
        runtime.validate_environment(self._run_cmd)

        exists = runtime.container_exists(config.server_name, self._run_cmd)
        if exists and not config.force:
            raise NamingConflictError(actionable_error("container_exists", name=config.server_name))

        runtime.pull_base_image(config.engine, self._run_cmd)

        if exists:
            runtime.remove_container(config.server_name, self._run_cmd)

        context_dir = self.prepare_build_context(config)
        try:
            runtime.build_image(config, context_dir, self._run_cmd)
        finally:
            self.filesystem_service.cleanup_dir(context_dir)

        runtime.run_container(config, self._run_cmd)
        runtime.wait_for_healthy(config.server_name, self._run_cmd, policy=self.health_policy)

    def print_connection_info(self, config: DevDBConfig):
        table = Table(title=f"{config.server_name} is ready", show_header=False)
        table.add_column("Field", style="bold")
        table.add_column("Value")
        table.add_row("Engine", config.engine.value)
        table.add_row("Host", "localhost")
        table.add_row("Port", str(config.port))
        table.add_row("User", config.user)
        table.add_row("Password", config.password)
        table.add_row("Database", config.database)
        table.add_row("URL", config.connection_url)
        console.print(table)
        logger.info("Database available at %s", config.connection_url)

    def attach(self, config: DevDBConfig):
        try:
            self.docker_runtime_service.stream_logs(config.server_name, self._stream_cmd)
        except KeyboardInterrupt:
            console.print("[yellow]Interrupted. Stopping database...[/yellow]")
        finally:
            if self.docker_runtime_service.remove_container(config.server_name, self._run_cmd):
                console.print(f"[dim]Removed container {config.server_name}.[/dim]")

    def _report_failure(self, exc: BaseException) -> int:
        if isinstance(exc, KeyboardInterrupt):
            console.print("[bold red]Operation cancelled by user.[/bold red]")
            logger.info("Operation cancelled by user")
        elif isinstance(exc, DevDBError):
            console.print(f"[bold red]Error:[/bold red] {exc}")
            logger.error(str(exc))
        else:
            console.print(f"[bold red]Unexpected error:[/bold red] {exc}")
            logger.exception("Unexpected error")
        return 1

    def run(self) -> int:
        try:
            logger.info("Starting devdb...")
            config = self.build_config()

            if config.export_requested:
                self.export(config)
                return 0

            self.start(config)
            self.print_connection_info(config)

            if config.detached:
                console.print(
                    f"[green]Running in the background.[/green] "
                    f"Remove it with `devdb rm {config.server_name}`."
                )
                return 0

            self.attach(config)
            return 0

        except (KeyboardInterrupt, Exception) as exc:
            return self._report_failure(exc)

    def remove(self, name: str) -> int:
        try:
            runtime = self.docker_runtime_service
            runtime.validate_environment(self._run_cmd)

            if not runtime.container_exists(name, self._run_cmd):
                console.print(f"[cyan]No container named {name}. Nothing to do.[/cyan]")
                logger.info("No container named %s. Nothing to do.", name)
                return 0

            self._run_cmd(["docker", "rm", "-f", name])
            console.print(f"[green]Removed container {name}.[/green]")
            return 0

        except (KeyboardInterrupt, Exception) as exc:
            return self._report_failure(exc)
