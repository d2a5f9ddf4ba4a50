"""Docker runtime services for devdb."""

from typing import Callable, Optional

from devdb.constants import HEALTHY_STATUS
from devdb.errors import (
    CommandFailedError,
    HealthCheckTimeoutError,
    MissingDependencyError,
)
from devdb.errors_catalog import actionable_error
from devdb.models import DevDBConfig, Engine, RetryPolicy


class DockerRuntimeService:
    """Wraps the docker CLI calls behind the database container lifecycle."""

    def __init__(self, logger, console):
        self.logger = logger
        self.console = console

    def validate_environment(self, run_cmd: Callable):
        self.console.print("[blue]Validating Docker environment...[/blue]")
        try:
            run_cmd(["docker", "info", "--format", "{{.ServerVersion}}"])
        except MissingDependencyError as exc:
            raise MissingDependencyError(actionable_error("docker_missing")) from exc
        except CommandFailedError as exc:
            raise MissingDependencyError(f"{actionable_error('docker_missing')}\n{exc}") from exc
        self.console.print("[green]Docker is available.[/green]")

    def container_exists(self, name: str, run_cmd: Callable) -> bool:
        result = run_cmd(["docker", "container", "inspect", name], check=False)
        return result.success

    def pull_base_image(self, engine: Engine, run_cmd: Callable):
        self.console.print(f"[blue]Pulling base image {engine.base_image}...[/blue]")
        self.logger.info("Pulling base image %s", engine.base_image)
        run_cmd(["docker", "pull", engine.base_image])

    def remove_container(self, name: str, run_cmd: Callable) -> bool:
        self.logger.info("Removing container %s", name)
        result = run_cmd(["docker", "rm", "-f", name], check=False)
        if not result.success:
            message = f"Could not remove container {name}"
            if result.output:
                message = f"{message}: {result.output}"
            self.console.print(f"[yellow]Warning:[/yellow] {message}")
            self.logger.warning(message)
        return result.success

    def build_image(self, config: DevDBConfig, context_dir: str, run_cmd: Callable):
        self.console.print(f"[blue]Building image {config.server_name}...[/blue]")
        self.logger.info("Building image %s from %s", config.server_name, context_dir)
        run_cmd(["docker", "build", "-t", config.server_name, context_dir])

    def run_container(self, config: DevDBConfig, run_cmd: Callable) -> str:
        self.console.print(f"[blue]Starting container {config.server_name}...[/blue]")
        result = run_cmd(
            [
                "docker",
                "run",
                "-d",
                "--name",
                config.server_name,
                "-p",
                f"{config.port}:{config.internal_port}",
                config.server_name,
            ]
        )
        return result.stdout.strip()

    def health_status(self, name: str, run_cmd: Callable) -> str:
        result = run_cmd(
            ["docker", "inspect", "--format", "{{.State.Health.Status}}", name],
            check=False,
        )
        if not result.success:
            return ""
        return result.stdout.strip()

    def wait_for_healthy(
        self,
        name: str,
        run_cmd: Callable,
        policy: Optional[RetryPolicy] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        policy = policy or RetryPolicy()
        self.console.print("[yellow]Waiting for database to be ready...[/yellow]")

        def is_healthy() -> bool:
            status = self.health_status(name, run_cmd)
            self.logger.debug("Health status of %s: %s", name, status or "<unknown>")
            return status == HEALTHY_STATUS

        if not policy.wait_until(is_healthy, sleep=sleep):
            raise HealthCheckTimeoutError(
                actionable_error("health_timeout", name=name, attempts=str(policy.max_attempts))
            )
        self.console.print("[green]Database is ready.[/green]")

    def stream_logs(self, name: str, stream_cmd: Callable):
        self.console.print("[dim]Streaming container logs. Press Ctrl+C to stop and remove it.[/dim]")
        stream_cmd(["docker", "logs", "-f", name])
