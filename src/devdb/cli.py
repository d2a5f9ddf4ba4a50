import logging
import os

import click
from rich.logging import RichHandler

from .constants import DEFAULT_CONFIG_FILE, DEFAULT_PASSWORD, DEFAULT_USER
from .core import DevDB
from .errors import DevDBError
from .services.config_loader import ConfigLoader


def _resolve_option(cli_value, config, key, default=None):
    if cli_value is not None:
        return cli_value
    if key in config:
        return config[key]
    return default


def _configure_logging(verbose: bool, log_file):
    logger = logging.getLogger("devdb")

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)


class DevDBGroup(click.Group):
    """Routes `devdb [options] <dump-file>` to the default `up` command."""

    default_command = "up"

    def parse_args(self, ctx, args):
        if not args:
            click.echo(ctx.get_help())
            ctx.exit(1)

        if args[0] not in self.commands and args[0] not in ctx.help_option_names:
            args = [self.default_command] + list(args)
        return super().parse_args(ctx, args)


@click.group(cls=DevDBGroup, context_settings={"help_option_names": ["-h", "--help"]})
def cli():
    """Spin up a disposable MySQL, MariaDB or PostgreSQL container seeded from a SQL dump.

    \b
    Usage:
      devdb [options] <dump-file>
      devdb help
      devdb rm|remove <name>
    """


@cli.command("up")
@click.argument("dump_file", required=False)
@click.option("-p", "--port", type=int, default=None, help="Host port (default: the engine's port)")
@click.option("-d", "--detached", is_flag=True, default=None, help="Leave the container running")
@click.option(
    "-b",
    "--base",
    default=None,
    help=f"Database engine, skips detection ({', '.join(DevDB.SUPPORTED_ENGINES)})",
)
@click.option("-f", "--force", is_flag=True, default=None, help="Replace an existing container")
@click.option("-u", "--user", default=None, help=f"Database user (default: {DEFAULT_USER})")
@click.option(
    "-P", "--password", default=None, help=f"Database password (default: {DEFAULT_PASSWORD})"
)
@click.option(
    "--to-docker",
    type=click.Path(),
    default=None,
    help="Export the Dockerfile and dump as an archive instead of running",
)
@click.option(
    "--to-compose",
    type=click.Path(),
    default=None,
    help="Export the Dockerfile, dump and a compose file as an archive instead of running",
)
@click.option(
    "--config",
    type=click.Path(),
    default=None,
    help=f"Path to a YAML configuration file. Defaults to {DEFAULT_CONFIG_FILE} if present.",
)
@click.option("--verbose", is_flag=True, default=None, help="Enable verbose logging")
@click.option("--log-file", type=click.Path(), default=None, help="Path to log file")
@click.pass_context
def up(
    ctx,
    dump_file,
    port,
    detached,
    base,
    force,
    user,
    password,
    to_docker,
    to_compose,
    config,
    verbose,
    log_file,
):
    """Build and run a database seeded from DUMP_FILE."""
    if not dump_file:
        click.echo(ctx.parent.get_help() if ctx.parent else ctx.get_help())
        ctx.exit(1)

    try:
        config_loader = ConfigLoader()
        resolved_config = config
        if resolved_config is None:
            default_config_path = os.path.join(os.getcwd(), DEFAULT_CONFIG_FILE)
            if os.path.exists(default_config_path):
                resolved_config = default_config_path

        config_values = config_loader.load(resolved_config)
    except DevDBError as exc:
        raise click.ClickException(str(exc)) from exc

    port = _resolve_option(port, config_values, "port")
    if port is not None:
        try:
            port = int(port)
        except (TypeError, ValueError) as exc:
            raise click.ClickException("port must be an integer") from exc
    detached = bool(_resolve_option(detached, config_values, "detached", default=False))
    base = _resolve_option(base, config_values, "base")
    force = bool(_resolve_option(force, config_values, "force", default=False))
    user = str(_resolve_option(user, config_values, "user", default=DEFAULT_USER))
    password = str(_resolve_option(password, config_values, "password", default=DEFAULT_PASSWORD))
    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    log_file = _resolve_option(log_file, config_values, "log_file")

    _configure_logging(verbose, log_file)

    devdb = DevDB(
        dump_file=dump_file,
        port=port,
        user=user,
        password=password,
        base=base,
        force=force,
        detached=detached,
        to_docker=to_docker,
        to_compose=to_compose,
    )
    raise SystemExit(devdb.run())


@cli.command("help")
@click.pass_context
def help_command(ctx):
    """Show this message and exit."""
    click.echo(ctx.parent.get_help())


@cli.command("rm")
@click.argument("name")
@click.option("--verbose", is_flag=True, default=False, help="Enable verbose logging")
def rm(name, verbose):
    """Remove the container NAME (for example devdb_mysql)."""
    _configure_logging(verbose, None)
    raise SystemExit(DevDB().remove(name))


cli.add_command(rm, name="remove")


def main(args=None):
    """Console entry point; click usage errors exit with status 1."""
    try:
        exit_code = cli.main(args=args, prog_name="devdb", standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        raise SystemExit(1) from exc
    except click.exceptions.Abort as exc:
        click.echo("Aborted!", err=True)
        raise SystemExit(1) from exc
    raise SystemExit(exit_code or 0)


if __name__ == "__main__":
    main()
