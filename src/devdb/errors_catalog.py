"""Actionable error catalog for devdb."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "dump_not_found": {
        "what": "Dump file not found: {path}",
        "next": "Check the path to the SQL dump and try again.",
    },
    "engine_not_detected": {
        "what": "Could not detect the database engine from the first lines of {path}.",
        "next": "Pass the engine explicitly with `--base` (one of: {engines}).",
    },
    "unsupported_engine": {
        "what": "Unsupported database engine: {engine}.",
        "next": "Use one of: {engines}.",
    },
    "container_exists": {
        "what": "A container named {name} already exists.",
        "next": "Remove it with `devdb rm {name}` or rerun with `--force` to replace it.",
    },
    "archive_exists": {
        "what": "Archive already exists: {path}",
        "next": "Choose another output path or remove the existing file.",
    },
    "health_timeout": {
        "what": "Container {name} did not become healthy after {attempts} checks.",
        "next": "Inspect `docker logs {name}`, then remove it with `devdb rm {name}`.",
    },
    "docker_missing": {
        "what": "Docker is not available.",
        "next": "Install Docker and make sure the daemon is running.",
    },
    "archiver_missing": {
        "what": "Archiving tool `{tool}` is not available.",
        "next": "Install `{tool}` or choose an archive format handled by another tool.",
    },
}


def actionable_error(code: str, **kwargs: str) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
