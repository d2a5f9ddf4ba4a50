"""Domain errors for devdb."""


class DevDBError(RuntimeError):
    """Raised when devdb cannot continue safely."""


class MissingDependencyError(DevDBError):
    """An external tool (docker, zip, tar) is not available."""


class InvalidInputError(DevDBError):
    """User input (path, engine, option) is not usable."""


class NamingConflictError(DevDBError):
    """A container with the target name already exists."""


class CommandFailedError(DevDBError):
    """An external command returned a non-zero status."""


class HealthCheckTimeoutError(DevDBError):
    """The database container never reported a healthy status."""
