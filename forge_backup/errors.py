class ForgeBackupError(Exception):
    """Base class for every failure that aborts a backup run."""


class ConfigError(ForgeBackupError):
    """A FORGE_* setting from the environment cannot be used."""


class UnknownSiteError(ForgeBackupError):
    def __init__(self, message: str = "Unknown site type"):
        super().__init__(message)


class MissingDatabaseCredentialsError(ForgeBackupError):
    def __init__(self, message: str = "Missing database credentials"):
        super().__init__(message)


class BackupIOError(ForgeBackupError):
    """Filesystem or subprocess I/O failure; the cause is chained."""

    def __init__(self, message: str):
        super().__init__(f"IO Error: {message}")


class BackupError(ForgeBackupError):
    """The archiver exited non-zero; ``stderr`` is its error output."""

    def __init__(self, stderr: str):
        self.stderr = stderr
        super().__init__(f"Error executing backup: {stderr}")


class PipelineOrderError(RuntimeError):
    """A stage was called before its prerequisite, or called twice."""
