# src/fileops/errors.py


class FileOpsError(Exception):
    """Base class for every failure surfaced to a caller."""


class NotFound(FileOpsError):
    """A project or target path does not exist."""


class ProjectNotFound(NotFound):
    def __init__(self, project: str):
        super().__init__(f"Project not found: {project}")
        self.project = project


class PathNotFound(NotFound):
    def __init__(self, path: str):
        super().__init__(f"File not found: {path}")
        self.path = path


class InvalidArgument(FileOpsError):
    """Rejected before any filesystem I/O is attempted."""


class FatalIO(FileOpsError):
    """Reading or writing the single target of an operation failed."""
