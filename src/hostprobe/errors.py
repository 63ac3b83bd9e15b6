"""Exception types raised by hostprobe accessors."""


class ProbeError(Exception):
    """Base class for every failure reported by a probe."""


class SourceUnavailable(ProbeError):
    """A file or command backing a probe could not be read or run."""


class NotFound(ProbeError):
    """An expected label or line is missing from a readable source."""


class MalformedValue(ProbeError):
    """A field was found but its value could not be parsed."""


class ProcessStatusUnavailable(SourceUnavailable):
    """A process status record could not be read, usually because it exited."""

    def __init__(self, pid: int, message: str) -> None:
        super().__init__(message)
        self.pid = pid
