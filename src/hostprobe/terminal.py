"""Terminal emulator identification by walking the parent-process chain."""

import logging
import os
from pathlib import Path

from hostprobe.errors import MalformedValue, NotFound, ProcessStatusUnavailable, SourceUnavailable
from hostprobe.models import AncestryWalk, ProcessStatusRecord
from hostprobe.reader import StatusLineReader, field_value

logger = logging.getLogger(__name__)

PROC_ROOT = "/proc"
MAX_LOOKUPS = 3  # first parent plus two more hops
UNKNOWN_TERMINAL = "N/A (could not determine the terminal, this could be an issue of using tmux)"


def is_shell_or_multiplexer(name: str) -> bool:
    """Return True for shells and terminal multiplexers that sit above the terminal."""
    return (
        name.endswith("sh")
        or name == "ion"
        or name == "screen"
        or name == "tmux"
        or name.startswith("tmux")
    )


class TerminalResolver:
    """
    Resolves the terminal hosting a process from /proc/<pid>/status records.

    The walk is a counted loop: it stops at the first ancestor that is not a
    shell or multiplexer, or after ``max_lookups`` name lookups, whichever
    comes first.
    """

    def __init__(
        self,
        proc_root: str | Path = PROC_ROOT,
        pid: int | None = None,
        reader: StatusLineReader | None = None,
        max_lookups: int = MAX_LOOKUPS,
    ) -> None:
        """
        Initialize the TerminalResolver.

        Args:
            proc_root: Directory holding the per-process status records.
            pid: Process to start from. Defaults to the running process.
            reader: File reader to use. Defaults to a fresh StatusLineReader.
            max_lookups: Upper bound on ancestor name lookups.
        """
        self._proc_root = Path(proc_root)
        self._pid = os.getpid() if pid is None else pid
        self._reader = reader or StatusLineReader()
        self._max_lookups = max(1, max_lookups)

    @property
    def pid(self) -> int:
        return self._pid

    def _status_path(self, pid: int) -> Path:
        return self._proc_root / str(pid) / "status"

    def _read_record(self, pid: int) -> str:
        try:
            return self._reader.read_all(self._status_path(pid))
        except SourceUnavailable as exc:
            raise ProcessStatusUnavailable(pid, str(exc)) from exc

    def _field(self, pid: int, record: str, label: str) -> str:
        for line in record.splitlines():
            if line.startswith(label):
                return field_value(line)
        raise NotFound(f"No {label} line in status record of process {pid}")

    def read_status(self, pid: int) -> ProcessStatusRecord:
        """
        Read the name and parent pid of ``pid`` from a single read of its record.

        Raises:
            ProcessStatusUnavailable: The record could not be read.
            NotFound: The record has no ``Name:`` or ``PPid:`` line.
            MalformedValue: ``PPid:`` is not an integer.
        """
        record = self._read_record(pid)
        name = self._field(pid, record, "Name:")
        ppid = self._field(pid, record, "PPid:")
        if not (ppid.isascii() and ppid.isdigit()):
            raise MalformedValue(f"Bad PPid {ppid!r} for process {pid}")
        return ProcessStatusRecord(pid=pid, name=name, ppid=int(ppid))

    def process_name(self, pid: int) -> str:
        """Return the trimmed process name recorded for ``pid``."""
        return self._field(pid, self._read_record(pid), "Name:")

    def step(self, pid: int) -> tuple[int, str]:
        """Return ``(parent_pid, parent_name)`` for ``pid``."""
        parent = self.read_status(pid).ppid
        return parent, self.process_name(parent)

    def resolve(self) -> str:
        """
        Return the name of the nearest ancestor that is not a shell or multiplexer.

        If the lookup budget runs out first, the last name found is returned
        as-is, even when it is still a shell or multiplexer.
        """
        walk = AncestryWalk(current_pid=self._pid)
        while walk.hop_count < self._max_lookups:
            walk.current_pid, walk.current_name = self.step(walk.current_pid)
            walk.hop_count += 1
            logger.debug("hop %d: pid %d is %r", walk.hop_count, walk.current_pid, walk.current_name)
            if not is_shell_or_multiplexer(walk.current_name):
                break
        return walk.current_name.strip()


def describe_terminal(name: str) -> str:
    """Map an unusable resolved name to the fallback message."""
    if name == "systemd" or name == "":
        return UNKNOWN_TERMINAL
    return name


def terminal(resolver: TerminalResolver | None = None) -> str:
    """
    Return the name of the terminal emulator running this process.

    Only a failure to read the starting process's own record is raised. An
    ancestor that exits during the walk yields the fallback message.
    """
    resolver = resolver or TerminalResolver(PROC_ROOT)
    try:
        name = resolver.resolve()
    except ProcessStatusUnavailable as exc:
        if exc.pid == resolver.pid:
            raise
        logger.warning("Process %d vanished during terminal lookup: %s", exc.pid, exc)
        return UNKNOWN_TERMINAL
    return describe_terminal(name)
