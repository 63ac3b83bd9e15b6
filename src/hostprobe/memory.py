"""Memory accounting from the kernel memory statistics table."""

import logging
from pathlib import Path

from hostprobe.errors import MalformedValue
from hostprobe.models import MemoryField, MemoryQuantity, MemoryUnit
from hostprobe.reader import StatusLineReader

logger = logging.getLogger(__name__)

MEMINFO_PATH = "/proc/meminfo"


def parse_meminfo_line(line: str) -> MemoryField:
    """
    Parse one ``Label:<whitespace><integer> kB`` line.

    Raises:
        MalformedValue: If the value is not a non-negative integer.
    """
    name = line.split(":", 1)[0].strip()
    raw = line.rsplit(":", 1)[-1].replace("kB", "").strip()
    if not (raw.isascii() and raw.isdigit()):
        raise MalformedValue(f"No memory info in {name} line: {raw!r}")
    return MemoryField(name=name, raw_value=int(raw))


def to_display(value_kb: int) -> MemoryQuantity:
    """Scale a kibibyte count to whole megabytes, truncating."""
    return MemoryQuantity(value=value_kb // 1024, unit=MemoryUnit.MB)


class MemoryAccountant:
    """
    Answers "how much memory is in state X" from /proc/meminfo.

    Every call re-reads the table; nothing is cached between calls.
    """

    def __init__(
        self,
        meminfo_path: str | Path = MEMINFO_PATH,
        reader: StatusLineReader | None = None,
    ) -> None:
        """
        Initialize the MemoryAccountant.

        Args:
            meminfo_path: Location of the statistics table.
            reader: File reader to use. Defaults to a fresh StatusLineReader.
        """
        self._path = meminfo_path
        self._reader = reader or StatusLineReader()

    def lookup(self, field_name: str) -> int:
        """
        Return the raw kB value of the first line starting with ``field_name``.

        Raises:
            SourceUnavailable: The table could not be read.
            NotFound: No line starts with ``field_name``.
            MalformedValue: The value is not an unsigned integer.
        """
        line = self._reader.find_line(self._path, field_name)
        value = parse_meminfo_line(line).raw_value
        logger.debug("%s = %d kB", field_name, value)
        return value

    def format(self, value_kb: int) -> str:
        """Format a kB value as ``"<int> MB"``."""
        return str(to_display(value_kb))

    def total(self) -> str:
        return self.format(self.lookup("MemTotal"))

    def free(self) -> str:
        return self.format(self.lookup("MemFree"))

    def available(self) -> str:
        return self.format(self.lookup("MemAvailable"))

    def used_kb(self) -> int:
        """Return ``MemTotal - MemAvailable`` in raw kB."""
        total = self.lookup("MemTotal")
        available = self.lookup("MemAvailable")
        return total - available

    def used(self) -> str:
        return self.format(self.used_kb())


def memory_total() -> str:
    """Total installed memory, e.g. ``"15875 MB"``."""
    return MemoryAccountant(MEMINFO_PATH).total()


def memory_free() -> str:
    """Memory not in use for anything, including caches."""
    return MemoryAccountant(MEMINFO_PATH).free()


def memory_available() -> str:
    """Memory available for new allocations without swapping."""
    return MemoryAccountant(MEMINFO_PATH).available()


def memory_used() -> str:
    """Total minus available memory."""
    return MemoryAccountant(MEMINFO_PATH).used()
