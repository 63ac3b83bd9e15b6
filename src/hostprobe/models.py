"""Data models for hostprobe."""

from dataclasses import dataclass
from enum import Enum


class MemoryUnit(Enum):
    """Display units for memory quantities."""

    KB = "kB"
    MB = "MB"
    GB = "GB"


@dataclass(slots=True, frozen=True)
class MemoryField:
    """One parsed line of the memory statistics table."""

    name: str
    raw_value: int
    raw_unit: str = "kB"  # /proc/meminfo always reports kibibytes


@dataclass(slots=True, frozen=True)
class MemoryQuantity:
    """A memory value scaled for display."""

    value: int
    unit: MemoryUnit

    def __str__(self) -> str:
        return f"{self.value} {self.unit.value}"


@dataclass(slots=True, frozen=True)
class ProcessStatusRecord:
    """The two fields of a process status record the terminal walk needs."""

    pid: int
    name: str
    ppid: int


@dataclass(slots=True, frozen=True)
class SummaryRow:
    """One labelled line of the host summary."""

    label: str
    value: str
    ok: bool = True


@dataclass(slots=True)
class AncestryWalk:
    """Working state of a single terminal resolution; never outlives the call."""

    current_pid: int
    current_name: str = ""
    hop_count: int = 0
