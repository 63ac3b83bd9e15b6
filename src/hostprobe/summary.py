"""Collects every accessor into labelled rows for display."""

import logging
from collections.abc import Callable

from hostprobe import memory, probes
from hostprobe.errors import ProbeError
from hostprobe.models import SummaryRow
from hostprobe.terminal import terminal

logger = logging.getLogger(__name__)

Field = tuple[str, Callable[[], str]]

DEFAULT_FIELDS: list[Field] = [
    ("Host", probes.hostname),
    ("Distro", probes.distro),
    ("Kernel", probes.kernel),
    ("Device", probes.device),
    ("Uptime", probes.uptime),
    ("Environment", probes.environment),
    ("Terminal", terminal),
    ("Shell", lambda: probes.env("SHELL")),
    ("CPU", probes.cpu),
    ("CPU temp", probes.temp),
    ("GPU", probes.gpu),
    ("Memory total", memory.memory_total),
    ("Memory used", memory.memory_used),
    ("Memory available", memory.memory_available),
]


def collect_summary(fields: list[Field] | None = None) -> list[SummaryRow]:
    """
    Call each accessor once and return its labelled result.

    A failing accessor yields an ``N/A`` row rather than aborting the summary.
    """
    rows: list[SummaryRow] = []
    for label, accessor in DEFAULT_FIELDS if fields is None else fields:
        try:
            rows.append(SummaryRow(label=label, value=accessor()))
        except ProbeError as exc:
            logger.warning("%s probe failed: %s", label, exc)
            rows.append(SummaryRow(label=label, value=f"N/A ({exc})", ok=False))
    return rows
