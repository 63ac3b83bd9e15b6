"""Tests for collect_summary."""

from hostprobe.errors import NotFound, SourceUnavailable
from hostprobe.models import SummaryRow
from hostprobe.summary import DEFAULT_FIELDS, collect_summary


def missing_file() -> str:
    raise SourceUnavailable("Could not read /etc/hostname: No such file or directory")


def test_rows_follow_field_order():
    """Test each accessor becomes one row in order."""
    rows = collect_summary([("Host", lambda: "box"), ("Kernel", lambda: "6.1.0")])
    assert rows == [SummaryRow("Host", "box"), SummaryRow("Kernel", "6.1.0")]


def test_failing_probe_becomes_placeholder():
    """Test a ProbeError is reported in the row instead of raised."""
    rows = collect_summary([("Host", missing_file), ("Kernel", lambda: "6.1.0")])
    assert rows[0] == SummaryRow(
        "Host", "N/A (Could not read /etc/hostname: No such file or directory)", ok=False
    )
    assert rows[1].ok


def test_failure_is_logged(caplog):
    """Test failing probes are logged as warnings."""

    def no_gpu() -> str:
        raise NotFound("No display controller listed by lspci")

    collect_summary([("GPU", no_gpu)])
    assert "GPU probe failed" in caplog.text


def test_accessors_called_every_time():
    """Test nothing is cached between collections."""
    calls = []

    def counter() -> str:
        calls.append(1)
        return str(len(calls))

    assert collect_summary([("N", counter)])[0].value == "1"
    assert collect_summary([("N", counter)])[0].value == "2"


def test_default_fields_cover_core_accessors():
    """Test the default summary includes memory and terminal."""
    labels = [label for label, _ in DEFAULT_FIELDS]
    assert "Terminal" in labels
    assert "Memory used" in labels
    assert len(labels) == len(set(labels))
