"""Tests for StatusLineReader."""

import pytest

from hostprobe.errors import NotFound, SourceUnavailable
from hostprobe.reader import StatusLineReader, field_value


@pytest.fixture
def status_file(tmp_path):
    path = tmp_path / "status"
    path.write_text("Name:\tbash\nUmask:\t0022\nPPid:\t1\n")
    return path


def test_read_all(status_file):
    """Test the whole file is returned."""
    assert StatusLineReader().read_all(status_file).startswith("Name:\tbash\n")


def test_read_all_missing_file(tmp_path):
    """Test a missing file raises SourceUnavailable."""
    with pytest.raises(SourceUnavailable):
        StatusLineReader().read_all(tmp_path / "nope")


def test_read_line(status_file):
    """Test a line is returned by zero-based index."""
    assert StatusLineReader().read_line(status_file, 2) == "PPid:\t1"


def test_read_line_out_of_range(status_file):
    """Test an index past the end raises NotFound."""
    with pytest.raises(NotFound):
        StatusLineReader().read_line(status_file, 10)


def test_find_line(status_file):
    """Test the first line starting with a label is returned."""
    assert StatusLineReader().find_line(status_file, "PPid:") == "PPid:\t1"


def test_find_line_missing_label(status_file):
    """Test an absent label raises NotFound."""
    with pytest.raises(NotFound):
        StatusLineReader().find_line(status_file, "Tgid:")


def test_field_value():
    """Test the value after the label is stripped."""
    assert field_value("Name:\t  xterm \n") == "xterm"
    assert field_value("model name\t: ARMv7 Processor rev 4 (v7l)") == "ARMv7 Processor rev 4 (v7l)"
    assert field_value("Name:\ttmux: client") == "tmux: client"
