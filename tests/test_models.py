"""Tests for hostprobe data models."""

import pytest

from hostprobe.models import (
    AncestryWalk,
    MemoryField,
    MemoryQuantity,
    MemoryUnit,
    ProcessStatusRecord,
    SummaryRow,
)


def test_memory_field_defaults_to_kb():
    """Test MemoryField records kB as the raw unit."""
    field = MemoryField(name="MemTotal", raw_value=1024)
    assert field.raw_unit == "kB"


def test_memory_quantity_str():
    """Test MemoryQuantity renders as "<int> <unit>"."""
    assert str(MemoryQuantity(value=8192, unit=MemoryUnit.MB)) == "8192 MB"
    assert str(MemoryQuantity(value=16, unit=MemoryUnit.GB)) == "16 GB"


def test_process_status_record_is_frozen():
    """Test that ProcessStatusRecord is immutable (frozen)."""
    record = ProcessStatusRecord(pid=1, name="systemd", ppid=0)
    with pytest.raises(AttributeError):
        record.pid = 999


def test_models_use_slots():
    """Test that models use __slots__."""
    instances = [
        MemoryField(name="MemFree", raw_value=0),
        MemoryQuantity(value=0, unit=MemoryUnit.MB),
        ProcessStatusRecord(pid=1, name="init", ppid=0),
        SummaryRow(label="Host", value="box"),
        AncestryWalk(current_pid=1),
    ]
    for instance in instances:
        assert not hasattr(instance, "__dict__")


def test_ancestry_walk_is_mutable():
    """Test AncestryWalk tracks progress in place."""
    walk = AncestryWalk(current_pid=100)
    walk.hop_count += 1
    walk.current_name = "bash"
    assert walk == AncestryWalk(current_pid=100, current_name="bash", hop_count=1)


def test_summary_row_ok_by_default():
    """Test SummaryRow marks values as successful unless told otherwise."""
    assert SummaryRow(label="Kernel", value="6.1.0").ok is True
