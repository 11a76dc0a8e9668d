import logging

import pytest

from utils.timing import TimeRecorder


def test_records_sections_in_order():
    with TimeRecorder("op") as rc:
        rc.record_section("first")
        rc.record_section("second")
    assert [s.name for s in rc.sections] == ["first", "second"]
    assert all(s.elapsed >= 0 for s in rc.sections)
    assert rc.total >= sum(s.elapsed for s in rc.sections)


def test_logs_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="utils.timing"):
        with TimeRecorder("CreateHybridCollectionRequest(collection=c1)") as rc:
            rc.record_section("check validation")
    messages = [r.getMessage() for r in caplog.records]
    assert any("check validation" in m for m in messages)
    assert any(m.startswith("CreateHybridCollectionRequest(collection=c1) done") for m in messages)


def test_disabled_recorder_is_silent(caplog):
    with caplog.at_level(logging.DEBUG, logger="utils.timing"):
        with TimeRecorder("quiet", enabled=False) as rc:
            rc.record_section("step")
    assert caplog.records == []
    assert len(rc.sections) == 1


def test_failure_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="utils.timing"):
        with pytest.raises(ValueError):
            with TimeRecorder("boom"):
                raise ValueError("x")
    assert any("boom failed" in r.getMessage() for r in caplog.records)
