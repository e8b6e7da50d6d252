"""Tests for the command-line scripts."""

import logging

import pytest

from ecg_ishne.examples import convert_raw, inspect_ishne, mock_sensor
from ecg_ishne.packaging.reader import ISHNEReader


@pytest.fixture(autouse=True)
def restore_package_logger():
    package_logger = logging.getLogger("ecg_ishne")
    level, handlers = package_logger.level, list(package_logger.handlers)
    yield
    package_logger.setLevel(level)
    package_logger.handlers = handlers
    package_logger.disabled = False


@pytest.fixture
def capture(tmp_path):
    path = tmp_path / "capture.bin"
    assert mock_sensor.main([str(path), "--duration", "2", "--sample-rate", "250"]) == 0
    return path


def test_mock_sensor_writes_whole_frames(tmp_path, capsys):
    path = tmp_path / "sensor.bin"
    assert mock_sensor.main([str(path), "--duration", "2", "--sample-rate", "250"]) == 0
    assert path.stat().st_size == 500 * 5
    assert "Wrote 500 frames (2500 bytes)" in capsys.readouterr().out


def test_convert_and_inspect(capture, tmp_path, capsys):
    output = tmp_path / "capture.ecg"
    status = convert_raw.main([
        str(capture), str(output),
        "--first-name", "Jane", "--last-name", "Doe", "--id", "001",
        "--sex", "Woman", "--birth-date", "1980-04-23",
        "--start-time", "09:30:00", "--var-block", "demo",
    ])
    assert status == 0
    assert "1000 samples" in capsys.readouterr().out

    package = ISHNEReader().read(output)
    fixed = package.header.fixed
    assert fixed.first_name == "Jane"
    assert fixed.birth_date == (23, 4, 1980)
    assert fixed.start_time == (9, 30, 0)
    assert fixed.sample_size_ecg == 1000
    assert fixed.offset_ecg_block == 522 + 4

    assert inspect_ishne.main([str(output), "--samples", "2"]) == 0
    out = capsys.readouterr().out
    assert "Jane Doe (ID 001)" in out
    assert "Birth date:        23/04/1980" in out
    assert "Duration:          2.00 s" in out
    assert "[1]" in out


def test_convert_rejects_oversized_id(capture, tmp_path, capsys):
    output = tmp_path / "out.ecg"
    assert convert_raw.main([str(capture), str(output), "--id", "X" * 21]) == 1
    assert "--id" in capsys.readouterr().out
    assert not output.exists()


def test_convert_rejects_bad_magic_number(capture, tmp_path, capsys):
    assert convert_raw.main([str(capture), str(tmp_path / "out.ecg"), "--magic-number", "BAD"]) == 1
    assert "Conversion failed" in capsys.readouterr().out


def test_convert_reports_missing_input(tmp_path, capsys):
    assert convert_raw.main([str(tmp_path / "missing.bin"), str(tmp_path / "out.ecg")]) == 1
    assert "read failed" in capsys.readouterr().out


def test_inspect_reports_corrupt_file(tmp_path, capsys):
    path = tmp_path / "bad.ecg"
    path.write_bytes(b"garbage")
    assert inspect_ishne.main([str(path)]) == 1
    assert "Inspection failed" in capsys.readouterr().out


def test_inspect_custom_magic_number(capture, tmp_path, capsys):
    output = tmp_path / "tagged.ecg"
    assert convert_raw.main([str(capture), str(output), "--magic-number", "ABCDEFGH"]) == 0
    capsys.readouterr()

    assert inspect_ishne.main([str(output)]) == 1
    assert "Bad magic number" in capsys.readouterr().out

    assert inspect_ishne.main([str(output), "--magic-number", "ABCDEFGH"]) == 0
    assert "Magic number:      ABCDEFGH" in capsys.readouterr().out


def test_inspect_rejects_malformed_magic_option(capture, tmp_path, capsys):
    output = tmp_path / "capture.ecg"
    assert convert_raw.main([str(capture), str(output)]) == 0
    capsys.readouterr()
    assert inspect_ishne.main([str(output), "--magic-number", "SHORT"]) == 1
    assert "Inspection failed" in capsys.readouterr().out
