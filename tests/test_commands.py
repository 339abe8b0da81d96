"""
Command Tests - save_flm / load_flm return values instead of raising.
"""

import logging
import zipfile

import pytest

from flowmark.commands import CommandResult, load_flm, save_flm


@pytest.fixture
def flm_path(tmp_path):
    return str(tmp_path / "a.flm")


class TestSaveLoad:

    def test_scenario_round_trip(self, flm_path):
        doc = "{\"format\":\"flowmark\",\"title\":\"x\"}"
        saved = save_flm(flm_path, doc)
        assert saved == CommandResult(ok=True)

        loaded = load_flm(flm_path)
        assert loaded.ok is True
        assert loaded.value == doc
        assert loaded.error is None

    def test_second_save_wins(self, flm_path):
        save_flm(flm_path, '{"format":"flowmark","n":1}')
        save_flm(flm_path, '{"format":"flowmark","n":2}')
        assert load_flm(flm_path).value == '{"format":"flowmark","n":2}'


class TestFailuresAsValues:

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_bytes(b"")
        result = load_flm(str(path))
        assert result.ok is False
        assert result.value is None
        assert result.category == "container"
        assert "Failed to read archive" in result.error

    def test_missing_format_tag(self, flm_path):
        with zipfile.ZipFile(flm_path, "w") as zf:
            zf.writestr("document.json", "{\"title\":\"x\"}")
        result = load_flm(flm_path)
        assert result.ok is False
        assert result.category == "format_tag"
        assert result.error == "Invalid format: expected 'flowmark'"

    def test_member_absent(self, flm_path):
        with zipfile.ZipFile(flm_path, "w") as zf:
            zf.writestr("readme.txt", "hi")
        result = load_flm(flm_path)
        assert result.category == "member"

    def test_invalid_json(self, flm_path):
        with zipfile.ZipFile(flm_path, "w") as zf:
            zf.writestr("document.json", "{{")
        assert load_flm(flm_path).category == "invalid_json"

    def test_missing_file(self, tmp_path):
        result = load_flm(str(tmp_path / "missing.flm"))
        assert result.category == "io"
        assert result.error.startswith("Failed to open file:")

    def test_save_into_missing_directory(self, tmp_path):
        result = save_flm(str(tmp_path / "no" / "such" / "dir.flm"), '{"format":"flowmark"}')
        assert result.ok is False
        assert result.category == "io"

    def test_failure_is_logged(self, tmp_path, caplog):
        caplog.set_level(logging.WARNING, logger="flowmark.commands")
        load_flm(str(tmp_path / "missing.flm"))
        assert "load_flm" in caplog.text

    def test_save_unencodable_text(self, flm_path):
        result = save_flm(flm_path, '{"format":"flowmark","t":"\ud800"}')
        assert result.ok is False
        assert result.category == "encoding"

    def test_unsupported_zip_version(self, flm_path):
        save_flm(flm_path, '{"format":"flowmark"}')
        with open(flm_path, "rb") as f:
            raw = bytearray(f.read())
        raw[raw.index(b"PK\x01\x02") + 6] = 64
        with open(flm_path, "wb") as f:
            f.write(bytes(raw))
        result = load_flm(flm_path)
        assert result.ok is False
        assert result.category == "container"

    def test_undecodable_member_name(self, flm_path):
        save_flm(flm_path, '{"format":"flowmark"}')
        with open(flm_path, "rb") as f:
            raw = bytearray(f.read())
        raw[7] |= 0x08
        raw[34] = 0x8B
        with open(flm_path, "wb") as f:
            f.write(bytes(raw))
        result = load_flm(flm_path)
        assert result.ok is False
        assert result.category == "container"
