"""Tests for backup export and import."""

import json
from datetime import date

import pytest

from worship_log.core.backup import (
    BackupError,
    backup_filename,
    dumps_backup,
    export_backup,
    import_backup,
)


class TestExportBackup:
    """Tests for export_backup() and dumps_backup()."""

    def test_document_shape(self, sample_records):
        document = export_backup(sample_records, ["Nova"])

        assert set(document) == {"history", "customSongs"}
        assert document["customSongs"] == ["Nova"]
        assert document["history"][0] == {
            "id": "rec_1",
            "date": "2024-01-10",
            "description": "Manhã",
            "songs": ["A", "B"],
        }

    def test_dumps_is_pretty_printed_utf8(self, sample_records):
        text = dumps_backup(sample_records, [])

        assert text.startswith("{\n  ")
        assert "Manhã" in text
        assert json.loads(text) == export_backup(sample_records, [])


class TestImportBackup:
    """Tests for import_backup()."""

    def test_round_trip(self, sample_records):
        data = import_backup(dumps_backup(sample_records, ["Nova", "Outra"]))

        assert data.records == sample_records
        assert data.custom_songs == ["Nova", "Outra"]

    def test_accepts_parsed_document(self, sample_records):
        data = import_backup(export_backup(sample_records, []))

        assert data.records == sample_records

    def test_accepts_bytes(self):
        data = import_backup('{"history": []}'.encode("utf-8"))

        assert data.records == []

    def test_custom_songs_default_to_empty(self):
        data = import_backup({"history": []})

        assert data.custom_songs == []

    def test_missing_description_defaults_to_empty(self):
        data = import_backup({"history": [{"id": "1", "date": "2024-01-01", "songs": ["A"]}]})

        assert data.records[0].description == ""

    @pytest.mark.parametrize(
        "document",
        [
            "not json",
            "[]",
            '{"customSongs": []}',
            '{"history": {}}',
            '{"history": [], "customSongs": "A"}',
            '{"history": [], "customSongs": [1]}',
            '{"history": ["A"]}',
            '{"history": [{"date": "2024-01-01", "songs": []}]}',
            '{"history": [{"id": "1", "date": "2024-01-01", "songs": "A"}]}',
            '{"history": [{"id": "1", "date": "05/02/2024", "songs": ["A"]}]}',
            '{"history": [{"id": "1", "date": "2024-2-5x", "songs": ["A"]}]}',
        ],
    )
    def test_invalid_documents(self, document):
        with pytest.raises(BackupError):
            import_backup(document)

    def test_backup_error_is_value_error(self):
        with pytest.raises(ValueError):
            import_backup("{")


class TestBackupFilename:
    """Tests for backup_filename()."""

    def test_filename(self):
        assert backup_filename("igreja", date(2024, 2, 20)) == "backup_igreja_2024-02-20.json"
