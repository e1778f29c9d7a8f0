"""Test atomic file writes."""

from edge_journal.core.file_io import read_text, safe_write_text


class TestSafeWriteText:
    def test_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "a" / "b" / "journal.json"
        safe_write_text(path, "{}")
        assert path.read_text() == "{}"

    def test_replaces_contents(self, tmp_path):
        path = tmp_path / "journal.json"
        safe_write_text(path, "first version, longer")
        safe_write_text(path, "second")
        assert path.read_text() == "second"

    def test_no_temp_file_left(self, tmp_path):
        path = tmp_path / "journal.json"
        safe_write_text(path, "x")
        assert not (tmp_path / "journal.json.tmp").exists()

    def test_unicode(self, tmp_path):
        path = tmp_path / "journal.json"
        safe_write_text(path, "Entrée ✓")
        assert read_text(path) == "Entrée ✓"


class TestReadText:
    def test_missing_is_none(self, tmp_path):
        assert read_text(tmp_path / "nope.json") is None
