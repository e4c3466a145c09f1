from pathlib import Path

import pytest

from lwframe.driver import categorize, discover_corpus, frame_corpus, frame_file
from lwframe.engine import Framer
from lwframe.errors import CorpusIOError


@pytest.fixture
def corpus(tmp_path):
    (tmp_path / "core-assignment.lw").write_text("SIMPLE PLACED AS 100.\n", encoding="utf-8")
    (tmp_path / "core-show.lw").write_text("SHOW |RESULT|.\n", encoding="utf-8")
    (tmp_path / "materials-stone.lw").write_text("|WALL| OF |STONE|.\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("SHOW RESULT.\n", encoding="utf-8")
    (tmp_path / "nested.lw").mkdir()
    return tmp_path


def test_categorize():
    assert categorize(Path("loops-nested-two.lw")) == ("loops", "nested-two")
    assert categorize(Path("basic.lw")) == ("basic", None)


def test_discover_only_suffix_files(corpus):
    names = [p.name for p in discover_corpus(corpus)]
    assert names == ["core-assignment.lw", "core-show.lw", "materials-stone.lw"]


def test_discover_missing_directory(tmp_path):
    with pytest.raises(CorpusIOError) as exc:
        discover_corpus(tmp_path / "missing")
    assert exc.value.code == "corpus_not_found"
    assert str(exc.value).startswith("[corpus_not_found]")


def test_frame_corpus_rewrites_only_changed_files(corpus):
    untouched = corpus / "core-show.lw"
    before = untouched.stat().st_mtime_ns

    report = frame_corpus(corpus, Framer())

    assert (corpus / "core-assignment.lw").read_text(encoding="utf-8") == "|SIMPLE| PLACED AS 100.\n"
    assert (corpus / "materials-stone.lw").read_text(encoding="utf-8") == "|WALL| OF STONE.\n"
    assert untouched.stat().st_mtime_ns == before
    assert (corpus / "notes.txt").read_text(encoding="utf-8") == "SHOW RESULT.\n"

    assert report.fixed == 2
    assert report.unchanged == 1
    assert report.failed == 0
    summary = report.summary()
    assert summary["fixed_by_category"] == {"core": 1, "materials": 1}
    assert summary["identifiers_framed"] == 1
    assert summary["corrections"] == {"material_quality": 1}


def test_second_run_changes_nothing(corpus):
    frame_corpus(corpus, Framer())
    report = frame_corpus(corpus, Framer())
    assert report.fixed == 0
    assert report.unchanged == 3


def test_check_mode_writes_nothing(corpus):
    report = frame_corpus(corpus, Framer(), write=False)
    assert report.fixed == 2
    assert not report.written
    assert (corpus / "core-assignment.lw").read_text(encoding="utf-8") == "SIMPLE PLACED AS 100.\n"


def test_write_failure_is_reported_per_file(corpus, monkeypatch):
    def refuse(self, data):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(Path, "write_bytes", refuse)
    outcome = frame_file(corpus / "core-assignment.lw", Framer())

    assert outcome.status == "failed"
    assert outcome.error == "[write_failed] cannot write core-assignment.lw: Permission denied"


def test_read_failure_is_reported_per_file(corpus, monkeypatch):
    def refuse(self):
        raise OSError(5, "Input/output error")

    monkeypatch.setattr(Path, "read_bytes", refuse)
    report = frame_corpus(corpus, Framer())

    assert report.failed == 3
    assert all(f.error.startswith("[read_failed]") for f in report.files)


def test_custom_suffix(tmp_path):
    (tmp_path / "prog.weil").write_text("SHOW RESULT.", encoding="utf-8")
    report = frame_corpus(tmp_path, Framer(), suffix=".weil")
    assert [f.name for f in report.files] == ["prog.weil"]
    assert (tmp_path / "prog.weil").read_text(encoding="utf-8") == "SHOW |RESULT|."


def test_utf8_quoted_text_survives_rewrite(tmp_path):
    path = tmp_path / "prices.lw"
    path.write_bytes('TELL "€5".\nSHOW Y.\n'.encode("utf-8"))

    report = frame_corpus(tmp_path, Framer())

    assert report.fixed == 1
    assert report.files[0].encoding == "utf-8"
    assert path.read_bytes() == 'TELL "€5".\nSHOW |Y|.\n'.encode("utf-8")


def test_bom_is_kept_on_rewrite(tmp_path):
    path = tmp_path / "bom.lw"
    path.write_bytes(b"\xef\xbb\xbfSHOW Y.\n")

    outcome = frame_file(path, Framer())

    assert outcome.encoding == "utf-8-sig"
    assert path.read_bytes() == b"\xef\xbb\xbfSHOW |Y|.\n"


def test_non_utf8_file_written_back_in_its_own_encoding(tmp_path):
    path = tmp_path / "legacy.lw"
    path.write_bytes('TELL "Montréal à côté".\nSHOW Y.\n'.encode("latin-1"))

    outcome = frame_file(path, Framer())

    assert outcome.status == "fixed"
    assert outcome.encoding not in ("utf-8", "utf-8-sig")
    assert path.read_bytes() == 'TELL "Montréal à côté".\nSHOW |Y|.\n'.encode("latin-1")


def test_undecodable_file_is_never_rewritten(tmp_path, monkeypatch):
    class NoMatch:
        def best(self):
            return None

    monkeypatch.setattr("lwframe.normalize.from_bytes", lambda raw: NoMatch())
    path = tmp_path / "broken.lw"
    raw = b"SHOW Y \xff.\n"
    path.write_bytes(raw)

    outcome = frame_file(path, Framer())

    assert outcome.status == "failed"
    assert outcome.error.startswith("[undecodable]")
    assert path.read_bytes() == raw
