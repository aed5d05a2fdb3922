import pytest

from diagsnap import SnapshotError, Variations
from diagsnap.snapshot.modes import UpdateMode
from diagsnap.snapshot.store import Outcome, SnapshotStore

VARIATIONS = Variations(("old trailer\n", "new\n"))


def test_missing_snapshot_writes_wip(tmp_path):
    store = SnapshotStore(tmp_path)
    result = store.check("compile-fail", VARIATIONS)

    assert result.outcome is Outcome.MISSING
    assert not result.passed
    assert result.written == tmp_path / "wip" / "compile-fail.stderr"
    assert result.written.read_text(encoding="utf-8") == "new\n"
    assert store.new == [result.written]
    assert not (tmp_path / "compile-fail.stderr").exists()


def test_missing_snapshot_overwrite_writes_in_place(tmp_path):
    store = SnapshotStore(tmp_path, mode=UpdateMode.OVERWRITE)
    result = store.check("nested/case", VARIATIONS)

    assert result.outcome is Outcome.MISSING
    assert result.written == tmp_path / "nested" / "case.stderr"
    assert result.written.read_text(encoding="utf-8") == "new\n"


def test_missing_snapshot_disabled_writes_nothing(tmp_path):
    store = SnapshotStore(tmp_path, mode=UpdateMode.DISABLED)
    result = store.check("compile-fail", VARIATIONS)

    assert result.outcome is Outcome.MISSING
    assert result.written is None
    assert list(tmp_path.iterdir()) == []


def test_older_variation_matches(tmp_path):
    path = tmp_path / "compile-fail.stderr"
    path.write_text("old trailer\n", encoding="utf-8")

    store = SnapshotStore(tmp_path)
    result = store.check("compile-fail", VARIATIONS)

    assert result.outcome is Outcome.MATCH
    assert result.passed
    assert result.actual == "new\n"
    assert store.used == [path]


def test_crlf_snapshot_matches(tmp_path):
    (tmp_path / "compile-fail.stderr").write_bytes(b"new\r\n")
    result = SnapshotStore(tmp_path).check("compile-fail.stderr", VARIATIONS)
    assert result.outcome is Outcome.MATCH


def test_mismatch_leaves_snapshot_alone(tmp_path):
    path = tmp_path / "compile-fail.stderr"
    path.write_text("something else\n", encoding="utf-8")

    store = SnapshotStore(tmp_path)
    result = store.check("compile-fail", VARIATIONS)

    assert result.outcome is Outcome.MISMATCH
    assert result.expected == "something else\n"
    assert result.written is None
    assert path.read_text(encoding="utf-8") == "something else\n"
    assert not (tmp_path / "wip").exists()


def test_mismatch_overwrite_updates_snapshot(tmp_path):
    path = tmp_path / "compile-fail.stderr"
    path.write_text("something else\n", encoding="utf-8")

    store = SnapshotStore(tmp_path, mode=UpdateMode.OVERWRITE)
    result = store.check("compile-fail", VARIATIONS)

    assert result.outcome is Outcome.UPDATED
    assert result.passed
    assert path.read_text(encoding="utf-8") == "new\n"
    assert not path.with_suffix(".stderr.tmp").exists()


def test_custom_matcher(tmp_path):
    (tmp_path / "loose.stderr").write_text("  NEW  \n", encoding="utf-8")
    store = SnapshotStore(tmp_path, matcher=lambda expected, actual: expected.strip().lower() == actual.strip())
    assert store.check("loose", VARIATIONS).outcome is Outcome.MATCH


def test_load_all_skips_wip(tmp_path):
    (tmp_path / "b.stderr").write_text("b\n", encoding="utf-8")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "a.stderr").write_text("a\n", encoding="utf-8")
    (tmp_path / "wip").mkdir()
    (tmp_path / "wip" / "c.stderr").write_text("c\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored\n", encoding="utf-8")

    store = SnapshotStore(tmp_path)
    store.load_all()
    assert store.paths == [tmp_path / "b.stderr", tmp_path / "sub" / "a.stderr"]


def test_load_all_missing_root(tmp_path):
    store = SnapshotStore(tmp_path / "absent")
    store.load_all()
    assert store.paths == []


def test_read_snapshot_errors_are_wrapped(tmp_path):
    (tmp_path / "dir.stderr").mkdir()
    with pytest.raises(SnapshotError):
        SnapshotStore(tmp_path).read_snapshot(tmp_path / "dir.stderr")


def test_write_snapshot_errors_are_wrapped(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = SnapshotStore(blocker, mode=UpdateMode.OVERWRITE)
    with pytest.raises(SnapshotError):
        store.write_snapshot(store.path_for("case"), "new\n")


@pytest.mark.parametrize("name", ["../escape", "nested/../../escape"])
def test_path_for_rejects_parent_traversal(tmp_path, name):
    with pytest.raises(SnapshotError):
        SnapshotStore(tmp_path / "ui").path_for(name)


def test_check_rejects_absolute_name(tmp_path):
    store = SnapshotStore(tmp_path / "ui", mode=UpdateMode.OVERWRITE)
    with pytest.raises(SnapshotError):
        store.check(str(tmp_path / "elsewhere" / "case"), VARIATIONS)
    assert not (tmp_path / "elsewhere").exists()


def test_failed_replace_removes_temporary_file(tmp_path):
    target = tmp_path / "case.stderr"
    target.mkdir()
    (target / "keep").write_text("", encoding="utf-8")

    store = SnapshotStore(tmp_path)
    with pytest.raises(SnapshotError):
        store.write_snapshot(target, "new\n")
    assert not (tmp_path / "case.stderr.tmp").exists()
