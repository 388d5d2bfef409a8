from photolib.scanning.filesystem import (
    ensure_directory,
    gather_inputs,
    normalize_extensions,
    search_input_path,
)


def test_normalize_extensions():
    assert normalize_extensions(["JPG", ".dng", " png ", ""]) == {"jpg", "dng", "png"}


def test_search_filters_by_extension_case_insensitively(tmp_path):
    for name in ["b.JPG", "a.jpg", "c.dng", "notes.txt", "README"]:
        (tmp_path / name).write_text("x")

    files = search_input_path(tmp_path, [".jpg", "DNG"])
    assert [p.name for p in files] == ["a.jpg", "b.JPG", "c.dng"]


def test_search_is_not_recursive(tmp_path):
    sub = tmp_path / "nested.jpg"
    sub.mkdir()
    (sub / "inner.jpg").write_text("x")
    (tmp_path / "top.jpg").write_text("x")

    assert search_input_path(tmp_path, ["jpg"]) == [tmp_path / "top.jpg"]


def test_gather_inputs_concatenates_in_input_order(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (second / "a.jpg").write_text("x")
    (first / "z.jpg").write_text("x")

    assert gather_inputs([first, second], ["jpg"]) == [first / "z.jpg", second / "a.jpg"]


def test_ensure_directory(tmp_path):
    target = tmp_path / "a" / "b"
    ensure_directory(target)
    assert target.is_dir()
    ensure_directory(target)  # idempotent
    assert target.is_dir()
