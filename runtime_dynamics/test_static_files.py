import os
from pathlib import Path

import pytest

from runtime_dynamics.core.errors import TraversalError
from runtime_dynamics.web.static_files import RESERVED_URLS, build_index, resolve


def test_about_and_css_example(tmp_path):
    (tmp_path / "css").mkdir()
    (tmp_path / "about.html").write_text("about")
    (tmp_path / "css" / "site.css").write_text("css")

    index = build_index(tmp_path)

    assert dict(index) == {
        "/about.html": str(tmp_path / "about.html"),
        "/about": str(tmp_path / "about.html"),
        "/css/site.css": str(tmp_path / "css" / "site.css"),
    }


def test_every_file_resolves(static_root):
    index = build_index(static_root)

    for dirpath, _, filenames in os.walk(static_root):
        for filename in filenames:
            path = Path(dirpath) / filename
            url = "/" + path.relative_to(static_root).as_posix()
            if url in RESERVED_URLS:
                continue
            assert resolve(index, url) == str(path)


def test_html_files_resolve_without_extension(static_root):
    index = build_index(static_root)

    assert resolve(index, "/about") == resolve(index, "/about.html")
    assert resolve(index, "/docs/index") == str(static_root / "docs" / "index.html")
    assert resolve(index, "/docs/index.html") == str(static_root / "docs" / "index.html")


def test_non_html_files_have_no_alias(static_root):
    index = build_index(static_root)

    assert resolve(index, "/css/site") is None
    assert resolve(index, "/images/logo") is None


def test_reserved_urls_never_indexed(static_root):
    index = build_index(static_root)

    assert (static_root / "index.html").exists()
    assert (static_root / "desktop-login.html").exists()
    for url in RESERVED_URLS:
        assert url not in index


def test_resolve_rejects_reserved_urls_in_any_mapping(tmp_path):
    index = {"/index.html": str(tmp_path / "index.html"), "/": str(tmp_path)}

    assert resolve(index, "/index.html") is None
    assert resolve(index, "/") is None


def test_resolve_missing_is_none(static_root):
    index = build_index(static_root)

    assert resolve(index, "/missing.png") is None


def test_resolve_is_exact_match(static_root):
    index = build_index(static_root)

    assert resolve(index, "/css") is None
    assert resolve(index, "/css/") is None
    assert resolve(index, "/CSS/site.css") is None
    assert resolve(index, "css/site.css") is None


def test_directories_are_not_indexed(static_root):
    index = build_index(static_root)

    assert "/css" not in index
    assert "/docs" not in index


def test_index_is_read_only(static_root):
    index = build_index(static_root)

    with pytest.raises(TypeError):
        index["/new.txt"] = "/tmp/new.txt"


def test_index_paths_are_absolute(static_root, monkeypatch):
    monkeypatch.chdir(static_root.parent)
    index = build_index("static")

    assert index["/css/site.css"] == str(static_root / "css" / "site.css")
    assert all(os.path.isabs(path) for path in index.values())


def test_index_is_a_snapshot(static_root):
    index = build_index(static_root)
    (static_root / "late.txt").write_text("added after build")

    assert resolve(index, "/late.txt") is None


def test_empty_directory(tmp_path):
    assert dict(build_index(tmp_path)) == {}


def test_missing_root_raises(tmp_path):
    missing = tmp_path / "does-not-exist"

    with pytest.raises(TraversalError) as exc_info:
        build_index(missing)

    assert exc_info.value.path == str(missing)
    assert isinstance(exc_info.value.__cause__, OSError)


def test_file_as_root_raises(tmp_path):
    not_a_dir = tmp_path / "file.txt"
    not_a_dir.write_text("x")

    with pytest.raises(TraversalError):
        build_index(not_a_dir)


def test_unreadable_subdirectory_stops_walk(static_root, monkeypatch):
    real_scandir = os.scandir
    broken = str(static_root / "docs")

    def scandir(path="."):
        if os.fspath(path) == broken:
            raise PermissionError(13, "Permission denied", broken)
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)

    index = None
    with pytest.raises(TraversalError) as exc_info:
        index = build_index(static_root)

    assert index is None
    assert exc_info.value.path == broken
    assert isinstance(exc_info.value.__cause__, PermissionError)
