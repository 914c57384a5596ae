import os
from pathlib import Path

import pytest

from mobilekit.links import (
    Clobber,
    ErrorCause,
    LinkCall,
    LinkError,
    LinkType,
    TargetStyle,
    force_symlink,
    force_symlink_relative,
)


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "src.txt"
    path.write_text("hello")
    return path


def test_force_symlink_file(tmp_path, source_file):
    link = tmp_path / "link"
    force_symlink(source_file, link, TargetStyle.FILE)
    assert link.is_symlink()
    assert Path(os.readlink(link)) == source_file
    assert link.read_text() == "hello"


def test_force_symlink_replaces_file(tmp_path, source_file):
    link = tmp_path / "link"
    link.write_text("old")
    force_symlink(source_file, link, TargetStyle.FILE)
    assert link.is_symlink()
    assert link.read_text() == "hello"


def test_force_symlink_replaces_directory(tmp_path, source_file):
    link = tmp_path / "link"
    link.mkdir()
    (link / "inner").write_text("x")
    force_symlink(source_file, link, TargetStyle.FILE)
    assert link.is_symlink()
    assert link.read_text() == "hello"


def test_directory_style_places_link_inside(tmp_path, source_file):
    target = tmp_path / "dest"
    target.mkdir()
    call = LinkCall(
        LinkType.SYMBOLIC, Clobber.FILE_ONLY, source_file, target, TargetStyle.DIRECTORY
    )
    assert call.target_override == target / source_file.name
    call.run()
    assert (target / source_file.name).is_symlink()
    assert (target / source_file.name).read_text() == "hello"


def test_never_clobber_refuses_existing(tmp_path, source_file):
    link = tmp_path / "link"
    link.write_text("old")
    call = LinkCall(LinkType.SYMBOLIC, Clobber.NEVER, source_file, link, TargetStyle.FILE)
    with pytest.raises(LinkError) as info:
        call.run()
    assert info.value.cause is ErrorCause.LINK_FAILED
    assert link.read_text() == "old"
    assert not link.is_symlink()


def test_hard_link(tmp_path, source_file):
    link = tmp_path / "hard"
    LinkCall(LinkType.HARD, Clobber.NEVER, source_file, link, TargetStyle.FILE).run()
    assert not link.is_symlink()
    assert os.path.samefile(link, source_file)


def test_missing_file_name_error(tmp_path):
    with pytest.raises(LinkError) as info:
        LinkCall(LinkType.SYMBOLIC, Clobber.NEVER, Path("/"), tmp_path, TargetStyle.DIRECTORY)
    err = info.value
    assert err.cause is ErrorCause.MISSING_FILE_NAME
    assert str(err).startswith("Failed to create a symbolic link from")
    assert "(clobbering disabled)" in str(err)
    assert "Neither the source nor target contained a file name." in str(err)


def test_force_symlink_relative_directory(tmp_path):
    src = tmp_path / "a" / "src"
    src.mkdir(parents=True)
    (src / "f").write_text("data")
    dest = tmp_path / "b"
    dest.mkdir()
    force_symlink_relative(src, dest, TargetStyle.DIRECTORY)
    link = dest / "src"
    assert link.is_symlink()
    assert Path(os.readlink(link)) == Path("..") / "a" / "src"
    assert (link / "f").read_text() == "data"


def test_force_symlink_relative_parent_uses_source_name(tmp_path):
    parent = tmp_path / "a"
    dest = parent / "b"
    dest.mkdir(parents=True)
    force_symlink_relative(parent, dest, TargetStyle.DIRECTORY)
    link = dest / "a"
    assert link.is_symlink()
    assert Path(os.readlink(link)) == Path("..")
    assert link.resolve() == parent.resolve()