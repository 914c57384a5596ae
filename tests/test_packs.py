from pathlib import Path

import pytest

from mobilekit.packs import (
    BRAINIUM,
    FancyPack,
    FancyPackParseError,
    FancyPackResolveError,
    ListError,
    PackLookupError,
    SimplePack,
    list_app_packs,
    lookup,
    lookup_app,
    lookup_platform,
)


def _spec(path: Path, target: Path, extra: str = "") -> Path:
    path.write_text(f"path = '{target.as_posix()}'\n{extra}", encoding="utf-8")
    return path


def test_lookup_simple_directory(tmp_path):
    (tmp_path / "plain").mkdir()
    pack = lookup(tmp_path, "plain")
    assert pack == SimplePack(tmp_path / "plain")
    assert pack.resolve() == [tmp_path / "plain"]
    assert pack.submodule_path() is None


def test_lookup_prefers_toml(tmp_path):
    target = tmp_path / "real"
    target.mkdir()
    (tmp_path / "pack").mkdir()
    _spec(tmp_path / "pack.toml", target)
    pack = lookup(tmp_path, "pack")
    assert isinstance(pack, FancyPack)
    assert pack.path == target
    assert pack.base is None
    assert pack.resolve() == [target]


def test_lookup_missing(tmp_path):
    with pytest.raises(PackLookupError) as info:
        lookup(tmp_path, "nothing")
    assert "Didn't find nothing template pack" in str(info.value)
    assert str(tmp_path / "nothing.toml") in str(info.value)


def test_lookup_invalid_toml(tmp_path):
    (tmp_path / "bad.toml").write_text("this is = = not toml", encoding="utf-8")
    with pytest.raises(PackLookupError) as info:
        lookup(tmp_path, "bad")
    assert isinstance(info.value.__cause__, FancyPackParseError)
    assert "Failed to parse remote template pack spec" in str(info.value)


def test_parse_missing_path_field(tmp_path):
    spec = tmp_path / "nopath.toml"
    spec.write_text("base = 'x'\n", encoding="utf-8")
    with pytest.raises(FancyPackParseError):
        FancyPack.parse(spec)


def test_parse_unreadable(tmp_path):
    with pytest.raises(FancyPackParseError) as info:
        FancyPack.parse(tmp_path / "absent.toml")
    assert "Failed to read remote template pack spec" in str(info.value)


def test_base_pack_resolves_first(tmp_path):
    base_dir = tmp_path / "base"
    base_dir.mkdir()
    target = tmp_path / "target"
    target.mkdir()
    spec = _spec(tmp_path / "layered.toml", target, "base = 'base'\n")
    pack = FancyPack.parse(spec)
    assert pack.base == SimplePack(base_dir)
    assert pack.resolve() == [base_dir, target]


def test_missing_base_pack(tmp_path):
    target = tmp_path / "target"
    target.mkdir()
    spec = _spec(tmp_path / "layered.toml", target, "base = 'ghost'\n")
    with pytest.raises(FancyPackParseError) as info:
        FancyPack.parse(spec)
    assert "Failed to lookup base template pack" in str(info.value)


def test_resolve_missing_target(tmp_path):
    spec = _spec(tmp_path / "gone.toml", tmp_path / "nowhere")
    pack = FancyPack.parse(spec)
    with pytest.raises(FancyPackResolveError) as info:
        pack.resolve()
    assert "Template pack wasn't found at" in str(info.value)


def test_submodule_parsed(tmp_path):
    target = tmp_path / "target"
    target.mkdir()
    spec = _spec(
        tmp_path / "sub.toml",
        target,
        "[submodule]\nremote = 'https://example.com/templates.git'\npath = 'sub/dir'\n",
    )
    pack = FancyPack.parse(spec)
    assert pack.submodule_path() == Path("sub/dir")
    assert pack.submodule.resolved_name() == "templates"
    assert pack.resolve() == [target]


def test_submodule_without_name_fails_resolve(tmp_path):
    target = tmp_path / "target"
    target.mkdir()
    spec = _spec(
        tmp_path / "sub.toml",
        target,
        "[submodule]\nremote = 'https://example.com/nameless'\npath = 'sub'\n",
    )
    pack = FancyPack.parse(spec)
    with pytest.raises(FancyPackResolveError) as info:
        pack.resolve()
    assert "Failed to initialize submodule" in str(info.value)


def test_home_expanded(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    spec = tmp_path / "home.toml"
    spec.write_text("path = '~/packs/here'\n", encoding="utf-8")
    pack = FancyPack.parse(spec)
    assert pack.path == tmp_path / "packs" / "here"


def test_list_app_packs(tmp_path):
    (tmp_path / "alpha").mkdir()
    (tmp_path / "alpha.toml").write_text("", encoding="utf-8")
    (tmp_path / "beta").mkdir()
    (tmp_path / "brainstorm").mkdir()
    assert list_app_packs(tmp_path) == ["alpha", "beta"]
    assert list_app_packs(tmp_path, brainium=True) == [*BRAINIUM, "alpha", "beta"]


def test_list_app_packs_missing_dir(tmp_path):
    with pytest.raises(ListError) as info:
        list_app_packs(tmp_path / "missing")
    assert "Failed to read directory" in str(info.value)


def test_lookup_app_and_platform_use_install_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("CARGO_HOME", str(tmp_path))
    root = tmp_path / ".mobilekit" / "templates"
    (root / "apps" / "wgpu").mkdir(parents=True)
    (root / "platforms" / "xcode").mkdir(parents=True)
    assert lookup_app("wgpu") == SimplePack(root / "apps" / "wgpu")
    assert lookup_platform("xcode") == SimplePack(root / "platforms" / "xcode")
    assert list_app_packs() == ["wgpu"]
    with pytest.raises(PackLookupError):
        lookup_app("xcode")