import pytest

from mobilekit.cargo import CargoCommand, explicit_cargo_env


def test_bare_command_is_just_subcommand():
    assert CargoCommand("build").args() == ["build"]


def test_full_command_order():
    command = CargoCommand(
        "build",
        verbose=True,
        package="app",
        target="aarch64-linux-android",
        no_default_features=True,
        features=["one", "two"],
        extra_args=["--lib"],
        release=True,
    )
    assert command.args() == [
        "build",
        "-vv",
        "--package",
        "app",
        "--target",
        "aarch64-linux-android",
        "--no-default-features",
        "--features",
        "one two",
        "--lib",
        "--release",
    ]


def test_manifest_path_is_canonical(tmp_path):
    manifest = tmp_path / "Cargo.toml"
    manifest.write_text("[package]\n")
    args = CargoCommand("check", manifest_path=tmp_path / "." / "Cargo.toml").args()
    index = args.index("--manifest-path")
    assert args[index + 1] == str(manifest.resolve())
    assert args[0] == "check"


def test_missing_manifest_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        CargoCommand("build", manifest_path=tmp_path / "absent.toml")


def test_explicit_cargo_env_filters():
    environ = {"CARGO_TARGET_DIR": "/t", "CARGO_BUILD_TARGET_DIR": "/b", "PATH": "/bin"}
    assert explicit_cargo_env(environ) == {
        "CARGO_TARGET_DIR": "/t",
        "CARGO_BUILD_TARGET_DIR": "/b",
    }
    assert explicit_cargo_env({"PATH": "/bin"}) == {}


def test_env_prefers_cargo_settings(monkeypatch):
    monkeypatch.setenv("CARGO_TARGET_DIR", "/from-env")
    monkeypatch.delenv("CARGO_BUILD_TARGET_DIR", raising=False)
    env = CargoCommand("build").env({"CARGO_TARGET_DIR": "/explicit", "FOO": "bar"})
    assert env["CARGO_TARGET_DIR"] == "/from-env"
    assert env["FOO"] == "bar"
    assert "CARGO_BUILD_TARGET_DIR" not in env