"""docker buildx wrapper: command shape and failure propagation."""

from types import SimpleNamespace

import pytest

from contract_kits.error_taxonomy import BinaryNotFound, BuildFailed, ChildProcessSignal
from tools.ci import docker_build
from tools.ci.docker_build import BuildSettings, build_command, run_build


@pytest.fixture
def settings(monkeypatch):
    for var in ("DOCKER_BIN", "DOCKER_CACHE_FROM", "DOCKER_CACHE_TO"):
        monkeypatch.delenv(var, raising=False)
    return BuildSettings()


def test_default_command_builds_current_directory(tmp_path, settings):
    cwd = tmp_path / "vault-router"
    cwd.mkdir()

    assert build_command(cwd=cwd, settings=settings) == [
        "docker", "buildx", "build",
        "--build-arg", "CONTRACT_DIR=.",
        "--output", "type=local,dest=dist",
        ".",
    ]


def test_root_sets_context_and_contract_dir(tmp_path, settings):
    cwd = tmp_path / "crates" / "bvs-registry"
    cwd.mkdir(parents=True)

    cmd = build_command(root="../..", cwd=cwd, settings=settings)

    assert cmd[cmd.index("--build-arg") + 1] == "CONTRACT_DIR=crates/bvs-registry"
    assert cmd[-1] == "../.."


def test_cache_arguments_use_name(tmp_path, monkeypatch):
    monkeypatch.setenv("DOCKER_CACHE_FROM", "ghcr.io/satlayer/cache")
    monkeypatch.setenv("DOCKER_CACHE_TO", "ghcr.io/satlayer/cache")
    cwd = tmp_path / "vault-bank"
    cwd.mkdir()

    cmd = build_command(cwd=cwd)

    assert cmd[cmd.index("--cache-from") + 1] == "type=registry,ref=ghcr.io/satlayer/cache/vault-bank"
    assert cmd[cmd.index("--cache-to") + 1] == "type=registry,ref=ghcr.io/satlayer/cache/vault-bank,mode=max"


def test_only_cache_to(tmp_path, monkeypatch):
    monkeypatch.delenv("DOCKER_CACHE_FROM", raising=False)
    monkeypatch.setenv("DOCKER_CACHE_TO", "registry.local:5000")

    cmd = build_command(name="pauser", cwd=tmp_path)

    assert "--cache-from" not in cmd
    assert cmd[cmd.index("--cache-to") + 1] == "type=registry,ref=registry.local:5000/pauser,mode=max"


def test_run_build_raises_with_child_status():
    with pytest.raises(BuildFailed) as exc:
        run_build(["docker", "buildx", "build", "."], runner=lambda cmd, cwd=None: SimpleNamespace(returncode=17))
    assert exc.value.exit_code == 17


def test_run_build_maps_signal_to_128_plus_n():
    with pytest.raises(ChildProcessSignal) as exc:
        run_build(["docker", "buildx", "build", "."], runner=lambda cmd, cwd=None: SimpleNamespace(returncode=-15))
    assert exc.value.exit_code == 143


def test_main_reports_missing_docker(monkeypatch, capsys, settings):
    def missing(cmd, cwd=None):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(docker_build.subprocess, "run", missing)

    assert docker_build.main([]) == BinaryNotFound.exit_code
    assert "Cannot run docker" in capsys.readouterr().err


def test_main_returns_build_status(monkeypatch, settings):
    monkeypatch.setattr(docker_build.subprocess, "run", lambda cmd, cwd=None: SimpleNamespace(returncode=2))
    assert docker_build.main([]) == 2


def test_dry_run_prints_without_running(monkeypatch, capsys, settings):
    def boom(*args, **kwargs):
        raise AssertionError("dry run must not build")

    monkeypatch.setattr(docker_build.subprocess, "run", boom)

    assert docker_build.main(["--dry-run", "--name", "rewards"]) == 0
    assert capsys.readouterr().out.startswith("docker buildx build --build-arg CONTRACT_DIR=.")
