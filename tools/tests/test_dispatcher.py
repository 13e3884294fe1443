"""Platform dispatcher: resolution, fallback and exit status forwarding."""

import logging
import subprocess
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

from contract_kits.error_taxonomy import BinaryNotFound, ChildProcessSignal, UnsupportedPlatform
from tools.cli import dispatcher
from tools.cli.dispatcher import DirectoryLocator, DispatcherSettings, dispatch, resolve_binary
from tools.cli.platforms import Arch, Platform, detect_platform, supported_packages


class FakeLocator:
    def __init__(self, *packages):
        self.installed = set(packages)
        self.lookups = []

    def locate(self, package, binary):
        self.lookups.append((package, binary))
        if package in self.installed:
            return Path("/opt") / package / "bin" / binary
        return None


class FakeRunner:
    def __init__(self, returncode=0):
        self.returncode = returncode
        self.calls = []

    def __call__(self, cmd):
        self.calls.append(cmd)
        return SimpleNamespace(returncode=self.returncode)


@pytest.mark.parametrize("platform", list(Platform))
@pytest.mark.parametrize("arch", list(Arch))
def test_every_supported_pair_resolves_its_own_package(platform, arch):
    expected = f"satlayer-cli-{platform.value}-{arch.value}"
    resolution = resolve_binary(platform, arch, FakeLocator(*supported_packages("satlayer-cli")))

    assert resolution.package == expected
    assert not resolution.emulated


def test_supported_packages_is_the_closed_set():
    assert len(supported_packages("satlayer-cli")) == 6


def test_arm64_falls_back_to_x64_with_warning(caplog):
    runner = FakeRunner()
    with caplog.at_level(logging.WARNING):
        code = dispatch(
            ["--version"],
            settings=DispatcherSettings(),
            locator=FakeLocator("satlayer-cli-darwin-x64"),
            host=(Platform.DARWIN, Arch.ARM64),
            runner=runner,
        )

    assert code == 0
    assert runner.calls == [["/opt/satlayer-cli-darwin-x64/bin/satlayer", "--version"]]
    assert "emulation" in caplog.text


def test_x64_does_not_fall_back_to_arm64():
    locator = FakeLocator("satlayer-cli-linux-arm64")
    assert resolve_binary(Platform.LINUX, Arch.X64, locator) is None
    assert [package for package, _ in locator.lookups] == ["satlayer-cli-linux-x64"]


def test_missing_package_spawns_nothing():
    runner = FakeRunner()
    with pytest.raises(BinaryNotFound) as exc:
        dispatch([], settings=DispatcherSettings(), locator=FakeLocator(),
                 host=(Platform.LINUX, Arch.X64), runner=runner)
    assert "satlayer-cli-linux-x64" in str(exc.value)
    assert runner.calls == []


def test_unsupported_platform_exits_one_without_spawning(monkeypatch, capsys):
    def boom(*args, **kwargs):
        raise AssertionError("nothing may be spawned")

    monkeypatch.setattr(sys, "platform", "sunos5")
    monkeypatch.setattr(subprocess, "run", boom)

    assert dispatcher.main(["--help"]) == 1
    assert "Unsupported platform: sunos5" in capsys.readouterr().err


def test_detect_platform_normalizes_machine_names():
    assert detect_platform("linux", "aarch64") == (Platform.LINUX, Arch.ARM64)
    assert detect_platform("win32", "AMD64") == (Platform.WIN32, Arch.X64)
    with pytest.raises(UnsupportedPlatform):
        detect_platform("linux", "riscv64")


def test_arguments_and_exit_code_are_forwarded():
    runner = FakeRunner(returncode=3)
    code = dispatch(
        ["keys", "list", "--output", "json"],
        settings=DispatcherSettings(),
        locator=FakeLocator("satlayer-cli-linux-x64"),
        host=(Platform.LINUX, Arch.X64),
        runner=runner,
    )
    assert code == 3
    assert runner.calls[0][1:] == ["keys", "list", "--output", "json"]


def test_signal_termination_maps_to_128_plus_n():
    with pytest.raises(ChildProcessSignal) as exc:
        dispatch([], settings=DispatcherSettings(), locator=FakeLocator("satlayer-cli-linux-x64"),
                 host=(Platform.LINUX, Arch.X64), runner=FakeRunner(returncode=-9))
    assert exc.value.exit_code == 137


def test_unexecutable_binary_raises_binary_not_found():
    def runner(cmd):
        raise PermissionError(13, "Permission denied", cmd[0])

    with pytest.raises(BinaryNotFound) as exc:
        dispatch([], settings=DispatcherSettings(), locator=FakeLocator("satlayer-cli-linux-x64"),
                 host=(Platform.LINUX, Arch.X64), runner=runner)
    assert "Permission denied" in exc.value.detail


def test_windows_binary_has_exe_suffix():
    resolution = resolve_binary(Platform.WIN32, Arch.X64, FakeLocator("satlayer-cli-win32-x64"))
    assert resolution.path.name == "satlayer.exe"


def test_directory_locator(tmp_path):
    binary = tmp_path / "satlayer-cli-linux-arm64" / "bin" / "satlayer"
    binary.parent.mkdir(parents=True)
    binary.write_text("#!/bin/sh\n")

    locator = DirectoryLocator(tmp_path)
    assert locator.locate("satlayer-cli-linux-arm64", "satlayer") == binary
    assert locator.locate("satlayer-cli-linux-x64", "satlayer") is None
