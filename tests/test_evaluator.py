"""
Tests for the dependency evaluator — detection dispatch and verdicts.
"""

from unittest.mock import patch

import pytest

from recap_check.core.models.dependency import DependencySpec
from recap_check.core.services.detection import DetectionResult
from recap_check.core.services.evaluator import (
    Verdict,
    classify,
    detect_dependency,
    evaluate_dependency,
)
from recap_check.core.services.platform_info import (
    current_platform,
    detect_package_manager,
    docker_available,
)
from tests.fakes import FakeRunner


def _spec(**fields) -> DependencySpec:
    fields.setdefault("check", {"type": "cli", "command": "git"})
    return DependencySpec.model_validate(fields)


def _found(version: str) -> DetectionResult:
    return DetectionResult(installed=True, version=version, discovered_via="path")


class TestClassify:
    def test_missing_required(self):
        spec = _spec(required=True)
        assert classify(spec, DetectionResult.not_found()) is Verdict.MISSING_REQUIRED

    def test_missing_recommended(self):
        assert classify(_spec(), DetectionResult.not_found()) is Verdict.MISSING_RECOMMENDED

    def test_below_minimum(self):
        spec = _spec(min_version="2.0.0")
        assert classify(spec, _found("1.9.0")) is Verdict.VERSION_BELOW_MINIMUM

    def test_meets_minimum_exactly(self):
        spec = _spec(min_version="2.0.0")
        assert classify(spec, _found("2.0.0")) is Verdict.VERSION_OK

    def test_shorter_version_equal(self):
        spec = _spec(min_version="4.3.0")
        assert classify(spec, _found("4.3")) is Verdict.VERSION_OK

    def test_no_gate(self):
        assert classify(_spec(), _found("0.1")) is Verdict.NO_VERSION_GATE

    def test_unknown_version_fails_gate(self):
        spec = _spec(min_version="1.0")
        assert classify(spec, _found("unknown")) is Verdict.VERSION_BELOW_MINIMUM

    def test_required_flag_irrelevant_once_installed(self):
        spec = _spec(required=True, min_version="1.0")
        assert classify(spec, _found("1.2")) is Verdict.VERSION_OK

    @pytest.mark.parametrize("verdict, installed", [
        (Verdict.MISSING_REQUIRED, False),
        (Verdict.MISSING_RECOMMENDED, False),
        (Verdict.VERSION_OK, True),
        (Verdict.VERSION_BELOW_MINIMUM, True),
        (Verdict.NO_VERSION_GATE, True),
    ])
    def test_installed_property(self, verdict, installed):
        assert verdict.installed is installed


class TestDetectDependency:
    def test_dispatch_cli(self):
        runner = FakeRunner(on_path={"git"}, outputs={"git --version": "git version 2.43.0"})
        assert detect_dependency(_spec(), runner).version == "2.43.0"

    def test_dispatch_tex(self):
        runner = FakeRunner(on_path={"latexmk"}, outputs={"latexmk -version": "Version 4.83"})
        spec = _spec(check={"type": "tex"})
        assert detect_dependency(spec, runner).installed is True

    def test_dispatch_r_package(self):
        runner = FakeRunner(on_path={"Rscript"}, outputs={"Rscript": "2.25"})
        spec = _spec(check={"type": "r_package", "package": "rmarkdown"})
        assert detect_dependency(spec, runner).version == "2.25"

    def test_unsupported_type_not_installed(self):
        runner = FakeRunner(on_path={"docker"})
        spec = _spec(check={"type": "docker_image", "image": "rocker/r-ver"})
        assert detect_dependency(spec, runner).installed is False
        assert runner.calls == []


class TestEvaluateDependency:
    def test_report_fields(self):
        runner = FakeRunner(on_path={"git"}, outputs={"git --version": "git version 1.9.0"})
        spec = _spec(
            required=True,
            min_version="2.0.0",
            message="Git tracks changes.",
            install_hint={"linux": {"apt": "sudo apt install git"}},
        )
        report = evaluate_dependency(
            "git", spec, runner=runner,
            platform_key="linux", package_manager="apt", package_manager_available=True,
        )
        assert report.name == "git"
        assert report.verdict is Verdict.VERSION_BELOW_MINIMUM
        assert report.version == "1.9.0"
        assert report.min_version == "2.0.0"
        assert report.message == "Git tracks changes."
        assert report.install_hint == "sudo apt install git"
        assert report.discovered_via == "path"

    def test_missing_uses_default_message(self):
        report = evaluate_dependency("git", _spec(required=True), runner=FakeRunner())
        assert report.verdict is Verdict.MISSING_REQUIRED
        assert report.installed is False
        assert report.message == "No message provided"

    def test_unsupported_type(self):
        spec = _spec(check={"type": "conda_env"}, required=True)
        report = evaluate_dependency("env", spec, runner=FakeRunner())
        assert report.verdict is Verdict.MISSING_REQUIRED

    def test_detection_fault_is_isolated(self):
        with patch("recap_check.core.services.evaluator.detect_cli",
                   side_effect=RuntimeError("boom")):
            report = evaluate_dependency("git", _spec(), runner=FakeRunner())
        assert report.verdict is Verdict.MISSING_RECOMMENDED

    def test_hint_falls_back_to_direct(self):
        spec = _spec(install_hint={"macos": {"brew": "brew install git", "direct": "xcode-select --install"}})
        report = evaluate_dependency(
            "git", spec, runner=FakeRunner(),
            platform_key="macos", package_manager="brew", package_manager_available=False,
        )
        assert report.install_hint == "xcode-select --install"

    def test_to_dict(self):
        runner = FakeRunner(on_path={"git"}, outputs={"git --version": "git version 2.43.0"})
        data = evaluate_dependency("git", _spec(min_version="2.0"), runner=runner).to_dict()
        assert data["verdict"] == "version_ok"
        assert data["installed"] is True
        assert data["version"] == "2.43.0"
        assert data["install_path"] is None


class TestPlatformInfo:
    @pytest.mark.parametrize("system, expected", [
        ("Darwin", "macos"),
        ("Windows", "windows"),
        ("Linux", "linux"),
        ("FreeBSD", "linux"),
    ])
    def test_current_platform(self, system, expected):
        with patch("recap_check.core.services.platform_info.platform.system", return_value=system):
            assert current_platform() == expected

    def test_apt_found_as_apt_get(self):
        which = lambda cmd: "/usr/bin/apt-get" if cmd == "apt-get" else None  # noqa: E731
        assert detect_package_manager("linux", which=which) == ("apt", True)

    def test_second_choice(self):
        which = lambda cmd: "/usr/bin/dnf" if cmd == "dnf" else None  # noqa: E731
        assert detect_package_manager("linux", which=which) == ("dnf", True)

    def test_missing_returns_preferred(self):
        assert detect_package_manager("macos", which=lambda cmd: None) == ("brew", False)

    def test_unknown_platform(self):
        assert detect_package_manager("haiku", which=lambda cmd: None) == (None, False)

    def test_docker(self):
        assert docker_available(which=lambda cmd: "/usr/bin/docker") is True
        assert docker_available(which=lambda cmd: None) is False
