"""
Unit tests for the image-ensure step.
"""
import pytest
from dapsbox.BUILDERS.image_builder import ImageBuilder
from dapsbox.MODELS.settings import WrapperSettings
from dapsbox.REGISTRY.image_reference import ImageReference
from dapsbox.exceptions import CommandFailedError


def make_builder(runner, image="dapsbox:latest"):
    return ImageBuilder(WrapperSettings(image=image), runner, ImageReference.parse(image))


class TestImageBuilder:
    """Tests for ImageBuilder."""

    def test_existing_image_is_not_rebuilt(self, make_runner):
        runner = make_runner(image_exists=True)
        make_builder(runner).ensure()
        assert runner.commands == [["podman", "image", "exists", "dapsbox:latest"]]

    def test_missing_image_is_built(self, make_runner):
        runner = make_runner(image_exists=False, working_container="ctr-1")
        make_builder(runner, "docs/daps").ensure()
        assert runner.commands == [
            ["podman", "image", "exists", "docs/daps:latest"],
            ["buildah", "from", "registry.opensuse.org/opensuse/leap:15.5"],
            ["buildah", "run", "ctr-1", "--",
             "zypper", "--non-interactive", "install", "--no-recommends",
             "daps", "suse-xsl-stylesheets", "geekodoc", "inotify-tools"],
            ["buildah", "config", "--workingdir", "/docs", "ctr-1"],
            ["buildah", "commit", "ctr-1", "docs/daps:latest"],
        ]

    def test_build_reports_progress(self, make_runner, capsys):
        make_builder(make_runner(image_exists=False)).ensure()
        assert "Building image dapsbox:latest" in capsys.readouterr().err

    def test_failed_install_stops_build(self, make_runner):
        runner = make_runner(image_exists=False, failures={("buildah", "run"): 104})
        with pytest.raises(CommandFailedError) as excinfo:
            make_builder(runner).ensure()
        assert excinfo.value.exit_code == 104
        # No cleanup and no commit after the failed step
        assert runner.commands[-1][:2] == ["buildah", "run"]

    def test_failed_from_stops_build(self, make_runner):
        runner = make_runner(image_exists=False, failures={("buildah", "from"): 125})
        with pytest.raises(CommandFailedError) as excinfo:
            make_builder(runner).ensure()
        assert excinfo.value.returncode == 125
        assert len(runner.commands) == 2

    def test_install_command_is_single_step(self, runner):
        command = make_builder(runner).install_command()
        assert command[:4] == ["zypper", "--non-interactive", "install", "--no-recommends"]
