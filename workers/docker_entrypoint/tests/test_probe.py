"""
test_probe — the help-flag subcommand probe against a real executable.

Tests verify invariant properties:
  - Exit 0 from `<binary> <sub> -h` means "known subcommand".
  - A clean non-zero exit means "not a subcommand".
  - A binary that cannot be started raises, it is never a plain "no".
  - Probe output never reaches the container's stdout/stderr.
"""
import pytest

from docker_entrypoint.core.probe import HelpFlagProbe
from docker_entrypoint.errors import ProbeError, ServiceBinaryUnavailable


class TestHelpFlagProbe:

    @pytest.mark.parametrize("subcommand", ["run", "sync", "dump-memdb", "convert-sdk"])
    def test_known_subcommands(self, fake_service, subcommand):
        assert HelpFlagProbe(str(fake_service))(subcommand) is True

    @pytest.mark.parametrize("subcommand", ["bash", "sh", "symbolserver", ""])
    def test_unknown_words(self, fake_service, subcommand):
        assert HelpFlagProbe(str(fake_service))(subcommand) is False

    def test_help_flag_is_passed(self, fake_service):
        # The fake only answers 0 when the second argument is the help flag.
        assert HelpFlagProbe(str(fake_service), help_flag="--help")("run") is False

    def test_output_discarded(self, fake_service, capfd):
        HelpFlagProbe(str(fake_service))("run")
        HelpFlagProbe(str(fake_service))("bash")

        out, err = capfd.readouterr()
        assert out == ""
        assert err == ""

    def test_missing_binary_path(self, tmp_path):
        probe = HelpFlagProbe(str(tmp_path / "does-not-exist"))

        with pytest.raises(ServiceBinaryUnavailable) as exc:
            probe("run")
        assert "not found" in str(exc.value)

    def test_missing_binary_on_path(self, posix_only, monkeypatch, tmp_path):
        monkeypatch.setenv("PATH", str(tmp_path))

        with pytest.raises(ServiceBinaryUnavailable):
            HelpFlagProbe("symbolserver")("run")

    def test_found_on_path(self, fake_service, monkeypatch):
        monkeypatch.setenv("PATH", str(fake_service.parent))
        assert HelpFlagProbe("symbolserver")("run") is True

    def test_not_executable(self, fake_service):
        fake_service.chmod(0o644)

        with pytest.raises(ProbeError) as exc:
            HelpFlagProbe(str(fake_service))("run")
        assert exc.value.binary == str(fake_service)
