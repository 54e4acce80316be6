"""
End-to-end tests for resolve_and_install with a recording runner
"""
import pytest

from xtask.config import XtaskConfig
from xtask.core.errors import ExternalCommandFailed, UnsupportedPlatform
from xtask.platform.detector import OSType, PlatformProfile, detect_profile
from xtask.platform.plans import PACKAGE_PLANS, LINUX_DEBIAN
from xtask.platform.resolver import resolve_and_install

from conftest import RecordingRunner


@pytest.fixture
def config(tmp_path):
    cfg = XtaskConfig()
    cfg.use_sudo = False
    cfg.aux_tool_bin_dir = str(tmp_path / 'bin')
    return cfg


def profile_from(tmp_path, text):
    os_release = tmp_path / 'os-release'
    os_release.write_text(text)
    return detect_profile('Linux', os_release)


class TestResolveAndInstall:

    def test_ubuntu_scenario(self, tmp_path, runner, console, config, fake_path):
        fake_path.update({'apt-get', 'linuxdeploy'})
        profile = profile_from(tmp_path, 'ID=ubuntu\nID_LIKE=debian')

        resolve_and_install(profile, runner=runner, config=config, console=console)

        assert runner.commands == [
            ['apt-get', 'update'],
            ['apt-get', 'install', '-y',
             'libwebkit2gtk-4.1-dev', 'build-essential', 'curl', 'wget', 'file',
             'libssl-dev', 'libayatana-appindicator3-dev', 'librsvg2-dev'],
        ]

    def test_unknown_distro_prints_instructions(self, tmp_path, runner, console, config):
        profile = profile_from(tmp_path, 'ID=alpine')

        resolve_and_install(profile, runner=runner, config=config, console=console)

        assert runner.calls == []
        assert 'Could not detect your Linux distribution' in console.file.getvalue()

    def test_windows_never_spawns(self, runner, console, config):
        resolve_and_install(PlatformProfile(OSType.WINDOWS), runner=runner,
                            config=config, console=console)

        assert runner.calls == []
        assert 'WebView2' in console.file.getvalue()

    def test_unknown_os_is_unsupported(self, runner, console, config):
        with pytest.raises(UnsupportedPlatform):
            resolve_and_install(PlatformProfile(OSType.UNKNOWN), runner=runner,
                                config=config, console=console)

    def test_arch_failure_does_not_abort(self, tmp_path, console, config, fake_path):
        fake_path.update({'pacman', 'linuxdeploy'})
        runner = RecordingRunner(returncodes={('pacman',): 1}, console=console)
        profile = profile_from(tmp_path, 'ID=cachyos\nID_LIKE=arch')

        resolve_and_install(profile, runner=runner, config=config, console=console)

        assert [cmd[:2] for cmd in runner.commands] == [['pacman', '-Syu'], ['pacman', '-S']]
        output = console.file.getvalue()
        assert 'continuing' in output
        assert 'Dependencies installed' in output

    @pytest.mark.parametrize('text, manager', [
        ('ID=debian', 'apt-get'),
        ('ID=fedora', 'dnf'),
    ])
    def test_other_plans_fail_on_nonzero(self, tmp_path, console, config, fake_path, text, manager):
        fake_path.add(manager)
        runner = RecordingRunner(returncodes={(manager, 'install'): 100}, console=console)
        profile = profile_from(tmp_path, text)
        plan = next(p for p in PACKAGE_PLANS.values() if p.manager == manager)

        with pytest.raises(ExternalCommandFailed) as exc_info:
            resolve_and_install(profile, runner=runner, config=config, console=console)

        assert exc_info.value.program == manager
        assert list(exc_info.value.arguments) == plan.install_command(use_sudo=False)[1:]

    def test_refresh_failure_stops_before_install(self, console, config, fake_path):
        fake_path.add('apt-get')
        runner = RecordingRunner(returncodes={('apt-get', 'update'): 100}, console=console)

        with pytest.raises(ExternalCommandFailed):
            resolve_and_install(LINUX_DEBIAN, runner=runner, config=config, console=console)

        assert runner.commands == [['apt-get', 'update']]

    def test_linux_installs_aux_tool_when_missing(self, tmp_path, runner, console, config, fake_path):
        fake_path.update({'dnf', 'curl'})
        profile = profile_from(tmp_path, 'ID="centos"')

        resolve_and_install(profile, runner=runner, config=config, console=console)

        assert runner.commands[-1][0] == 'curl'
        assert (tmp_path / 'bin' / 'linuxdeploy').is_symlink()

    def test_macos_has_no_aux_tool(self, runner, console, config, fake_path):
        fake_path.add('brew')

        resolve_and_install(PlatformProfile(OSType.MACOS), runner=runner,
                            config=config, console=console)

        assert runner.commands == [
            ['brew', 'update'],
            ['brew', 'install', 'pkg-config', 'libusb', 'dfu-util'],
        ]
