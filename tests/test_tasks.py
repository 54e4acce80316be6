"""
Tests for the cargo task set
"""
import pytest

from xtask.config import XtaskConfig
from xtask.core.errors import ExternalCommandFailed, FilesystemError, UnsupportedPlatform
from xtask.core.tasks import CargoTasks
from xtask.platform.detector import OSType

from conftest import RecordingRunner


@pytest.fixture
def tasks(runner, console, tmp_path):
    return CargoTasks(XtaskConfig(), runner, console, project_root=tmp_path)


class TestSimpleTasks:

    @pytest.mark.parametrize('method, expected', [
        ('check', ['cargo', 'check', '--all']),
        ('fmt', ['cargo', 'fmt', '--all']),
        ('lint', ['cargo', 'clippy', '--all', '--', '-D', 'warnings']),
        ('test', ['cargo', 'test', '--all']),
        ('clean', ['cargo', 'clean']),
        ('dev', ['cargo', 'tauri', 'dev']),
        ('install', ['cargo', 'tauri', 'build']),
    ])
    def test_command(self, tasks, runner, method, expected):
        getattr(tasks, method)()
        assert runner.commands == [expected]

    def test_commands_run_in_project_root(self, tasks, runner, tmp_path):
        tasks.check()
        _cmd, _env, cwd = runner.calls[0]
        assert cwd == tmp_path

    def test_custom_cargo_program(self, runner, console, tmp_path):
        config = XtaskConfig()
        config.cargo = '/opt/rust/bin/cargo'
        CargoTasks(config, runner, console, tmp_path).clean()
        assert runner.commands == [['/opt/rust/bin/cargo', 'clean']]


class TestBuild:

    def test_build_without_target(self, tasks, runner):
        tasks.build()
        cmd, env, _cwd = runner.calls[0]
        assert cmd == ['cargo', 'tauri', 'build']
        assert env['TAURI_SKIP_WEBVIEW_DOWNLOAD'] == 'false'

    def test_build_with_target(self, tasks, runner):
        tasks.build('aarch64-unknown-linux-gnu')
        assert runner.commands == [['cargo', 'tauri', 'build', '--target=aarch64-unknown-linux-gnu']]

    def test_skip_webview_download_from_config(self, runner, console, tmp_path):
        config = XtaskConfig()
        config.skip_webview_download = True
        CargoTasks(config, runner, console, tmp_path).dev()
        assert runner.calls[0][1]['TAURI_SKIP_WEBVIEW_DOWNLOAD'] == 'true'

    def test_non_tauri_commands_get_no_overlay(self, tasks, runner):
        tasks.check()
        assert runner.calls[0][1] is None


class TestAll:

    def test_pipeline_order(self, tasks, runner):
        tasks.all('x86_64-unknown-linux-gnu')
        assert [cmd[1] for cmd in runner.commands] == ['check', 'fmt', 'clippy', 'tauri']
        assert runner.commands[-1][-1] == '--target=x86_64-unknown-linux-gnu'

    def test_stops_at_first_failure(self, console, tmp_path):
        runner = RecordingRunner(returncodes={('cargo', 'fmt'): 1}, console=console)

        with pytest.raises(ExternalCommandFailed) as exc_info:
            CargoTasks(XtaskConfig(), runner, console, tmp_path).all()

        assert exc_info.value.arguments == ('fmt', '--all')
        assert [cmd[1] for cmd in runner.commands] == ['check', 'fmt']


class TestInstallSystem:

    @pytest.fixture
    def artifacts(self, tmp_path):
        release = tmp_path / 'target' / 'release'
        release.mkdir(parents=True)
        (release / 'eim').write_bytes(b'')
        (tmp_path / 'docs').mkdir()
        (tmp_path / 'docs' / 'eim.1').write_text('.TH EIM 1\n')
        return tmp_path

    def test_windows_is_unsupported(self, tasks, runner):
        with pytest.raises(UnsupportedPlatform):
            tasks.install_system(OSType.WINDOWS)
        assert runner.calls == []

    def test_builds_then_installs(self, tasks, runner, artifacts, monkeypatch):
        monkeypatch.setattr('xtask.core.tasks.running_as_root', lambda: False)

        tasks.install_system(OSType.LINUX)

        assert runner.commands == [
            ['cargo', 'build', '--release'],
            ['sudo', 'install', '-d', '-m', '755', '/usr/local/bin', '/usr/local/share/man/man1'],
            ['sudo', 'install', '-m', '755', str(artifacts / 'target' / 'release' / 'eim'),
             '/usr/local/bin/eim'],
            ['sudo', 'install', '-m', '644', str(artifacts / 'docs' / 'eim.1'),
             '/usr/local/share/man/man1/eim.1'],
        ]

    def test_missing_man_page(self, tasks, runner, artifacts):
        (artifacts / 'docs' / 'eim.1').unlink()

        with pytest.raises(FilesystemError):
            tasks.install_system(OSType.MACOS)

        assert runner.commands == [['cargo', 'build', '--release']]

    def test_macos_uses_bsd_compatible_install(self, runner, console, artifacts, monkeypatch):
        monkeypatch.setattr('xtask.core.tasks.running_as_root', lambda: False)
        config = XtaskConfig()
        config.system_bin_dir = '/opt/homebrew/bin'

        CargoTasks(config, runner, console, artifacts).install_system(OSType.MACOS)

        installs = runner.commands[1:]
        assert installs[0] == ['sudo', 'install', '-d', '-m', '755',
                               '/opt/homebrew/bin', '/usr/local/share/man/man1']
        assert installs[2] == ['sudo', 'install', '-m', '644', str(artifacts / 'docs' / 'eim.1'),
                               '/usr/local/share/man/man1/eim.1']
        assert all('-D' not in cmd for cmd in installs)

    def test_no_sudo_when_disabled(self, runner, console, artifacts):
        config = XtaskConfig()
        config.use_sudo = False

        CargoTasks(config, runner, console, artifacts).install_system(OSType.LINUX)

        assert [cmd[0] for cmd in runner.commands[1:]] == ['install', 'install', 'install']
