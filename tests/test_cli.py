"""
Tests for the thoughtscan command line
"""
import pytest
from click.testing import CliRunner
from rich.console import Console

from thoughtscan import cli
from thoughtscan.cli import main


ASYNC_RANDOM = (
    "async function run() {\n"
    "  if (Math.random() < 0.5) { await doThing(); }\n"
    "}\n"
)


@pytest.fixture
def project(tmp_path, monkeypatch):
    """Empty project directory used as cwd"""
    monkeypatch.chdir(tmp_path)
    # Wide, colourless console so output assertions see plain text
    monkeypatch.setattr(cli, 'console', Console(width=200, color_system=None))
    return tmp_path


@pytest.fixture
def runner():
    return CliRunner()


class TestAnalyzeCommand:
    """Default command and exit codes"""

    def test_empty_project_passes(self, runner, project):
        (project / 'src').mkdir()

        result = runner.invoke(main, [])

        assert result.exit_code == 0
        assert 'Tree of Thought Security Reasoning' in result.output
        assert 'Scanning directory: src' in result.output
        assert 'No critical security vectors detected.' in result.output

    def test_critical_path_fails(self, runner, project):
        (project / 'src').mkdir()
        (project / 'src' / 'app.js').write_text(ASYNC_RANDOM)

        result = runner.invoke(main, [])

        assert result.exit_code == 1
        assert 'CRITICAL: 1 critical reasoning paths detected!' in result.output
        assert 'Critical Path 1:' in result.output

    def test_explicit_analyze(self, runner, project):
        (project / 'scripts').mkdir()
        (project / 'scripts' / 'a.js').write_text("window['x'] = 1;\n")

        result = runner.invoke(main, ['analyze'])

        assert result.exit_code == 0
        assert 'Found 1 potential security vectors.' in result.output

    def test_respects_config_file(self, runner, project):
        (project / 'src').mkdir()
        (project / 'src' / 'app.js').write_text(ASYNC_RANDOM)
        (project / '.thoughtscan.yml').write_text(
            'analyzers:\n  disabled:\n    - CodeExecutionAnalyzer\n'
        )

        result = runner.invoke(main, [])
        assert result.exit_code == 0

    def test_unexpected_error_exits_one(self, runner, project, monkeypatch):
        def boom(project_root=None):
            raise RuntimeError('disk on fire')

        monkeypatch.setattr(cli, 'run_analysis', boom)

        result = runner.invoke(main, ['analyze'])

        assert result.exit_code == 1
        assert 'Error: disk on fire' in result.output

    def test_debug_reraises(self, runner, project, monkeypatch):
        def boom(project_root=None):
            raise RuntimeError('disk on fire')

        monkeypatch.setattr(cli, 'run_analysis', boom)

        result = runner.invoke(main, ['analyze', '--debug'])

        assert result.exit_code == 1
        assert isinstance(result.exception, RuntimeError)

    def test_wrongly_typed_config_uses_defaults(self, runner, project):
        (project / 'src').mkdir()
        (project / '.thoughtscan.yml').write_text('scan:\n  - src\n')

        result = runner.invoke(main, [])

        assert result.exit_code == 0
        assert 'Failed to load config' in result.output
        assert 'Scanning directory: src' in result.output


class TestVersion:
    def test_version_flag(self, runner, project):
        result = runner.invoke(main, ['--version'])

        assert result.exit_code == 0
        assert 'Thoughtscan v1.0.0' in result.output


class TestConfigCommands:
    """init and config subcommands"""

    def test_init_creates_file(self, runner, project):
        result = runner.invoke(main, ['init'])

        assert result.exit_code == 0
        assert (project / '.thoughtscan.yml').exists()

    def test_init_refuses_overwrite(self, runner, project):
        (project / '.thoughtscan.yml').write_text('version: "0.1"\n')

        result = runner.invoke(main, ['init'])

        assert result.exit_code == 1
        assert 'already exists' in result.output
        assert (project / '.thoughtscan.yml').read_text() == 'version: "0.1"\n'

    def test_init_force(self, runner, project):
        (project / '.thoughtscan.yml').write_text('version: "0.1"\n')

        result = runner.invoke(main, ['init', '--force'])

        assert result.exit_code == 0
        assert 'max_files: 100' in (project / '.thoughtscan.yml').read_text()

    def test_config_shows_settings(self, runner, project):
        (project / '.thoughtscan.yml').write_text('scan:\n  max_files: 7\n')

        result = runner.invoke(main, ['config'])

        assert result.exit_code == 0
        assert 'Max files' in result.output
        assert '7' in result.output
        assert '.thoughtscan.yml' in result.output

    def test_config_without_file(self, runner, project):
        result = runner.invoke(main, ['config'])

        assert result.exit_code == 0
        assert 'built-in defaults' in result.output
