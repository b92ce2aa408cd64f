"""Unit tests for main CLI entry point (main.py).

Tests the Typer CLI application using CliRunner.
"""

import logging
from unittest.mock import Mock, patch

import pytest
from typer.testing import CliRunner

from migrate_confluence import __version__
from migrate_confluence.cli.main import PACKAGE_LOGGER, _configure_logging, app
from migrate_confluence.cli.models import ExitCode
from tests.fixtures.sample_entities import SAMPLE_EXPORT


runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo the handlers and level the CLI installs on the package logger."""
    app_logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(app_logger.handlers)
    level = app_logger.level
    yield
    for handler in app_logger.handlers[:]:
        if handler not in handlers:
            app_logger.removeHandler(handler)
            handler.close()
    app_logger.setLevel(level)


class TestConfigureLogging:
    """Test cases for _configure_logging function."""

    @pytest.mark.parametrize('verbosity,level', [
        (0, logging.WARNING),
        (1, logging.INFO),
        (2, logging.DEBUG),
        (5, logging.DEBUG),
    ])
    def test_verbosity_sets_level(self, verbosity, level):
        """Verbosity maps to the package logger level."""
        _configure_logging(verbosity)

        assert logging.getLogger(PACKAGE_LOGGER).level == level

    def test_root_logger_untouched(self):
        """Only the package logger is configured."""
        root_level = logging.getLogger().level

        _configure_logging(2)

        assert logging.getLogger().level == root_level

    def test_logdir_creates_log_file(self, tmp_path):
        """A log file is created in the log directory."""
        logdir = tmp_path / 'logs'

        _configure_logging(1, str(logdir))
        logging.getLogger(PACKAGE_LOGGER).info("hello")

        log_files = list(logdir.glob('confluence-analyze_*.log'))
        assert len(log_files) == 1


class TestMainCommand:
    """Test cases for the analyze command."""

    @patch('migrate_confluence.cli.main.AnalyzeCommand')
    def test_options_are_passed_to_command(self, mock_command_cls):
        """Workspace and config options reach AnalyzeCommand."""
        mock_instance = Mock()
        mock_instance.run.return_value = ExitCode.SUCCESS
        mock_command_cls.return_value = mock_instance

        result = runner.invoke(app, ['export', '--workspace', 'ws', '--config', 'cfg.yaml'])

        assert result.exit_code == ExitCode.SUCCESS
        kwargs = mock_command_cls.call_args.kwargs
        assert kwargs['workspace_dir'] == 'ws'
        assert kwargs['config_path'] == 'cfg.yaml'
        mock_instance.run.assert_called_once_with('export')

    @patch('migrate_confluence.cli.main.AnalyzeCommand')
    def test_default_workspace(self, mock_command_cls):
        """Without --workspace the default workspace directory is used."""
        mock_command_cls.return_value.run.return_value = ExitCode.SUCCESS

        runner.invoke(app, ['export'])

        assert mock_command_cls.call_args.kwargs['workspace_dir'] == '.migration-workspace'

    @pytest.mark.parametrize('exit_code', [
        ExitCode.GENERAL_ERROR,
        ExitCode.DOCUMENT_ERROR,
        ExitCode.CONFIG_ERROR,
    ])
    @patch('migrate_confluence.cli.main.AnalyzeCommand')
    def test_exit_code_is_propagated(self, mock_command_cls, exit_code):
        """The command's exit code becomes the process exit code."""
        mock_command_cls.return_value.run.return_value = exit_code

        result = runner.invoke(app, ['export'])

        assert result.exit_code == exit_code

    @patch('migrate_confluence.cli.main.AnalyzeCommand')
    def test_unexpected_error_is_general_error(self, mock_command_cls):
        """Unhandled exceptions exit with GENERAL_ERROR."""
        mock_command_cls.return_value.run.side_effect = RuntimeError("boom")

        result = runner.invoke(app, ['export'])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "Unexpected error: boom" in result.output

    def test_version(self):
        """--version prints the version and exits."""
        result = runner.invoke(app, ['--version'])

        assert result.exit_code == 0
        assert f"confluence-analyze version {__version__}" in result.output

    def test_no_arguments_shows_help(self):
        """Running without a source prints usage."""
        result = runner.invoke(app, [])

        assert "Usage" in result.output

    def test_end_to_end_run(self, tmp_path):
        """A real export is analyzed into the workspace."""
        export = tmp_path / 'export'
        export.mkdir()
        (export / 'entities.xml').write_text(SAMPLE_EXPORT, encoding='utf-8')
        workspace = tmp_path / 'workspace'

        result = runner.invoke(app, [str(export), '-w', str(workspace), '--no-color'])

        assert result.exit_code == ExitCode.SUCCESS
        assert (workspace / 'space-id-to-prefix-map.yaml').is_file()
        assert "Pages resolved" in result.output

    def test_missing_source(self, tmp_path):
        """A missing source exits with GENERAL_ERROR."""
        result = runner.invoke(app, [str(tmp_path / 'nope'), '-w', str(tmp_path / 'ws')])

        assert result.exit_code == ExitCode.GENERAL_ERROR
