"""
Tests for the command-line interface.
"""

import json

import pytest

from simscan.cli import main, parse_arguments
from simscan.cli.orchestrator import EXIT_CANCELLED, EXIT_ERROR, EXIT_OK, CLIOrchestrator
from simscan.models import ScanStatus


class TestParseArguments:
    """Test argument parsing."""

    def test_defaults(self, isolated_user_config):
        args = parse_arguments(['/photos'])
        assert str(args.directory) == '/photos'
        assert args.threshold == 90
        assert args.algorithm == 'both'
        assert args.workers == 4
        assert args.no_recursive is False
        assert args.exclude_folder == []
        assert args.exclude_ext == []
        assert args.export is None

    def test_options(self, isolated_user_config):
        args = parse_arguments([
            '/photos', '-t', '95', '-a', 'phash', '--min-size', '1000',
            '--exclude-ext', 'GIF,.bmp', '--exclude-ext', 'tif',
            '--exclude-folder', '/photos/raw', '-w', '2', '-r',
        ])
        assert args.threshold == 95.0
        assert args.algorithm == 'phash'
        assert args.min_size == 1000
        assert args.exclude_ext == ['gif', 'bmp', 'tif']
        assert args.exclude_folder == ['/photos/raw']
        assert args.workers == 2
        assert args.no_recursive is True

    def test_user_config_defaults(self, isolated_user_config, monkeypatch):
        monkeypatch.setenv('SIMSCAN_THRESHOLD', '80')
        assert parse_arguments(['/photos']).threshold == 80

    def test_unknown_algorithm(self, isolated_user_config):
        with pytest.raises(SystemExit):
            parse_arguments(['/photos', '-a', 'fuzzy'])


class TestCLI:
    """Test complete CLI runs."""

    def test_report(self, sample_images, temp_dir, isolated_user_config, capsys):
        assert main([str(temp_dir), '--no-progress']) == EXIT_OK
        out = capsys.readouterr().out
        assert 'SIMILAR IMAGE REPORT' in out
        assert f"[KEEP] {sample_images['photo_large']}" in out
        assert f"[DUPE] {sample_images['photo']}" in out

    def test_export_json(self, sample_images, temp_dir, isolated_user_config):
        output = temp_dir / 'out' / 'results.json'
        output.parent.mkdir()
        exit_code = main([str(temp_dir), '--no-progress', '-a', 'hash',
                          '-e', str(output), '--export-format', 'json'])
        assert exit_code == EXIT_OK
        data = json.loads(output.read_text())
        assert data['totalGroups'] == 1
        assert data['groups'][0]['recommendedKeep'] == sample_images['photo_copy']

    def test_missing_directory(self, temp_dir, isolated_user_config):
        assert main([str(temp_dir / 'missing')]) == EXIT_ERROR

    def test_invalid_threshold(self, temp_dir, isolated_user_config):
        assert main([str(temp_dir), '-t', '150']) == EXIT_ERROR

    def test_invalid_workers(self, temp_dir, isolated_user_config):
        assert main([str(temp_dir), '-w', '0']) == EXIT_ERROR

    def test_excluded_folder_relative_path(self, sample_images, temp_dir, isolated_user_config, monkeypatch):
        monkeypatch.chdir(temp_dir)
        orchestrator = CLIOrchestrator(['.', '--exclude-folder', 'sub', '--no-progress'])
        assert orchestrator.run() == EXIT_OK
        assert orchestrator.config.excluded_folders == frozenset({str(temp_dir / 'sub')})

    def test_cancelled_scan(self, sample_images, temp_dir, isolated_user_config, monkeypatch):
        from simscan.cli import orchestrator as cli_orchestrator

        class CancelledJob(cli_orchestrator.ScanJob):
            def start(self):
                self.token.cancel()
                return super().start()

        monkeypatch.setattr(cli_orchestrator, 'ScanJob', CancelledJob)
        orchestrator = CLIOrchestrator([str(temp_dir), '--no-progress'])
        assert orchestrator.run() == EXIT_CANCELLED
        assert orchestrator.result is None


class TestProgressDisplay:
    """Test the CLI progress listener."""

    def test_logs_stage_changes(self, caplog):
        import logging
        from simscan.cli.progress import ProgressDisplay
        from simscan.models import ScanProgress

        display = ProgressDisplay(logging.getLogger('test'), show_progress=False)
        with caplog.at_level(logging.INFO, logger='test'):
            display(ScanProgress(status=ScanStatus.SCANNING))
            display(ScanProgress(status=ScanStatus.HASHING, current=1, total=2))
            display(ScanProgress(status=ScanStatus.HASHING, current=2, total=2))
            display(ScanProgress(status=ScanStatus.COMPARING))
        display.close()

        messages = [record.getMessage() for record in caplog.records]
        assert messages == ["Scanning for image files...", "Fingerprinting images...", "Comparing images..."]
