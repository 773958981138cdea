"""
CLI tests — argument parsing, validation exits and end-to-end pruning.
"""
import logging
import sys
from unittest import mock
import pytest
from classprune.cli import CLIApplication, main


class TestArgumentParsing:

    def test_classpath_flag_variants(self):
        app = CLIApplication()

        with mock.patch.object(sys, 'argv', ['classprune', '--classpath', 'build/classes/main']):
            args = app.parse_args()
        assert args.classpath == ["build/classes/main"]

        with mock.patch.object(sys, 'argv', ['classprune', '-c', 'a,b', '-c', 'c']):
            args = app.parse_args()
        assert app.split_classpath(args.classpath) == ["a", "b", "c"]

    def test_defaults(self):
        args = CLIApplication.parse_args(['-c', 'x'])
        assert args.classdump == "build/jacoco/classdump"
        assert args.exclusion_dir is None
        assert not args.dry_run
        assert not args.quiet
        assert not args.verbose

    def test_classpath_required(self):
        with pytest.raises(SystemExit):
            CLIApplication.parse_args(['-d', '/tmp'])


class TestValidation:

    def test_missing_classdump_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication().run(['-d', str(tmp_path / "nope"), '-c', str(tmp_path)])
        assert exc_info.value.code == 1
        assert "Classdump directory not found" in capsys.readouterr().err

    def test_existing_exclusion_dir_exits(self, classdump, build_classes, exclusion_dir, capsys):
        exclusion_dir.mkdir()
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication().run([
                '-d', str(classdump["root"]), '-c', str(build_classes), '-e', str(exclusion_dir)])
        assert exc_info.value.code == 1
        assert "already exists" in capsys.readouterr().err

    def test_quiet_and_verbose_conflict(self, classdump, build_classes):
        with pytest.raises(SystemExit):
            CLIApplication().run(['-d', str(classdump["root"]), '-c', str(build_classes), '-q', '-v'])

    def test_warns_about_non_directory_entries(self, tmp_path, classdump, build_classes, capsys):
        CLIApplication().run([
            '-d', str(classdump["root"]), '-c', f"{build_classes},{tmp_path / 'missing.jar'}"])
        assert "Classpath entry not found" in capsys.readouterr().err


class TestRun:

    def test_prunes_and_reports(self, classdump, build_classes, exclusion_dir, capsys):
        stats = CLIApplication().run(['-d', str(classdump["root"]), '-c', str(build_classes)])

        assert (stats.kept, stats.pruned) == (3, 3)
        assert exclusion_dir.is_dir()
        out = capsys.readouterr().out
        assert "Kept 3 classdump files, moved 3" in out

    def test_dry_run(self, classdump, build_classes, exclusion_dir, capsys):
        stats = CLIApplication().run(['-d', str(classdump["root"]), '-c', str(build_classes), '--dry-run'])

        assert stats.pruned == 3
        assert not exclusion_dir.exists()
        assert "Dry run: 3 of 6" in capsys.readouterr().out

    def test_quiet_prints_nothing(self, classdump, build_classes, capsys):
        CLIApplication().run(['-d', str(classdump["root"]), '-c', str(build_classes), '-q'])
        assert capsys.readouterr().out == ""

    def test_verbose_prints_statistics(self, classdump, build_classes, capsys):
        with mock.patch.object(logging.getLogger(), "setLevel") as set_level:
            CLIApplication().run(['-d', str(classdump["root"]), '-c', str(build_classes), '-v'])
        set_level.assert_called_once_with(logging.DEBUG)
        out = capsys.readouterr().out
        assert "Pruning Statistics" in out
        assert "Completed in" in out

    def test_default_run_keeps_error_log_level(self, classdump, build_classes):
        with mock.patch.object(logging.getLogger(), "setLevel") as set_level:
            CLIApplication().run(['-d', str(classdump["root"]), '-c', str(build_classes), '-q'])
        set_level.assert_not_called()

    def test_empty_build_exits_with_cause(self, tmp_path, classdump, exclusion_dir, capsys):
        empty = tmp_path / "empty"
        empty.mkdir()
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication().run(['-d', str(classdump["root"]), '-c', str(empty)])

        assert exc_info.value.code == 1
        assert "Have you run a build" in capsys.readouterr().err
        assert not exclusion_dir.exists()


class TestMain:

    def test_main_uses_sys_argv(self, classdump, build_classes, exclusion_dir):
        with mock.patch.object(sys, 'argv', ['classprune', '-d', str(classdump["root"]), '-c', str(build_classes)]):
            with mock.patch('builtins.print'):
                main()
        assert exclusion_dir.is_dir()

    def test_main_keyboard_interrupt_exit_code(self):
        with mock.patch.object(CLIApplication, 'run', side_effect=KeyboardInterrupt):
            with mock.patch('builtins.print'):
                with pytest.raises(SystemExit) as exc_info:
                    main()
        assert exc_info.value.code == 130

    def test_main_unexpected_error_exit_code(self, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        with mock.patch.object(CLIApplication, 'run', side_effect=OSError("disk gone")):
            with mock.patch('builtins.print'):
                with pytest.raises(SystemExit) as exc_info:
                    main()
        assert exc_info.value.code == 1
