"""Tests for git staging of updated files."""

from unittest.mock import MagicMock, patch

import pytest

from updater.git_stage import GitStageError, stage_files


class TestStageFiles:
    """Test the git add wrapper."""

    @patch('updater.git_stage.subprocess.run')
    def test_runs_git_add(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stderr="")

        stage_files(["conandata.yml", "conan.win.lock"], cwd="/work")

        args, kwargs = mock_run.call_args
        assert args[0] == ["git", "add", "--", "conandata.yml", "conan.win.lock"]
        assert kwargs["cwd"] == "/work"
        assert kwargs["check"] is False

    @patch('updater.git_stage.subprocess.run')
    def test_failure_raises(self, mock_run):
        mock_run.return_value = MagicMock(returncode=128, stderr="fatal: not a git repository\n")

        with pytest.raises(GitStageError, match="not a git repository"):
            stage_files(["conandata.yml"])
