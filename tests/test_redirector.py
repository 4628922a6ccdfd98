"""Tests for FileRedirector and FileOperations."""

import logging
from pathlib import Path

import pytest

from ci_message_env.engine import file_utils
from ci_message_env.engine.exceptions import MessageFileWriteError
from ci_message_env.engine.file_utils import FileOperations
from ci_message_env.engine.redirect_result import RedirectOutcome, RedirectStatus
from ci_message_env.engine.redirector import FileRedirector
from ci_message_env.engine.workspace import BuildRun, PipelineRun

# -----------------------------------------------------------------------
# Successful redirects
# -----------------------------------------------------------------------


class TestRedirectSuccess:
    def test_writes_message_to_workspace(self, build_run: BuildRun, workspace: Path) -> None:
        outcome = FileRedirector().redirect(build_run, "hello")

        target = workspace / ".ci_message.txt"
        assert outcome.is_success
        assert outcome.pointer_variable_name == "CI_MESSAGE_FILE"
        assert outcome.path == str(target)
        assert target.read_text(encoding="utf-8") == "hello"

    def test_pipeline_run_writes_under_workspace_subdir(
        self, pipeline_run: PipelineRun, pipeline_root: Path
    ) -> None:
        outcome = FileRedirector().redirect(pipeline_run, "payload")

        target = pipeline_root / "workspace" / ".ci_message.txt"
        assert outcome.path == str(target)
        assert target.read_text(encoding="utf-8") == "payload"

    def test_utf8_content_preserved(self, build_run: BuildRun, workspace: Path) -> None:
        message = '{"msg": "déploiement réussi ✓", "lines": "a\\nb"}\nsecond line\r\n'
        outcome = FileRedirector().redirect(build_run, message)

        assert outcome.is_success
        raw = (workspace / ".ci_message.txt").read_bytes()
        assert raw == message.encode("utf-8")
        assert outcome.size_bytes == len(raw)

    def test_empty_message(self, build_run: BuildRun, workspace: Path) -> None:
        outcome = FileRedirector().redirect(build_run, "")
        assert outcome.is_success
        assert (workspace / ".ci_message.txt").read_text(encoding="utf-8") == ""
        assert outcome.size_bytes == 0

    def test_overwrites_existing_content(self, build_run: BuildRun, workspace: Path) -> None:
        target = workspace / ".ci_message.txt"
        target.write_text("a much longer previous message", encoding="utf-8")

        FileRedirector().redirect(build_run, "short")

        assert target.read_text(encoding="utf-8") == "short"

    def test_repeated_redirect_is_idempotent(self, build_run: BuildRun, workspace: Path) -> None:
        redirector = FileRedirector()
        first = redirector.redirect(build_run, "same")
        second = redirector.redirect(build_run, "same")

        assert first.path == second.path
        assert (workspace / ".ci_message.txt").read_text(encoding="utf-8") == "same"

    def test_creates_missing_workspace_directory(self, tmp_path: Path) -> None:
        run = BuildRun("app #2", workspace=tmp_path / "fresh" / "ws")
        outcome = FileRedirector().redirect(run, "x")

        target = tmp_path / "fresh" / "ws" / ".ci_message.txt"
        assert outcome.is_success
        assert target.read_text(encoding="utf-8") == "x"

    def test_pipeline_workspace_subdir_created(self, tmp_path: Path) -> None:
        """A run root without a workspace subdirectory still gets the file."""
        root = tmp_path / "builds" / "3"
        root.mkdir(parents=True)
        outcome = FileRedirector().redirect(PipelineRun("p #3", root_dir=root), "x")

        target = root / "workspace" / ".ci_message.txt"
        assert outcome.is_success
        assert outcome.path == str(target)
        assert target.read_text(encoding="utf-8") == "x"

    def test_verification_disabled_leaves_size_unset(self, build_run: BuildRun) -> None:
        outcome = FileRedirector(verify_written_file=False).redirect(build_run, "x")
        assert outcome.is_success
        assert outcome.size_bytes is None

    def test_verification_failure_does_not_downgrade(
        self,
        build_run: BuildRun,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """A failed post-write check is logged but the outcome stays SUCCESS."""
        monkeypatch.setattr(FileOperations, "stat_size", staticmethod(lambda path: None))
        caplog.set_level(logging.WARNING, logger="ci_message_env")

        outcome = FileRedirector().redirect(build_run, "x")

        assert outcome.is_success
        assert outcome.size_bytes is None
        assert "not found after write" in caplog.text


# -----------------------------------------------------------------------
# Failed redirects
# -----------------------------------------------------------------------


class TestRedirectFailure:
    def test_build_without_workspace(self) -> None:
        run = BuildRun("app #1", workspace=None)
        outcome = FileRedirector().redirect(run, "x")

        assert outcome.is_failure
        assert "no workspace allocated" in (outcome.cause or "")

    def test_pipeline_without_root_dir(self) -> None:
        outcome = FileRedirector().redirect(PipelineRun("p #1", root_dir=None), "x")
        assert outcome.is_failure
        assert outcome.path is None

    def test_workspace_blocked_by_file(self, tmp_path: Path) -> None:
        """A workspace path occupied by a regular file cannot be created."""
        blocker = tmp_path / "ws"
        blocker.write_text("not a directory")
        run = BuildRun("app #2", workspace=blocker)

        outcome = FileRedirector().redirect(run, "x")

        assert outcome.is_failure
        assert "failed to create parent directories" in (outcome.cause or "")
        assert blocker.read_text() == "not a directory"

    @pytest.mark.parametrize(
        "error",
        [
            PermissionError(13, "Permission denied"),
            InterruptedError(4, "Interrupted system call"),
            OSError(28, "No space left on device"),
        ],
    )
    def test_io_errors_become_failures(
        self,
        build_run: BuildRun,
        monkeypatch: pytest.MonkeyPatch,
        error: OSError,
    ) -> None:
        def failing_open(*args: object, **kwargs: object) -> None:
            raise error

        monkeypatch.setattr(file_utils, "open", failing_open, raising=False)

        outcome = FileRedirector().redirect(build_run, "x")

        assert outcome.status == RedirectStatus.FAILED
        assert error.strerror in (outcome.cause or "")

    def test_failure_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.WARNING, logger="ci_message_env")
        FileRedirector().redirect(BuildRun("app #9", workspace=None), "secret-payload")

        assert "Cannot redirect CI_MESSAGE" in caplog.text
        assert "secret-payload" not in caplog.text


# -----------------------------------------------------------------------
# FileOperations / RedirectOutcome
# -----------------------------------------------------------------------


class TestFileOperations:
    def test_write_returns_encoded_size(self, tmp_path: Path) -> None:
        assert FileOperations.write_text(tmp_path / "f.txt", "é") == 2

    def test_write_raises_for_unencodable_content(self, tmp_path: Path) -> None:
        with pytest.raises(MessageFileWriteError, match="encoding error"):
            FileOperations.write_text(tmp_path / "f.txt", "\ud800")

    def test_write_creates_missing_directories(self, tmp_path: Path) -> None:
        assert FileOperations.write_text(tmp_path / "a" / "b" / "f.txt", "xy") == 2
        assert (tmp_path / "a" / "b" / "f.txt").read_text(encoding="utf-8") == "xy"

    def test_write_under_file_raises(self, tmp_path: Path) -> None:
        (tmp_path / "nope").write_text("file")
        with pytest.raises(MessageFileWriteError) as exc_info:
            FileOperations.write_text(tmp_path / "nope" / "f.txt", "x")
        assert exc_info.value.path == str(tmp_path / "nope" / "f.txt")

    def test_stat_size_missing_file(self, tmp_path: Path) -> None:
        assert FileOperations.stat_size(tmp_path / "absent") is None

    def test_stat_size_directory(self, tmp_path: Path) -> None:
        assert FileOperations.stat_size(tmp_path) is None


class TestRedirectOutcome:
    def test_success_requires_path(self) -> None:
        with pytest.raises(ValueError, match="pointer variable and a path"):
            RedirectOutcome(status=RedirectStatus.SUCCESS, pointer_variable_name="CI_MESSAGE_FILE")

    def test_failure_requires_cause(self) -> None:
        with pytest.raises(ValueError, match="must have a cause"):
            RedirectOutcome(status=RedirectStatus.FAILED)

    def test_truthiness(self) -> None:
        assert RedirectOutcome.success("/ws/.ci_message.txt")
        assert not RedirectOutcome.failure("boom")
