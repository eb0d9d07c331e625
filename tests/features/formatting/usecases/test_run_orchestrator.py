"""Summary: Tests for run-wide orchestration and cache persistence.
Why: Validate preconditions, statistics, convergence and failure isolation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from srcfmt.features.formatting.domain.errors import CachePersistError, ConfigError
from srcfmt.features.formatting.domain.line_ending import LineEnding
from srcfmt.features.formatting.domain.processing_types import FormatOutcome, ProcessingEvent
from srcfmt.features.formatting.engines import JavaFormatter, JavascriptFormatter
from srcfmt.features.formatting.usecases.hash_cache import HashCache, compute_digest
from srcfmt.features.formatting.usecases.run_orchestrator import (
    ProgressCallback,
    RunOrchestrator,
    deduplicate,
)


@pytest.fixture
def store(tmp_path: Path) -> Path:
    return tmp_path / "target" / "srcfmt-cache.properties"


def _orchestrator(
    tmp_path: Path,
    store: Path,
    formatters: list[JavaFormatter | JavascriptFormatter],
    *,
    workers: int = 1,
    dry_run: bool = False,
    clear_cache: bool = False,
    progress_callback: ProgressCallback | None = None,
) -> RunOrchestrator:
    return RunOrchestrator(
        formatters,
        store,
        base_dir=tmp_path,
        encoding="utf-8",
        line_ending=LineEnding.LF,
        workers=workers,
        dry_run=dry_run,
        clear_cache=clear_cache,
        progress_callback=progress_callback,
    )


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_bytes(content.encode("utf-8"))
    return path


class TestPreconditions:
    """Checks performed before any file is touched."""

    def test_no_initialized_formatter_raises_config_error(
        self, tmp_path: Path, store: Path, unformatted_java: str
    ) -> None:
        source = _write(tmp_path / "Foo.java", unformatted_java)
        orchestrator = _orchestrator(tmp_path, store, [JavaFormatter(), JavascriptFormatter()])

        with pytest.raises(ConfigError, match="You must provide a Java or Javascript configuration file"):
            _ = orchestrator.run([source])

        assert source.read_bytes().decode("utf-8") == unformatted_java
        assert not store.exists()

    def test_workers_must_be_positive(self, tmp_path: Path, store: Path) -> None:
        with pytest.raises(ConfigError):
            _ = _orchestrator(tmp_path, store, [], workers=0)

    def test_read_only_file_is_never_formatted(
        self,
        tmp_path: Path,
        store: Path,
        java_formatter: JavaFormatter,
        unformatted_java: str,
        mocker: MockerFixture,
    ) -> None:
        source = _write(tmp_path / "Foo.java", unformatted_java)
        _ = mocker.patch(
            "srcfmt.features.formatting.usecases.run_orchestrator.is_writable",
            return_value=False,
        )
        spy = mocker.spy(java_formatter, "format")

        stats = _orchestrator(tmp_path, store, [java_formatter]).run([source])

        assert stats.read_only_count == 1
        assert stats.total == 1
        spy.assert_not_called()
        assert source.read_bytes().decode("utf-8") == unformatted_java

    def test_missing_file_counts_as_failure(
        self, tmp_path: Path, store: Path, java_formatter: JavaFormatter
    ) -> None:
        stats = _orchestrator(tmp_path, store, [java_formatter]).run([tmp_path / "Gone.java"])

        assert stats.fail_count == 1
        assert stats.failed_files[0].event is ProcessingEvent.FILE_MISSING

    def test_undecodable_file_counts_as_failure(
        self, tmp_path: Path, store: Path, java_formatter: JavaFormatter
    ) -> None:
        source = tmp_path / "Latin.java"
        _ = source.write_bytes(b"class \xe9 {}\n")

        stats = _orchestrator(tmp_path, store, [java_formatter]).run([source])

        assert stats.fail_count == 1
        assert stats.failed_files[0].outcome is FormatOutcome.FAIL


class TestRun:
    """End-to-end runs against real files."""

    def test_formats_file_and_persists_digest(
        self,
        tmp_path: Path,
        store: Path,
        java_formatter: JavaFormatter,
        unformatted_java: str,
        formatted_java: str,
    ) -> None:
        source = _write(tmp_path / "src" / "Foo.java", unformatted_java)

        stats = _orchestrator(tmp_path, store, [java_formatter]).run([source])

        assert (stats.success_count, stats.fail_count, stats.skipped_count, stats.read_only_count) == (1, 0, 0, 0)
        assert stats.cache_persisted
        assert source.read_bytes().decode("utf-8") == formatted_java
        assert b"\r" not in source.read_bytes()
        persisted = HashCache.load(store)
        assert persisted.get("src/Foo.java") == compute_digest(formatted_java, "utf-8")

    def test_second_run_converges_without_formatting(
        self,
        tmp_path: Path,
        store: Path,
        java_formatter: JavaFormatter,
        unformatted_java: str,
        mocker: MockerFixture,
    ) -> None:
        source = _write(tmp_path / "Foo.java", unformatted_java)
        _ = _orchestrator(tmp_path, store, [java_formatter]).run([source])
        spy = mocker.spy(java_formatter, "format")

        stats = _orchestrator(tmp_path, store, [java_formatter]).run([source])

        assert stats.skipped_count == 1
        assert stats.success_count == 0
        spy.assert_not_called()

    def test_edit_after_run_is_a_cache_miss(
        self,
        tmp_path: Path,
        store: Path,
        java_formatter: JavaFormatter,
        unformatted_java: str,
    ) -> None:
        source = _write(tmp_path / "Foo.java", unformatted_java)
        _ = _orchestrator(tmp_path, store, [java_formatter]).run([source])
        _ = source.write_bytes(source.read_bytes() + b"class Extra {\nint y;\n}\n")

        stats = _orchestrator(tmp_path, store, [java_formatter]).run([source])

        assert stats.success_count == 1
        assert source.read_bytes().decode("utf-8").endswith("class Extra {\n\tint y;\n}\n")

    def test_unsupported_extension_is_skipped(
        self, tmp_path: Path, store: Path, java_formatter: JavaFormatter
    ) -> None:
        notes = _write(tmp_path / "notes.txt", "{\n")

        stats = _orchestrator(tmp_path, store, [java_formatter]).run([notes])

        assert stats.skipped_count == 1
        assert notes.read_text(encoding="utf-8") == "{\n"

    def test_failure_does_not_stop_the_run(
        self,
        tmp_path: Path,
        store: Path,
        java_formatter: JavaFormatter,
        unformatted_java: str,
    ) -> None:
        broken = _write(tmp_path / "Broken.java", "class Broken {\n")
        good = _write(tmp_path / "Good.java", unformatted_java)

        stats = _orchestrator(tmp_path, store, [java_formatter]).run([broken, good])

        assert stats.fail_count == 1
        assert stats.success_count == 1
        persisted = HashCache.load(store)
        assert "Good.java" in persisted
        assert "Broken.java" not in persisted

    def test_persist_failure_is_not_fatal(
        self,
        tmp_path: Path,
        store: Path,
        java_formatter: JavaFormatter,
        unformatted_java: str,
        mocker: MockerFixture,
    ) -> None:
        source = _write(tmp_path / "Foo.java", unformatted_java)
        _ = mocker.patch.object(
            HashCache,
            "persist",
            side_effect=CachePersistError(store, PermissionError("denied")),
        )

        stats = _orchestrator(tmp_path, store, [java_formatter]).run([source])

        assert stats.success_count == 1
        assert not stats.cache_persisted

    def test_parallel_run_counts_every_file_once(
        self,
        tmp_path: Path,
        store: Path,
        java_formatter: JavaFormatter,
        unformatted_java: str,
    ) -> None:
        files = [_write(tmp_path / f"pkg{index}" / "Foo.java", unformatted_java) for index in range(8)]

        stats = _orchestrator(tmp_path, store, [java_formatter], workers=4).run(files)

        assert stats.success_count == 8
        assert stats.total == 8
        assert len(HashCache.load(store)) == 8

    def test_duplicates_are_processed_once(
        self,
        tmp_path: Path,
        store: Path,
        java_formatter: JavaFormatter,
        unformatted_java: str,
    ) -> None:
        source = _write(tmp_path / "Foo.java", unformatted_java)

        stats = _orchestrator(tmp_path, store, [java_formatter]).run([source, tmp_path / "." / "Foo.java"])

        assert stats.total == 1

    def test_progress_callback_receives_counts(
        self,
        tmp_path: Path,
        store: Path,
        java_formatter: JavaFormatter,
        unformatted_java: str,
    ) -> None:
        first = _write(tmp_path / "A.java", unformatted_java)
        second = _write(tmp_path / "B.java", unformatted_java)
        calls: list[tuple[int, int, Path]] = []

        def on_progress(processed: int, total: int, path: Path) -> None:
            calls.append((processed, total, path))

        _ = _orchestrator(tmp_path, store, [java_formatter], progress_callback=on_progress).run([first, second])

        assert calls == [(1, 2, first), (2, 2, second)]

    def test_dry_run_writes_neither_files_nor_cache(
        self,
        tmp_path: Path,
        store: Path,
        java_formatter: JavaFormatter,
        unformatted_java: str,
    ) -> None:
        source = _write(tmp_path / "Foo.java", unformatted_java)

        stats = _orchestrator(tmp_path, store, [java_formatter], dry_run=True).run([source])

        assert stats.success_count == 1
        assert stats.changed_files == [source]
        assert source.read_bytes().decode("utf-8") == unformatted_java
        assert not store.exists()
        assert not store.parent.exists()

    def test_clear_cache_ignores_stored_digests(
        self,
        tmp_path: Path,
        store: Path,
        java_formatter: JavaFormatter,
        unformatted_java: str,
        mocker: MockerFixture,
    ) -> None:
        source = _write(tmp_path / "Foo.java", unformatted_java)
        _ = _orchestrator(tmp_path, store, [java_formatter]).run([source])
        spy = mocker.spy(java_formatter, "format")

        stats = _orchestrator(tmp_path, store, [java_formatter], clear_cache=True).run([source])

        spy.assert_called_once()
        assert stats.skipped_count == 1


def test_deduplicate_keeps_first_occurrence(tmp_path: Path) -> None:
    first = tmp_path / "A.java"
    alias = tmp_path / "sub" / ".." / "A.java"
    other = tmp_path / "B.java"

    assert deduplicate([first, other, alias]) == [first, other]
