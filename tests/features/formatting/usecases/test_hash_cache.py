"""Summary: Tests for the persisted path-to-digest cache.
Why: Cache correctness decides which files reach a formatter."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

import pytest

from srcfmt.features.formatting.domain.errors import CachePersistError
from srcfmt.features.formatting.usecases.hash_cache import (
    STORE_HEADER,
    CorruptCacheError,
    HashCache,
    cache_key,
    compute_digest,
    parse_store,
)


class TestDigest:
    """SHA-512 digests over encoded text."""

    def test_matches_sha512_of_encoded_text(self) -> None:
        digest = compute_digest("class A {}\n", "utf-8")

        assert digest == hashlib.sha512(b"class A {}\n").hexdigest()
        assert len(digest) == 128

    def test_is_stable(self) -> None:
        assert compute_digest("x", "utf-8") == compute_digest("x", "utf-8")

    def test_depends_on_encoding(self) -> None:
        assert compute_digest("é", "utf-8") != compute_digest("é", "latin-1")

    def test_distinct_texts_have_distinct_digests(self) -> None:
        digests = {compute_digest(f"class C{index} {{}}\n", "utf-8") for index in range(3000)}

        assert len(digests) == 3000


class TestCacheKey:
    """Project-relative keys."""

    def test_relative_posix_key(self, tmp_path: Path) -> None:
        path = tmp_path / "src" / "A.java"

        assert cache_key(path, tmp_path) == "src/A.java"

    def test_outside_base_uses_absolute_path(self, tmp_path: Path) -> None:
        base = tmp_path / "project"
        outside = tmp_path / "other" / "A.java"

        assert cache_key(outside, base) == outside.resolve().as_posix()


class TestLoad:
    """Loading the store never raises."""

    def test_missing_target_directory_is_created(self, tmp_path: Path) -> None:
        store = tmp_path / "target" / "srcfmt-cache.properties"

        cache = HashCache.load(store)

        assert len(cache) == 0
        assert store.parent.is_dir()

    def test_read_only_load_leaves_target_directory_absent(self, tmp_path: Path) -> None:
        store = tmp_path / "target" / "srcfmt-cache.properties"

        cache = HashCache.load(store, create_directory=False)

        assert len(cache) == 0
        assert not store.parent.exists()

    def test_missing_store_yields_empty_cache(self, tmp_path: Path) -> None:
        cache = HashCache.load(tmp_path / "cache.properties")

        assert len(cache) == 0

    def test_corrupt_store_yields_empty_cache_with_warning(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        store = tmp_path / "cache.properties"
        _ = store.write_text("src/A.java=not-a-digest\n", encoding="utf-8")
        caplog.set_level(logging.WARNING)

        cache = HashCache.load(store)

        assert len(cache) == 0
        assert "Cannot load file hash cache" in caplog.text

    def test_target_that_is_a_file_yields_empty_cache(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        target = tmp_path / "target"
        _ = target.write_text("", encoding="utf-8")
        caplog.set_level(logging.WARNING)

        cache = HashCache.load(target / "cache.properties")

        assert len(cache) == 0
        assert "is not a directory" in caplog.text


class TestPersist:
    """Writing the store."""

    def test_round_trip(self, tmp_path: Path) -> None:
        store = tmp_path / "cache.properties"
        cache = HashCache()
        cache.put("src/b/B.java", compute_digest("b", "utf-8"))
        cache.put("src/a/A.java", compute_digest("a", "utf-8"))

        cache.persist(store)
        loaded = HashCache.load(store)

        assert dict(loaded.entries()) == dict(cache.entries())
        lines = store.read_text(encoding="utf-8").splitlines()
        assert lines[0] == STORE_HEADER
        assert [line.split("=")[0] for line in lines[1:]] == ["src/a/A.java", "src/b/B.java"]

    def test_put_overwrites(self) -> None:
        cache = HashCache()
        cache.put("A.java", "1" * 128)
        cache.put("A.java", "2" * 128)

        assert cache.get("A.java") == "2" * 128
        assert "A.java" in cache
        assert len(cache) == 1

    def test_persist_failure_raises_cache_persist_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        _ = blocker.write_text("", encoding="utf-8")
        cache = HashCache({"A.java": "0" * 128})

        with pytest.raises(CachePersistError) as excinfo:
            cache.persist(blocker / "cache.properties")

        assert isinstance(excinfo.value.cause, OSError)

    def test_entries_are_read_only(self) -> None:
        cache = HashCache({"A.java": "0" * 128})

        with pytest.raises(TypeError):
            cache.entries()["B.java"] = "1" * 128  # type: ignore[index]


class TestParseStore:
    """Store parsing."""

    def test_skips_comments_and_blank_lines(self) -> None:
        digest = "a" * 128

        entries = parse_store(f"# header\n! bang comment\n\nsrc/A.java={digest}\n")

        assert entries == {"src/A.java": digest}

    def test_keys_may_contain_equals_signs(self) -> None:
        digest = "b" * 128

        assert parse_store(f"src/a=b.java={digest}\n") == {"src/a=b.java": digest}

    @pytest.mark.parametrize("content", ["no separator\n", "A.java=" + "z" * 128 + "\n", "=" + "a" * 128])
    def test_malformed_lines_raise(self, content: str) -> None:
        with pytest.raises(CorruptCacheError):
            _ = parse_store(content)
