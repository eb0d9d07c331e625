"""Test configuration management."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from srcfmt.config.config import FormatterConfig
from srcfmt.features.formatting.domain.errors import ConfigError
from srcfmt.features.formatting.domain.line_ending import LineEnding
from srcfmt.features.formatting.engines.import_sorter import UnmatchedImports


def test_defaults(tmp_path: Path) -> None:
    config = FormatterConfig(base_dir=tmp_path)

    assert config.line_ending is LineEnding.AUTO
    assert config.unmatched_imports is UnmatchedImports.LAST
    assert config.directories == ["src"]
    assert config.includes == ["**/*.java", "**/*.js"]
    assert config.config_file is None
    assert config.workers == 1
    assert config.target_path == (tmp_path / "target").resolve()
    assert config.cache_store == (tmp_path / "target" / "srcfmt-cache.properties").resolve()


def test_load_from_srcfmt_toml(tmp_path: Path) -> None:
    _ = (tmp_path / "srcfmt.toml").write_text(
        "\n".join(
            [
                'directories = ["src/main/java", "src/main/js"]',
                'line_ending = "lf"',
                'unmatched_imports = "first"',
                'config_file = "eclipse-formatter.xml"',
                'encoding = "UTF-8"',
                "compiler_source = 11",
                "workers = 2",
            ]
        ),
        encoding="utf-8",
    )

    config = FormatterConfig.load(base_dir=tmp_path)

    assert config.base_dir == tmp_path.resolve()
    assert config.directories == ["src/main/java", "src/main/js"]
    assert config.line_ending is LineEnding.LF
    assert config.unmatched_imports is UnmatchedImports.FIRST
    assert config.config_file == Path("eclipse-formatter.xml")
    assert config.compiler_source == "11"
    assert config.workers == 2
    assert config.source_directories() == [
        (tmp_path / "src" / "main" / "java").resolve(),
        (tmp_path / "src" / "main" / "js").resolve(),
    ]


def test_load_falls_back_to_pyproject_table(tmp_path: Path) -> None:
    _ = (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "demo"\n\n[tool.srcfmt]\ntarget_directory = "build"\nskip = true\n',
        encoding="utf-8",
    )

    config = FormatterConfig.load(base_dir=tmp_path)

    assert config.skip is True
    assert config.target_path == (tmp_path / "build").resolve()


def test_load_without_files_uses_defaults(tmp_path: Path) -> None:
    config = FormatterConfig.load(base_dir=tmp_path)

    assert config == FormatterConfig(base_dir=tmp_path.resolve())


def test_explicit_config_path_resolves_base_dir_from_file(tmp_path: Path) -> None:
    config_dir = tmp_path / "conf"
    config_dir.mkdir()
    config_path = config_dir / "fmt.toml"
    _ = config_path.write_text('base_dir = ".."\n', encoding="utf-8")

    config = FormatterConfig.load(config_path, base_dir=tmp_path)

    assert config.project_dir == tmp_path.resolve()


def test_missing_explicit_config_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        _ = FormatterConfig.load(tmp_path / "absent.toml", base_dir=tmp_path)


def test_invalid_toml_raises(tmp_path: Path) -> None:
    _ = (tmp_path / "srcfmt.toml").write_text("workers = = 2\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        _ = FormatterConfig.load(base_dir=tmp_path)


def test_unknown_keys_raise(tmp_path: Path) -> None:
    _ = (tmp_path / "srcfmt.toml").write_text('colour = "blue"\n', encoding="utf-8")

    with pytest.raises(ConfigError, match="colour"):
        _ = FormatterConfig.load(base_dir=tmp_path)


@pytest.mark.parametrize(
    "values",
    [
        {"workers": 0},
        {"workers": True},
        {"skip": "yes"},
        {"directories": [1, 2]},
        {"line_ending": "unix"},
        {"unmatched_imports": "middle"},
        {"config_file": 3},
    ],
)
def test_invalid_values_raise(values: dict[str, object]) -> None:
    with pytest.raises(ConfigError):
        _ = FormatterConfig.from_mapping(values)


def test_single_string_list_is_accepted() -> None:
    config = FormatterConfig.from_mapping({"excludes": "**/gen/**"})

    assert config.excludes == ["**/gen/**"]


def test_with_overrides_ignores_none(tmp_path: Path) -> None:
    config = FormatterConfig(base_dir=tmp_path, workers=3)

    updated = config.with_overrides(workers=None, line_ending=LineEnding.CRLF)

    assert updated.workers == 3
    assert updated.line_ending is LineEnding.CRLF
    assert config.line_ending is LineEnding.AUTO


def test_resolve_encoding_normalizes_codec_name() -> None:
    assert FormatterConfig(encoding="UTF8").resolve_encoding() == "utf-8"


def test_resolve_encoding_rejects_unknown_codec() -> None:
    with pytest.raises(ConfigError, match="not supported"):
        _ = FormatterConfig(encoding="klingon-8").resolve_encoding()


def test_unset_encoding_warns_and_uses_platform(
    mocker: MockerFixture, caplog: pytest.LogCaptureFixture
) -> None:
    _ = mocker.patch("srcfmt.config.config.locale.getpreferredencoding", return_value="CP1252")
    caplog.set_level(logging.WARNING)

    encoding = FormatterConfig().resolve_encoding()

    assert encoding == "cp1252"
    assert "platform dependent" in caplog.text


def test_formatter_settings_carry_compiler_levels(tmp_path: Path) -> None:
    config = FormatterConfig(base_dir=tmp_path, compiler_source="11", compiler_compliance="11")

    settings = config.formatter_settings()

    assert settings.compiler_source == "11"
    assert settings.compiler_compliance == "11"
    assert settings.compiler_target_platform == "1.8"
