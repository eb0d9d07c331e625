"""Tests for loading formatter option sets."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from srcfmt.config.options_loader import load_formatter_options
from srcfmt.features.formatting.domain.errors import ConfigError

ECLIPSE_PROFILE = """<?xml version="1.0" encoding="UTF-8" standalone="no"?>
<profiles version="12">
<profile kind="CodeFormatterProfile" name="Project" version="12">
<setting id="org.eclipse.jdt.core.formatter.tabulation.char" value="space"/>
<setting id="org.eclipse.jdt.core.formatter.tabulation.size" value="2"/>
</profile>
</profiles>
"""


def test_unset_file_yields_empty_options(tmp_path: Path) -> None:
    assert load_formatter_options(None, tmp_path) == {}


def test_missing_file_yields_none(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG)

    assert load_formatter_options("absent.xml", tmp_path) is None
    assert "cannot be found" in caplog.text


def test_reads_eclipse_xml_profile(tmp_path: Path) -> None:
    _ = (tmp_path / "formatter.xml").write_text(ECLIPSE_PROFILE, encoding="utf-8")

    options = load_formatter_options("formatter.xml", tmp_path)

    assert options == {
        "org.eclipse.jdt.core.formatter.tabulation.char": "space",
        "org.eclipse.jdt.core.formatter.tabulation.size": "2",
    }


def test_xml_without_settings_is_rejected(tmp_path: Path) -> None:
    _ = (tmp_path / "empty.xml").write_text("<profiles/>", encoding="utf-8")

    with pytest.raises(ConfigError, match="does not define any setting"):
        _ = load_formatter_options("empty.xml", tmp_path)


def test_malformed_xml_is_rejected(tmp_path: Path) -> None:
    _ = (tmp_path / "broken.xml").write_text("<profiles><setting", encoding="utf-8")

    with pytest.raises(ConfigError, match="Cannot parse"):
        _ = load_formatter_options("broken.xml", tmp_path)


def test_reads_toml_formatter_table(tmp_path: Path) -> None:
    _ = (tmp_path / "fmt.toml").write_text(
        '[formatter]\n"org.eclipse.jdt.core.formatter.tabulation.size" = 8\n"flag" = true\n',
        encoding="utf-8",
    )

    options = load_formatter_options(tmp_path / "fmt.toml", tmp_path)

    assert options == {"org.eclipse.jdt.core.formatter.tabulation.size": "8", "flag": "true"}


def test_reads_flat_toml(tmp_path: Path) -> None:
    _ = (tmp_path / "fmt.toml").write_text('"a.b" = "tab"\n', encoding="utf-8")

    assert load_formatter_options("fmt.toml", tmp_path) == {"a.b": "tab"}


def test_toml_tables_are_rejected_as_values(tmp_path: Path) -> None:
    _ = (tmp_path / "fmt.toml").write_text("[other]\nkey = 1\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="must be a scalar"):
        _ = load_formatter_options("fmt.toml", tmp_path)


def test_reads_properties(tmp_path: Path) -> None:
    _ = (tmp_path / "fmt.properties").write_text(
        "# comment\n! other comment\n\nkey.one = 1\nkey.two=two\n",
        encoding="utf-8",
    )

    assert load_formatter_options("fmt.properties", tmp_path) == {"key.one": "1", "key.two": "two"}


def test_properties_line_without_separator_is_rejected(tmp_path: Path) -> None:
    _ = (tmp_path / "fmt.properties").write_text("just words\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="line 1"):
        _ = load_formatter_options("fmt.properties", tmp_path)
