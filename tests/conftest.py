"""Shared pytest fixtures for srcfmt tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from srcfmt.features.formatting.engines import FormatterSettings, JavaFormatter, JavascriptFormatter
from srcfmt.platform.logging import setup_logger

UNFORMATTED_JAVA: str = (
    "package com.example;\n"
    "\n"
    "import org.junit.Test;\n"
    "import java.util.List;\n"
    "import com.acme.Widget;\n"
    "import javax.inject.Inject;\n"
    "import java.io.File;\n"
    "\n"
    "\n"
    "public class Foo {\n"
    "public void run() {   \n"
    "if (x) {\n"
    "call(a,\n"
    "b);\n"
    "}\n"
    "}\n"
    "}"
)

FORMATTED_JAVA: str = (
    "package com.example;\n"
    "\n"
    "import java.util.List;\n"
    "import java.io.File;\n"
    "\n"
    "import javax.inject.Inject;\n"
    "\n"
    "import org.junit.Test;\n"
    "\n"
    "import com.acme.Widget;\n"
    "\n"
    "public class Foo {\n"
    "\tpublic void run() {\n"
    "\t\tif (x) {\n"
    "\t\t\tcall(a,\n"
    "\t\t\t\t\tb);\n"
    "\t\t}\n"
    "\t}\n"
    "}\n"
)


@pytest.fixture(autouse=True)
def reset_logger() -> Iterator[None]:
    """Restore the console-only logger after tests that attach a log file."""

    yield None
    _ = setup_logger()


@pytest.fixture
def formatter_settings() -> FormatterSettings:
    return FormatterSettings()


@pytest.fixture
def java_formatter(formatter_settings: FormatterSettings) -> JavaFormatter:
    """Java formatter initialized with compiler defaults only."""

    formatter = JavaFormatter()
    formatter.initialize({}, formatter_settings)
    return formatter


@pytest.fixture
def javascript_formatter(formatter_settings: FormatterSettings) -> JavascriptFormatter:
    formatter = JavascriptFormatter()
    formatter.initialize({}, formatter_settings)
    return formatter


@pytest.fixture
def unformatted_java() -> str:
    return UNFORMATTED_JAVA


@pytest.fixture
def formatted_java() -> str:
    return FORMATTED_JAVA


@pytest.fixture
def java_project(tmp_path: Path) -> Path:
    """Create a project with one unformatted Java source under ``src``."""

    source = tmp_path / "src" / "com" / "example" / "Foo.java"
    source.parent.mkdir(parents=True)
    _ = source.write_bytes(UNFORMATTED_JAVA.encode("utf-8"))
    return tmp_path
