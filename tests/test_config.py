"""
Unit tests for configuration resolution.
"""

import tempfile
from pathlib import Path

import pytest

from file_relocator.config import (
    DEFAULT_EXTENSIONS,
    build_config,
    normalize_extensions,
    resolve_directories,
)
from file_relocator.errors import ConfigError


class TestResolveDirectories:
    """Tests for resolve_directories function."""

    def test_defaults_from_home(self):
        """Derives both paths from HOME."""
        with tempfile.TemporaryDirectory() as tmp:
            source, target = resolve_directories(environ={"HOME": tmp})

            assert source == Path(tmp).absolute() / "Downloads"
            assert target == Path(tmp).absolute() / "Documents" / "PDFs"

    def test_explicit_paths_win(self):
        """Explicit source and target override HOME."""
        with tempfile.TemporaryDirectory() as tmp:
            source, target = resolve_directories(
                source=Path(tmp) / "in",
                target=Path(tmp) / "out",
                environ={"HOME": "/elsewhere"},
            )

            assert source == Path(tmp).absolute() / "in"
            assert target == Path(tmp).absolute() / "out"

    def test_missing_home_is_config_error(self):
        """Missing HOME without explicit paths raises ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            resolve_directories(environ={})

        assert "HOME" in str(exc_info.value)

    def test_empty_home_is_config_error(self):
        """Blank HOME counts as missing."""
        with pytest.raises(ConfigError):
            resolve_directories(environ={"HOME": "  "})

    def test_missing_home_with_one_override(self):
        """HOME is still needed for the path that was not given."""
        with pytest.raises(ConfigError):
            resolve_directories(source="/tmp/src", environ={})

    def test_missing_home_with_both_overrides(self):
        """HOME is not needed when both paths are explicit."""
        source, target = resolve_directories(
            source="/tmp/src", target="/tmp/dst", environ={}
        )

        assert source.is_absolute()
        assert target.is_absolute()

    def test_relative_paths_become_absolute(self):
        """Relative explicit paths are made absolute."""
        source, target = resolve_directories(
            source="relative/src", target="relative/dst", environ={}
        )

        assert source.is_absolute()
        assert target.is_absolute()


class TestNormalizeExtensions:
    """Tests for normalize_extensions function."""

    def test_none_gives_default(self):
        assert normalize_extensions(None) == DEFAULT_EXTENSIONS
        assert DEFAULT_EXTENSIONS == ("pdf",)

    def test_strips_dots_and_whitespace(self):
        """Leading dots and surrounding spaces are removed."""
        assert normalize_extensions([" .pdf", "epub "]) == ("pdf", "epub")

    def test_deduplicates_preserving_order(self):
        """Duplicates are dropped, first occurrence wins."""
        assert normalize_extensions(["pdf", "txt", ".pdf"]) == ("pdf", "txt")

    def test_case_is_preserved(self):
        """Case is kept; comparison mode decides how it is used."""
        assert normalize_extensions(["PDF"]) == ("PDF",)

    def test_empty_extension_rejected(self):
        """A bare dot or blank string is invalid."""
        with pytest.raises(ConfigError):
            normalize_extensions(["."])

    def test_empty_list_rejected(self):
        """An empty filter is invalid."""
        with pytest.raises(ConfigError):
            normalize_extensions([])


class TestBuildConfig:
    """Tests for build_config function."""

    def test_builds_from_home(self):
        """Builds a config when the default source exists."""
        with tempfile.TemporaryDirectory() as tmp:
            (Path(tmp) / "Downloads").mkdir()

            config = build_config(environ={"HOME": tmp}, dry_run=True)

            assert config.source_dir == Path(tmp).absolute() / "Downloads"
            assert config.target_dir == Path(tmp).absolute() / "Documents" / "PDFs"
            assert config.extensions == ("pdf",)
            assert config.case_sensitive is True
            assert config.dry_run is True

    def test_target_need_not_exist(self):
        """A missing target is fine; it is created later."""
        with tempfile.TemporaryDirectory() as tmp:
            config = build_config(source=tmp, target=Path(tmp) / "a" / "b")
            assert not config.target_dir.exists()

    def test_missing_source_rejected(self):
        """Non-existent source raises ConfigError."""
        with tempfile.TemporaryDirectory() as tmp:
            with pytest.raises(ConfigError) as exc_info:
                build_config(source=Path(tmp) / "nope", target=Path(tmp) / "out")

            assert "does not exist" in str(exc_info.value)

    def test_source_file_rejected(self):
        """A file as source raises ConfigError."""
        with tempfile.TemporaryDirectory() as tmp:
            file_path = Path(tmp) / "file.txt"
            file_path.write_text("content")

            with pytest.raises(ConfigError) as exc_info:
                build_config(source=file_path, target=Path(tmp) / "out")

            assert "not a directory" in str(exc_info.value)

    def test_same_source_and_target_rejected(self):
        """Source and target must differ."""
        with tempfile.TemporaryDirectory() as tmp:
            with pytest.raises(ConfigError) as exc_info:
                build_config(source=tmp, target=tmp)

            assert "same directory" in str(exc_info.value)

    def test_custom_extensions(self):
        with tempfile.TemporaryDirectory() as tmp:
            config = build_config(
                source=tmp,
                target=Path(tmp) / "out",
                extensions=[".epub", "mobi"],
                case_sensitive=False,
            )

            assert config.extensions == ("epub", "mobi")
            assert config.case_sensitive is False
