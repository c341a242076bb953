"""Tests for MentionConfig and TOML loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from storylinks.config import MentionConfig, load_config


class TestMentionConfig:
    def test_defaults(self) -> None:
        config = MentionConfig()

        assert config.ascii_word_boundaries is False
        assert config.character_title_template == "View character: {name}"
        assert config.note_title_template == "View note: {name}"
        assert config.link_scheme == "mention"

    def test_template_requires_placeholder(self) -> None:
        with pytest.raises(ValidationError):
            MentionConfig(note_title_template="View note")

    def test_scheme_must_be_bare(self) -> None:
        with pytest.raises(ValidationError):
            MentionConfig(link_scheme="mention:")

    def test_frozen(self) -> None:
        config = MentionConfig()
        with pytest.raises(ValidationError):
            config.link_scheme = "ref"  # type: ignore[misc]


class TestLoadConfig:
    def test_reads_mentions_table(self, tmp_path: Path) -> None:
        path = tmp_path / "storylinks.toml"
        path.write_text('[mentions]\nascii_word_boundaries = true\nlink_scheme = "ref"\nunknown = 1\n')

        config = load_config([path])

        assert config.ascii_word_boundaries is True
        assert config.link_scheme == "ref"

    def test_first_existing_file_wins(self, tmp_path: Path) -> None:
        first = tmp_path / "a.toml"
        second = tmp_path / "b.toml"
        first.write_text("[mentions]\nmax_scan_entries = 10\n")
        second.write_text("[mentions]\nmax_scan_entries = 20\n")

        assert load_config([tmp_path / "missing.toml", first, second]).max_scan_entries == 10

    def test_missing_files_use_defaults(self, tmp_path: Path) -> None:
        assert load_config([tmp_path / "missing.toml"]) == MentionConfig()

    def test_malformed_file_skipped(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.toml"
        bad.write_text("[mentions\n")
        good = tmp_path / "good.toml"
        good.write_text("[mentions]\nmax_index_entries = 3\n")

        assert load_config([bad, good]).max_index_entries == 3

    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "custom.toml"
        path.write_text('[mentions]\nnote_title_template = "Note: {name}"\n')
        monkeypatch.setenv("STORYLINKS_CONFIG", str(path))

        assert load_config().note_title_template == "Note: {name}"

    def test_bad_value_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "storylinks.toml"
        path.write_text("[mentions]\nmax_scan_entries = 0\n")

        with pytest.raises(ValidationError):
            load_config([path])
