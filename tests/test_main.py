"""Tests for the command line entry point."""

import logging
from pathlib import Path

from title_filter.main import EXIT_CONFIG_ERROR, EXIT_OK, EXIT_REJECTED, main, read_titles

CONFIG_DIR = str(Path(__file__).resolve().parent.parent / "config")


def test_main_all_pass(capsys):
    code = main(["2019 Prizm Zion Williamson Silver PSA 10", "--config-dir", CONFIG_DIR])
    out = capsys.readouterr().out
    assert code == EXIT_OK
    assert "PASS 2019 Prizm Zion Williamson Silver PSA 10" in out


def test_main_rejected(capsys):
    """Test that a failing title prints its reasons."""
    code = main(["Mystery Repack Box", "--config-dir", CONFIG_DIR])
    out = capsys.readouterr().out
    assert code == EXIT_REJECTED
    assert "FAIL Mystery Repack Box" in out
    assert "  - Matched with blacklisted term: Repack." in out
    assert "  - Matched with blacklisted term: Mystery." in out


def test_main_card_set(capsys):
    code = main(["Jumbo Pikachu", "--card-set", "pokemon_base_set", "--config-dir", CONFIG_DIR])
    assert code == EXIT_REJECTED
    assert "Matched with wordsToStrip: Jumbo." in capsys.readouterr().out


def test_main_unknown_card_set(capsys):
    code = main(["Jumbo Pikachu", "--card-set", "nope", "--config-dir", CONFIG_DIR])
    assert code == EXIT_CONFIG_ERROR
    assert "Unknown card set" in capsys.readouterr().err


def test_main_bad_pattern(tmp_path, capsys):
    """Test that a broken pattern is reported as a configuration error."""
    (tmp_path / "uel_settings.yaml").write_text(
        "\n".join(
            [
                "blacklist: []",
                "whitelist: []",
                "words_to_strip: ['(lot']",
                "grades_to_strip: []",
                "emoji_regex: '/x/g'",
                "punctuation_to_strip_regex: '[-]'",
                "punctuation_pattern_regex: ''",
                "grade_punctuation_pattern_regex: ''",
            ]
        ),
        encoding="utf-8",
    )
    code = main(["Jordan lot", "--config-dir", str(tmp_path)])
    assert code == EXIT_CONFIG_ERROR
    assert "Invalid filter configuration" in capsys.readouterr().err


def test_main_reads_file(tmp_path, capsys):
    titles = tmp_path / "titles.txt"
    titles.write_text("Jordan RC\n\nJordan Reprint\n", encoding="utf-8")
    assert read_titles(titles) == ["Jordan RC", "Jordan Reprint"]
    code = main(["--file", str(titles), "--config-dir", CONFIG_DIR])
    out = capsys.readouterr().out
    assert code == EXIT_REJECTED
    assert "PASS Jordan RC" in out
    assert "FAIL Jordan Reprint" in out


def test_main_no_titles(capsys):
    assert main(["--config-dir", CONFIG_DIR]) == EXIT_OK
    assert "No titles given" in capsys.readouterr().err


def test_main_debug_logs(caplog, capsys):
    caplog.set_level(logging.INFO, logger="title_filter.validators")
    main(["Mystery Box", "--debug", "--config-dir", CONFIG_DIR])
    assert "Matched with blacklisted term: Mystery." in caplog.messages
