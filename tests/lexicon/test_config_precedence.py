from __future__ import annotations

from pathlib import Path

from symtab.lexicon.config import LexiconSettings

ENV_KEYS = [
    "SYMTAB_LEXICON_UNKNOWN_KEY",
    "SYMTAB_LEXICON_MISS_POLICY",
    "SYMTAB_LEXICON_TEMPLATE",
    "SYMTAB_LEXICON_MIN_COUNT",
]


def _clear_env(monkeypatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def _write(tmp: Path, name: str, content: str) -> Path:
    p = tmp / name
    p.write_text(content)
    return p


def test_lexicon_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    # Arrange TOML
    _write(
        tmp_path,
        "symtab.toml",
        """
        [lexicon]
        unknown_key = "*UNK*"
        miss_policy = "strict_optional"
        min_count = 4
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)
    # Arrange ENV that should override TOML
    monkeypatch.setenv("SYMTAB_LEXICON_MISS_POLICY", "template_fallback")
    monkeypatch.setenv("SYMTAB_LEXICON_MIN_COUNT", "2")

    # Act
    s = LexiconSettings.load()

    # Assert precedence: env > TOML
    assert s.miss_policy == "template_fallback"
    assert s.min_count == 2
    assert s.unknown_key == "*UNK*"  # TOML only


def test_lexicon_settings_from_pyproject_when_no_symtab_toml(tmp_path: Path, monkeypatch) -> None:
    _write(
        tmp_path,
        "pyproject.toml",
        """
        [tool.symtab.lexicon]
        template = "shape"
        miss_policy = "Template-Fallback"
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = LexiconSettings.load()

    assert s.template == "shape"
    assert s.miss_policy == "template_fallback"


def test_lexicon_settings_top_level_keys_and_explicit_path(tmp_path: Path, monkeypatch) -> None:
    path = _write(tmp_path, "custom.toml", 'template = "digits"\nmin_count = 5\n')
    _clear_env(monkeypatch)

    s = LexiconSettings.load(path)

    assert s.template == "digits"
    assert s.min_count == 5


def test_lexicon_settings_invalid_values_ignored(tmp_path: Path, monkeypatch) -> None:
    _write(
        tmp_path,
        "symtab.toml",
        """
        [lexicon]
        miss_policy = "lenient"
        template = "stem"
        min_count = 0
        unknown_key = ""
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)
    monkeypatch.setenv("SYMTAB_LEXICON_MIN_COUNT", "many")

    s = LexiconSettings.load()

    assert s == LexiconSettings()


def test_lexicon_settings_defaults_when_no_config(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = LexiconSettings.load()

    assert s.unknown_key == "<UNK>"
    assert s.miss_policy == "sentinel"
    assert s.template == "lower_digits"
    assert s.min_count == 1


def test_lexicon_settings_malformed_toml_falls_back_to_defaults(tmp_path: Path, monkeypatch) -> None:
    _write(tmp_path, "symtab.toml", "[lexicon\nmin_count = ")
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    assert LexiconSettings.load() == LexiconSettings()
