"""
Configuration for the symtab.lexicon module.

Defines LexiconSettings, a frozen dataclass carrying the knobs used to build word
managers and vocabularies. Defaults are sourced from symtab.core.constants.

Source of truth
- symtab.core.constants.DEFAULT_UNKNOWN_KEY
- symtab.core.policies.MissPolicyKind values for ``miss_policy``
- symtab.core.templates.TEMPLATE_EXTRACTORS names for ``template``

Import DAG discipline
- Depends only on stdlib and symtab.core.
- Does not import symtab.io.

Notes
- Precedence: environment > TOML > defaults.
- Invalid values are ignored; the lower-precedence value is kept.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from symtab.core.constants import DEFAULT_UNKNOWN_KEY
from symtab.core.policies import MissPolicyKind
from symtab.core.templates import TEMPLATE_EXTRACTORS

__all__ = ["LexiconSettings"]


@dataclass(frozen=True)
class LexiconSettings:
    """
    Runtime settings for lexicon managers.

    Attributes:
        unknown_key (str): Sentinel surface form registered first (id 0).
        miss_policy (str): One of "strict_optional", "sentinel", "template_fallback".
        template (str): Template extractor name used by "template_fallback".
        min_count (int): Minimum frequency for a token to get its own id when
            building a vocabulary (>= 1).

    Examples:
        >>> from symtab.lexicon.config import LexiconSettings
        >>> LexiconSettings(miss_policy="template_fallback", min_count=2)  # doctest: +ELLIPSIS
        LexiconSettings(...)
    """

    unknown_key: str = DEFAULT_UNKNOWN_KEY
    miss_policy: str = MissPolicyKind.SENTINEL.value
    template: str = "lower_digits"
    min_count: int = 1

    @classmethod
    def _apply_mapping(cls, base: LexiconSettings, cfg: dict[str, Any] | None) -> LexiconSettings:
        """Apply a loose config mapping onto LexiconSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if "unknown_key" in cfg and isinstance(cfg["unknown_key"], str) and cfg["unknown_key"]:
            s = replace(s, unknown_key=cfg["unknown_key"])

        if "miss_policy" in cfg and isinstance(cfg["miss_policy"], str):
            policy = cfg["miss_policy"].strip().lower().replace("-", "_")
            if policy in {kind.value for kind in MissPolicyKind}:
                s = replace(s, miss_policy=policy)

        if "template" in cfg and isinstance(cfg["template"], str):
            template = cfg["template"].strip().lower().replace("-", "_")
            if template in TEMPLATE_EXTRACTORS:
                s = replace(s, template=template)

        if "min_count" in cfg:
            try:
                min_count = int(cfg["min_count"])
            except (TypeError, ValueError):
                min_count = s.min_count
            if min_count >= 1:
                s = replace(s, min_count=min_count)

        return s

    @classmethod
    def from_env(cls, base: LexiconSettings | None = None, prefix: str = "SYMTAB_LEXICON_") -> LexiconSettings:
        """
        Build LexiconSettings from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - SYMTAB_LEXICON_UNKNOWN_KEY
            - SYMTAB_LEXICON_MISS_POLICY
            - SYMTAB_LEXICON_TEMPLATE
            - SYMTAB_LEXICON_MIN_COUNT
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for name in ("unknown_key", "miss_policy", "template", "min_count"):
            v = os.getenv(prefix + name.upper())
            if v:
                mapping[name] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> LexiconSettings:
        """
        Build LexiconSettings from a TOML file.

        Search order when `path` is None:
            1) ./symtab.toml (with either a [lexicon] table or top-level keys)
            2) ./pyproject.toml under [tool.symtab.lexicon]

        Returns defaults if no file is present or none parses.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError):
                return None

        cfg: dict[str, Any] | None = None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "symtab.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("symtab", {}).get("lexicon", {}) if isinstance(tool, dict) else None
            elif isinstance(data.get("lexicon"), dict):
                cfg = data["lexicon"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> LexiconSettings:
        """
        Load LexiconSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (symtab.toml, pyproject.toml).

        Returns:
            LexiconSettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
