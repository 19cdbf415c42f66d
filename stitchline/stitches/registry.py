"""
Stitch registry: loads the stitch dictionary and section vocabulary from YAML
at startup, validates them, and exposes a read-only query API.

The registry is a module-level singleton; call get_registry() to obtain it.
All tables are loaded and validated once at import time. Nothing writes to
the registry after startup.

──────────────────────────────────────────────────────────────────────────────
Ordering contract
──────────────────────────────────────────────────────────────────────────────
``entries`` preserves the declaration order of stitches.yaml.  The detector
relies on that order to break ties between matches that start at the same
offset: the entry declared first sorts first, and therefore survives overlap
resolution.  Reordering the YAML file changes highlighting output.
──────────────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional, cast

import yaml

from .types import StitchCategory, StitchEntry

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent / "data"

# Colour used when a category has no dictionary entry.
DEFAULT_STITCH_COLOR = "#95A5A6"


class StitchRegistry:
    """
    Read-only registry of the stitch dictionary and header vocabulary.

    ``entries`` is a tuple in declaration order; ``by_abbreviation`` is a
    MappingProxyType keyed by lower-cased abbreviation.  Both are immutable
    for the lifetime of the registry instance.

    Instantiate directly to use a custom data directory (e.g. in tests);
    otherwise use get_registry() for the module singleton.
    """

    def __init__(self, data_dir: Path = _DATA_DIR) -> None:
        self._data_dir = data_dir

        # Type annotations only; actual assignment happens in _load_*
        self.entries: tuple[StitchEntry, ...]
        self.by_abbreviation: MappingProxyType[str, StitchEntry]
        self.header_keywords: tuple[str, ...]
        self.short_header_max_length: int

        errors: list[str] = []
        self._load_stitches(errors)
        self._load_sections(errors)
        if errors:
            raise ValueError(
                "Stitch registry validation failed:\n" + "\n".join(f"  • {e}" for e in errors)
            )
        logger.debug(
            "Loaded %d stitch entries and %d header keywords from %s",
            len(self.entries),
            len(self.header_keywords),
            self._data_dir,
        )

    # ── Loading ────────────────────────────────────────────────────────────────

    def _load_yaml(self, filename: str) -> dict[str, Any]:
        path = self._data_dir / filename
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Stitch data file not found: {path}") from None
        except yaml.YAMLError as exc:
            raise ValueError(f"Failed to parse stitch data file {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Stitch data file {path} must contain a mapping at top level")
        return cast(dict[str, Any], data)

    def _load_stitches(self, errors: list[str]) -> None:
        data = self._load_yaml("stitches.yaml")
        entries: list[StitchEntry] = []
        index: dict[str, StitchEntry] = {}

        for position, raw in enumerate(data.get("entries") or []):
            abbreviation = str(raw.get("abbreviation", "")).strip()
            prefix = f"stitch entry #{position} ({abbreviation or '?'})"
            if not abbreviation:
                errors.append(f"{prefix}: abbreviation is missing")
                continue

            try:
                category = StitchCategory(raw.get("category"))
            except ValueError:
                errors.append(f"{prefix}: unknown category {raw.get('category')!r}")
                continue

            try:
                pattern = re.compile(raw["pattern"], re.IGNORECASE)
            except KeyError:
                errors.append(f"{prefix}: pattern is missing")
                continue
            except re.error as exc:
                errors.append(f"{prefix}: pattern does not compile: {exc}")
                continue

            key = abbreviation.lower()
            if key in index:
                errors.append(f"{prefix}: duplicate abbreviation")
                continue

            entry = StitchEntry(
                abbreviation=abbreviation,
                full_name=str(raw.get("full_name", abbreviation)).strip(),
                category=category,
                color=str(raw.get("color", DEFAULT_STITCH_COLOR)),
                pattern=pattern,
            )
            entries.append(entry)
            index[key] = entry

        if not entries:
            errors.append("stitches.yaml: no stitch entries defined")

        self.entries = tuple(entries)
        self.by_abbreviation = MappingProxyType(index)

    def _load_sections(self, errors: list[str]) -> None:
        data = self._load_yaml("sections.yaml")
        keywords = tuple(str(k).strip() for k in data.get("header_keywords") or [] if str(k).strip())
        if not keywords:
            errors.append("sections.yaml: header_keywords is empty")
        max_length = data.get("short_header_max_length", 50)
        if not isinstance(max_length, int) or max_length < 1:
            errors.append(
                f"sections.yaml: short_header_max_length must be a positive integer, "
                f"got {max_length!r}"
            )
            max_length = 50
        self.header_keywords = keywords
        self.short_header_max_length = max_length

    # ── Query API ──────────────────────────────────────────────────────────────

    def get_stitch_info(self, abbreviation: str) -> Optional[StitchEntry]:
        """Return the entry for *abbreviation* (case-insensitive), or None."""
        return self.by_abbreviation.get(abbreviation.strip().lower())

    def color_for_category(self, category: StitchCategory) -> str:
        """Return the colour of the first entry in *category*."""
        for entry in self.entries:
            if entry.category == category:
                return entry.color
        return DEFAULT_STITCH_COLOR


# ── Module-level singleton ─────────────────────────────────────────────────────
#
# Initialized eagerly at import time so there is no lazy-init race condition
# in concurrent contexts. The registry is read-only after construction, so
# sharing it across threads is safe.

_registry: StitchRegistry = StitchRegistry()


def get_registry() -> StitchRegistry:
    """Return the module-level registry singleton."""
    return _registry
