from __future__ import annotations

import json
import logging
import random
import re
import string
import time
from dataclasses import dataclass, replace
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Set

import yaml

from flipgrid.core.errors import EmptyExport, InvalidLevelDocument, NoValidLevels
from flipgrid.core.grid import TOTAL_CELLS, Grid

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


@dataclass(frozen=True)
class Level:
    id: str
    name: str
    initial_state: Grid

    def to_dict(self) -> Dict[str, Any]:
        """Wire form used by export: ``{id, name, initialState}``."""
        return {"id": self.id, "name": self.name, "initialState": list(self.initial_state)}


@dataclass(frozen=True)
class ImportResult:
    accepted: List[Level]
    rejected_count: int


def _random_suffix(length: int) -> str:
    return "".join(random.choices(_ID_ALPHABET, k=length))


def _epoch_ms() -> int:
    return int(time.time() * 1000)


def validate_level(candidate: Any, position: int) -> Optional[Level]:
    """Return a normalised Level for *candidate*, or None if it is unusable.

    *position* is the 1-based number used for the default name. Any ``id`` in
    the candidate is dropped; the returned level has an empty id until the
    repository assigns one.
    """
    if not isinstance(candidate, dict):
        return None
    state = candidate.get("initialState")
    if not isinstance(state, list) or len(state) != TOTAL_CELLS:
        return None
    if not all(isinstance(cell, bool) for cell in state):
        return None
    name = candidate.get("name")
    if not isinstance(name, str) or not name.strip():
        name = f"Imported Level {position}"
    return Level(id="", name=name, initial_state=tuple(state))


def parse_document(text: str) -> List[Any]:
    """Parse a level document into a list of raw entries.

    JSON is tried first; anything that is not JSON is read as YAML, so
    hand-written level files work too. A bare object is wrapped into a
    one-element list so both shapes are handled the same way downstream.
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError:
        try:
            raw = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise InvalidLevelDocument(f"Could not parse level document: {e}") from e
    return _as_entries(raw)


def _as_entries(raw: Any) -> List[Any]:
    if isinstance(raw, dict):
        return [raw]
    if isinstance(raw, list):
        return raw
    raise InvalidLevelDocument("Level document must be an object or a list of objects")


class LevelRepository:
    """Ordered list of competition levels; list order is play order."""

    def __init__(self, levels: Sequence[Level] = ()) -> None:
        self._levels: List[Level] = list(levels)

    def all(self) -> List[Level]:
        return list(self._levels)

    def __len__(self) -> int:
        return len(self._levels)

    def is_empty(self) -> bool:
        return not self._levels

    def _existing_ids(self) -> Set[str]:
        return {level.id for level in self._levels}

    def _unique_id(self, make_id: Callable[[], str], taken: Set[str]) -> str:
        new_id = make_id()
        while new_id in taken:
            new_id = make_id()
        taken.add(new_id)
        return new_id

    # -- authoring ---------------------------------------------------------

    def add_from_grid(self, grid: Sequence[bool], name: Optional[str] = None) -> Level:
        """Append a level drawn in the editor and return it."""
        if len(grid) != TOTAL_CELLS:
            raise InvalidLevelDocument(f"A level needs exactly {TOTAL_CELLS} cells, got {len(grid)}")
        if not name or not name.strip():
            name = f"Level {len(self._levels) + 1}"
        level_id = self._unique_id(
            lambda: f"level-{_epoch_ms()}-{_random_suffix(6)}", self._existing_ids()
        )
        level = Level(id=level_id, name=name.strip(), initial_state=tuple(bool(c) for c in grid))
        self._levels.append(level)
        logger.info("Added level %r (%s)", level.name, level.id)
        return level

    def remove(self, level_id: str) -> List[Level]:
        """Remove the level with *level_id*. Unknown ids are ignored."""
        before = len(self._levels)
        self._levels = [level for level in self._levels if level.id != level_id]
        if len(self._levels) != before:
            logger.info("Removed level %s", level_id)
        return self.all()

    # -- import ------------------------------------------------------------

    def import_batch(self, raw: Any) -> ImportResult:
        """Validate *raw* (one object or a list) and append the valid levels.

        Invalid entries are dropped and counted. If nothing is valid the list
        is left untouched and ``NoValidLevels`` is raised.
        """
        entries = _as_entries(raw)
        accepted: List[Level] = []
        rejected = 0
        for idx, entry in enumerate(entries):
            level = validate_level(entry, len(accepted) + 1)
            if level is None:
                rejected += 1
                logger.debug("Rejected level entry %d: %r", idx, entry)
                continue
            accepted.append(level)

        if not accepted:
            raise NoValidLevels(rejected)

        stamp = _epoch_ms()
        taken = self._existing_ids()
        accepted = [
            replace(level, id=self._unique_id(lambda i=idx: f"import-{stamp}-{i}-{_random_suffix(9)}", taken))
            for idx, level in enumerate(accepted)
        ]
        self._levels.extend(accepted)
        logger.info("Imported %d level(s), rejected %d", len(accepted), rejected)
        return ImportResult(accepted=accepted, rejected_count=rejected)

    def import_text(self, text: str) -> ImportResult:
        if not text.strip():
            raise InvalidLevelDocument("Level document is empty")
        return self.import_batch(parse_document(text))

    def import_file(self, path: Path) -> ImportResult:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidLevelDocument(f"Could not read {path}: {e}") from e
        return self.import_text(text)

    # -- export ------------------------------------------------------------

    def export_text(self) -> str:
        if not self._levels:
            raise EmptyExport()
        return json.dumps([level.to_dict() for level in self._levels], indent=2, ensure_ascii=False)

    def export_file(self, path: Optional[Path] = None, directory: Optional[Path] = None) -> Path:
        """Write the export to *path*, or to a dated file inside *directory*."""
        text = self.export_text()
        if path is None:
            directory = Path(directory) if directory is not None else Path.cwd()
            path = directory / default_export_name()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        logger.info("Exported %d level(s) to %s", len(self._levels), path)
        return path

    # -- bundled samples ---------------------------------------------------

    def load_bundled(self, base_dir: Optional[Path] = None) -> List[Level]:
        """Append the sample levels shipped in ``data/levels/level*.yaml``."""
        if base_dir is None:
            base_dir = Path(__file__).resolve().parent.parent / "data" / "levels"
        if not base_dir.exists():
            logger.warning("Sample levels directory not found: %s", base_dir)
            return []

        def _sort_key(p: Path) -> tuple[int, str]:
            m = re.match(r"^level(\d+)$", p.stem)
            if m:
                return (int(m.group(1)), p.stem)
            return (10**9, p.stem)

        entries: List[Any] = []
        for level_path in sorted(base_dir.glob("level*.yaml"), key=_sort_key):
            try:
                raw = yaml.safe_load(level_path.read_text(encoding="utf-8"))
            except yaml.YAMLError as e:
                raise InvalidLevelDocument(f"{level_path.name}: {e}") from e
            if not raw or not isinstance(raw, dict):
                raise InvalidLevelDocument(f"{level_path.name}: expected YAML with 'name' and 'initialState'")
            entries.append(raw)

        if not entries:
            return []
        return self.import_batch(entries).accepted


def default_export_name(day: Optional[date] = None) -> str:
    day = day or date.today()
    return f"flip-grid-levels-{day.isoformat()}.json"
