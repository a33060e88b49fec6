from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_ADVANCE_DELAY_MS = 1000
DEFAULT_TICK_MS = 100


@dataclass(frozen=True)
class Settings:
    """Runtime knobs, read from ``FLIPGRID_*`` environment variables."""

    advance_delay_ms: int = DEFAULT_ADVANCE_DELAY_MS
    tick_ms: int = DEFAULT_TICK_MS
    load_sample_levels: bool = False
    export_dir: Path = Path.home() / ".flipgrid" / "exports"


def _int_setting(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", name, raw, default)
        return default
    return max(0, value)


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if env is None else env
    export_dir = env.get("FLIPGRID_EXPORT_DIR")
    return Settings(
        advance_delay_ms=_int_setting(env, "FLIPGRID_ADVANCE_DELAY_MS", DEFAULT_ADVANCE_DELAY_MS),
        tick_ms=_int_setting(env, "FLIPGRID_TICK_MS", DEFAULT_TICK_MS),
        load_sample_levels=env.get("FLIPGRID_SAMPLE_LEVELS") == "1",
        export_dir=Path(export_dir).expanduser() if export_dir else Settings.export_dir,
    )
