# src/pitch_tracker/normalize.py
"""
Field normalization for uploaded pitch data.

Uploads arrive with whatever headers the measuring device or the coach's
spreadsheet used (Japanese, English, camelCase, SHOUTING_CASE). Every
canonical field has an ordered list of candidate headers; the first one that
carries a value wins. Coercion is total: a malformed cell becomes 0, never an
exception, so one bad row cannot sink a whole upload.
"""
from __future__ import annotations

import logging
import math
import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .models import PitchRecord, RawRecord

logger = logging.getLogger(__name__)

FIELD_CANDIDATES: Dict[str, Tuple[str, ...]] = {
    "player_id": ("playerId", "player_id", "id"),
    "document_id": ("documentId", "document_id"),
    "date": ("日付", "date", "Date", "DATE", "測定日"),
    "speed": (
        "速度(kph)", "速度", "releaseSpeed", "Release Speed", "speed", "Speed",
        "リリース速度", "球速", "RELEASE_SPEED", "release_speed",
    ),
    "spin": (
        "SPIN", "Spin", "spinRate", "Spin Rate", "spin", "回転数",
        "スピンレート", "SPIN_RATE", "spin_rate",
    ),
    "true_spin": ("TRUE SPIN", "True Spin", "trueSpin", "true_spin", "TRUE_SPIN"),
    "spin_efficiency": (
        "SPIN EFF.", "Spin Eff.", "spinEff", "spin_eff", "spinEfficiency",
        "回転効率",
    ),
    "spin_direction": (
        "SPIN DIRECTION", "Spin Direction", "spinDirection", "spinDirect",
        "spin_direction", "回転方向",
    ),
    "vertical_movement": (
        "線の変化量(cm)", "verticalMovement", "verticalBreak",
        "Vertical Break", "inducedVerticalBreak", "vertical_movement",
    ),
    "horizontal_movement": (
        "軸の変化量(cm)", "horizontalMovement", "horizontalBreak",
        "Horizontal Break", "horizontal_movement",
    ),
    "strike": ("ストライク", "strike", "Strike", "STRIKE"),
    "release_point": (
        "リリースポイントの高さ(m)", "releasePoint", "releaseHeight",
        "Release Height", "release_point",
    ),
    "rating": ("評価", "rating", "Rating"),
}

# Compared by equality only; "No", "いいえ", "" and anything else are balls.
STRIKE_TOKENS = ("はい", "yes", "Yes", "YES", True, 1)

UNKNOWN_PLAYER_ID = "unknown-id"

_NON_NUMERIC = re.compile(r"[^\d.\-]")
_CLOCK_LABEL = re.compile(r"^0?(\d{1,2}):(\d{2})$")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def find_field_value(raw: RawRecord, *keys: str) -> Any:
    """Return the first non-blank value among ``keys``, or None."""
    for key in keys:
        value = raw.get(key)
        if not _is_blank(value):
            return value
    return None


def _lookup(raw: RawRecord, field: str) -> Any:
    return find_field_value(raw, *FIELD_CANDIDATES[field])


def _parse_number(value: Any) -> Optional[float]:
    """Best-effort numeric parse; None when nothing usable is there."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if text.endswith("%"):
            text = text[:-1]
        text = _NON_NUMERIC.sub("", text)
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def coerce_float(value: Any) -> float:
    number = _parse_number(value)
    return 0.0 if number is None else number


def coerce_int(value: Any) -> int:
    # truncates toward zero, "2250.7" -> 2250
    number = _parse_number(value)
    return 0 if number is None else int(number)


def convert_spin_direction(direction: Any) -> str:
    if _is_blank(direction):
        return ""
    text = str(direction).strip()
    match = _CLOCK_LABEL.match(text)
    if match:
        hour = int(match.group(1))
        if 1 <= hour <= 12:
            return f"{hour}:{match.group(2)}"
    return text


def is_strike(value: Any) -> bool:
    if isinstance(value, str):
        value = value.strip()
    elif isinstance(value, float) and value == 1.0:
        value = 1
    return any(value == token and type(value) is type(token) for token in STRIKE_TOKENS)


def _required_number(raw: RawRecord, field: str, integer: bool) -> float:
    value = _lookup(raw, field)
    number = _parse_number(value)
    if number is None:
        logger.warning("Invalid %s detected: %r", field, value)
        return 0
    return int(number) if integer else number


def normalize(raw: RawRecord, player_id: Optional[str] = None) -> PitchRecord:
    """
    Map one uploaded row onto the canonical PitchRecord.

    Args:
        raw: Upload row keyed by whatever headers the file carried.
        player_id: Owning player; overrides any id found in the row.

    Returns:
        A PitchRecord whose numeric fields are 0 wherever the row had nothing
        parseable.
    """
    if player_id is None:
        found = _lookup(raw, "player_id")
        player_id = str(found) if found is not None else UNKNOWN_PLAYER_ID

    document_id = _lookup(raw, "document_id")
    date_value = _lookup(raw, "date")
    rating = _lookup(raw, "rating")

    return PitchRecord(
        player_id=player_id,
        document_id=str(document_id) if document_id is not None else None,
        date=str(date_value).strip() if date_value is not None else "",
        speed=_required_number(raw, "speed", integer=False),
        spin=_required_number(raw, "spin", integer=True),
        true_spin=coerce_int(_lookup(raw, "true_spin")),
        spin_efficiency=coerce_float(_lookup(raw, "spin_efficiency")),
        spin_direction=convert_spin_direction(_lookup(raw, "spin_direction")),
        vertical_movement=coerce_float(_lookup(raw, "vertical_movement")),
        horizontal_movement=coerce_float(_lookup(raw, "horizontal_movement")),
        strike=is_strike(_lookup(raw, "strike")),
        release_point=coerce_float(_lookup(raw, "release_point")),
        rating=str(rating).strip() if rating is not None else "",
    )


def normalize_many(rows: Iterable[RawRecord], player_id: Optional[str] = None) -> List[PitchRecord]:
    return [normalize(row, player_id=player_id) for row in rows]
