"""Normalization of the provider's response layouts into a TrackMatch.

The provider answers in one of three undocumented layouts::

    {"data":   [{"title"|"song", "artist"|"performer", "confidence"?}, ...]}
    {"result": [{"title", "artist", "confidence"?}, ...]}
    {"title", "artist", "confidence"?}

They are probed in that order and the first structural match wins, even when
the matched entry turns out to lack a title or artist.
"""

from __future__ import annotations

import math
from collections.abc import Sized
from typing import Any, Callable, Mapping, Optional

from .types import NO_TRACK_RECOGNIZED, Matched, NoMatch, RecognitionOutcome, TrackMatch

ShapeProbe = Callable[[Any], Optional[Mapping[str, Any]]]


def _first_entry(body: Any, key: str) -> Optional[Mapping[str, Any]]:
    if not isinstance(body, Mapping):
        return None
    entries = body.get(key)
    if isinstance(entries, Mapping) or not isinstance(entries, Sized) or not entries:
        return None
    if not isinstance(entries, list):
        return {}
    first = entries[0]
    return first if isinstance(first, Mapping) else {}


def _probe_data_list(body: Any) -> Optional[Mapping[str, Any]]:
    entry = _first_entry(body, "data")
    if entry is None:
        return None
    return {
        "title": entry.get("title") or entry.get("song"),
        "artist": entry.get("artist") or entry.get("performer"),
        "confidence": entry.get("confidence"),
    }


def _probe_result_list(body: Any) -> Optional[Mapping[str, Any]]:
    return _first_entry(body, "result")


def _probe_flat(body: Any) -> Optional[Mapping[str, Any]]:
    if not isinstance(body, Mapping):
        return None
    if body.get("title") and body.get("artist"):
        return body
    return None


SHAPE_PROBES: tuple[ShapeProbe, ...] = (_probe_data_list, _probe_result_list, _probe_flat)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _confidence(value: Any) -> float:
    if isinstance(value, bool) or not value:
        return 0.0
    try:
        confidence = float(value)
    except (TypeError, ValueError):
        return 0.0
    return confidence if math.isfinite(confidence) else 0.0


def extract_track(body: Any, *, source: str) -> Optional[TrackMatch]:
    """Return the first candidate track found in ``body``, or None when no shape matches."""

    for probe in SHAPE_PROBES:
        fields = probe(body)
        if fields is None:
            continue
        return TrackMatch(
            title=_text(fields.get("title")),
            artist=_text(fields.get("artist")),
            confidence=_confidence(fields.get("confidence")),
            source=source,
        )
    return None


def normalize_response(body: Any, *, provider: str) -> RecognitionOutcome:
    track = extract_track(body, source=provider)
    if track is not None and track.title and track.artist:
        return Matched(track=track, provider=provider)
    return NoMatch(provider=provider, reason=NO_TRACK_RECOGNIZED)


__all__ = ["SHAPE_PROBES", "extract_track", "normalize_response"]
