from __future__ import annotations

from typing import List, Optional, Sequence

from twitchtui.api.models import ClipVideoQuality
from twitchtui.errors import MalformedResponseError

# Lowest to highest
QUALITY_LADDER = (
    "audio_only",
    "worst",
    "160p",
    "360p",
    "480p",
    "720p",
    "720p60",
    "1080p60",
    "best",
)

FIRST_RENDITION = ("best",)
LAST_RENDITION = ("worst", "audio_only")


class QualitySelector:
    """The user's quality preferences, the first of which can be stepped up and down."""

    def __init__(self, preferences: Optional[Sequence[str]] = None) -> None:
        self._preferences: List[str] = list(preferences or []) or ["best"]

    @property
    def current(self) -> str:
        return self._preferences[0]

    @property
    def ladder(self) -> List[str]:
        return list(self._preferences)

    def _step(self, delta: int) -> str:
        try:
            i = QUALITY_LADDER.index(self.current)
        except ValueError:
            # Not a quality we know how to step from
            return self.current
        i = max(0, min(len(QUALITY_LADDER) - 1, i + delta))
        self._preferences[0] = QUALITY_LADDER[i]
        return self.current

    def increase(self) -> str:
        return self._step(1)

    def decrease(self) -> str:
        return self._step(-1)


def select_clip_quality(qualities: Sequence[ClipVideoQuality], ladder: Sequence[str]) -> ClipVideoQuality:
    """Pick the clip rendition for the first preference that is available.

    Renditions are ordered best first, and their ``quality`` has no trailing
    "p" ("1080"). Falls back to the first rendition if nothing matches.
    """
    if not qualities:
        raise MalformedResponseError("Clip has no video qualities")

    for preference in ladder:
        if preference in LAST_RENDITION:
            return qualities[-1]
        if preference in FIRST_RENDITION:
            return qualities[0]
        if preference.lower().endswith("p"):
            wanted = preference[:-1].lower()
            for q in qualities:
                if q.quality.lower() == wanted:
                    return q
        # Otherwise this preference isn't available (or isn't valid), try the next

    return qualities[0]


def clip_url(source_url: str, signature: str, token: str) -> str:
    # The token has to be urlencoded again, which only means escaping the %s
    return f"{source_url}?sig={signature}&token={token.replace('%', '%25')}"
