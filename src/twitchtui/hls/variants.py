from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from twitchtui.errors import MalformedResponseError
from twitchtui.quality import FIRST_RENDITION, LAST_RENDITION

# VOD manifests list their variants at fixed positions: the first variant's
# info line is line 3, its URL line 4, and so on every second line.
FIRST_VARIANT_LINE = 3
VARIANT_STRIDE = 2
BEST_URL_LINE = FIRST_VARIANT_LINE + 1


@dataclass
class VariantSelection:
    quality: str
    variant_url: str


def _lines(text: str) -> List[str]:
    return text.split("\n")


def select_variant(manifest: str, ladder: Sequence[str]) -> VariantSelection:
    """Pick the variant URL for the first preference in ``ladder`` found in the manifest.

    Falls back to the first (best) variant when no preference matches.
    """
    lines = _lines(manifest)
    if len(lines) <= BEST_URL_LINE or not lines[BEST_URL_LINE].strip():
        raise MalformedResponseError("VOD manifest has no variants")

    for preference in ladder:
        if preference in LAST_RENDITION:
            last = next((line for line in reversed(lines) if line.strip()), "")
            return VariantSelection(quality=preference, variant_url=last.strip())
        if preference in FIRST_RENDITION:
            return VariantSelection(quality=preference, variant_url=lines[BEST_URL_LINE].strip())

        for i in range(FIRST_VARIANT_LINE, len(lines) - 1, VARIANT_STRIDE):
            if preference in lines[i]:
                return VariantSelection(quality=preference, variant_url=lines[i + 1].strip())
        # This quality isn't available, try the next one

    return VariantSelection(quality="best", variant_url=lines[BEST_URL_LINE].strip())
