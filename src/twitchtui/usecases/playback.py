from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from twitchtui.api import queries
from twitchtui.api.client import GqlClient
from twitchtui.api.models import decode_clip_access, decode_vod_access
from twitchtui.hls.variants import select_variant
from twitchtui.player import (
    PlayerCommand,
    build_player_command,
    build_streamlink_command,
    run_player,
)
from twitchtui.quality import clip_url, select_clip_quality

logger = logging.getLogger(__name__)

Runner = Callable[[PlayerCommand], int]


def resolve_clip_url(client: GqlClient, slug: str, ladder: Sequence[str]) -> str:
    access = decode_clip_access(client.query(queries.clip_access_token(slug)))
    rendition = select_clip_quality(access.video_qualities, ladder)
    logger.debug("clip %s: picked %s", slug, rendition.quality)
    token = access.playback_access_token
    return clip_url(rendition.source_url, token.signature, token.value)


def resolve_vod_url(client: GqlClient, vod_id: str, ladder: Sequence[str]) -> str:
    token = decode_vod_access(client.query(queries.vod_access_token(vod_id)))
    manifest = client.vod_manifest(vod_id, signature=token.signature, token=token.value)
    selection = select_variant(manifest, ladder)
    logger.debug("vod %s: picked %s", vod_id, selection.quality)
    return selection.variant_url


def play_clip(
    client: GqlClient,
    slug: str,
    *,
    ladder: Sequence[str],
    player: Sequence[str],
    runner: Optional[Runner] = None,
) -> int:
    url = resolve_clip_url(client, slug, ladder)
    return (runner or run_player)(build_player_command(player, url))


def play_vod(
    client: GqlClient,
    vod_id: str,
    *,
    ladder: Sequence[str],
    player: Sequence[str],
    runner: Optional[Runner] = None,
) -> int:
    url = resolve_vod_url(client, vod_id, ladder)
    return (runner or run_player)(build_player_command(player, url))


def play_stream(
    login: str,
    *,
    ladder: Sequence[str],
    player: Sequence[str],
    runner: Optional[Runner] = None,
) -> int:
    return (runner or run_player)(build_streamlink_command(player, login, ladder))
