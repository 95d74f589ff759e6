from __future__ import annotations

import logging
from contextlib import nullcontext
from typing import Callable, ContextManager, Optional, Sequence

from twitchtui.api.client import GqlClient
from twitchtui.api.models import Category, ClipNode, ContentNode, StreamNode, VideoNode
from twitchtui.quality import QualitySelector
from twitchtui.usecases.playback import Runner, play_clip, play_stream, play_vod

logger = logging.getLogger(__name__)


class NodeDispatcher:
    """Performs what selecting a row means for its content node.

    Content nodes are plain data, every side effect of selecting one lives
    here. Playback runs inside ``suspend`` so the caller can hand the terminal
    over to the player while it runs.
    """

    def __init__(
        self,
        client: GqlClient,
        *,
        player: Sequence[str],
        quality: QualitySelector,
        suspend: Optional[Callable[[], ContextManager]] = None,
        runner: Optional[Runner] = None,
    ) -> None:
        self.client = client
        self.player = list(player)
        self.quality = quality
        self._suspend = suspend or nullcontext
        self._runner = runner

    def select(self, node: ContentNode) -> Optional[str]:
        """Select ``node``. Returns the category name to move into, if it is one."""
        if isinstance(node, Category):
            return node.name

        ladder = self.quality.ladder
        if isinstance(node, StreamNode):
            login = node.broadcaster.login
            logger.info("Playing stream %s (%s)", login, ",".join(ladder))
            with self._suspend():
                play_stream(login, ladder=ladder, player=self.player, runner=self._runner)
        elif isinstance(node, ClipNode):
            logger.info("Playing clip %s", node.slug)
            with self._suspend():
                play_clip(self.client, node.slug, ladder=ladder, player=self.player, runner=self._runner)
        elif isinstance(node, VideoNode):
            logger.info("Playing VOD %s", node.id)
            with self._suspend():
                play_vod(self.client, node.id, ladder=ladder, player=self.player, runner=self._runner)
        return None

    __call__ = select
