from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from typing import List, Sequence

from twitchtui.errors import PlaybackError

logger = logging.getLogger(__name__)


@dataclass
class PlayerCommand:
    argv: List[str]


def build_player_command(player: Sequence[str], url: str) -> PlayerCommand:
    """The configured player and its args, with the URL appended."""
    if not player:
        raise PlaybackError("No player configured")
    return PlayerCommand(argv=[*player, url])


def build_streamlink_command(player: Sequence[str], login: str, ladder: Sequence[str]) -> PlayerCommand:
    """Live streams are resolved and played through streamlink."""
    return PlayerCommand(
        argv=[
            "streamlink",
            f"-p={' '.join(player)}",
            f"twitch.tv/{login}",
            ",".join(ladder),
        ]
    )


def run_player(cmd: PlayerCommand) -> int:
    """Run the player and wait for it to exit, returning its exit code."""
    program = cmd.argv[0]
    if not shutil.which(program):
        raise PlaybackError(f"{program} not found. Please install it and ensure it's in your PATH.")

    logger.info("Running %s", program)
    logger.debug("argv: %s", cmd.argv)
    try:
        proc = subprocess.Popen(cmd.argv)
    except OSError as exc:
        raise PlaybackError(f"Failed to start {program}: {exc}") from exc

    rc = proc.wait()
    if rc != 0:
        logger.warning("%s exited with code %d", program, rc)
    return rc
