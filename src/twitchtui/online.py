"""Print which of a set of channels are live.

Meant for status bars and scripts: one batched request, the live logins on a
single line, nothing at all if the response can't be understood.
"""

import argparse
import logging
from typing import List, Optional, Sequence

from twitchtui.api import queries
from twitchtui.api.client import GqlClient
from twitchtui.api.models import decode_live_statuses
from twitchtui.config import load_settings
from twitchtui.errors import MalformedResponseError, TransportError
from twitchtui.log import setup_logging

logger = logging.getLogger(__name__)


def check_online(client: GqlClient, logins: Sequence[str]) -> List[str]:
    """Return the logins that are live, in the order given."""
    logins = list(logins)
    if not logins:
        return []
    raw = client.query_batch([queries.channel_live_status(login) for login in logins])
    statuses = decode_live_statuses(raw)
    if len(statuses) != len(logins):
        raise MalformedResponseError(f"Expected {len(logins)} statuses, got {len(statuses)}")
    return [login for login, live in zip(logins, statuses) if live]


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="twitchtui-online")
    parser.add_argument("logins", nargs="*", metavar="LOGIN")
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args(argv)

    setup_logging(debug=args.debug, console=True)

    settings = load_settings()
    logins = args.logins or settings.following
    if not logins:
        logger.warning("No channels given and none in the 'following' setting")
        return 0

    client = GqlClient.from_settings(settings)
    try:
        live = check_online(client, logins)
    except TransportError as exc:
        logger.error("%s", exc)
        return 1
    except MalformedResponseError as exc:
        logger.debug("Ignoring response: %s", exc)
        return 0

    if live:
        print(" ".join(live))
    return 0
