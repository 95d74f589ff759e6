"""
Pytest configuration and shared fixtures for twitchtui tests.

Payload builders return camelCase dicts shaped like the GraphQL responses.
"""
import json
import logging
from datetime import datetime, timezone

import pytest

from twitchtui.projector import ProjectionConfig

logging.getLogger("twitchtui").setLevel(logging.DEBUG)

NOW = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def make_user(login="alice", display_name="Alice", colour="9146FF", title="Speedruns", partner=True):
    user = {"login": login, "displayName": display_name, "primaryColorHex": colour}
    if title is not None:
        user["broadcastSettings"] = {"title": title}
    if partner is not None:
        user["roles"] = {"isPartner": partner}
    return user


def make_game(name="chess", display_name="Chess"):
    return {"name": name, "displayName": display_name}


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def projection_config():
    return ProjectionConfig(clock=lambda: NOW)


@pytest.fixture
def respond():
    """Wrap a ``data`` payload the way the API returns it."""
    def _respond(data):
        return json.dumps({"data": data}).encode()
    return _respond


@pytest.fixture
def user():
    return make_user


@pytest.fixture
def game():
    return make_game


@pytest.fixture
def personal_sections_data():
    return {
        "personalSections": [
            {
                "title": {"localizedFallback": "Recommended"},
                "items": [
                    {
                        "user": make_user("alice", "Alice"),
                        "content": {"viewersCount": 120, "game": make_game("Just Chatting", "Just Chatting")},
                    },
                    {
                        "user": make_user("bob", "Bob", colour=None, title="Openings"),
                        "content": {"viewersCount": 5, "game": make_game()},
                    },
                ],
            },
            {
                "title": {"localizedFallback": "Followed"},
                "items": [
                    {
                        "user": make_user("carol", "Carol", colour="nothex", title=None),
                        "content": {"viewersCount": 9, "game": make_game()},
                    },
                ],
            },
        ]
    }


@pytest.fixture
def clip_payload():
    return {
        "slug": "FunnyClipSlug",
        "clipTitle": "What a play",
        "clipViewCount": 1000,
        "curator": make_user("dan", "Dan"),
        "game": make_game(),
        "broadcaster": make_user("alice", "Alice"),
        "clipCreatedAt": "2024-01-15T10:00:00Z",
        "durationSeconds": 30,
        "language": "EN",
    }


@pytest.fixture
def category_payload():
    return {
        "name": "minecraft",
        "displayName": "Minecraft",
        "viewersCount": 5000,
        "gameTags": [{"localizedName": "Survival"}, {"localizedName": "Sandbox"}],
        "originalReleaseDate": "2011-11-18T00:00:00Z",
    }


@pytest.fixture
def stream_payload():
    return {
        "broadcaster": make_user("erin", "Erin", title="Endgame practice"),
        "game": make_game(),
        "freeformTags": [{"name": "English"}, {"name": "Chill"}],
        "viewersCount": 42,
        "createdAt": "2024-01-15T09:00:00Z",
    }


@pytest.fixture
def shelves_data(clip_payload, category_payload, stream_payload):
    offline = {
        "broadcaster": make_user("frank", "Frank", title=None),
        "freeformTags": [],
        "viewersCount": 0,
    }
    return {
        "shelves": {
            "edges": [
                {
                    "node": {
                        "title": {
                            "fallbackLocalizedTitle": "Recommended Chess channels",
                            "localizedTitleTokens": [
                                {"node": {"text": "Recommended", "hasEmphasis": False}},
                                {"node": {"text": " ", "hasEmphasis": False}},
                                {"node": make_game()},
                                {"node": {"text": " channels", "hasEmphasis": True}},
                            ],
                        },
                        "content": {
                            "edges": [
                                {"node": clip_payload},
                                {"node": category_payload},
                                {"node": stream_payload},
                                {"node": None},
                                {"node": "123456789"},
                                {"node": offline},
                            ]
                        },
                    }
                },
                {
                    "node": {
                        "title": {
                            "fallbackLocalizedTitle": "Because you watch Chess",
                            "localizedTitleTokens": [
                                {"node": {"collectionName": {"fallbackLocalizedTitle": "Because you watch"}}},
                                {"node": None},
                            ],
                        },
                        "content": {"edges": []},
                    }
                },
            ]
        }
    }


@pytest.fixture
def directory_data():
    return {
        "game": {
            "streams": {
                "edges": [
                    {
                        "node": {
                            "title": "Blitz with viewers",
                            "viewersCount": 300,
                            "createdAt": "2024-01-15T11:00:00Z",
                            "broadcaster": make_user("gina", "Gina", colour="00FF00"),
                            "freeformTags": [{"name": "English"}],
                            "game": make_game(),
                        }
                    },
                    {
                        "node": {
                            "title": "Bullet",
                            "viewersCount": 12,
                            "createdAt": "2024-01-14T12:00:00Z",
                            "broadcaster": make_user("hank", "Hank"),
                            "freeformTags": [],
                            "game": make_game(),
                        }
                    },
                ]
            }
        }
    }


@pytest.fixture
def search_user():
    """Build one search channel result."""
    def _search_user(
        login="alice",
        display_name="Alice",
        started_at="2024-01-14T12:00:00Z",
        stream=None,
        latest_videos=(),
        top_clips=(),
        description=None,
        next_segment=None,
    ):
        return {
            "broadcastSettings": {"title": "Speedruns"},
            "displayName": display_name,
            "followers": {"totalCount": 1500},
            "lastBroadcast": {"startedAt": started_at},
            "login": login,
            "description": description,
            "channel": {"schedule": {"nextSegment": next_segment}},
            "latestVideo": {"edges": [{"node": {"id": vid, "lengthSeconds": 3600}} for vid in latest_videos]},
            "topClip": {
                "edges": [{"node": {"title": "Top moment", "durationSeconds": 20, "slug": slug}} for slug in top_clips]
            },
            "roles": {"isPartner": True},
            "stream": stream,
        }
    return _search_user


@pytest.fixture
def search_data():
    """Build a search response, every section empty unless given."""
    def _search_data(channels=None, channels_with_tag=None, games=None, videos=None, related=None):
        empty = {"edges": [], "score": 1, "totalMatches": 0}
        return {
            "searchFor": {
                "channels": channels or empty,
                "channelsWithTag": channels_with_tag or empty,
                "games": games or empty,
                "videos": videos or empty,
                "relatedLiveChannels": related or {"edges": [], "score": 1},
            }
        }
    return _search_data


@pytest.fixture
def vod_manifest():
    return "\n".join(
        [
            "#EXTM3U",
            '#EXT-X-TWITCH-INFO:ORIGIN="s3"',
            '#EXT-X-MEDIA:TYPE=VIDEO,GROUP-ID="chunked",NAME="1080p60"',
            '#EXT-X-STREAM-INF:BANDWIDTH=8000000,RESOLUTION=1920x1080,VIDEO="1080p60"',
            "https://vod.example/chunked/index-dvr.m3u8",
            '#EXT-X-STREAM-INF:BANDWIDTH=3000000,RESOLUTION=1280x720,VIDEO="720p60"',
            "https://vod.example/720p60/index-dvr.m3u8",
            '#EXT-X-STREAM-INF:BANDWIDTH=1400000,RESOLUTION=852x480,VIDEO="480p30"',
            "https://vod.example/480p30/index-dvr.m3u8",
            '#EXT-X-STREAM-INF:BANDWIDTH=200000,CODECS="mp4a.40.2",VIDEO="audio_only"',
            "https://vod.example/audio_only/index-dvr.m3u8",
            "",
        ]
    )
