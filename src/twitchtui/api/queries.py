"""POST bodies for the persisted GraphQL queries used by the client.

Changing some of these variables can make the server return errors.
"""

from __future__ import annotations

from typing import Any, Dict

PERSONAL_SECTIONS_HASH = "f8cc9b91bb629f2d09dd8299d9f07c4daefe019236a19fc12fa2b14eb95c359e"
SHELVES_HASH = "41858598cc637cf9e6153818f5a4d274a08e8743e4a85903cdfe39c464152404"
DIRECTORY_PAGE_GAME_HASH = "df4bb6cc45055237bfaf3ead608bbafb79815c7100b6ee126719fac3762ddf8b"
SEARCH_RESULTS_HASH = "6ea6e6f66006485e41dbe3ebd69d5674c5b22896ce7b595d7fce6411a3790138"
CLIP_ACCESS_TOKEN_HASH = "36b89d2507fce29e5ca551df756d27c1cfe079e2609642b4390aa4c35796eb11"
PLAYBACK_ACCESS_TOKEN_HASH = "0828119ded1c13477966434e15800ff57ddacf13ba1911c129dc2200705b0712"
CHANNEL_LIVE_STATUS_HASH = "21c86683bbfd1a6e9e6636c2b460f94c5014272dcb56f0aa04a7d28d0633502c"

_RECOMMENDATION_CONTEXT_KEYS = (
    "platform",
    "clientApp",
    "location",
    "referrerDomain",
    "viewportHeight",
    "viewportWidth",
    "channelName",
    "categoryName",
    "lastChannelName",
    "lastCategoryName",
    "pageviewContent",
    "pageviewContentType",
    "pageviewLocation",
    "pageviewMedium",
    "previousPageviewContent",
    "previousPageviewContentType",
    "previousPageviewLocation",
    "previousPageviewMedium",
)


def _body(operation: str, sha256hash: str, variables: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "operationName": operation,
        "variables": variables,
        "extensions": {"persistedQuery": {"sha256hash": sha256hash}},
    }


def personal_sections() -> Dict[str, Any]:
    # Add "SIMILAR_SECTION" to sectionInputs together with contextChannelName to get
    # channels similar to one you like.
    return _body(
        "PersonalSections",
        PERSONAL_SECTIONS_HASH,
        {
            "input": {
                "sectionInputs": ["RECOMMENDED_SECTION"],
                "recommendationContext": {k: None for k in _RECOMMENDATION_CONTEXT_KEYS},
                "contextChannelName": None,
            },
            "creatorAnniversariesExperimentEnabled": False,
        },
    )


def shelves() -> Dict[str, Any]:
    return _body(
        "Shelves",
        SHELVES_HASH,
        {
            "imageWidth": None,
            "itemsPerRow": 0,
            "langWeightedCCU": None,
            "platform": "",
            "requestID": "",
            "context": None,
            "verbose": None,
        },
    )


def directory_page(name: str, *, sort: str = "RELEVANCE", limit: int = 30) -> Dict[str, Any]:
    return _body(
        "DirectoryPage_Game",
        DIRECTORY_PAGE_GAME_HASH,
        {
            # Needs to be set to get colours
            "imageWidth": 0,
            "name": name,
            "options": {
                "sort": sort,
                "recommendationsContext": None,
                "requestID": None,
                "freeformTags": None,
                "tags": None,
            },
            "sortTypeIsRecency": True,
            "limit": limit,
        },
    )


def search_results(query: str) -> Dict[str, Any]:
    return _body(
        "SearchResultsPage_SearchResults",
        SEARCH_RESULTS_HASH,
        {"query": query, "options": None, "requestID": None},
    )


def clip_access_token(slug: str) -> Dict[str, Any]:
    return _body("VideoAccessToken_Clip", CLIP_ACCESS_TOKEN_HASH, {"slug": slug})


def vod_access_token(vod_id: str) -> Dict[str, Any]:
    return _body(
        "PlaybackAccessToken",
        PLAYBACK_ACCESS_TOKEN_HASH,
        {
            "isLive": False,
            "isVod": True,
            "login": "",
            "playerType": "",
            "vodID": vod_id,
        },
    )


def channel_live_status(login: str) -> Dict[str, Any]:
    return _body(
        "ChannelLiveStatus",
        CHANNEL_LIVE_STATUS_HASH,
        {"channelLogin": login, "isLive": True, "isVod": False, "videoID": ""},
    )
