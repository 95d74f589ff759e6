"""Typed models for GraphQL responses.

The server's payloads are untagged: which shape comes back depends on the query
that was sent. Decoding tries each known shape in order and keeps the first
that validates, so two queries whose responses are valid for more than one
shape must never be mixed up by the caller.

Fields we don't use are ignored rather than rejected.
"""

from __future__ import annotations

import json
import logging
from typing import Annotated, Any, List, Optional, Sequence, Tuple, Type, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from twitchtui.errors import MalformedResponseError

logger = logging.getLogger(__name__)


class WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


# Shared


class BroadcastSettings(WireModel):
    title: str


class UserRoles(WireModel):
    is_partner: bool


class User(WireModel):
    login: str
    display_name: str
    primary_color_hex: Optional[str] = None
    broadcast_settings: Optional[BroadcastSettings] = None
    roles: Optional[UserRoles] = None

    @classmethod
    def blank(cls, login: str = "") -> "User":
        return cls(login=login, display_name="")


class Tag(WireModel):
    localized_name: str


class FreeformTag(WireModel):
    name: str


class Category(WireModel):
    """A game/category. Also the selectable category variant of a content node."""

    viewers_count: Optional[int] = None
    name: str
    display_name: Optional[str] = None
    game_tags: Optional[List[Tag]] = Field(
        default=None, validation_alias=AliasChoices("gameTags", "tags", "game_tags")
    )
    original_release_date: Optional[str] = None

    @property
    def label(self) -> str:
        return self.display_name or self.name


# Content nodes


class ClipNode(WireModel):
    slug: str
    clip_title: str
    clip_view_count: int
    curator: User
    game: Category
    broadcaster: User
    clip_created_at: str
    # Clips are 60 seconds max
    duration_seconds: int = Field(ge=0)
    language: str

    @classmethod
    def from_slug(cls, slug: str) -> "ClipNode":
        """A clip that only knows its slug, enough to play it."""
        return cls(
            slug=slug,
            clip_title="",
            clip_view_count=0,
            curator=User.blank(),
            game=Category(name=""),
            broadcaster=User.blank(),
            clip_created_at="",
            duration_seconds=0,
            language="",
        )


class StreamNode(WireModel):
    broadcaster: User
    game: Optional[Category] = None
    freeform_tags: List[FreeformTag]
    viewers_count: int
    created_at: Optional[str] = None

    @classmethod
    def for_login(cls, login: str) -> "StreamNode":
        """A live stream that only knows the broadcaster's login, enough to play it."""
        return cls(
            broadcaster=User(
                login=login,
                display_name="",
                broadcast_settings=BroadcastSettings(title=""),
            ),
            freeform_tags=[],
            viewers_count=0,
        )


class VideoNode(WireModel):
    """A past broadcast, details are fetched when it's selected."""

    id: str


class EmptyNode(WireModel):
    """Placeholder for rows that can't be selected, such as headers."""


EMPTY = EmptyNode()

ContentNode = Union[ClipNode, Category, StreamNode, VideoNode, EmptyNode]


def _first_valid(raw: Any, candidates: Sequence[Type[WireModel]]) -> WireModel:
    errors: List[str] = []
    for model in candidates:
        try:
            return model.model_validate(raw)
        except ValidationError as exc:
            errors.append(f"{model.__name__}: {exc.error_count()} errors")
    raise ValueError("no variant matched (" + "; ".join(errors) + ")")


def decode_content_node(raw: Any) -> ContentNode:
    if isinstance(raw, WireModel):
        return raw
    if raw is None:
        return EMPTY
    if isinstance(raw, str):
        return VideoNode(id=raw)
    return _first_valid(raw, (ClipNode, Category, StreamNode))


# Personal sections


class PersonalSectionTitle(WireModel):
    localized_fallback: str


class PersonalSectionContent(WireModel):
    viewers_count: int
    game: Category


class PersonalSectionChannel(WireModel):
    user: User
    content: PersonalSectionContent


class PersonalSection(WireModel):
    title: PersonalSectionTitle
    items: List[PersonalSectionChannel]


class PersonalSectionsData(WireModel):
    personal_sections: List[PersonalSection]


# Shelves


class CollectionName(WireModel):
    fallback_localized_title: str


class CollectionToken(WireModel):
    collection_name: CollectionName


class TextToken(WireModel):
    text: str
    has_emphasis: bool


TitleToken = Union[CollectionToken, Category, TextToken]


class TitleTokenEdge(WireModel):
    # None is the sentinel for a token we can't render
    node: Optional[TitleToken] = None

    @field_validator("node", mode="before")
    @classmethod
    def _decode_token(cls, raw: Any) -> Any:
        if raw is None or isinstance(raw, WireModel):
            return raw
        return _first_valid(raw, (CollectionToken, Category, TextToken))


class ShelfTitle(WireModel):
    fallback_localized_title: str
    localized_title_tokens: List[TitleTokenEdge]


class ShelfContentEdge(WireModel):
    node: ContentNode

    @field_validator("node", mode="before")
    @classmethod
    def _decode_node(cls, raw: Any) -> Any:
        return decode_content_node(raw)


class ShelfContentConnection(WireModel):
    edges: List[ShelfContentEdge]


class Shelf(WireModel):
    title: ShelfTitle
    content: ShelfContentConnection


class ShelfEdge(WireModel):
    node: Shelf


class ShelfConnection(WireModel):
    edges: List[ShelfEdge]


class ShelvesData(WireModel):
    shelves: ShelfConnection


# Directory (category) page


class DirectoryStream(WireModel):
    title: str
    viewers_count: int
    created_at: str
    broadcaster: User
    freeform_tags: List[FreeformTag]
    game: Category


class DirectoryStreamEdge(WireModel):
    node: DirectoryStream


class DirectoryStreamConnection(WireModel):
    edges: List[DirectoryStreamEdge]


class Directory(WireModel):
    streams: DirectoryStreamConnection


class DirectoryData(WireModel):
    game: Directory


# Search

# Search scores range from 1 to 5
Score = Annotated[int, Field(ge=1, le=5)]


class FollowerConnection(WireModel):
    total_count: int


class Broadcast(WireModel):
    started_at: Optional[str] = None


class ScheduleSegmentCategory(WireModel):
    name: str


class ScheduleSegment(WireModel):
    start_at: str
    end_at: Optional[str] = None
    title: str
    categories: List[ScheduleSegmentCategory]


class Schedule(WireModel):
    next_segment: Optional[ScheduleSegment] = None


class Channel(WireModel):
    schedule: Optional[Schedule] = None


class LatestVideo(WireModel):
    id: str
    # Up to 48 hours
    length_seconds: int


class LatestVideoEdge(WireModel):
    node: LatestVideo


class LatestVideoConnection(WireModel):
    edges: List[LatestVideoEdge]


class TopClip(WireModel):
    title: str
    duration_seconds: int
    slug: str


class TopClipEdge(WireModel):
    node: TopClip


class TopClipConnection(WireModel):
    edges: List[TopClipEdge]


class SearchStream(WireModel):
    game: Category
    freeform_tags: List[FreeformTag]
    viewers_count: int


class SearchUser(WireModel):
    broadcast_settings: BroadcastSettings
    display_name: str
    followers: FollowerConnection
    last_broadcast: Broadcast
    login: str
    description: Optional[str] = None
    channel: Channel
    latest_video: LatestVideoConnection
    top_clip: TopClipConnection
    roles: UserRoles
    stream: Optional[SearchStream] = None


class SearchUserEdge(WireModel):
    item: SearchUser


class SearchUsers(WireModel):
    edges: List[SearchUserEdge]
    score: Score
    total_matches: int


class SearchCategoryEdge(WireModel):
    item: Category


class SearchCategories(WireModel):
    edges: List[SearchCategoryEdge]
    score: Score
    total_matches: int


class SearchVideo(WireModel):
    created_at: str
    owner: User
    id: str
    game: Category
    length_seconds: int
    title: str
    view_count: int


class SearchVideoEdge(WireModel):
    item: SearchVideo


class SearchVideos(WireModel):
    edges: List[SearchVideoEdge]
    score: Score
    total_matches: int


class RelatedStream(WireModel):
    viewers_count: int
    game: Category
    broadcaster: User


class RelatedUser(WireModel):
    stream: RelatedStream


class RelatedLiveChannelEdge(WireModel):
    item: RelatedUser


class RelatedLiveChannels(WireModel):
    edges: List[RelatedLiveChannelEdge]
    score: Score


class SearchFor(WireModel):
    channels: SearchUsers
    channels_with_tag: SearchUsers
    games: SearchCategories
    videos: SearchVideos
    related_live_channels: RelatedLiveChannels


class SearchData(WireModel):
    search_for: SearchFor


ResponseEnvelope = Union[PersonalSectionsData, ShelvesData, DirectoryData, SearchData]

ENVELOPE_SHAPES: Tuple[Type[WireModel], ...] = (
    PersonalSectionsData,
    ShelvesData,
    DirectoryData,
    SearchData,
)


# Playback tokens


class PlaybackAccessToken(WireModel):
    signature: str
    value: str


class ClipVideoQuality(WireModel):
    quality: str
    source_url: str = Field(validation_alias=AliasChoices("sourceURL", "source_url"))


class ClipAccess(WireModel):
    playback_access_token: PlaybackAccessToken
    video_qualities: List[ClipVideoQuality]


class _ClipAccessData(WireModel):
    clip: ClipAccess


class _VodAccessData(WireModel):
    video_playback_access_token: PlaybackAccessToken


# Live status


class _LiveStream(WireModel):
    pass


class _LiveUser(WireModel):
    stream: Optional[_LiveStream] = None


class _LiveStatusData(WireModel):
    # Null if the user doesn't exist or has been banned
    user: Optional[_LiveUser] = None


def _load(raw: Union[bytes, str]) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError(f"Response is not valid JSON: {exc}") from exc


def _data(doc: Any) -> Any:
    if not isinstance(doc, dict):
        raise MalformedResponseError("Response is not a JSON object")
    data = doc.get("data")
    if data is None:
        errors = doc.get("errors") or []
        messages = ", ".join(str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors)
        raise MalformedResponseError(f"Response has no data{': ' + messages if messages else ''}")
    return data


def decode_response(
    raw: Union[bytes, str],
    expect: Optional[Type[WireModel]] = None,
) -> ResponseEnvelope:
    """Decode a catalog response into one of the envelope shapes.

    With ``expect`` only that shape is tried, otherwise every known shape is
    tried in order and the first one that validates wins.
    """
    data = _data(_load(raw))
    shapes = (expect,) if expect is not None else ENVELOPE_SHAPES

    failures: List[str] = []
    for shape in shapes:
        try:
            return shape.model_validate(data)
        except ValidationError as exc:
            first = exc.errors()[0]
            loc = ".".join(str(p) for p in first.get("loc", ()))
            failures.append(f"{shape.__name__} ({loc}: {first.get('msg')})")

    logger.debug("Undecodable response: %s", failures)
    raise MalformedResponseError("Unrecognised response: " + "; ".join(failures))


def decode_clip_access(raw: Union[bytes, str]) -> ClipAccess:
    try:
        return _ClipAccessData.model_validate(_data(_load(raw))).clip
    except ValidationError as exc:
        raise MalformedResponseError(f"Invalid clip access token response: {exc}") from exc


def decode_vod_access(raw: Union[bytes, str]) -> PlaybackAccessToken:
    try:
        return _VodAccessData.model_validate(_data(_load(raw))).video_playback_access_token
    except ValidationError as exc:
        raise MalformedResponseError(f"Invalid VOD access token response: {exc}") from exc


def decode_live_statuses(raw: Union[bytes, str]) -> List[bool]:
    """Decode a batched live status response, one flag per query sent."""
    doc = _load(raw)
    if not isinstance(doc, list):
        raise MalformedResponseError("Batched response is not a JSON list")
    out: List[bool] = []
    for entry in doc:
        try:
            status = _LiveStatusData.model_validate(_data(entry))
        except ValidationError as exc:
            raise MalformedResponseError(f"Invalid live status response: {exc}") from exc
        out.append(status.user is not None and status.user.stream is not None)
    return out
