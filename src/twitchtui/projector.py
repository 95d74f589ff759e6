"""Turn decoded catalog responses into the rows shown in the list.

Every row carries a label for the list, a detail block for the side pane and
the content node that is activated when the row is selected. Headers carry
``EMPTY`` so that rows and nodes always line up one to one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from rich.style import Style
from rich.text import Text

from twitchtui.api.models import (
    EMPTY,
    Category,
    ClipNode,
    CollectionToken,
    ContentNode,
    DirectoryData,
    PersonalSectionsData,
    RelatedLiveChannels,
    ResponseEnvelope,
    SearchCategories,
    SearchData,
    SearchUser,
    SearchUsers,
    SearchVideos,
    ShelfTitle,
    ShelvesData,
    StreamNode,
    TextToken,
    VideoNode,
)
from twitchtui.errors import MalformedResponseError
from twitchtui.formatting import (
    colour_style,
    format_date,
    header,
    join_names,
    lines,
    utc_now,
    yes_no,
)

SEARCH_BUCKETS = 5


@dataclass(frozen=True)
class DisplayRow:
    label: Text
    detail: Text
    node: ContentNode


@dataclass(frozen=True)
class ProjectionConfig:
    date_format: Optional[str] = None
    clock: Callable[[], datetime] = field(default=utc_now)

    @classmethod
    def from_settings(cls, settings) -> "ProjectionConfig":
        return cls(date_format=settings.date_format)

    def date(self, value: Optional[str]) -> str:
        return format_date(value, date_format=self.date_format, now=self.clock())


def _header_row(title: str, detail: str = "") -> DisplayRow:
    return DisplayRow(label=header(title), detail=Text(detail), node=EMPTY)


def project(envelope: ResponseEnvelope, config: Optional[ProjectionConfig] = None) -> List[DisplayRow]:
    config = config or ProjectionConfig()
    if isinstance(envelope, PersonalSectionsData):
        return _project_personal_sections(envelope, config)
    if isinstance(envelope, ShelvesData):
        return _project_shelves(envelope, config)
    if isinstance(envelope, DirectoryData):
        return _project_directory(envelope, config)
    if isinstance(envelope, SearchData):
        return _project_search(envelope, config)
    raise TypeError(f"Unknown response type {type(envelope).__name__}")


# Personal sections


def _project_personal_sections(envelope: PersonalSectionsData, config: ProjectionConfig) -> List[DisplayRow]:
    rows: List[DisplayRow] = []
    for section in envelope.personal_sections:
        rows.append(_header_row(section.title.localized_fallback))

        for channel in section.items:
            user = channel.user
            style = colour_style(user.primary_color_hex)
            detail = []
            if user.broadcast_settings is not None:
                detail += [user.broadcast_settings.title, ""]
            detail += [
                user.display_name,
                f"Viewers: {channel.content.viewers_count}",
                f"Game: {channel.content.game.label}",
            ]
            rows.append(
                DisplayRow(
                    label=Text(user.display_name, style=style),
                    detail=lines(detail, style),
                    node=StreamNode.for_login(user.login),
                )
            )
    return rows


# Shelves


def shelf_title(title: ShelfTitle) -> Text:
    """Build a shelf header from its title tokens.

    If any token is one we can't render the whole title falls back to the
    plain localized string.
    """
    tokens = title.localized_title_tokens
    if any(edge.node is None for edge in tokens):
        return header(title.fallback_localized_title)

    text = Text()
    for edge in tokens:
        token = edge.node
        if isinstance(token, CollectionToken):
            text.append(token.collection_name.fallback_localized_title, style=Style(underline=True))
        elif isinstance(token, Category):
            text.append(token.label, style=Style(underline=True))
        elif isinstance(token, TextToken):
            text.append(token.text, style=Style(underline=True, bold=token.has_emphasis))
    return text


def _shelf_entry(node: ContentNode, config: ProjectionConfig) -> Optional[DisplayRow]:
    if isinstance(node, ClipNode):
        detail = [
            node.clip_title,
            "",
            f"Views: {node.clip_view_count}",
            f"Curator: {node.curator.display_name}",
            f"Game: {node.game.label}",
            f"Broadcaster: {node.broadcaster.display_name}",
            f"Clip created: {config.date(node.clip_created_at)}",
            f"Duration: {node.duration_seconds}s",
            f"Language: {node.language}",
        ]
        return DisplayRow(label=Text(node.clip_title), detail=lines(detail), node=node)

    if isinstance(node, Category):
        detail = [node.label, ""]
        if node.viewers_count is not None:
            detail.append(f"Viewers: {node.viewers_count}")
        if node.game_tags is not None:
            detail.append(f"Tags: {join_names(tag.localized_name for tag in node.game_tags)}")
        if node.original_release_date is not None:
            detail.append(f"Released: {config.date(node.original_release_date)}")
        return DisplayRow(label=Text(node.label), detail=lines(detail), node=node)

    if isinstance(node, StreamNode):
        broadcaster = node.broadcaster
        # Offline or otherwise incomplete channels are dropped
        if broadcaster.broadcast_settings is None:
            return None
        detail = [
            broadcaster.broadcast_settings.title,
            "",
            broadcaster.display_name,
            f"Tags: {join_names(tag.name for tag in node.freeform_tags)}",
            f"Viewers: {node.viewers_count}",
        ]
        if node.game is not None:
            detail.append(f"Game: {node.game.label}")
        if node.created_at is not None:
            detail.append(f"Created: {config.date(node.created_at)}")
        return DisplayRow(label=Text(broadcaster.display_name), detail=lines(detail), node=node)

    return None


def _project_shelves(envelope: ShelvesData, config: ProjectionConfig) -> List[DisplayRow]:
    rows: List[DisplayRow] = []
    for shelf_edge in envelope.shelves.edges:
        shelf = shelf_edge.node
        rows.append(DisplayRow(label=shelf_title(shelf.title), detail=Text(), node=EMPTY))

        for edge in shelf.content.edges:
            row = _shelf_entry(edge.node, config)
            if row is not None:
                rows.append(row)
    return rows


# Directory


def _project_directory(envelope: DirectoryData, config: ProjectionConfig) -> List[DisplayRow]:
    rows: List[DisplayRow] = []
    for edge in envelope.game.streams.edges:
        stream = edge.node
        style = colour_style(stream.broadcaster.primary_color_hex)
        detail = [
            stream.title,
            "",
            stream.broadcaster.display_name,
            f"Viewers: {stream.viewers_count}",
            f"Game: {stream.game.label}",
            f"Created: {config.date(stream.created_at)}",
            f"Tags: {join_names(tag.name for tag in stream.freeform_tags)}",
        ]
        rows.append(
            DisplayRow(
                label=Text(stream.broadcaster.display_name, style=style),
                detail=lines(detail, style),
                node=StreamNode.for_login(stream.broadcaster.login),
            )
        )
    return rows


# Search


def _bucket(score: int) -> int:
    if not 1 <= score <= SEARCH_BUCKETS:
        raise MalformedResponseError(f"Search score {score} is outside 1..{SEARCH_BUCKETS}")
    return score - 1


def _search_user_rows(user: SearchUser, config: ProjectionConfig) -> List[DisplayRow]:
    detail = [
        user.broadcast_settings.title,
        "",
        f"Followers: {user.followers.total_count}",
        f"Started: {config.date(user.last_broadcast.started_at) if user.last_broadcast.started_at else 'Never'}",
        f"Partner: {yes_no(user.roles.is_partner)}",
    ]

    node: ContentNode
    if user.last_broadcast.started_at is None:
        # Never streamed
        node = EMPTY
    elif user.stream is not None:
        detail += [
            f"Game: {user.stream.game.label}",
            f"Viewers: {user.stream.viewers_count}",
            f"Tags: {join_names(tag.name for tag in user.stream.freeform_tags)}",
        ]
        node = StreamNode.for_login(user.login)
    elif not user.latest_video.edges:
        # Streamed before, but there's no VOD
        node = EMPTY
    else:
        latest = user.latest_video.edges[0].node
        detail += [
            "",
            "Not currently streaming, you can watch their latest VOD",
            f"Length: {latest.length_seconds} s",
        ]
        node = VideoNode(id=latest.id)

    if user.description is not None:
        detail += ["", user.description]

    schedule = user.channel.schedule
    if schedule is not None and schedule.next_segment is not None:
        segment = schedule.next_segment
        detail += [
            "",
            "Next scheduled stream:",
            segment.title,
            f"Starts: {config.date(segment.start_at)}",
            f"Ends: {config.date(segment.end_at) if segment.end_at is not None else 'tbd'}",
            f"Categories: {join_names(c.name for c in segment.categories)}",
        ]

    rows = [DisplayRow(label=Text(user.display_name), detail=lines(detail), node=node)]

    if len(user.top_clip.edges) == 1:
        clip = user.top_clip.edges[0].node
        rows.append(
            DisplayRow(
                label=Text("| Top clip"),
                detail=lines([clip.title, "", f"Duration: {clip.duration_seconds} s"]),
                node=ClipNode.from_slug(clip.slug),
            )
        )
    return rows


def _user_section(title: str, users: SearchUsers, config: ProjectionConfig) -> List[DisplayRow]:
    rows = [_header_row(title, f"Total matches: {users.total_matches}")]
    for edge in users.edges:
        rows.extend(_search_user_rows(edge.item, config))
    return rows


def _category_section(categories: SearchCategories) -> List[DisplayRow]:
    rows = [_header_row("Categories", f"Total matches: {categories.total_matches}")]
    for edge in categories.edges:
        item = edge.item
        detail = []
        if item.viewers_count is not None:
            detail.append(f"Viewers: {item.viewers_count}")
        if item.game_tags is not None:
            detail.append(f"Tags: {join_names(tag.localized_name for tag in item.game_tags)}")
        rows.append(DisplayRow(label=Text(item.label), detail=lines(detail), node=Category(name=item.name)))
    return rows


def _video_section(videos: SearchVideos, config: ProjectionConfig) -> List[DisplayRow]:
    rows = [_header_row("Past videos", f"Total matches: {videos.total_matches}")]
    for edge in videos.edges:
        video = edge.item
        detail = [
            video.owner.display_name,
            "",
            f"Created: {config.date(video.created_at)}",
            f"Game: {video.game.label}",
            f"Length: {video.length_seconds} s",
            f"Views: {video.view_count}",
        ]
        if video.owner.roles is not None:
            detail.append(f"Partner: {yes_no(video.owner.roles.is_partner)}")
        rows.append(DisplayRow(label=Text(video.title), detail=lines(detail), node=VideoNode(id=video.id)))
    return rows


def _related_section(related: RelatedLiveChannels) -> List[DisplayRow]:
    rows = [_header_row("People searching also watch:")]
    for edge in related.edges:
        stream = edge.item.stream
        broadcaster = stream.broadcaster
        style = colour_style(broadcaster.primary_color_hex)
        detail = []
        if broadcaster.broadcast_settings is not None:
            detail += [broadcaster.broadcast_settings.title, ""]
        detail += [f"Viewers: {stream.viewers_count}", f"Game: {stream.game.name}"]
        if broadcaster.roles is not None:
            detail.append(f"Partner: {yes_no(broadcaster.roles.is_partner)}")
        rows.append(
            DisplayRow(
                label=Text(broadcaster.display_name, style=style),
                detail=lines(detail, style),
                node=StreamNode.for_login(broadcaster.login),
            )
        )
    return rows


def _project_search(envelope: SearchData, config: ProjectionConfig) -> List[DisplayRow]:
    result = envelope.search_for
    buckets: List[List[DisplayRow]] = [[] for _ in range(SEARCH_BUCKETS)]

    # Sections sharing a score keep this order
    if result.channels.edges:
        buckets[_bucket(result.channels.score)] += _user_section("Channels", result.channels, config)
    if result.channels_with_tag.edges:
        buckets[_bucket(result.channels_with_tag.score)] += _user_section(
            "Live channels with tag", result.channels_with_tag, config
        )
    if result.games.edges:
        buckets[_bucket(result.games.score)] += _category_section(result.games)
    if result.videos.edges:
        buckets[_bucket(result.videos.score)] += _video_section(result.videos, config)
    if result.related_live_channels.edges:
        buckets[_bucket(result.related_live_channels.score)] += _related_section(result.related_live_channels)

    return [row for bucket in buckets for row in bucket]
