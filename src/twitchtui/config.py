import json
import logging
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import List, Optional, Tuple

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

HOME_PAGE_KINDS = ("personal_section", "shelves", "game", "search")
TITLE_ALIGNMENTS = ("left", "center", "right")
BORDER_TYPES = ("plain", "thick", "double", "rounded")


@dataclass
class Settings:
    # Program and args used to play clips and VODs, the URL is appended.
    player: List[str] = field(default_factory=lambda: ["ffplay", "-autoexit"])

    # Preferred qualities, first item is tried first and can be changed at runtime.
    # One of: audio_only, worst, 160p, 360p, 480p, 720p, 720p60, 1080p60, best
    quality: List[str] = field(default_factory=lambda: ["best"])

    # "personal_section" is ~9kb, "shelves" ~1mb.
    # "game:<name>" and "search:<query>" open a fixed category or search.
    home_page: str = "personal_section"

    # None shows relative dates ("18 Hours ago"), otherwise a strftime format.
    date_format: Optional[str] = None

    title_alignment: str = "left"
    border_type: str = "plain"

    client_id: str = "kimne78kx3ncx6brgo4mv6wki5h1ko"
    # Required for some requests, can be anything.
    device_id: str = "A"
    accept_language: str = "en"

    # Channels checked by twitchtui-online.
    following: List[str] = field(default_factory=list)

    request_timeout: float = 20.0

    def qualities(self) -> List[str]:
        return list(self.quality) or ["best"]

    def home(self) -> Tuple[str, str]:
        """Split ``home_page`` into ``(kind, argument)``."""
        kind, _, arg = (self.home_page or "").partition(":")
        kind = kind.strip().lower()
        if kind not in HOME_PAGE_KINDS or (kind in ("game", "search") and not arg.strip()):
            logger.warning("Invalid home_page %r, using personal_section", self.home_page)
            return "personal_section", ""
        return kind, arg.strip()

    def headers(self) -> dict:
        return {
            "Client-Id": self.client_id,
            "X-Device-Id": self.device_id,
            "Accept-Language": self.accept_language,
        }


def config_path() -> Path:
    cfg_dir = Path(user_config_dir("twitchtui"))
    cfg_dir.mkdir(parents=True, exist_ok=True)
    return cfg_dir / "config.json"


def load_settings(path: Optional[Path] = None) -> Settings:
    path = path or config_path()
    if not path.exists():
        return Settings()
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        settings = Settings(**{k: v for k, v in raw.items() if k in Settings.__annotations__})
    except Exception as exc:
        logger.warning("Could not read %s, using defaults: %s", path, exc)
        return Settings()

    if settings.title_alignment not in TITLE_ALIGNMENTS:
        settings.title_alignment = "left"
    if settings.border_type not in BORDER_TYPES:
        settings.border_type = "plain"
    return settings


def save_settings(settings: Settings, path: Optional[Path] = None) -> None:
    path = path or config_path()
    path.write_text(json.dumps(asdict(settings), indent=2) + "\n", encoding="utf-8")
