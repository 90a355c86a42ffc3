import re
from dataclasses import dataclass
from typing import Optional

_ANDROID_RE = re.compile(r"android", re.IGNORECASE)
_SAFARI_RE = re.compile(r"safari", re.IGNORECASE)
_CHROME_RE = re.compile(r"chrome", re.IGNORECASE)


@dataclass(frozen=True)
class NetworkHint:
    is_android: bool
    is_safari: bool


def get_network_hint(user_agent: Optional[str]) -> NetworkHint:
    """Coarse client hint from the User-Agent header."""
    ua = user_agent or ""
    return NetworkHint(
        is_android=bool(_ANDROID_RE.search(ua)),
        is_safari=bool(_SAFARI_RE.search(ua)) and not _CHROME_RE.search(ua),
    )


def compress_if_needed(audio: bytes) -> bytes:
    # Hook for bitrate reduction on slow networks; must stay idempotent.
    return audio
