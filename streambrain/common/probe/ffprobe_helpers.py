# streambrain/common/probe/ffprobe_helpers.py
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from streambrain.domain.entities.media_metadata import MediaMetadata, Resolution, StreamInfo
from streambrain.domain.enums.codec_type import CodecType


def build_ffprobe_cmd(
    input_path: str | Path,
    extra_args: Iterable[str] | None = None,
    *,
    ffprobe_bin: str = "ffprobe",
    log_level: str = "error",
) -> List[str]:
    """
    Build a robust ffprobe command that emits JSON we can parse consistently.
    """
    if isinstance(input_path, Path):
        input_path = str(input_path)
    base = [
        ffprobe_bin,
        "-v", log_level,
        "-show_streams",
        "-show_format",
        "-print_format", "json",
        "--",  # Stop option parsing in case of weird filenames
        input_path,
    ]
    if extra_args:
        # Insert before the "--" so they are still parsed as options
        base = base[:-2] + list(extra_args) + base[-2:]
    return base


def _maybe_int(x) -> Optional[int]:
    try:
        if x is None:
            return None
        return int(float(x))
    except (TypeError, ValueError):
        return None


def _maybe_float(x) -> Optional[float]:
    try:
        if x is None:
            return None
        return float(x)
    except (TypeError, ValueError):
        return None


def _get_tag(obj: dict | None, key: str) -> Optional[str]:
    if not obj:
        return None
    tags = obj.get("tags") or {}
    if not isinstance(tags, dict):
        return None
    val = tags.get(key)
    return str(val) if val is not None else None


def _to_stream(s: Dict[str, Any], fallback_index: int) -> StreamInfo:
    disposition = s.get("disposition") or {}
    index = _maybe_int(s.get("index"))
    return StreamInfo(
        index=index if index is not None else fallback_index,
        codec_type=CodecType.from_ffprobe(s.get("codec_type")),
        codec=s.get("codec_name"),
        codec_long_name=s.get("codec_long_name"),
        language=_get_tag(s, "language"),
        width=_maybe_int(s.get("width")),
        height=_maybe_int(s.get("height")),
        bitrate=_maybe_int(s.get("bit_rate")),
        channels=_maybe_int(s.get("channels")),
        start_time=_maybe_float(s.get("start_time")) or 0.0,
        is_default=disposition.get("default") == 1,
    )


def _main_video(streams: List[StreamInfo]) -> Optional[StreamInfo]:
    # default disposition first, else highest resolution
    videos = [s for s in streams if s.codec_type is CodecType.VIDEO and s.width and s.height]
    if not videos:
        return None
    default = next((s for s in videos if s.is_default), None)
    return default or max(videos, key=lambda s: (s.width or 0) * (s.height or 0))


def parse_ffprobe(data: Dict[str, Any]) -> MediaMetadata:
    """
    Turn ffprobe JSON into a MediaMetadata snapshot.
    Safe to call in unit tests with fixture JSON.
    """
    fmt = (data or {}).get("format", {}) or {}
    raw_streams = (data or {}).get("streams", []) or []

    streams = [_to_stream(s, i) for i, s in enumerate(raw_streams)]

    # duration: format-level, else the longest stream
    duration = _maybe_float(fmt.get("duration"))
    if duration is None:
        durations = [d for d in (_maybe_float(s.get("duration")) for s in raw_streams) if d is not None]
        duration = max(durations) if durations else None

    # bitrate: format-level, else sum of stream bitrates
    bitrate = _maybe_int(fmt.get("bit_rate"))
    if bitrate is None:
        rates = [s.bitrate for s in streams if s.bitrate is not None]
        bitrate = sum(rates) if rates else None

    video = _main_video(streams)
    resolution = Resolution(video.width, video.height) if video else None

    return MediaMetadata(
        streams=tuple(streams),
        duration=duration,
        bitrate=bitrate,
        resolution=resolution,
        container=fmt.get("format_name"),
    )
