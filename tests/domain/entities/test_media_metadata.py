import pytest

from streambrain.domain.entities.media_metadata import MediaMetadata, Resolution, StreamInfo
from streambrain.domain.enums import CodecType


def test_media_metadata_defaults_are_empty():
    meta = MediaMetadata()
    assert meta.is_empty is True
    assert meta.video_streams == ()
    assert meta.resolution is None


def test_media_metadata_is_immutable():
    meta = MediaMetadata(streams=(StreamInfo(index=0, codec_type=CodecType.VIDEO),))
    with pytest.raises(Exception):
        meta.duration = 12.0  # type: ignore[misc]


def test_stream_filters_keep_order():
    meta = MediaMetadata(streams=(
        StreamInfo(index=0, codec_type=CodecType.AUDIO, codec="aac"),
        StreamInfo(index=1, codec_type=CodecType.VIDEO, codec="h264"),
        StreamInfo(index=2, codec_type=CodecType.AUDIO, codec="opus"),
    ))
    assert [s.codec for s in meta.audio_streams] == ["aac", "opus"]
    assert [s.index for s in meta.video_streams] == [1]


def test_resolution_rejects_negative_and_computes_ratio():
    with pytest.raises(ValueError):
        Resolution(-1, 10)
    assert Resolution(1920, 1080).ratio == pytest.approx(16 / 9)


def test_codec_type_from_ffprobe():
    assert CodecType.from_ffprobe("VIDEO") is CodecType.VIDEO
    assert CodecType.from_ffprobe("attachment") is CodecType.OTHER
    assert CodecType.from_ffprobe(None) is CodecType.OTHER
