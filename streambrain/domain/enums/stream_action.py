from __future__ import annotations
from enum import StrEnum


class StreamAction(StrEnum):
    copy = "copy"            # pass-through, no re-encode
    transcode = "transcode"
