# File: inflio/core/common/enums.py

from enum import Enum, unique

@unique
class SubtitleFormat(str, Enum):
    SRT = "srt"
    VTT = "vtt"
    TXT = "txt"

@unique
class ImageFormat(str, Enum):
    JPEG = "jpeg"
    PNG = "png"
