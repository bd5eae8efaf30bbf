"""Format catalog: static itag -> descriptor lookup.

Descriptors are comma-separated so that selector terms such as ``mp4``,
``720p`` or ``audio`` can be matched as substrings. Muxed streams carry
both ``video`` and ``audio``.
"""

from __future__ import annotations

_MUXED = {
    5: "flv, video, 240p, audio",
    6: "flv, video, 270p, audio",
    13: "3gp, video, audio",
    17: "3gp, video, 144p, audio",
    18: "mp4, video, 360p, audio",
    22: "mp4, video, 720p, audio",
    34: "flv, video, 360p, audio",
    35: "flv, video, 480p, audio",
    36: "3gp, video, 180p, audio",
    37: "mp4, video, 1080p, audio",
    38: "mp4, video, 3072p, audio",
    43: "webm, video, 360p, audio",
    44: "webm, video, 480p, audio",
    45: "webm, video, 720p, audio",
    46: "webm, video, 1080p, audio",
    59: "mp4, video, 480p, audio",
    78: "mp4, video, 480p, audio",
    # 3D
    82: "mp4, video, 360p, audio, 3D",
    83: "mp4, video, 480p, audio, 3D",
    84: "mp4, video, 720p, audio, 3D",
    85: "mp4, video, 1080p, audio, 3D",
    100: "webm, video, 360p, audio, 3D",
    101: "webm, video, 480p, audio, 3D",
    102: "webm, video, 720p, audio, 3D",
    # Apple HTTP Live Streaming
    91: "mp4, video, 144p, audio, hls",
    92: "mp4, video, 240p, audio, hls",
    93: "mp4, video, 360p, audio, hls",
    94: "mp4, video, 480p, audio, hls",
    95: "mp4, video, 720p, audio, hls",
    96: "mp4, video, 1080p, audio, hls",
    132: "mp4, video, 240p, audio, hls",
    151: "mp4, video, 72p, audio, hls",
}

_VIDEO_ONLY = {
    # mp4 / avc1
    133: "mp4, video, 240p",
    134: "mp4, video, 360p",
    135: "mp4, video, 480p",
    136: "mp4, video, 720p",
    137: "mp4, video, 1080p",
    138: "mp4, video, 2160p",
    160: "mp4, video, 144p",
    212: "mp4, video, 480p",
    264: "mp4, video, 1440p",
    266: "mp4, video, 2160p",
    298: "mp4, video, 720p60",
    299: "mp4, video, 1080p60",
    # webm / vp9
    167: "webm, video, 360p",
    168: "webm, video, 480p",
    169: "webm, video, 720p",
    170: "webm, video, 1080p",
    218: "webm, video, 480p",
    219: "webm, video, 480p",
    242: "webm, video, 240p",
    243: "webm, video, 360p",
    244: "webm, video, 480p",
    245: "webm, video, 480p",
    246: "webm, video, 480p",
    247: "webm, video, 720p",
    248: "webm, video, 1080p",
    271: "webm, video, 1440p",
    272: "webm, video, 2160p",
    278: "webm, video, 144p",
    302: "webm, video, 720p60",
    303: "webm, video, 1080p60",
    308: "webm, video, 1440p60",
    313: "webm, video, 2160p",
    315: "webm, video, 2160p60",
    330: "webm, video, 144p60, hdr",
    331: "webm, video, 240p60, hdr",
    332: "webm, video, 360p60, hdr",
    333: "webm, video, 480p60, hdr",
    334: "webm, video, 720p60, hdr",
    335: "webm, video, 1080p60, hdr",
    336: "webm, video, 1440p60, hdr",
    337: "webm, video, 2160p60, hdr",
    # mp4 / av01
    394: "mp4, video, 144p, av1",
    395: "mp4, video, 240p, av1",
    396: "mp4, video, 360p, av1",
    397: "mp4, video, 480p, av1",
    398: "mp4, video, 720p, av1",
    399: "mp4, video, 1080p, av1",
    400: "mp4, video, 1440p, av1",
    401: "mp4, video, 2160p, av1",
    402: "mp4, video, 4320p, av1",
    571: "mp4, video, 4320p, av1",
}

_AUDIO_ONLY = {
    139: "m4a, audio, 48k",
    140: "m4a, audio, 128k",
    141: "m4a, audio, 256k",
    256: "m4a, audio, 192k, surround",
    258: "m4a, audio, 384k, surround",
    325: "m4a, audio, 384k, surround",
    328: "m4a, audio, 384k, surround",
    171: "webm, audio, 128k",
    172: "webm, audio, 256k",
    249: "webm, audio, 50k, opus",
    250: "webm, audio, 70k, opus",
    251: "webm, audio, 160k, opus",
}

_ITAGS: dict[int, str] = {**_MUXED, **_VIDEO_ONLY, **_AUDIO_ONLY}

KNOWN_ITAGS: frozenset[int] = frozenset(_ITAGS)


def describe_itag(itag: int) -> str:
    """Return the format descriptor for ``itag``."""
    return _ITAGS.get(itag, f"unknown format #{itag}")
