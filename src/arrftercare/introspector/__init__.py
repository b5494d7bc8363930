"""Media introspection.

- FFprobeIntrospector: probes a file with ffprobe
- MediaInfo / StreamInfo: probe results
- MediaIntrospectionError: raised when a probe fails
"""

from arrftercare.introspector.ffprobe import FFprobeIntrospector
from arrftercare.introspector.interface import (
    MediaInfo,
    MediaIntrospectionError,
    StreamInfo,
)

__all__ = [
    "FFprobeIntrospector",
    "MediaInfo",
    "MediaIntrospectionError",
    "StreamInfo",
]
