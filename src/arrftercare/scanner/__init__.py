"""Directory scanning for the scan command.

Public API:
    - DEFAULT_EXTENSIONS: Media file extensions processed by default
    - discover_media_files: Recursively list media files in a directory
"""

from arrftercare.scanner.discovery import DEFAULT_EXTENSIONS, discover_media_files

__all__ = [
    "DEFAULT_EXTENSIONS",
    "discover_media_files",
]
