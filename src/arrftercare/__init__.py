"""arrftercare - post-download letterbox cropping for Radarr/Sonarr libraries."""

__version__ = "0.3.0"
