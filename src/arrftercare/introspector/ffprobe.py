"""ffprobe-based media introspection."""

import json
import subprocess  # nosec B404 - only for TimeoutExpired
from pathlib import Path

from arrftercare.core.subprocess_utils import run_command
from arrftercare.introspector.interface import MediaInfo, MediaIntrospectionError
from arrftercare.introspector.parsers import parse_ffprobe_output


class FFprobeIntrospector:
    """Extracts stream and container metadata using ffprobe.

    A single ffprobe call with JSON output supplies everything the pipeline
    needs: the frame height for the crop significance gate, the audio codecs
    for the audio plan, and the declared bitrate or container duration for
    the bitrate estimate.
    """

    def __init__(self, ffprobe_path: Path, timeout: float | None = 60) -> None:
        """Initialize the introspector.

        Args:
            ffprobe_path: Resolved path to ffprobe.
            timeout: Seconds before a probe is abandoned (prevents hangs
                on corrupted files).
        """
        self._ffprobe_path = ffprobe_path
        self._timeout = timeout

    def get_file_info(self, path: Path) -> MediaInfo:
        """Extract metadata from a media file.

        Args:
            path: Path to the media file.

        Returns:
            MediaInfo describing the file's streams and container.

        Raises:
            MediaIntrospectionError: If the file cannot be introspected.
        """
        if not path.exists():
            raise MediaIntrospectionError(f"File not found: {path}")

        try:
            data = self._run_ffprobe(path)
        except subprocess.TimeoutExpired as e:
            raise MediaIntrospectionError(
                f"ffprobe timed out for {path} after {e.timeout}s"
            ) from e
        except OSError as e:
            raise MediaIntrospectionError(f"Could not run ffprobe: {e}") from e
        except json.JSONDecodeError as e:
            raise MediaIntrospectionError(
                f"Invalid ffprobe output for {path}: {e}"
            ) from e

        return parse_ffprobe_output(path, data)

    def _run_ffprobe(self, path: Path) -> dict:
        """Run ffprobe and return parsed JSON output.

        Raises:
            MediaIntrospectionError: If ffprobe fails or output lacks
                required keys.
            json.JSONDecodeError: If output is not valid JSON.
        """
        result = run_command(
            [
                self._ffprobe_path,
                "-v",
                "error",
                "-print_format",
                "json",
                "-show_streams",
                "-show_format",
                path,
            ],
            timeout=self._timeout,
        )
        if not result.succeeded:
            detail = result.stderr.strip() or f"exit {result.returncode}"
            raise MediaIntrospectionError(f"ffprobe failed for {path}: {detail}")

        data = json.loads(result.stdout)

        missing = [key for key in ("streams", "format") if key not in data]
        if missing:
            raise MediaIntrospectionError(
                f"ffprobe output for {path} has no {' or '.join(missing)} section; "
                "the file may be corrupted or not a media file"
            )
        return data
