"""Original-file retirement and staging cleanup.

After a successful encode the original is either deleted or, when backups
are enabled, moved aside. On failure the staged output is removed so the
directory is left exactly as it was found.
"""

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

# Backup file suffix
BACKUP_SUFFIX = ".arrftercare-backup"


def get_backup_path(file_path: Path) -> Path:
    """Get the backup path for a given file.

    Args:
        file_path: Path to the original file.

    Returns:
        Path where the backup would be stored.
    """
    return file_path.with_name(file_path.name + BACKUP_SUFFIX)


def retire_original(file_path: Path, keep_backup: bool = False) -> Path | None:
    """Remove the original file after its replacement has been committed.

    Args:
        file_path: Path to the original file.
        keep_backup: Move the file to its backup path instead of deleting it.

    Returns:
        Path to the backup if one was kept, otherwise None.

    Raises:
        OSError: If the file cannot be removed or moved.
    """
    if keep_backup:
        backup_path = get_backup_path(file_path)
        if backup_path.exists():
            backup_path.unlink()
            logger.debug(
                "Removed existing backup",
                extra={"backup_path": str(backup_path)},
            )
        shutil.move(str(file_path), str(backup_path))
        logger.info("Original file kept as backup: %s", backup_path)
        return backup_path

    file_path.unlink()
    logger.info("Original file deleted: %s", file_path)
    return None


def discard_staged_output(staging_path: Path) -> bool:
    """Remove a partially written or rejected output file.

    Failures are logged rather than raised: this runs in error handlers,
    where a cleanup failure must not mask the original error.

    Args:
        staging_path: Path of the staged output.

    Returns:
        True if nothing is left at staging_path.
    """
    try:
        staging_path.unlink(missing_ok=True)
    except OSError as e:
        logger.error(
            "Failed to remove staged output %s: %s. Remove it manually.",
            staging_path,
            e,
        )
        return False
    logger.debug("Discarded staged output", extra={"staging_path": str(staging_path)})
    return True
