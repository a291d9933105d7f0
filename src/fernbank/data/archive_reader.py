"""
Zip archive access for NCBI taxonomy dumps.
Extracts a single member to a scratch directory that only lives for the
duration of a ``with`` block.
"""

import logging
import shutil
import tempfile
import zipfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

logger = logging.getLogger(__name__)


class ArchiveMemberReader:
    """
    Extracts one member of a zip archive into a private temporary directory.
    The extracted file and its directory are removed on exit, whether or not
    the caller finished reading it.
    """

    def __init__(self, archive_path: Union[str, Path], member: str):
        """
        Initialize archive member reader.

        Args:
            archive_path: Path to zip archive
            member: Base name of the file inside the archive (e.g. "names.dmp")
        """
        self.archive_path = Path(archive_path)
        self.member = member
        self.scratch_dir: Union[Path, None] = None
        self.extracted_path: Union[Path, None] = None

    def __enter__(self) -> Path:
        """Context manager entry; returns the path of the extracted file."""
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def _find_member(self, archive: zipfile.ZipFile) -> zipfile.ZipInfo:
        """Locate the member, ignoring any directory prefix inside the archive."""
        for info in archive.infolist():
            if not info.is_dir() and Path(info.filename).name == self.member:
                return info
        raise FileNotFoundError(f"{self.member} not found in archive: {self.archive_path}")

    def open(self) -> Path:
        """Extract the member and return its path."""
        if self.extracted_path:
            return self.extracted_path  # Already extracted

        if not self.archive_path.exists():
            raise FileNotFoundError(f"Archive not found: {self.archive_path}")

        self.scratch_dir = Path(tempfile.mkdtemp(prefix="fernbank_"))
        try:
            with zipfile.ZipFile(self.archive_path) as archive:
                info = self._find_member(archive)
                target = self.scratch_dir / self.member
                # Flatten directory structure of the archive
                with archive.open(info) as src, open(target, 'wb') as dst:
                    shutil.copyfileobj(src, dst)
        except BaseException:
            self.close()
            raise

        self.extracted_path = target
        logger.debug(f"Extracted {self.member} from {self.archive_path} to {target}")
        return target

    def close(self):
        """Delete the extracted file and the scratch directory."""
        if self.scratch_dir:
            shutil.rmtree(self.scratch_dir, ignore_errors=True)
            logger.debug(f"Removed scratch directory {self.scratch_dir}")
        self.scratch_dir = None
        self.extracted_path = None


@contextmanager
def extracted_member(archive_path: Union[str, Path], member: str) -> Iterator[Path]:
    """
    Convenience context manager around ArchiveMemberReader.

    Args:
        archive_path: Path to zip archive
        member: Base name of the file inside the archive

    Yields:
        Path to the extracted file, valid only inside the ``with`` block
    """
    reader = ArchiveMemberReader(archive_path, member)
    try:
        yield reader.open()
    finally:
        reader.close()


def archive_has_member(archive_path: Union[str, Path], member: str) -> bool:
    """
    Check that a file is a readable zip archive containing ``member``.

    Args:
        archive_path: Path to zip archive
        member: Base name of the file inside the archive

    Returns:
        True if the archive is valid and holds the member
    """
    try:
        with zipfile.ZipFile(archive_path) as archive:
            if archive.testzip() is not None:
                return False
            return any(Path(name).name == member for name in archive.namelist())
    except (zipfile.BadZipFile, OSError) as e:
        logger.error(f"Archive validation failed for {archive_path}: {e}")
        return False
