"""Fetch NCBI taxonomy dump archives (taxdmp.zip)."""

import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

import requests
from tqdm import tqdm

from .archive_reader import archive_has_member

logger = logging.getLogger(__name__)


class TaxdumpDownloader:
    """Streams a taxonomy dump to disk and checks it holds the names table.

    Dated dumps come from NCBI's ``taxdump_archive`` directory, so a run can
    be pinned to the same snapshot of names (e.g. ``2023-09-01``).
    """

    TAXDUMP_URL = 'https://ftp.ncbi.nlm.nih.gov/pub/taxonomy/taxdmp.zip'
    ARCHIVE_URL = 'https://ftp.ncbi.nlm.nih.gov/pub/taxonomy/taxdump_archive/taxdmp_{version}.zip'

    def __init__(self, download_dir: Path, chunk_size: int = 8 * 1024 * 1024,
                 member: str = 'names.dmp', timeout: float = 60.0, progress: bool = False):
        """
        Args:
            download_dir: Directory the archive is written to
            chunk_size: Bytes read per streamed chunk
            member: File the archive must contain to be usable
            timeout: Seconds to wait for the server to respond
            progress: Show a byte progress bar while downloading
        """
        self.download_dir = Path(download_dir)
        self.download_dir.mkdir(parents=True, exist_ok=True)
        self.chunk_size = chunk_size
        self.member = member
        self.timeout = timeout
        self.progress = progress

    def url_for(self, version: Optional[str] = None) -> str:
        """Current dump when ``version`` is None, else the dated archive."""
        return self.ARCHIVE_URL.format(version=version) if version else self.TAXDUMP_URL

    def archive_path(self, version: Optional[str] = None) -> Path:
        """Local file name, stamped with the archive date or today's date."""
        return self.download_dir / f"taxdmp_{version or date.today().isoformat()}.zip"

    def download_taxdump(self, version: Optional[str] = None,
                         force_redownload: bool = False) -> Path:
        """Download a taxonomy dump unless a usable copy is already on disk.

        Args:
            version: Archive date (YYYY-MM-DD), or None for the current dump
            force_redownload: Ignore any existing copy

        Returns:
            Path to the archive

        Raises:
            requests.HTTPError: If the server returns an error status
            ValueError: If the downloaded file is not a zip containing
                ``member``
        """
        file_path = self.archive_path(version)

        if file_path.exists() and not force_redownload:
            if archive_has_member(file_path, self.member):
                logger.info(f"Reusing taxonomy dump {file_path}")
                return file_path
            logger.warning(f"{file_path} is unreadable or lacks {self.member}, downloading again")

        url = self.url_for(version)
        logger.info(f"Downloading {url}")

        # Written under a temporary name so an interrupted download is never reused
        partial_path = file_path.with_suffix('.zip.part')
        try:
            with requests.get(url, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()
                total_bytes = int(response.headers.get('content-length', 0)) or None

                with open(partial_path, 'wb') as f, tqdm(
                    total=total_bytes, unit='B', unit_scale=True, desc=file_path.name,
                    disable=not self.progress,
                ) as bar:
                    for chunk in response.iter_content(chunk_size=self.chunk_size):
                        if chunk:
                            f.write(chunk)
                            bar.update(len(chunk))
        except BaseException:
            if partial_path.exists():
                partial_path.unlink()
                logger.debug(f"Removed incomplete download {partial_path}")
            raise

        partial_path.replace(file_path)

        if not archive_has_member(file_path, self.member):
            raise ValueError(f"Downloaded file is corrupt or lacks {self.member}: {file_path}")

        logger.info(f"Saved taxonomy dump to {file_path}")
        return file_path

    def get_file_info(self, file_path: Path) -> Dict[str, Any]:
        """Size, age and usability of a local archive."""
        file_path = Path(file_path)
        if not file_path.exists():
            return {'exists': False}

        stat = file_path.stat()
        return {
            'exists': True,
            'size_mb': stat.st_size / (1024**2),
            'modified_time': stat.st_mtime,
            'is_valid': archive_has_member(file_path, self.member),
        }
