"""
Image Handle

Unified interface for reading embedded metadata schemes from an image file
and for removing them. The ExifTool-backed implementation drives a single
exiftool process for the lifetime of the handle.
"""

import os
import shutil
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Any

import exiftool  # type: ignore

logger = logging.getLogger(__name__)


class ImageReadError(Exception):
    """Raised when an image file cannot be read by the metadata backend."""


class ImageHandle(ABC):
    """
    Abstract base class for an opened image.

    A handle is a scoped resource: use it as a context manager so the
    backend is released on every exit path.

    Example:
        >>> with ExifToolImage('/photos/DSC05760.JPG') as image:
        ...     tags = image.exif_tags()
    """

    def __enter__(self) -> 'ImageHandle':
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        """Acquire backend resources. No-op by default."""

    def close(self) -> None:
        """Release backend resources. No-op by default."""

    @abstractmethod
    def profile_names(self) -> List[str]:
        """List the names of opaque profiles present (e.g. 'exif', 'icc')."""
        pass

    @abstractmethod
    def get_profile(self, name: str) -> Optional[bytes]:
        """Fetch the raw bytes of a profile, or None if it is absent."""
        pass

    @abstractmethod
    def exif_tags(self) -> Dict[str, Any]:
        """Fetch EXIF tag name/value pairs."""
        pass

    @abstractmethod
    def xmp_text(self) -> Optional[str]:
        """Fetch the serialized XMP packet, or None if there is none."""
        pass

    @abstractmethod
    def iptc_fields(self) -> Dict[str, Any]:
        """Fetch IPTC field name/value pairs."""
        pass

    @abstractmethod
    def get_attribute(self, name: str) -> Optional[str]:
        """Fetch a well-known descriptive attribute (e.g. 'Make') as text."""
        pass

    @abstractmethod
    def strip(self) -> None:
        """Remove all metadata from the image."""
        pass

    @abstractmethod
    def write(self, output_path: str) -> None:
        """Persist the image to output_path."""
        pass


class ExifToolImage(ImageHandle):
    """
    Image handle backed by ExifTool through pyexiftool.

    Metadata is read once on open with group-prefixed keys ("EXIF:Make")
    and numeric values. Raw blocks are fetched on demand with "-b".
    Stripping is deferred until write(), which runs "-all=" into the
    output file and leaves the source untouched.

    Attributes:
        path: Path to the image file
        executable: Optional path to the exiftool binary (defaults to PATH)
    """

    # Profile name -> ExifTool group / block tag
    PROFILE_BLOCKS = {
        'exif': 'EXIF',
        'xmp': 'XMP',
        'iptc': 'IPTC',
        'icc': 'ICC_Profile',
        '8bim': 'Photoshop',
    }

    ATTRIBUTE_GROUPS = ['EXIF', 'IPTC', 'XMP']

    def __init__(self, path: str, executable: Optional[str] = None):
        """
        Initialize ExifTool image handle.

        Args:
            path: Path to the image file
            executable: Path to the exiftool binary, or None to use PATH
        """
        self.path = path
        self.executable = executable
        self._helper: Optional[exiftool.ExifToolHelper] = None
        self._metadata: Dict[str, Any] = {}
        self._strip_pending = False

    def open(self) -> None:
        if self.executable:
            self._helper = exiftool.ExifToolHelper(executable=self.executable)
        else:
            self._helper = exiftool.ExifToolHelper()
        self._helper.run()

        try:
            metadata_list = self._helper.get_metadata(self.path)
        except Exception:
            self.close()
            raise

        if not metadata_list:
            self.close()
            raise ImageReadError(f"No metadata returned for: {self.path}")

        metadata = metadata_list[0]
        error = metadata.get("ExifTool:Error")
        if error:
            self.close()
            raise ImageReadError(f"{self.path}: {error}")

        self._metadata = metadata
        logger.debug(f"Opened {self.path} ({len(metadata)} tags)")

    def close(self) -> None:
        if self._helper is not None:
            if self._helper.running:
                self._helper.terminate()
            self._helper = None

    def _group(self, group: str) -> Dict[str, Any]:
        prefix = f"{group}:"
        return {
            key[len(prefix):]: value
            for key, value in self._metadata.items()
            if key.startswith(prefix)
        }

    def _read_block(self, tag: str) -> bytes:
        if self._helper is None:
            raise ImageReadError(f"Image is not open: {self.path}")
        return self._helper.execute("-b", f"-{tag}", self.path, raw_bytes=True)

    def profile_names(self) -> List[str]:
        groups = {key.split(':', 1)[0] for key in self._metadata if ':' in key}
        return [name for name, group in self.PROFILE_BLOCKS.items() if group in groups]

    def get_profile(self, name: str) -> Optional[bytes]:
        block = self.PROFILE_BLOCKS.get(name.lower())
        if block is None:
            return None
        data = self._read_block(block)
        return data or None

    def exif_tags(self) -> Dict[str, Any]:
        return self._group('EXIF')

    def xmp_text(self) -> Optional[str]:
        if 'xmp' not in self.profile_names():
            return None
        data = self._read_block('XMP')
        if not data:
            return None
        return data.decode('utf-8', errors='replace')

    def iptc_fields(self) -> Dict[str, Any]:
        return self._group('IPTC')

    def get_attribute(self, name: str) -> Optional[str]:
        for group in self.ATTRIBUTE_GROUPS:
            value = self._metadata.get(f"{group}:{name}")
            if value is not None and str(value).strip():
                return str(value)
        return None

    def strip(self) -> None:
        self._strip_pending = True

    def write(self, output_path: str) -> None:
        # exiftool refuses to overwrite with -o
        if os.path.exists(output_path):
            os.remove(output_path)

        if not self._strip_pending:
            shutil.copyfile(self.path, output_path)
            return

        if self._helper is None:
            raise ImageReadError(f"Image is not open: {self.path}")
        self._helper.execute("-all=", "-o", output_path, self.path)
        logger.debug(f"Wrote stripped copy: {output_path}")
