"""
Image Folder

Local working folders: the input folder images are dropped into and the
output folder stripped copies are written to.
"""

import os
import logging
import platform
import subprocess
from typing import List, Optional

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = ['.jpg', '.jpeg', '.png', '.gif', '.bmp', '.tiff', '.webp']


class ImageFolder:
    """
    Local filesystem folder holding images.

    Only files directly inside the folder are considered; subfolders are
    not searched.

    Attributes:
        path: Absolute folder path
        supported_extensions: Lowercase extensions treated as images

    Example:
        >>> folder = ImageFolder('MSSresource')
        >>> folder.ensure_exists()
        >>> images = folder.list_images()
    """

    def __init__(self, path: str, supported_extensions: Optional[List[str]] = None):
        """
        Initialize image folder.

        Args:
            path: Folder path, relative paths resolve against the working directory
            supported_extensions: File extensions to treat as images
        """
        self.path = os.path.abspath(path)
        self.supported_extensions = [
            ext.lower() for ext in (supported_extensions or DEFAULT_EXTENSIONS)
        ]

    def ensure_exists(self) -> bool:
        """
        Create the folder if it does not exist.

        Returns:
            True if the folder was created, False if it already existed
        """
        if os.path.isdir(self.path):
            logger.info(f"Folder exists: {self.path}")
            return False
        os.makedirs(self.path, exist_ok=True)
        logger.info(f"Folder created: {self.path}")
        return True

    def is_image(self, file_path: str) -> bool:
        return os.path.splitext(file_path)[1].lower() in self.supported_extensions

    def list_images(self) -> List[str]:
        """List image files directly inside the folder, sorted by name."""
        if not os.path.isdir(self.path):
            logger.warning(f"Path does not exist: {self.path}")
            return []

        files = []
        for name in sorted(os.listdir(self.path)):
            full_path = os.path.join(self.path, name)
            if os.path.isfile(full_path) and self.is_image(full_path):
                files.append(full_path)
        return files

    def output_path_for(self, file_path: str) -> str:
        """Path inside this folder with the same file name as file_path."""
        return os.path.join(self.path, os.path.basename(file_path))

    def open_in_file_browser(self) -> bool:
        """
        Open the folder in the platform file browser.

        Returns:
            True if a browser process was launched
        """
        system = platform.system()
        if system == 'Windows':
            command = ['explorer', self.path]
        elif system == 'Darwin':
            command = ['open', self.path]
        elif system == 'Linux':
            command = ['xdg-open', self.path]
        else:
            logger.warning(f"Opening folders is not supported on {system}")
            return False

        try:
            subprocess.Popen(command)
            return True
        except OSError as e:
            logger.warning(f"Could not open folder {self.path}: {e}")
            return False
