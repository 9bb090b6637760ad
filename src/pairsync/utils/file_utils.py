"""File utility functions."""

import hashlib
import os
from pathlib import Path
from typing import Any, Dict
from datetime import datetime

class FileHelper:
    """Helper class for inspecting pair files."""

    @staticmethod
    def get_file_info(file_path: Path) -> Dict[str, Any]:
        """Get file information used by status reports.

        Args:
            file_path: Path to the file

        Returns:
            Dictionary with file information
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        stat = file_path.stat()

        return {
            'name': file_path.name,
            'path': str(file_path),
            'size': stat.st_size,
            'modified_time': datetime.fromtimestamp(stat.st_mtime),
            'extension': file_path.suffix.lower(),
            'parent': str(file_path.parent)
        }

    @staticmethod
    def format_file_size(size_bytes: int) -> str:
        """Format file size in human readable format.

        Args:
            size_bytes: Size in bytes

        Returns:
            Formatted size string
        """
        if size_bytes == 0:
            return "0 B"

        size_names = ["B", "KB", "MB", "GB", "TB", "PB"]
        i = 0

        while size_bytes >= 1024 and i < len(size_names) - 1:
            size_bytes /= 1024.0
            i += 1

        return f"{size_bytes:.1f} {size_names[i]}"

    @staticmethod
    def same_base_name(first_path: str, second_path: str) -> bool:
        """Check whether two paths name the same file (name + extension).

        Directories are ignored; the comparison is case-sensitive.
        """
        return os.path.basename(first_path) == os.path.basename(second_path)

    @staticmethod
    def calculate_file_hash(file_path: Path, chunk_size: int = 8192) -> str:
        """Calculate MD5 hash of a file.

        Args:
            file_path: Path to the file
            chunk_size: Size of chunks to read

        Returns:
            MD5 hash as hex string
        """
        hash_md5 = hashlib.md5()

        with open(file_path, 'rb') as f:
            for chunk in iter(lambda: f.read(chunk_size), b""):
                hash_md5.update(chunk)

        return hash_md5.hexdigest()
