"""
Module for computing content digests of local files.
"""
import hashlib
import logging
from pathlib import Path
from typing import Union

from .exceptions import ChecksumError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024 * 1024


def calculate_sha1(file_path: Union[str, Path], chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """Calculate the SHA-1 checksum of a file without loading it whole.
    
    Args:
        file_path: Path to a regular file
        chunk_size: Number of bytes read per step
        
    Returns:
        Lowercase hex digest
        
    Raises:
        ChecksumError: If the file cannot be opened or read
    """
    digest = hashlib.sha1()
    try:
        with open(file_path, "rb") as f:
            for chunk in iter(lambda: f.read(chunk_size), b""):
                digest.update(chunk)
    except OSError as e:
        raise ChecksumError(f"Error calculating SHA1 checksum for {file_path}: {e}") from e

    checksum = digest.hexdigest()
    logger.debug(f"SHA1 of {file_path} is {checksum}")
    return checksum
