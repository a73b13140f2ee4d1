"""
Tests for the checksum computer.
"""
import pytest

from jotti_uploader.checksum import calculate_sha1
from jotti_uploader.exceptions import ChecksumError


def test_known_digest(tmp_upload_dir):
    """Test that the digest matches a known SHA-1 value."""
    test_file = tmp_upload_dir / "hello.txt"
    test_file.write_bytes(b"hello world")

    assert calculate_sha1(test_file) == "2aae6c35c94fcfb415dbe95f408b9ce91ee846ed"


def test_empty_file_digest(tmp_upload_dir):
    """Test the digest of an empty file."""
    test_file = tmp_upload_dir / "empty.bin"
    test_file.write_bytes(b"")

    assert calculate_sha1(test_file) == "da39a3ee5e6b4b0d3255bfef95601890afd80709"


def test_digest_independent_of_chunk_size(tmp_upload_dir):
    """Test that streaming in small chunks gives the same digest."""
    test_file = tmp_upload_dir / "data.bin"
    test_file.write_bytes(bytes(range(256)) * 40)

    expected = calculate_sha1(test_file)
    for chunk_size in (1, 7, 255, 4096):
        assert calculate_sha1(test_file, chunk_size=chunk_size) == expected


def test_identical_content_identical_digest(tmp_upload_dir):
    """Test that byte-identical files share a digest and a one-byte change does not."""
    first = tmp_upload_dir / "a.bin"
    second = tmp_upload_dir / "b.bin"
    changed = tmp_upload_dir / "c.bin"
    first.write_bytes(b"x" * 1000)
    second.write_bytes(b"x" * 1000)
    changed.write_bytes(b"x" * 999 + b"y")

    assert calculate_sha1(first) == calculate_sha1(second)
    assert calculate_sha1(first) != calculate_sha1(changed)


def test_digest_format(tmp_upload_dir):
    """Test that the digest is 40 lowercase hex characters."""
    test_file = tmp_upload_dir / "data.bin"
    test_file.write_bytes(b"\x00\xff" * 10)

    checksum = calculate_sha1(test_file)
    assert len(checksum) == 40
    assert checksum == checksum.lower()
    int(checksum, 16)


def test_missing_file_raises_checksum_error(tmp_upload_dir):
    """Test that an unreadable file surfaces as a checksum error."""
    with pytest.raises(ChecksumError):
        calculate_sha1(tmp_upload_dir / "missing.bin")


def test_directory_raises_checksum_error(tmp_upload_dir):
    """Test that opening a directory surfaces as a checksum error."""
    with pytest.raises(ChecksumError):
        calculate_sha1(tmp_upload_dir)
