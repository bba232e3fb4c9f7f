import hashlib

import pytest

from flagtree.hash_type import HashType, hash_file, parse_hash_type


@pytest.mark.parametrize(
    "value, expected",
    [
        ("md5", HashType.MD5),
        ("sha1", HashType.SHA1),
        ("SHA256", HashType.SHA256),
        (" sha512 ", HashType.SHA512),
    ],
)
def test_hash_type_from_string(value, expected):
    assert HashType(value) is expected
    assert parse_hash_type(value) is expected


def test_hash_type_invalid():
    with pytest.raises(ValueError, match="Must be one of: md5, sha1, sha256, sha512"):
        HashType("crc32")
    assert parse_hash_type("crc32") is None
    assert parse_hash_type("") is None


def test_hash_type_names_and_str():
    assert HashType.names() == ["md5", "sha1", "sha256", "sha512"]
    assert str(HashType.SHA1) == "sha1"


def test_hash_file(tmp_path):
    path = tmp_path / "data.bin"
    payload = b"flagtree" * 10000
    path.write_bytes(payload)

    assert hash_file(path, HashType.SHA256) == hashlib.sha256(payload).hexdigest()
    assert hash_file(str(path), HashType.MD5, chunk_size=7) == (
        hashlib.md5(payload).hexdigest()
    )


def test_hash_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        hash_file(tmp_path / "missing", HashType.SHA1)
