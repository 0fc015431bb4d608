"""
Hex digests used for breach lookups and privacy-preserving records.
"""

from cryptography.hazmat.primitives import hashes


def _hex_digest(algorithm: hashes.HashAlgorithm, data: str) -> str:
    digest = hashes.Hash(algorithm)
    digest.update(data.encode("utf-8"))
    return digest.finalize().hex()


def sha1_hex(password: str) -> str:
    """Uppercase SHA-1 hex, the form the range API expects."""
    return _hex_digest(hashes.SHA1(), password).upper()


def record_hash(password: str) -> str:
    """SHA-256 hex stored in place of the password. Empty input maps to ''."""
    if not password:
        return ""
    return _hex_digest(hashes.SHA256(), password)
