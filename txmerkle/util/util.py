"""
Utility Module - Cryptographic Hash Functions

Module chứa các hàm tiện ích crypto được sử dụng xuyên suốt codebase.
SHA-256 lấy từ hashlib, package không tự implement hash.
"""
import hashlib


def hash256(data: bytes) -> bytes:
    """
    Double SHA-256 hash (chuẩn Bitcoin).
    
    hash256(data) = SHA256(SHA256(data))
    
    Được sử dụng cho:
    - Ghép cặp 2 node trong Merkle tree
    - Replay Merkle proof khi verify
    
    Args:
        data: Dữ liệu cần hash (bytes)
        
    Returns:
        bytes: 32-byte hash result
        
    Example:
        >>> hash256(b"hello").hex()[:16]
        '9595c9df90075148'
    """
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


def sha256(data: bytes) -> bytes:
    """
    Single SHA-256 hash.
    
    Args:
        data: Dữ liệu cần hash
        
    Returns:
        bytes: 32-byte hash result
    """
    return hashlib.sha256(data).digest()


def reverse_bytes(data: bytes) -> bytes:
    """Đảo thứ tự byte (little-endian <-> big-endian)."""
    return bytes(data[::-1])
