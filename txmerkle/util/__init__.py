"""
Util Package - Utility Functions cho Merkle Tree

Package này export các functions tiện ích:

TXID Encoding (txid):
- encode_txid(): TXID display hex → 32-byte internal buffer
- decode_leaf(): 32-byte internal buffer → TXID display hex
- validate_txid(): Kiểm tra format TXID
- InvalidIdentifierError: Exception cho TXID sai format
- MerkleError: Base exception của package

Hash Functions (util):
- hash256(): Double SHA-256
- sha256(): Single SHA-256
- reverse_bytes(): Đảo thứ tự byte
"""

from .txid import (
    TXID_BYTES,
    TXID_HEX_LENGTH,
    encode_txid,
    decode_leaf,
    validate_txid,
    InvalidIdentifierError,
    MerkleError
)

from .util import (
    hash256,
    sha256,
    reverse_bytes
)


__all__ = [
    # TXID encoding
    'TXID_BYTES',
    'TXID_HEX_LENGTH',
    'encode_txid',
    'decode_leaf',
    'validate_txid',
    'InvalidIdentifierError',
    'MerkleError',

    # Hash functions
    'hash256',
    'sha256',
    'reverse_bytes'
]
