"""
TXID Module - Chuyển đổi Transaction ID giữa display order và internal order

Bitcoin hiển thị TXID dạng big-endian (display order), nhưng khi hash
trong Merkle tree thì dùng little-endian (internal order):

    Display:  8c14f0db3df150123e6f...a3d06d87
    Internal: 876dd0a3ef4a2816ffd1...dbf0148c   (đảo ngược từng byte)

Function chính:
- encode_txid(): TXID hex (display) → 32-byte buffer (internal)
- decode_leaf(): 32-byte buffer (internal) → TXID hex (display)
"""
import string
from typing import Any


# =============================================================================
# CONSTANTS
# =============================================================================

TXID_BYTES = 32
TXID_HEX_LENGTH = TXID_BYTES * 2

_HEX_DIGITS = frozenset(string.hexdigits)


# =============================================================================
# EXCEPTIONS
# =============================================================================

class MerkleError(Exception):
    """Base exception cho toàn bộ package txmerkle."""
    pass


class InvalidIdentifierError(MerkleError, ValueError):
    """Exception được raise khi TXID sai độ dài hoặc chứa ký tự không phải hex."""
    pass


# =============================================================================
# VALIDATION
# =============================================================================

def validate_txid(txid: Any) -> str:
    """
    Kiểm tra một TXID có đúng format không.

    TXID hợp lệ:
    - Là string
    - Đúng 64 ký tự
    - Chỉ chứa ký tự hex (0-9, a-f, A-F)

    Args:
        txid: Giá trị cần kiểm tra

    Returns:
        str: Chính TXID đó (không đổi)

    Raises:
        InvalidIdentifierError: Nếu TXID không hợp lệ
    """
    if not isinstance(txid, str):
        raise InvalidIdentifierError(
            f"TXID must be a hex string, got {type(txid).__name__}"
        )

    if len(txid) != TXID_HEX_LENGTH:
        raise InvalidIdentifierError(
            f"TXID must be {TXID_HEX_LENGTH} hex chars, got {len(txid)}: {txid[:16]}..."
        )

    # bytes.fromhex chấp nhận khoảng trắng, nên phải tự kiểm tra từng ký tự
    if not _HEX_DIGITS.issuperset(txid):
        raise InvalidIdentifierError(f"TXID contains non-hex characters: {txid[:16]}...")

    return txid


# =============================================================================
# ENCODE / DECODE
# =============================================================================

def encode_txid(txid: str) -> bytes:
    """
    Chuyển TXID (display order) sang leaf buffer (internal order).

    Byte thứ k của TXID nằm ở vị trí 31 - k trong buffer.

    Args:
        txid: TXID dạng hex, 64 ký tự, big-endian

    Returns:
        bytes: 32-byte buffer little-endian

    Raises:
        InvalidIdentifierError: Nếu TXID không hợp lệ

    Example:
        >>> encode_txid("00" * 31 + "ff").hex()[:4]
        'ff00'
    """
    return bytes.fromhex(validate_txid(txid))[::-1]


def decode_leaf(leaf: bytes) -> str:
    """Chuyển leaf buffer (internal order) về TXID hex (display order)."""
    if len(leaf) != TXID_BYTES:
        raise InvalidIdentifierError(f"Leaf must be {TXID_BYTES} bytes, got {len(leaf)}")
    return leaf[::-1].hex()
