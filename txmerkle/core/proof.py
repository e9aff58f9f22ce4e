"""
Proof Module - Merkle Inclusion Proof

Inclusion proof là danh sách các sibling hash cần thiết để tính lại
Merkle root từ một leaf, kèm vị trí (trái/phải) của từng sibling.

Ví dụ: proof cho Tx3 trong block 4 transactions:

                    Root
                   /    \\
                 H12    [H34]
                /    \\   /    \\
              H1    H2 [H3]   H4
                                ↑ sibling đầu tiên, nằm bên phải

    Steps = [(H4, right), (H12, left)]

Format dict (dùng cho JSON API, giống format {'data', 'position'} cũ):
    {
        "txid": "...",
        "index": 2,
        "found": true,
        "path": [
            {"data": "<sibling hex, internal order>", "position": "right"},
            {"data": "...", "position": "left"}
        ]
    }
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple


class Position(str, Enum):
    """Vị trí của sibling so với node đang được fold."""

    LEFT = 'left'
    RIGHT = 'right'


@dataclass(frozen=True)
class ProofStep:
    """
    Một bước trong Merkle proof.

    Attributes:
        sibling: 32-byte sibling hash (internal order)
        position: Sibling nằm bên trái hay bên phải
    """
    sibling: bytes
    position: Position

    def to_dict(self) -> Dict[str, str]:
        return {
            'data': self.sibling.hex(),
            'position': self.position.value
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProofStep':
        """
        Parse một step từ dict.

        Raises:
            KeyError: Thiếu 'data' hoặc 'position'
            ValueError: position không phải 'left'/'right' hoặc data không phải hex
        """
        sibling = bytes.fromhex(data['data'])
        position = Position(data['position'])
        return cls(sibling=sibling, position=position)


@dataclass(frozen=True)
class InclusionProof:
    """
    Merkle inclusion proof cho một TXID.

    Proof rỗng xảy ra trong 2 trường hợp khác nhau:
    - TXID không có trong tree → found = False
    - Tree chỉ có 1 transaction → found = True, không cần sibling nào

    Attributes:
        txid: TXID cần chứng minh (display hex)
        found: TXID có nằm trong tree không
        index: Vị trí leaf trong tree (None nếu không tìm thấy hoặc không biết)
        steps: Các bước từ sibling của leaf lên tới root
    """
    txid: str
    found: bool
    index: Optional[int] = None
    steps: Tuple[ProofStep, ...] = field(default_factory=tuple)

    @classmethod
    def not_found(cls, txid: str) -> 'InclusionProof':
        return cls(txid=txid, found=False)

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[ProofStep]:
        return iter(self.steps)

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def path(self) -> List[Dict[str, str]]:
        """Danh sách step dạng dict: [{'data': hex, 'position': 'left'|'right'}]."""
        return [step.to_dict() for step in self.steps]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'txid': self.txid,
            'index': self.index,
            'found': self.found,
            'path': self.path()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InclusionProof':
        """
        Parse proof từ dict (output của to_dict).

        'found' và 'index' có thể thiếu: mặc định found = True, index = None.

        Args:
            data: Dict có 'txid', 'path', (tuỳ chọn) 'found' và 'index'

        Returns:
            InclusionProof: Proof đã parse

        Raises:
            KeyError: Thiếu field bắt buộc
            ValueError: Giá trị không hợp lệ
        """
        steps = tuple(ProofStep.from_dict(item) for item in data['path'])
        return cls(
            txid=data['txid'],
            found=bool(data.get('found', True)),
            index=data.get('index'),
            steps=steps
        )

    @classmethod
    def from_path(cls, txid: str, path: List[Dict[str, Any]]) -> 'InclusionProof':
        """Tạo proof từ list step dạng dict (không có index)."""
        steps = tuple(ProofStep.from_dict(item) for item in path)
        return cls(txid=txid, found=True, steps=steps)
