"""
Merkle Tree Module - Merkle Tree Implementation cho Bitcoin

Merkle Tree là cấu trúc dữ liệu dùng để:
- Commit tất cả transactions vào một hash duy nhất (Merkle Root)
- Chứng minh một transaction có trong block mà không cần download toàn bộ block

Cấu trúc Merkle Tree:
                    Root
                   /    \\
                 H(AB)   H(CD)
                /    \\   /    \\
              H(A)  H(B) H(C)  H(D)
               |     |    |     |
              Tx1   Tx2  Tx3   Tx4

Quy ước byte order:
- TXID đầu vào và Merkle root đầu ra: display order (big-endian)
- Mọi node bên trong tree: internal order (little-endian)

Function chính:
- build(): Build tree từ danh sách TXID
- prove(): Lấy inclusion proof cho một TXID
- prove_index(): Lấy inclusion proof theo vị trí leaf
- verify(): Xác minh proof với root của tree
- verify_root(): Xác minh proof với một root cho trước (SPV)
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from ..util.txid import (
    TXID_BYTES,
    InvalidIdentifierError,
    decode_leaf,
    encode_txid,
    validate_txid
)
from ..util.util import hash256, reverse_bytes
from .proof import InclusionProof, Position, ProofStep


# =============================================================================
# LOGGING SETUP
# =============================================================================

logger = logging.getLogger(__name__)


# =============================================================================
# TYPES
# =============================================================================

Level = Tuple[bytes, ...]


# =============================================================================
# MERKLE TREE CLASS
# =============================================================================

@dataclass(frozen=True)
class MerkleTree:
    """
    Merkle Tree bất biến (immutable) đã build xong.

    Tree được tạo một lần bằng build() và không thay đổi sau đó.
    Level cuối cùng (chỉ chứa root) không được lưu trong levels,
    root được lưu riêng ở display order.

    Attributes:
        leaves: Các leaf buffer theo thứ tự input, chưa pad
        levels: Level 0..height-1, mỗi level đã pad về số chẵn
        root: Merkle root (display order), None nếu không có transaction
    """
    leaves: Tuple[bytes, ...] = ()
    levels: Tuple[Level, ...] = ()
    root: Optional[bytes] = None

    @classmethod
    def from_txids(cls, txids: Sequence[str]) -> 'MerkleTree':
        return build(txids)

    @property
    def root_hex(self) -> Optional[str]:
        """Merkle root dạng hex (display order), None nếu tree rỗng."""
        if self.root is None:
            return None
        return self.root.hex()

    @property
    def height(self) -> int:
        return len(self.levels)

    @property
    def size(self) -> int:
        """Số transaction đầu vào."""
        return len(self.leaves)

    def levels_hex(self) -> List[List[str]]:
        """Các level dưới dạng TXID hex (display order), tiện cho debug/API."""
        return [[decode_leaf(node) for node in level] for level in self.levels]

    def find(self, txid: str) -> Optional[int]:
        """
        Tìm vị trí leaf của một TXID.

        Duyệt tuyến tính từ trái sang phải, kết quả đầu tiên được dùng.

        Returns:
            int: Index của leaf, None nếu không tìm thấy

        Raises:
            InvalidIdentifierError: Nếu TXID sai format
        """
        leaf = encode_txid(txid)
        for index, node in enumerate(self.leaves):
            if node == leaf:
                return index
        return None


# =============================================================================
# TREE BUILDING
# =============================================================================

def _hash_level(nodes: List[bytes]) -> List[bytes]:
    """Hash từng cặp (0,1), (2,3),... của một level đã pad."""
    return [
        hash256(nodes[i] + nodes[i + 1])
        for i in range(0, len(nodes), 2)
    ]


def build(txids: Sequence[str]) -> MerkleTree:
    """
    Build Merkle tree từ danh sách TXID.

    Thuật toán:
    1. Không có TXID → root = None
    2. Chỉ có 1 TXID → root chính là TXID đó (không hash)
    3. Nếu số node lẻ → duplicate node cuối
    4. Lưu snapshot level, ghép cặp và double-hash
    5. Lặp lại cho đến khi còn 1 node, đảo byte order → root

    Ví dụ với 3 transactions:
        Level 0: [A, B, C, C]         ← C được duplicate
        Level 1: [H(AB), H(CC)]
        Root:    H(H(AB) + H(CC))     ← không lưu thành level

    Args:
        txids: Danh sách TXID (hex, display order)

    Returns:
        MerkleTree: Tree đã build xong

    Raises:
        InvalidIdentifierError: Nếu có TXID sai format
    """
    leaves = tuple(encode_txid(txid) for txid in txids)

    if not leaves:
        logger.debug("Building merkle tree from empty list, root is absent")
        return MerkleTree()

    if len(leaves) == 1:
        # Block chỉ có coinbase: root = TXID, giữ nguyên không hash
        return MerkleTree(leaves=leaves, root=reverse_bytes(leaves[0]))

    levels: List[Level] = []
    nodes = list(leaves)

    while len(nodes) > 1:
        if len(nodes) % 2 != 0:
            nodes.append(nodes[-1])

        levels.append(tuple(nodes))
        nodes = _hash_level(nodes)

    tree = MerkleTree(
        leaves=leaves,
        levels=tuple(levels),
        root=reverse_bytes(nodes[0])
    )
    logger.debug(
        f"Built merkle tree: {tree.size} txs, height {tree.height}, "
        f"root {tree.root_hex[:16]}..."
    )
    return tree


# =============================================================================
# PROOF GENERATION
# =============================================================================

def _collect_path(tree: MerkleTree, index: int) -> Tuple[ProofStep, ...]:
    """Đi từ leaf lên root, thu thập sibling ở mỗi level."""
    steps: List[ProofStep] = []

    for level in tree.levels:
        if index % 2 == 0:
            # Node ở bên trái → sibling ở bên phải
            sibling_index = index + 1
            position = Position.RIGHT
        else:
            # Node ở bên phải → sibling ở bên trái
            sibling_index = index - 1
            position = Position.LEFT

        if sibling_index < len(level):
            steps.append(ProofStep(sibling=level[sibling_index], position=position))

        index //= 2

    return tuple(steps)


def prove(tree: MerkleTree, target: str) -> InclusionProof:
    """
    Lấy inclusion proof cho một transaction.

    Ví dụ: Để prove Tx2 (index=1) trong tree 4 transactions:
        Steps = [(H1, left), (H(H3+H4), right)]

    Args:
        tree: Merkle tree đã build
        target: TXID cần prove

    Returns:
        InclusionProof: Proof, found = False nếu TXID không có trong tree

    Raises:
        InvalidIdentifierError: Nếu target sai format
    """
    index = tree.find(target)

    if index is None:
        logger.debug(f"TXID {target[:16]}... not found in merkle tree")
        return InclusionProof.not_found(target)

    return InclusionProof(
        txid=target,
        found=True,
        index=index,
        steps=_collect_path(tree, index)
    )


def prove_index(tree: MerkleTree, index: int) -> InclusionProof:
    """
    Lấy inclusion proof theo vị trí leaf (0-indexed).

    Raises:
        IndexError: Nếu index nằm ngoài danh sách transaction
    """
    if index < 0 or index >= tree.size:
        raise IndexError(f"Leaf index {index} out of range for {tree.size} txs")

    return InclusionProof(
        txid=decode_leaf(tree.leaves[index]),
        found=True,
        index=index,
        steps=_collect_path(tree, index)
    )


# =============================================================================
# PROOF VERIFICATION
# =============================================================================

def _fold(proof: InclusionProof, target: str) -> Optional[bytes]:
    """Replay proof từ leaf, trả về root ứng viên (display order)."""
    current = encode_txid(target)

    # Proof "không tìm thấy" không chứng minh được gì
    if not proof.found:
        return None

    for step in proof.steps:
        if step.position == Position.LEFT:
            current = hash256(step.sibling + current)
        else:
            current = hash256(current + step.sibling)

    return reverse_bytes(current)


def verify_root(
    root: Union[bytes, str],
    proof: InclusionProof,
    target: str
) -> bool:
    """
    Xác minh Merkle proof với một Merkle root cho trước.

    Dùng khi chỉ có root từ block header (SPV), không có tree đầy đủ.

    Args:
        root: Merkle root (32 bytes hoặc 64 hex chars, display order)
        proof: Inclusion proof
        target: TXID cần verify

    Returns:
        bool: True nếu proof hợp lệ

    Raises:
        InvalidIdentifierError: Nếu root hoặc target sai format
    """
    if isinstance(root, str):
        root = bytes.fromhex(validate_txid(root))
    elif len(root) != TXID_BYTES:
        raise InvalidIdentifierError(f"Root must be {TXID_BYTES} bytes, got {len(root)}")

    return _fold(proof, target) == root


def verify(tree: MerkleTree, proof: InclusionProof, target: str) -> bool:
    """
    Xác minh Merkle proof cho một transaction.

    Quá trình verify:
    1. Bắt đầu với leaf buffer của target
    2. Với mỗi step trong proof:
        - Sibling bên trái: H(sibling + current)
        - Sibling bên phải: H(current + sibling)
    3. Đảo byte order, so sánh với root của tree → VALID nếu bằng nhau

    Args:
        tree: Merkle tree đã build
        proof: Inclusion proof (từ prove() hoặc parse từ JSON)
        target: TXID cần verify

    Returns:
        bool: True nếu proof hợp lệ, False nếu sai hoặc tree rỗng
    """
    if tree.root is None:
        return False

    return _fold(proof, target) == tree.root
