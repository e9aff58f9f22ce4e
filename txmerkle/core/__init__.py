"""
Core Package - Merkle Tree và Inclusion Proof

Merkle Tree (merkle_tree):
- MerkleTree: Tree bất biến (leaves, levels, root)
- build(): Build tree từ danh sách TXID
- prove(): Inclusion proof theo TXID
- prove_index(): Inclusion proof theo vị trí leaf
- verify(): Verify proof với root của tree
- verify_root(): Verify proof với root cho trước

Proof (proof):
- InclusionProof, ProofStep, Position
"""

from .merkle_tree import (
    MerkleTree,
    build,
    prove,
    prove_index,
    verify,
    verify_root
)

from .proof import (
    InclusionProof,
    ProofStep,
    Position
)


__all__ = [
    'MerkleTree',
    'build',
    'prove',
    'prove_index',
    'verify',
    'verify_root',
    'InclusionProof',
    'ProofStep',
    'Position'
]
