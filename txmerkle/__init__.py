"""
txmerkle - Bitcoin Merkle Tree cho Transaction IDs

Tính Merkle root theo chuẩn Bitcoin (double SHA-256, internal order
little-endian, display order big-endian), tạo và xác minh inclusion proof.

Ví dụ:
    >>> from txmerkle import build, prove, verify
    >>> tree = build(txids)
    >>> proof = prove(tree, txids[2])
    >>> verify(tree, proof, txids[2])
    True
"""

from .core import (
    MerkleTree,
    build,
    prove,
    prove_index,
    verify,
    verify_root,
    InclusionProof,
    ProofStep,
    Position
)

from .util import (
    encode_txid,
    decode_leaf,
    InvalidIdentifierError,
    MerkleError
)


__version__ = '1.0.0'

__all__ = [
    'MerkleTree',
    'build',
    'prove',
    'prove_index',
    'verify',
    'verify_root',
    'InclusionProof',
    'ProofStep',
    'Position',
    'encode_txid',
    'decode_leaf',
    'InvalidIdentifierError',
    'MerkleError'
]
