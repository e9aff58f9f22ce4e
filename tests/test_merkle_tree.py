"""Tests cho Merkle tree: build, prove, verify."""
import dataclasses

import pytest

from txmerkle import (
    InvalidIdentifierError,
    MerkleTree,
    Position,
    build,
    encode_txid,
    prove,
    prove_index,
    verify,
    verify_root,
)
from txmerkle.util import hash256

from .conftest import BLOCK_100000_MERKLE_ROOT, make_txid


def H(left: str, right: str) -> bytes:
    return hash256(encode_txid(left) + encode_txid(right))


# =============================================================================
# BUILD
# =============================================================================

def test_build_empty_has_no_root_and_no_levels():
    tree = build([])

    assert tree.root is None
    assert tree.root_hex is None
    assert tree.levels == ()
    assert tree.height == 0
    assert tree.size == 0


def test_build_single_returns_txid_verbatim():
    txid = make_txid(0)

    tree = build([txid])

    assert tree.root_hex == txid
    assert tree.root == bytes.fromhex(txid)
    assert tree.levels == ()


def test_build_single_still_validates():
    with pytest.raises(InvalidIdentifierError):
        build(["abc"])


def test_build_two_leaves():
    a, b = make_txid(1), make_txid(2)

    tree = build([a, b])

    assert tree.root == H(a, b)[::-1]
    assert tree.levels == ((encode_txid(a), encode_txid(b)),)


def test_build_three_leaves_duplicates_last():
    a, b, c = make_txid(1), make_txid(2), make_txid(3)

    tree = build([a, b, c])

    assert tree.levels[0] == tuple(encode_txid(t) for t in (a, b, c, c))
    assert tree.levels[1] == (H(a, b), H(c, c))
    assert tree.root == hash256(H(a, b) + H(c, c))[::-1]
    assert tree.height == 2
    assert tree.size == 3


def test_build_real_block_100000(block_txids):
    tree = build(block_txids)

    assert tree.root_hex == BLOCK_100000_MERKLE_ROOT


def test_stored_levels_are_even():
    tree = build([make_txid(i) for i in range(11)])

    # 11 → 12 → 6 → 3(+1) → 2
    assert [len(level) for level in tree.levels] == [12, 6, 4, 2]


def test_leaves_are_unpadded():
    tree = build([make_txid(i) for i in range(5)])

    assert len(tree.leaves) == 5
    assert len(tree.levels[0]) == 6


def test_order_sensitivity():
    a, b = make_txid(1), make_txid(2)

    assert build([a, b]).root != build([b, a]).root


def test_root_hex_is_hex_of_raw_bytes(txids):
    tree = build(txids)

    assert tree.root_hex == tree.root.hex()
    assert len(tree.root_hex) == 64


def test_tree_is_immutable(txids):
    tree = build(txids)

    with pytest.raises(dataclasses.FrozenInstanceError):
        tree.root = b"\x00" * 32


def test_from_txids_matches_build(txids):
    assert MerkleTree.from_txids(txids) == build(txids)


def test_levels_hex_display_order():
    a, b = make_txid(1), make_txid(2)

    assert build([a, b]).levels_hex() == [[a, b]]


def test_build_large_input():
    tree = build([make_txid(i) for i in range(1000)])

    assert tree.height == 10
    assert len(tree.root) == 32


# =============================================================================
# PROVE
# =============================================================================

@pytest.mark.parametrize("count", [2, 3, 4, 5, 7, 8, 13])
def test_every_member_verifies(count):
    txids = [make_txid(i) for i in range(count)]
    tree = build(txids)

    for txid in txids:
        proof = prove(tree, txid)
        assert proof.found
        assert verify(tree, proof, txid) is True


def test_prove_positions():
    a, b, c = make_txid(1), make_txid(2), make_txid(3)
    tree = build([a, b, c])

    proof = prove(tree, b)

    assert proof.index == 1
    assert [step.position for step in proof] == [Position.LEFT, Position.RIGHT]
    assert proof.steps[0].sibling == encode_txid(a)
    assert proof.steps[1].sibling == H(c, c)


def test_prove_duplicated_last_leaf_pairs_with_itself():
    a, b, c = make_txid(1), make_txid(2), make_txid(3)
    tree = build([a, b, c])

    proof = prove(tree, c)

    assert proof.index == 2
    assert proof.steps[0].sibling == encode_txid(c)
    assert proof.steps[0].position == Position.RIGHT


def test_prove_unknown_is_not_found(txids):
    tree = build(txids)

    proof = prove(tree, make_txid(999))

    assert proof.found is False
    assert proof.index is None
    assert len(proof) == 0
    assert verify(tree, proof, make_txid(999)) is False


def test_prove_single_leaf_is_found_and_empty():
    txid = make_txid(0)
    tree = build([txid])

    proof = prove(tree, txid)

    assert proof.found is True
    assert len(proof) == 0
    assert verify(tree, proof, txid) is True


def test_prove_on_empty_tree():
    tree = build([])

    proof = prove(tree, make_txid(0))

    assert proof.found is False
    assert verify(tree, proof, make_txid(0)) is False


def test_prove_first_match_wins():
    a, b = make_txid(1), make_txid(2)
    tree = build([a, b, a])

    assert prove(tree, a).index == 0


def test_prove_rejects_malformed_target(txids):
    with pytest.raises(InvalidIdentifierError):
        prove(build(txids), "xyz")


def test_prove_index_matches_prove(txids):
    tree = build(txids)

    for index, txid in enumerate(txids):
        assert prove_index(tree, index) == prove(tree, txid)


@pytest.mark.parametrize("index", [-1, 7, 100])
def test_prove_index_out_of_range(txids, index):
    with pytest.raises(IndexError):
        prove_index(build(txids), index)


# =============================================================================
# VERIFY
# =============================================================================

def test_tampered_sibling_fails(txids):
    tree = build(txids)
    target = txids[3]
    proof = prove(tree, target)

    for i, step in enumerate(proof.steps):
        for byte_index in (0, 15, 31):
            mutated = bytearray(step.sibling)
            mutated[byte_index] ^= 0x01
            bad_step = dataclasses.replace(step, sibling=bytes(mutated))
            steps = proof.steps[:i] + (bad_step,) + proof.steps[i + 1:]
            bad = dataclasses.replace(proof, steps=steps)

            assert verify(tree, bad, target) is False


def test_flipped_position_fails(txids):
    tree = build(txids)
    proof = prove(tree, txids[0])
    first = proof.steps[0]
    flipped = dataclasses.replace(first, position=Position.LEFT)
    bad = dataclasses.replace(proof, steps=(flipped,) + proof.steps[1:])

    assert verify(tree, bad, txids[0]) is False


def test_proof_for_other_target_fails(txids):
    tree = build(txids)

    assert verify(tree, prove(tree, txids[1]), txids[2]) is False


def test_proof_against_other_tree_fails(txids):
    tree = build(txids)
    other = build(txids[:-1])

    assert verify(other, prove(tree, txids[0]), txids[0]) is False


def test_verify_root_with_hex_and_bytes(block_txids):
    tree = build(block_txids)
    proof = prove(tree, block_txids[2])

    assert verify_root(BLOCK_100000_MERKLE_ROOT, proof, block_txids[2]) is True
    assert verify_root(tree.root, proof, block_txids[2]) is True
    assert verify_root("00" * 32, proof, block_txids[2]) is False


def test_verify_root_rejects_malformed_root(block_txids):
    tree = build(block_txids)
    proof = prove(tree, block_txids[0])

    with pytest.raises(InvalidIdentifierError):
        verify_root("abcd", proof, block_txids[0])

    with pytest.raises(InvalidIdentifierError):
        verify_root(b"\x00" * 20, proof, block_txids[0])
