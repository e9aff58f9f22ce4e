"""Shared fixtures cho test suite."""
import hashlib

import pytest


# Block 100000 trên Bitcoin mainnet: 4 transactions, coinbase đứng đầu
BLOCK_100000_TXIDS = [
    "8c14f0db3df150123e6f3dbbf30f8b955a8249b62ac1d1ff16284aefa3d06d87",
    "fff2525b8931402dd09222c50775608f75787bd2b87e56995a7bdd30f79702c4",
    "6359f0868171b1d194cbee1af2f16ea598ae8fad666d9b012c8ed2b79a236ec4",
    "e9a66845e05d5abc0ad04ec80f774a7e585c6e8db975962d069a522137b80c1d",
]
BLOCK_100000_MERKLE_ROOT = "f3e94742aca4b5ef85488dc37c06c3282295ffec960994b2c0d5ac2a25a95766"


def make_txid(seed: int) -> str:
    """TXID giả lập, xác định theo seed."""
    return hashlib.sha256(f"tx:{seed}".encode("utf-8")).hexdigest()


@pytest.fixture
def block_txids():
    return list(BLOCK_100000_TXIDS)


@pytest.fixture
def txids():
    return [make_txid(i) for i in range(7)]
