"""
Merkle Tree CLI - Giao diện dòng lệnh cho người dùng

Cung cấp menu tương tác để:
- Nhập danh sách TXID
- Xem Merkle root
- Xem các level của tree
- Tạo inclusion proof
- Xác minh inclusion proof

Chạy: python -m txmerkle.cli
"""
import os
import json
from dataclasses import dataclass, field
from typing import List, Optional

from .core.merkle_tree import MerkleTree, build, prove, verify, verify_root
from .core.proof import InclusionProof
from .util.txid import InvalidIdentifierError


# =============================================================================
# SESSION STATE
# =============================================================================

@dataclass
class Session:
    """
    Trạng thái của một phiên CLI.

    Attributes:
        txids: Danh sách TXID đã nhập
        tree: Tree build từ txids (None nếu chưa nhập)
        last_proof: Proof vừa tạo gần nhất
    """
    txids: List[str] = field(default_factory=list)
    tree: Optional[MerkleTree] = None
    last_proof: Optional[InclusionProof] = None


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def clear_screen():
    """Xóa màn hình console."""
    os.system('cls' if os.name == 'nt' else 'clear')


def print_header(title: str):
    """In tiêu đề đẹp."""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)


def print_menu():
    """In menu chính."""
    print_header("MERKLE TREE - MENU CHÍNH")
    print("""
    [1] 📥 Nhập danh sách TXID
    [2] 🌳 Xem Merkle root
    [3] 📊 Xem các level của tree
    [4] 📍 Tạo Merkle proof
    [5] ✅ Xác minh Merkle proof
    [0] ❌ Thoát
    """)


def pause():
    """Dừng màn hình chờ người dùng."""
    input("\n⏎ Nhấn Enter để tiếp tục...")


def require_tree(session: Session) -> bool:
    """Kiểm tra đã có tree chưa, in thông báo nếu chưa."""
    if session.tree is None:
        print("\n❌ Chưa có danh sách TXID! Chọn [1] để nhập.")
        return False
    return True


# =============================================================================
# FEATURE FUNCTIONS
# =============================================================================

def enter_txids(session: Session):
    """Nhập danh sách TXID, mỗi dòng một TXID, dòng trống để kết thúc."""
    print_header("NHẬP DANH SÁCH TXID")
    print("\n📝 Mỗi dòng một TXID (64 ký tự hex). Dòng trống để kết thúc.")

    txids: List[str] = []
    while True:
        line = input(f"   TX #{len(txids)}: ").strip()
        if not line:
            break
        txids.append(line)

    try:
        tree = build(txids)
    except InvalidIdentifierError as e:
        print(f"❌ TXID không hợp lệ: {e}")
        pause()
        return

    session.txids = txids
    session.tree = tree
    session.last_proof = None

    print(f"\n✅ Đã build tree từ {tree.size} giao dịch.")
    pause()


def show_root(session: Session):
    """Xem Merkle root của danh sách hiện tại."""
    print_header("MERKLE ROOT")

    if not require_tree(session):
        pause()
        return

    tree = session.tree
    if tree.root_hex is None:
        print("\n⚠️  Danh sách rỗng, không có Merkle root.")
    else:
        print(f"\n🌳 Merkle Root: {tree.root_hex}")
        print(f"📜 Số giao dịch: {tree.size}")
        print(f"📏 Số level: {tree.height}")

    pause()


def show_levels(session: Session):
    """Xem từng level của tree (display order)."""
    print_header("CÁC LEVEL CỦA TREE")

    if not require_tree(session):
        pause()
        return

    levels = session.tree.levels_hex()
    if not levels:
        print("\n⚠️  Tree không có level nào (0 hoặc 1 giao dịch).")

    for height, level in enumerate(levels):
        print(f"\n📊 Level {height} ({len(level)} node):")
        for node in level:
            print(f"   {node}")

    pause()


def create_proof(session: Session):
    """Tạo Merkle proof cho một TXID."""
    print_header("TẠO MERKLE PROOF")

    if not require_tree(session):
        pause()
        return

    txid = input("\n🔍 Nhập TXID cần prove: ").strip()

    try:
        proof = prove(session.tree, txid)
    except InvalidIdentifierError as e:
        print(f"❌ TXID không hợp lệ: {e}")
        pause()
        return

    if not proof.found:
        print("\n❌ TXID không có trong danh sách!")
        pause()
        return

    session.last_proof = proof

    print(f"\n📍 Merkle Path cho TX #{proof.index}:")
    for i, step in enumerate(proof.steps):
        print(f"   Level {i}: {step.sibling.hex()} ({step.position.value})")
    print("\n📋 JSON:")
    print(json.dumps(proof.path(), indent=2))

    pause()


def verify_proof(session: Session):
    """
    Xác minh Merkle proof.

    Dùng proof vừa tạo, hoặc dán path dạng JSON. Root lấy từ tree
    hiện tại, hoặc nhập tay nếu chưa có tree.
    """
    print_header("XÁC MINH MERKLE PROOF")

    txid = input("\n🔍 Nhập TXID: ").strip()
    raw_path = input("📋 Path JSON (Enter để dùng proof vừa tạo): ").strip()

    try:
        if raw_path:
            proof = InclusionProof.from_path(txid, json.loads(raw_path))
        elif session.last_proof is not None:
            proof = session.last_proof
        else:
            print("❌ Chưa có proof nào!")
            pause()
            return

        if session.tree is not None:
            is_valid = verify(session.tree, proof, txid)
        else:
            root = input("🌳 Nhập Merkle root: ").strip()
            is_valid = verify_root(root, proof, txid)

    except (KeyError, TypeError, ValueError) as e:
        print(f"❌ Dữ liệu không hợp lệ: {e}")
        pause()
        return

    if is_valid:
        print("\n✅ Proof hợp lệ!")
    else:
        print("\n❌ Proof KHÔNG hợp lệ!")

    pause()


# =============================================================================
# MAIN LOOP
# =============================================================================

def main():
    """Vòng lặp chính của CLI."""
    session = Session()

    while True:
        clear_screen()
        print_menu()

        choice = input("👉 Chọn chức năng (0-5): ").strip()

        if choice == "1":
            enter_txids(session)
        elif choice == "2":
            show_root(session)
        elif choice == "3":
            show_levels(session)
        elif choice == "4":
            create_proof(session)
        elif choice == "5":
            verify_proof(session)
        elif choice == "0":
            print("\n👋 Tạm biệt!")
            break
        else:
            print("\n❌ Lựa chọn không hợp lệ!")
            pause()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\n👋 Đã thoát.")
