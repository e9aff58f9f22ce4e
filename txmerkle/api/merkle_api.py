"""
Merkle API Module - REST API cho Merkle root và inclusion proof

Module này cung cấp các API endpoints để:
- Tính Merkle root từ danh sách TXID
- Xem các level của Merkle tree
- Tạo inclusion proof cho một TXID
- Xác minh inclusion proof

Endpoints:
- POST /root: Tính Merkle root
- POST /levels: Lấy các level của tree
- POST /proof: Tạo proof cho một TXID
- POST /verify: Xác minh proof
- GET /health: Health check
"""
import os
import logging
from typing import Dict, Any, List

from flask import Blueprint, request, jsonify

from ..core.merkle_tree import MerkleTree, build, prove, verify, verify_root
from ..core.proof import InclusionProof


# =============================================================================
# LOGGING SETUP
# =============================================================================

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_MAX_TXIDS = 100_000


# =============================================================================
# BLUEPRINT SETUP
# =============================================================================

# Blueprint cho các API liên quan đến Merkle tree
merkle_api = Blueprint('merkle_api', __name__)


# =============================================================================
# HELPER FUNCTIONS - Tái sử dụng code chung
# =============================================================================

def get_max_txids() -> int:
    """Giới hạn số TXID mỗi request (env MERKLE_MAX_TXIDS)."""
    return int(os.environ.get('MERKLE_MAX_TXIDS', DEFAULT_MAX_TXIDS))


def parse_txids_from_json(data: Dict[str, Any]) -> List[str]:
    """
    Lấy danh sách TXID từ JSON request.

    Args:
        data: Dictionary từ JSON request, phải có key 'txids'

    Returns:
        List[str]: Danh sách TXID

    Raises:
        KeyError: Thiếu 'txids'
        ValueError: 'txids' không phải list hoặc vượt quá giới hạn
    """
    txids = data['txids']

    if not isinstance(txids, list):
        raise ValueError("'txids' must be a list of hex strings")

    max_txids = get_max_txids()
    if len(txids) > max_txids:
        raise ValueError(f"Too many txids: {len(txids)} > {max_txids}")

    return txids


def build_tree_from_json(data: Dict[str, Any]) -> MerkleTree:
    """Parse 'txids' và build tree (dùng chung cho các endpoint)."""
    return build(parse_txids_from_json(data))


def get_request_json() -> Dict[str, Any]:
    """Lấy JSON body, trả về {} nếu body rỗng hoặc không phải object."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return {}
    return data


def create_error_response(error_message: str) -> Dict[str, Any]:
    """
    Tạo response JSON cho trường hợp lỗi.

    Args:
        error_message: Mô tả lỗi

    Returns:
        Dictionary chứa thông tin lỗi
    """
    return {
        'success': False,
        'error': error_message
    }


# =============================================================================
# API ENDPOINTS
# =============================================================================

@merkle_api.route('/root', methods=['POST'])
def merkle_root():
    """
    Tính Merkle root từ danh sách TXID.

    Request JSON:
        {"txids": ["<64 hex>", ...]}

    Response JSON:
        Success: {"success": true, "root": "..." | null, "height": 2, "count": 4}
        Error: {"success": false, "error": "error message"}
    """
    try:
        data = get_request_json()

        if not data:
            return jsonify(create_error_response("No JSON data provided")), 400

        tree = build_tree_from_json(data)

        return jsonify({
            'success': True,
            'root': tree.root_hex,
            'height': tree.height,
            'count': tree.size
        })

    except KeyError as e:
        # Thiếu field bắt buộc
        return jsonify(create_error_response(f"Missing required field: {e}")), 400

    except ValueError as e:
        # Giá trị không hợp lệ (bao gồm InvalidIdentifierError)
        return jsonify(create_error_response(f"Invalid value: {e}")), 400

    except Exception as e:
        # Lỗi không xác định
        logger.error(f"Merkle root calculation failed: {e}")
        return jsonify(create_error_response(str(e))), 400


@merkle_api.route('/levels', methods=['POST'])
def merkle_levels():
    """
    Lấy tất cả level của Merkle tree (TXID hex, display order).

    Response JSON:
        {"success": true, "root": "...", "levels": [["...", ...], ...]}
    """
    try:
        data = get_request_json()

        if not data:
            return jsonify(create_error_response("No JSON data provided")), 400

        tree = build_tree_from_json(data)

        return jsonify({
            'success': True,
            'root': tree.root_hex,
            'levels': tree.levels_hex()
        })

    except KeyError as e:
        return jsonify(create_error_response(f"Missing required field: {e}")), 400

    except ValueError as e:
        return jsonify(create_error_response(f"Invalid value: {e}")), 400

    except Exception as e:
        logger.error(f"Merkle levels request failed: {e}")
        return jsonify(create_error_response(str(e))), 400


@merkle_api.route('/proof', methods=['POST'])
def merkle_proof():
    """
    Tạo inclusion proof cho một TXID.

    Request JSON:
        {"txids": [...], "txid": "<64 hex>"}

    Response JSON:
        {
            "success": true,
            "root": "...",
            "found": true,
            "proof": {"txid": "...", "index": 2, "found": true, "path": [...]}
        }
    """
    try:
        data = get_request_json()

        if not data:
            return jsonify(create_error_response("No JSON data provided")), 400

        tree = build_tree_from_json(data)
        proof = prove(tree, data['txid'])

        return jsonify({
            'success': True,
            'root': tree.root_hex,
            'found': proof.found,
            'proof': proof.to_dict()
        })

    except KeyError as e:
        return jsonify(create_error_response(f"Missing required field: {e}")), 400

    except ValueError as e:
        return jsonify(create_error_response(f"Invalid value: {e}")), 400

    except Exception as e:
        logger.error(f"Merkle proof request failed: {e}")
        return jsonify(create_error_response(str(e))), 400


@merkle_api.route('/verify', methods=['POST'])
def merkle_verify():
    """
    Xác minh inclusion proof.

    Có 2 cách cung cấp root:
    - "txids": build tree từ danh sách TXID rồi verify với root của tree
    - "root": verify trực tiếp với root cho trước (SPV)

    Request JSON:
        {
            "txid": "<64 hex>",
            "proof": [{"data": "...", "position": "left"|"right"}, ...],
            "txids": [...]       // hoặc "root": "<64 hex>"
        }

    Response JSON:
        Success: {"success": true, "valid": true/false}
        Error: {"success": false, "error": "error message"}
    """
    try:
        data = get_request_json()

        if not data:
            return jsonify(create_error_response("No JSON data provided")), 400

        txid = data['txid']
        raw_proof = data['proof']

        # Chấp nhận cả list step lẫn dict đầy đủ từ /proof
        if isinstance(raw_proof, dict):
            proof = InclusionProof.from_dict(raw_proof)
        else:
            proof = InclusionProof.from_path(txid, raw_proof)

        if 'root' in data:
            is_valid = verify_root(data['root'], proof, txid)
        else:
            is_valid = verify(build_tree_from_json(data), proof, txid)

        return jsonify({
            'success': True,
            'valid': is_valid
        })

    except KeyError as e:
        return jsonify(create_error_response(f"Missing required field: {e}")), 400

    except ValueError as e:
        return jsonify(create_error_response(f"Invalid value: {e}")), 400

    except Exception as e:
        logger.error(f"Merkle verify request failed: {e}")
        return jsonify(create_error_response(str(e))), 400


# =============================================================================
# ADDITIONAL ENDPOINTS
# =============================================================================

@merkle_api.route('/health', methods=['GET'])
def health_check():
    """
    Health check endpoint.

    Returns:
        JSON: {"status": "ok"}
    """
    return jsonify({'status': 'ok'})
