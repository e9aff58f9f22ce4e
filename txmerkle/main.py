"""
Merkle API Server - Flask app cho Merkle root và inclusion proof

Chạy: python -m txmerkle.main
Truy cập: http://localhost:5000

Cấu hình qua biến môi trường:
- HOST: Địa chỉ bind (mặc định 0.0.0.0)
- PORT: Port HTTP (mặc định 5000)
- LOG_LEVEL: Mức log (mặc định INFO)
- FLASK_DEBUG: Bật debug mode nếu là "1"
- MERKLE_MAX_TXIDS: Số TXID tối đa mỗi request (mặc định 100000)
"""
import os
import logging

from flask import Flask, jsonify
from flask_cors import CORS

from .api.merkle_api import merkle_api


logger = logging.getLogger(__name__)


def create_app():
    """Create and configure Flask application"""
    app = Flask(__name__)

    # Enable CORS
    CORS(app)

    # Register Blueprints
    app.register_blueprint(merkle_api, url_prefix='/api/merkle')

    @app.route('/')
    def index():
        return jsonify({
            "service": "Merkle Tree API",
            "status": "running",
            "endpoints": [
                "/api/merkle/root",
                "/api/merkle/levels",
                "/api/merkle/proof",
                "/api/merkle/verify",
                "/api/merkle/health"
            ]
        })

    logger.info("Merkle API initialized")
    return app


def main():
    # Configure Logging
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())

    app = create_app()
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", 5000))
    debug = os.environ.get("FLASK_DEBUG") == "1"

    logger.info(f"Starting Merkle API server on {host}:{port}...")
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    main()
