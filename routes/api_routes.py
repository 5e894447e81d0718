import logging
from flask import Blueprint, current_app, jsonify, request
from services.benchmark.benchmark_service import BenchmarkService
from utils.validators import validate_benchmark_request

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__)

def _benchmark_service() -> BenchmarkService:
    return current_app.extensions['benchmark']

@api_bp.route('/healthz')
def health_check():
    """API health check"""
    return jsonify({"ok": True})

@api_bp.route('/benchmark/score', methods=['POST'])
def benchmark_score():
    """Score a PC build from its component records

    Body: {"products": [record, ...]} or {"components": {"cpu": record, ...}}
    """
    data = request.get_json(silent=True)
    if not data:
        return jsonify({
            "success": False,
            "message": "No products or components provided"
        }), 400

    try:
        max_products = current_app.config.get('BENCHMARK_MAX_PRODUCTS', 30)
        products = validate_benchmark_request(data, max_products=max_products)
    except ValueError as e:
        return jsonify({
            "success": False,
            "message": str(e)
        }), 400

    if not products:
        return jsonify({
            "success": False,
            "message": "No products to score"
        }), 400

    try:
        result = _benchmark_service().score_build(products)
        return jsonify({"success": True, **result.to_dict()})

    except Exception as e:
        logger.error(f"Benchmark score error: {str(e)}")
        return jsonify({
            "success": False,
            "message": "Server error"
        }), 500

@api_bp.route('/benchmark/weights')
def benchmark_weights():
    """Active category and metric weights"""
    return jsonify({
        "success": True,
        "weights": _benchmark_service().config_manager.describe()
    })
