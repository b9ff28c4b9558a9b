from flask import jsonify
from . import health_bp


@health_bp.route('/health')
def health():
    """Liveness check for load balancers and the client"""
    return jsonify(status='ok', message='MyHome API is running')
