"""
Main routes blueprint.

Unauthenticated service endpoints.
"""

from flask import Blueprint, jsonify

main_bp = Blueprint("main", __name__)


@main_bp.route("/health")
def health():
    """Liveness check for load balancers."""
    return jsonify({"status": "ok"})
