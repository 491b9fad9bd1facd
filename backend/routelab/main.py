from __future__ import annotations

import traceback

from flask import Flask, current_app, request, jsonify
from flask_cors import CORS
from pydantic import ValidationError

from .config import get_settings
from .errors import GraphFormatError, InvalidCoordinatesError, PathReconstructionError
from .graph_loader import GraphData, get_graph_data
from .algorithms import describe_all, get_config, update_config, list_all
from .models.graph import FeatureCollection, GraphStats, NearestNodeRequest, NearestNodeResponse
from .services.routing_service import compare_algorithms, compute_route


def create_app(graph_data: GraphData | None = None) -> Flask:
    """Build the Flask app; ``graph_data`` overrides the cached graph (tests, scripts)."""
    app = Flask(__name__)
    settings = get_settings()
    CORS(app, resources={r"/*": {"origins": settings.cors_origins}})
    app.config["GRAPH_DATA"] = graph_data
    _register_routes(app)
    return app


def _get_graph_data() -> GraphData:
    graph_data = current_app.config.get("GRAPH_DATA")
    if graph_data is not None:
        return graph_data
    return get_graph_data()


def _graph_unavailable(e: Exception):
    print(f"[ERROR] Graph data unavailable: {e}", flush=True)
    traceback.print_exc()
    return jsonify({"error": f"Graph data unavailable: {e}"}), 500


def _register_routes(app: Flask) -> None:
    app.add_url_rule("/api/route", view_func=route, methods=["GET"])
    app.add_url_rule("/api/route/compare", view_func=compare_route, methods=["GET"])
    app.add_url_rule("/algorithms", view_func=list_algorithms, methods=["GET"])
    app.add_url_rule("/graph/nodes", view_func=graph_nodes, methods=["GET"])
    app.add_url_rule("/graph/stats", view_func=graph_stats, methods=["GET"])
    app.add_url_rule("/graph/nearest-node", view_func=nearest_node, methods=["POST"])
    app.add_url_rule("/graph/refresh", view_func=refresh_graph_data, methods=["POST"])
    app.add_url_rule("/config", view_func=get_algorithm_config, methods=["GET"])
    app.add_url_rule("/config", view_func=update_algorithm_config, methods=["POST"])


def route():
    """Compute a single route between two coordinates."""
    src = request.args.get("src")
    dst = request.args.get("dst")
    algo = request.args.get("algo")

    try:
        result = compute_route(_get_graph_data(), src, dst, algo)
    except InvalidCoordinatesError as e:
        return jsonify({"error": str(e)}), 400
    except (GraphFormatError, FileNotFoundError) as e:
        return _graph_unavailable(e)
    except PathReconstructionError as e:
        print(f"[ERROR] Route assembly failed: {e}", flush=True)
        traceback.print_exc()
        return jsonify({"error": f"Route assembly failed: {e}"}), 500
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(result.model_dump(by_alias=True))


def compare_route():
    """Run several strategies on the same pair for side-by-side comparison."""
    src = request.args.get("src")
    dst = request.args.get("dst")
    algos = request.args.get("algos")
    names = [name.strip() for name in algos.split(",") if name.strip()] if algos else None

    try:
        result = compare_algorithms(_get_graph_data(), src, dst, names)
    except InvalidCoordinatesError as e:
        return jsonify({"error": str(e)}), 400
    except (GraphFormatError, FileNotFoundError) as e:
        return _graph_unavailable(e)
    except PathReconstructionError as e:
        print(f"[ERROR] Comparison failed: {e}", flush=True)
        traceback.print_exc()
        return jsonify({"error": f"Comparison failed: {e}"}), 500
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(result.model_dump(by_alias=True))


def list_algorithms():
    """List all available search strategies."""
    return jsonify({"algorithms": list_all(), "details": describe_all()})


def graph_nodes():
    graph_data = _get_graph_data()
    return jsonify(FeatureCollection(**graph_data.nodes_geojson).model_dump())


def graph_stats():
    graph_data = _get_graph_data()
    return jsonify(GraphStats(**graph_data.stats()).model_dump())


def nearest_node():
    graph_data = _get_graph_data()
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400
    if data.get("lat") is None or data.get("lon") is None:
        return jsonify({"error": "lat and lon are required"}), 400
    try:
        req = NearestNodeRequest(lat=data["lat"], lon=data["lon"])
    except ValidationError:
        return jsonify({"error": "lat and lon must be numbers"}), 400

    try:
        node_id = graph_data.nearest_node(req.lat, req.lon)
        lat_out, lon_out = graph_data.node_coords(node_id)
    except (GraphFormatError, FileNotFoundError) as e:
        return _graph_unavailable(e)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(NearestNodeResponse(node_id=node_id, lat=lat_out, lon=lon_out).model_dump())


def refresh_graph_data():
    """Drop the cached graph so the next request reloads it from disk."""
    get_graph_data.cache_clear()
    new_graph = get_graph_data()
    new_graph.ensure_loaded()
    return jsonify({
        "status": "refreshed",
        "message": f"Graph data reloaded from {new_graph.path}.",
        "num_nodes": new_graph.num_nodes,
    })


def get_algorithm_config():
    """Get current algorithm configuration."""
    cfg = get_config()
    return jsonify(cfg.model_dump())


def update_algorithm_config():
    """Update algorithm configuration."""
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400
    if "default_algorithm" in data and data["default_algorithm"] not in list_all():
        return jsonify({"error": f"Algorithm '{data['default_algorithm']}' not found"}), 400
    try:
        updated = update_config(**data)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(updated.model_dump())


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    app.run(host=settings.host, port=settings.port, debug=True)
