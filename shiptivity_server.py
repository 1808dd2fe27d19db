#!/usr/bin/env python3
"""
Shiptivity Server
-----------------
JSON API over the SQLite client board. Clients sit in three swimlanes
(backlog, in-progress, complete); within a lane, priority 1 is on top.

Usage:
    shiptivity-server --port 3001 --db ./clients.db
    shiptivity-server --reset          # restore the seed data first

API:
    GET /                         → { message }
    GET /api/v1/clients           → [client, ...]   (?status=backlog|in-progress|complete)
    GET /api/v1/clients/<id>      → client
    PUT /api/v1/clients/<id>      → JSON body: { status?, priority? }
                                    Returns: every client after re-ranking
    GET /api/v1/stats             → { total, by_status }
    GET /health                   → { status, db }

Errors:
    400 → { message, long_message } for bad id / status / priority
    500 → { message, long_message } for storage or ranking failures
"""

import hmac
import logging
import sys
from functools import wraps

from flask import Flask, current_app, jsonify, request

from shiptivity.config import Config
from shiptivity.errors import ClientError, StoreError
from shiptivity.rerank import InvariantViolation, check_dense, lane_counts, rerank
from shiptivity.schema import Lane
from shiptivity.store import ClientStore
from shiptivity.validator import validate_id, validate_priority, validate_status

logger = logging.getLogger("shiptivity")


def _store() -> ClientStore:
    return current_app.extensions["shiptivity_store"]


# ── Auth ─────────────────────────────────────────────────────────────────────

def require_api_key(f):
    """Decorator: when an API secret is configured, require a matching X-API-Key header."""
    @wraps(f)
    def decorated(*args, **kwargs):
        secret = current_app.config.get("API_SECRET", "")
        if not secret:
            return f(*args, **kwargs)
        provided = request.headers.get("X-API-Key", "").strip()
        if not hmac.compare_digest(provided, secret):
            code = 401 if not provided else 403
            logger.warning(f"Rejected write to {request.path}: bad API key")
            return jsonify({"message": "Unauthorized", "long_message": "A valid X-API-Key header is required."}), code
        return f(*args, **kwargs)
    return decorated


# ── App factory ──────────────────────────────────────────────────────────────

def create_app(store: ClientStore, api_secret: str = "") -> Flask:
    """Build the Flask app around an explicitly owned store."""
    app = Flask(__name__)
    app.config["API_SECRET"] = api_secret
    app.extensions["shiptivity_store"] = store

    # ── Error handlers ───────────────────────────────────────────────────────

    @app.errorhandler(ClientError)
    def handle_client_error(e: ClientError):
        logger.warning(f"{request.method} {request.path}: {e}")
        return jsonify(e.to_dict()), 400

    @app.errorhandler(StoreError)
    def handle_store_error(e: StoreError):
        logger.error(f"{request.method} {request.path}: store failure: {e}")
        return jsonify(e.to_dict()), 500

    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(e: InvariantViolation):
        logger.error(f"{request.method} {request.path}: ranking invariant broken: {e}")
        return jsonify({
            "message": "Internal ranking error.",
            "long_message": "The update was aborted and nothing was saved.",
        }), 500

    # ── Routes ───────────────────────────────────────────────────────────────

    @app.route("/")
    def index():
        return jsonify({"message": "SHIPTIVITY API. Read documentation to see API docs"})

    @app.route("/api/v1/clients", methods=["GET"])
    def api_clients():
        """List all clients, optionally filtered by ?status=."""
        status = validate_status(request.args.get("status"))
        if status:
            clients = _store().list_by_status(status)
        else:
            clients = _store().list_all()
        return jsonify([c.to_dict() for c in clients])

    @app.route("/api/v1/clients/<client_id>", methods=["GET"])
    def api_client(client_id):
        """Get a client by id."""
        cid = validate_id(_store(), client_id)
        return jsonify(_store().get(cid).to_dict())

    @app.route("/api/v1/clients/<client_id>", methods=["PUT"])
    @require_api_key
    def api_update_client(client_id):
        """
        Move a client to another lane and/or priority.

        Body (both optional):
            status:   'backlog' | 'in-progress' | 'complete'
            priority: positive integer, 1 = top of the lane

        Every other client in the affected lanes is re-ranked so each lane
        stays numbered 1..N. Returns the full client list.
        """
        data = request.get_json(force=True, silent=True)
        if not isinstance(data, dict):
            data = {}
        store = _store()

        with store.lock:
            cid = validate_id(store, client_id)
            status = validate_status(data.get("status"))
            priority = validate_priority(data.get("priority"))

            clients = store.list_all()
            updated = rerank(clients, cid, status=status, priority=priority)
            check_dense(updated)
            store.save_all(updated)

        moved = next(c for c in updated if c.id == cid)
        logger.info(
            f"Client {cid} now {moved.status.value} #{moved.priority} "
            f"(requested status={data.get('status')!r}, priority={data.get('priority')!r})"
        )
        return jsonify([c.to_dict() for c in updated])

    @app.route("/api/v1/stats")
    def api_stats():
        """Client counts per lane."""
        counts = lane_counts(_store().list_all())
        return jsonify({
            "total": sum(counts.values()),
            "by_status": {lane.value: counts[lane] for lane in Lane},
        })

    @app.route("/health")
    def health():
        return jsonify({"status": "ok", "db": _store().db_path})

    return app


# ── Main ─────────────────────────────────────────────────────────────────────

def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description="Shiptivity Server")
    parser.add_argument("--config", help="Path to shiptivity.yaml")
    parser.add_argument("--host", help="Bind address (use 0.0.0.0 to expose on network)")
    parser.add_argument("--port", type=int)
    parser.add_argument("--db", help="Path to clients.db (overrides SHIPTIVITY_DB env var)")
    parser.add_argument("--reset", action="store_true",
                        help="Restore the seed clients before serving")
    args = parser.parse_args(argv)

    cfg = Config.load(args.config)
    if args.host:
        cfg.host = args.host
    if args.port:
        cfg.port = args.port
    if args.db:
        cfg.db_path = args.db

    logging.basicConfig(
        level=getattr(logging, str(cfg.log_level).upper(), logging.INFO),
        format="%(asctime)s [shiptivity] %(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    store = ClientStore(cfg.db_path)
    try:
        if args.reset:
            store.reset()
        app = create_app(store, api_secret=cfg.api_secret)
        logger.info(f"app running on http://{cfg.host}:{cfg.port} (db: {cfg.db_path})")
        app.run(host=cfg.host, port=cfg.port, debug=False, threaded=True)
    finally:
        # Explicit shutdown hook: the store is closed however run() exits.
        store.close()


if __name__ == "__main__":
    main()
