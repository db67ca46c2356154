"""
Frontend routes.

Production serves the bundled frontend from the package's static directory.
In development (server.frontend_port > 0) every non-API path is forwarded to
the frontend dev server instead.
"""

import os
import requests
from flask import Blueprint, Response, current_app, jsonify, request, send_from_directory

STATIC_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "static")
PROXY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

# Hop-by-hop headers are not forwarded in either direction
EXCLUDED_HEADERS = {
    "connection",
    "content-encoding",
    "content-length",
    "host",
    "keep-alive",
    "transfer-encoding",
    "upgrade",
}

web = Blueprint("web", __name__)


def _proxy_to_frontend(path: str):
    """Forward the current request to the frontend dev server."""
    settings = current_app.config["SWITCHER_SETTINGS"]
    target_url = f"http://localhost:{settings.server.frontend_port}/{path}"
    headers = {k: v for k, v in request.headers if k.lower() not in EXCLUDED_HEADERS}

    try:
        upstream = requests.request(
            request.method,
            target_url,
            params=request.args.to_dict(flat=False),
            data=request.get_data(),
            headers=headers,
            allow_redirects=False,
            timeout=30,
        )
    except requests.exceptions.RequestException as e:
        current_app.logger.error("Error proxying to frontend dev server: %s", e)
        return jsonify({"error": f"Frontend dev server not available: {e}"}), 502

    response_headers = [
        (k, v) for k, v in upstream.headers.items() if k.lower() not in EXCLUDED_HEADERS
    ]
    return Response(upstream.content, upstream.status_code, response_headers)


@web.route("/", defaults={"path": ""}, methods=PROXY_METHODS)
@web.route("/<path:path>", methods=PROXY_METHODS)
def frontend(path):
    settings = current_app.config["SWITCHER_SETTINGS"]
    if settings.server.proxy_enabled:
        return _proxy_to_frontend(path)

    if request.method not in ("GET", "HEAD"):
        return jsonify({"error": "Method not allowed"}), 405
    # send_from_directory rejects paths escaping STATIC_DIR with a 404
    return send_from_directory(STATIC_DIR, path or "index.html")
