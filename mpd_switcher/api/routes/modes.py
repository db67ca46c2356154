"""
API Implementation for the Modes domain.

GET /api/currentmode, GET /api/configparts, GET /api/switch/<mode>.
"""

from flask import Blueprint, current_app, jsonify
from mpd_switcher.api.schemas import (
    ErrorResponse,
    ModeListResponse,
    ModeResponse,
    SwitchResponse,
)
from mpd_switcher.core.errors import DiscoveryError, SwitcherError
from mpd_switcher.services.mode_service import ModeService

modes_bp = Blueprint("modes_api", __name__, url_prefix="/api")


def _service() -> ModeService:
    return current_app.extensions["mode_service"]


def _error(message: str, status: int):
    return jsonify(ErrorResponse(error=message).model_dump()), status


@modes_bp.route("/currentmode", methods=["GET"])
def current_mode():
    # Always 200: an undeterminable mode is reported as the "unknown" sentinel
    part = _service().current_mode()
    return jsonify(ModeResponse(key=part.key, name=part.name).model_dump())


@modes_bp.route("/configparts", methods=["GET"])
def config_parts():
    try:
        parts = _service().list_modes()
    except DiscoveryError as e:
        current_app.logger.error("Error discovering modes: %s", e)
        return _error(f"Failed to discover config parts: {e}", 500)

    body = ModeListResponse([ModeResponse(key=p.key, name=p.name) for p in parts])
    return jsonify(body.model_dump())


@modes_bp.route("/switch/<mode>", methods=["GET"])
def switch_mode(mode):
    try:
        message = _service().switch(mode)
    except DiscoveryError as e:
        current_app.logger.error("Error discovering modes: %s", e)
        return _error("Failed to discover config parts.", 500)
    except SwitcherError as e:
        current_app.logger.error("Switch to '%s' failed: %s", mode, e)
        return _error(str(e), e.http_status)

    return jsonify(SwitchResponse(message=message).model_dump())


@modes_bp.route("/<path:path>", methods=["GET", "POST", "PUT", "DELETE", "PATCH"])
def api_not_found(path):
    return _error(f"Unknown API endpoint: /api/{path}", 404)
