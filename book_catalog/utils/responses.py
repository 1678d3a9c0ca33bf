from datetime import datetime, timezone

from flask import jsonify, request


def error_response(status: int, message: str, errors: dict = None):
    body = {
        "status": status,
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": request.path,
    }
    if errors is not None:
        body["errors"] = errors
    return jsonify(body), status
