from flask import Flask, request, jsonify
import os
import sys

from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Obtener el directorio raíz del proyecto
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from recovery.errors import ErrorKind, RecoveryError
from recovery.shamir_core import recover_from_document
from recovery.config import SERVER_HOST, SERVER_PORT

# los secretos se devuelven en base 10 sin límite de dígitos
if hasattr(sys, "set_int_max_str_digits"):
    sys.set_int_max_str_digits(0)

app = Flask(__name__)

frontend_origin = os.getenv("FRONTEND_ORIGIN", "http://127.0.0.1:5000")
CORS(
    app,
    resources={"/api/*": {"origins": frontend_origin}},
    supports_credentials=False,
    expose_headers=["Content-Type"],
    allow_headers=["Content-Type"],
)

limiter_enabled = os.getenv("LIMITER_ENABLED", "true").lower() in {"1", "true", "yes"}
limiter_rate = os.getenv("LIMITER_DEFAULT_RATE", "60 per minute")
if limiter_enabled:
    limiter = Limiter(
        get_remote_address,
        app=app,
        default_limits=[limiter_rate],
        storage_uri="memory://",
    )
else:
    limiter = Limiter(get_remote_address, app=app, enabled=False)


@app.errorhandler(429)
def handle_rate_limit(exc):
    return jsonify({"error": "Límite de solicitudes excedido. Intenta nuevamente más tarde."}), 429


def error_response(exc: RecoveryError):
    status = 400 if exc.kind is ErrorKind.INPUT_UNREADABLE else 422
    return jsonify(exc.to_dict()), status


@app.route("/api/health")
def health():
    return jsonify({"status": "ok"})


@app.route("/api/reconstruct", methods=["POST"])
@limiter.limit("30 per minute")
def reconstruct():
    document = request.get_json(silent=True)
    if document is None:
        return error_response(
            RecoveryError(ErrorKind.INPUT_UNREADABLE, "El cuerpo de la petición no es JSON válido.")
        )

    exact = request.args.get("mode", "exact") != "truncate"

    try:
        result = recover_from_document(document, exact=exact)
    except RecoveryError as exc:
        return error_response(exc)

    # los enteros grandes viajan como cadenas en base 10
    return jsonify({
        "secret": str(result.secret),
        "threshold": result.threshold,
        "available": result.available,
        "points_used": [str(point.x) for point in result.selected],
        "skipped": [skipped.to_dict() for skipped in result.skipped],
    })


if __name__ == "__main__":
    print(f"Servidor en http://{SERVER_HOST}:{SERVER_PORT}")
    app.run(host=SERVER_HOST, port=SERVER_PORT)
