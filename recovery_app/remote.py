"""
Cliente HTTP del servicio de reconstrucción.

Envía un documento de shares a ``/api/reconstruct`` y traduce la respuesta
a un entero o a un ``RecoveryError`` con la misma etiqueta que devolvió el
servidor.
"""

import requests

from recovery.errors import ErrorKind, RecoveryError
from recovery_app.config import SERVER_URL, REQUEST_TIMEOUT


def request_reconstruction(document, url=SERVER_URL, exact=True, timeout=REQUEST_TIMEOUT) -> int:
    params = {} if exact else {"mode": "truncate"}
    try:
        response = requests.post(url, json=document, params=params, timeout=timeout)
    except requests.RequestException as exc:
        raise RecoveryError(
            ErrorKind.INPUT_UNREADABLE,
            f"No se pudo contactar con el servidor {url}: {exc}",
        ) from exc

    try:
        payload = response.json()
    except ValueError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}

    if response.status_code == 200:
        try:
            return int(payload["secret"])
        except (KeyError, TypeError, ValueError):
            raise RecoveryError(
                ErrorKind.INPUT_UNREADABLE,
                f"Respuesta inesperada del servidor {url}: falta un 'secret' numérico.",
            ) from None

    try:
        kind = ErrorKind(payload.get("kind"))
    except ValueError:
        kind = ErrorKind.INPUT_UNREADABLE
    message = payload.get("error") or f"Respuesta inesperada del servidor ({response.status_code})."
    raise RecoveryError(kind, message)
