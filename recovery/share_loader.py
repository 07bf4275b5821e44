"""Lectura de documentos de shares desde disco."""

import json
from pathlib import Path

from recovery.errors import ErrorKind, RecoveryError


def load_share_document(path) -> dict:
    """Carga un documento JSON de shares. Cualquier fallo es fatal."""
    file_path = Path(path).expanduser()
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RecoveryError(
            ErrorKind.INPUT_UNREADABLE,
            f"No se pudo abrir el archivo {file_path}: {exc.strerror or exc}",
        ) from exc
    except UnicodeDecodeError as exc:
        raise RecoveryError(
            ErrorKind.INPUT_UNREADABLE,
            f"El archivo {file_path} no está codificado en UTF-8: {exc.reason}",
        ) from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise RecoveryError(
            ErrorKind.INPUT_UNREADABLE,
            f"JSON no válido en {file_path}: {exc}",
        ) from exc

    if not isinstance(data, dict):
        raise RecoveryError(
            ErrorKind.INPUT_UNREADABLE,
            f"El contenido de {file_path} debe ser un objeto JSON.",
        )
    return data
