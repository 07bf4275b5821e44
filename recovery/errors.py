"""
Errores de la reconstrucción.

Un único tipo de excepción con una etiqueta ``kind`` permite distinguir los
errores recuperables (un share mal formado: se descarta y se sigue) de los
fatales (se aborta la ejecución sin devolver un secreto parcial).
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INPUT_UNREADABLE = "input_unreadable"
    MISSING_THRESHOLD = "missing_threshold"
    MALFORMED_POINT = "malformed_point"
    INSUFFICIENT_POINTS = "insufficient_points"
    DEGENERATE_GEOMETRY = "degenerate_geometry"

    @property
    def fatal(self) -> bool:
        return self is not ErrorKind.MALFORMED_POINT


class RecoveryError(Exception):
    """Fallo etiquetado de alguna etapa de la reconstrucción."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def fatal(self) -> bool:
        return self.kind.fatal

    def to_dict(self) -> dict:
        return {"error": self.message, "kind": self.kind.value}


class InsufficientPointsError(RecoveryError):
    """No hay suficientes shares válidos para alcanzar el umbral."""

    def __init__(self, available: int, required: int) -> None:
        super().__init__(
            ErrorKind.INSUFFICIENT_POINTS,
            f"No hay suficientes puntos válidos (n={available}) para el umbral requerido k={required}.",
        )
        self.available = available
        self.required = required
