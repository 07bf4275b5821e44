# Reconstrucción de Shamir sobre enteros (sin campo finito)

# ---------------------------
# IMPORTS
# ---------------------------
from __future__ import annotations

import logging
import re
from fractions import Fraction
from typing import Iterable, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from recovery import config
from recovery.errors import ErrorKind, InsufficientPointsError, RecoveryError

logger = logging.getLogger(__name__)

# x siempre en base 10: signo opcional y dígitos ASCII
_DECIMAL_KEY = re.compile(r"^[+-]?[0-9]+$")

# int() rechaza cadenas de más de 4300 dígitos en bases que no son potencia de 2
_DIGIT_CHUNK = 4000
_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


# ---------------------------
# TIPOS
# ---------------------------
class SharePoint(NamedTuple):
    """Un share (x, y). Se ordena sólo por x, ver ``sort_key``."""

    x: int
    y: int


def sort_key(point: SharePoint) -> int:
    return point.x


class SkippedShare(NamedTuple):
    key: str
    kind: ErrorKind
    message: str

    def to_dict(self) -> dict:
        return {"key": self.key, "kind": self.kind.value, "message": self.message}


class DecodedShares(NamedTuple):
    points: List[SharePoint]      # orden del documento, sin ordenar
    threshold: int
    skipped: List[SkippedShare]


class Recovery(NamedTuple):
    secret: int
    threshold: int
    available: int
    selected: Tuple[SharePoint, ...]
    skipped: List[SkippedShare]


# ---------------------------
# DECODIFICACIÓN: documento -> puntos
# ---------------------------
def _parse_x(key) -> int:
    if not isinstance(key, str) or not _DECIMAL_KEY.match(key):
        raise ValueError(f"la clave {key!r} no es un entero en base 10")
    return int(key, 10)


def _int_from_digits(text: str, base: int) -> int:
    """int(text, base) sin el límite de dígitos de int() (Python 3.11+)."""
    if len(text) <= _DIGIT_CHUNK:
        return int(text, base)
    # el signo se aplica al final; int() sólo ve dígitos
    sign = -1 if text[0] == "-" else 1
    if text[0] in "+-":
        text = text[1:]
    if text[:1] in ("+", "-"):
        raise ValueError("signo duplicado")
    valid = _DIGITS[:base]
    # primer bloque por int() (admite prefijos 0x/0b/0o), el resto sólo dígitos
    result = int(text[:_DIGIT_CHUNK], base)
    for start in range(_DIGIT_CHUNK, len(text), _DIGIT_CHUNK):
        chunk = text[start:start + _DIGIT_CHUNK]
        if not set(chunk.lower()) <= set(valid):
            raise ValueError(f"dígitos no válidos en base {base}")
        # desplazamos lo acumulado y sumamos el bloque
        result = result * base ** len(chunk) + int(chunk, base)
    return sign * result


def _parse_y(value, base) -> int:
    if not isinstance(value, str):
        raise ValueError(f"'{config.VALUE_FIELD}' debe ser una cadena")
    if isinstance(base, bool) or not isinstance(base, int):
        raise ValueError(f"'{config.BASE_FIELD}' debe ser un entero")
    if not config.MIN_BASE <= base <= config.MAX_BASE:
        raise ValueError(f"base {base} fuera del rango {config.MIN_BASE}-{config.MAX_BASE}")
    # int() tolera espacios y '_' entre dígitos; aquí no
    if not value.isascii() or value != value.strip() or "_" in value:
        raise ValueError(f"valor {value!r} no válido en base {base}")
    try:
        return _int_from_digits(value, base)
    except ValueError:
        raise ValueError(f"valor {value!r} no válido en base {base}") from None


def read_threshold(document: Mapping) -> int:
    """Extrae el umbral k de la entrada reservada del documento."""
    entry = document.get(config.THRESHOLD_ENTRY)
    if not isinstance(entry, Mapping) or config.THRESHOLD_FIELD not in entry:
        raise RecoveryError(
            ErrorKind.MISSING_THRESHOLD,
            f"No se encontró '{config.THRESHOLD_FIELD}' en el objeto '{config.THRESHOLD_ENTRY}'.",
        )
    k = entry[config.THRESHOLD_FIELD]
    if isinstance(k, bool) or not isinstance(k, int) or k < 1:
        raise RecoveryError(
            ErrorKind.MISSING_THRESHOLD,
            f"El umbral '{config.THRESHOLD_FIELD}' debe ser un entero positivo (recibido {k!r}).",
        )
    return k


def decode_points(document: Mapping) -> DecodedShares:
    """
    Convierte el documento de shares en puntos (x, y) y el umbral k.

    Las entradas mal formadas se descartan con un aviso y quedan registradas
    en ``skipped``; sólo un documento ilegible o sin umbral aborta.
    """
    if not isinstance(document, Mapping):
        raise RecoveryError(
            ErrorKind.INPUT_UNREADABLE,
            "El documento de shares debe ser un objeto JSON.",
        )
    k = read_threshold(document)

    points: List[SharePoint] = []
    skipped: List[SkippedShare] = []

    def skip(key, reason: str) -> None:
        message = f"Share '{key}' descartado: {reason}"
        logger.warning(message)
        skipped.append(SkippedShare(str(key), ErrorKind.MALFORMED_POINT, message))

    for key, entry in document.items():
        if key == config.THRESHOLD_ENTRY:
            continue
        try:
            x = _parse_x(key)
        except ValueError as exc:
            skip(key, str(exc))
            continue

        if not isinstance(entry, Mapping) or config.VALUE_FIELD not in entry or config.BASE_FIELD not in entry:
            skip(key, f"faltan '{config.VALUE_FIELD}' o '{config.BASE_FIELD}'")
            continue

        try:
            y = _parse_y(entry[config.VALUE_FIELD], entry[config.BASE_FIELD])
        except ValueError as exc:
            skip(key, str(exc))
            continue

        points.append(SharePoint(x, y))

    return DecodedShares(points, k, skipped)


# ---------------------------
# SELECCIÓN: primeros k por x ascendente
# ---------------------------
def select_shares(points: Iterable[SharePoint], k: int) -> Tuple[SharePoint, ...]:
    """
    Ordena por x y devuelve los k primeros.

    La ordenación es estable: si llegan dos puntos con la misma x conservan
    el orden de entrada (el reconstructor los rechazará si ambos se eligen).
    """
    if isinstance(k, bool) or not isinstance(k, int) or k < 1:
        raise RecoveryError(ErrorKind.MISSING_THRESHOLD, f"Umbral no válido: {k!r}.")
    ordered = sorted(points, key=sort_key)
    if len(ordered) < k:
        raise InsufficientPointsError(len(ordered), k)
    return tuple(ordered[:k])


# ---------------------------
# RECONSTRUCCIÓN: Lagrange en x=0
# ---------------------------
def _trunc_div(numerator: int, denominator: int) -> int:
    # división entera truncando hacia cero (// de Python redondea hacia -inf)
    quotient = abs(numerator) // abs(denominator)
    return -quotient if (numerator < 0) != (denominator < 0) else quotient


def lagrange_terms(points: Sequence[SharePoint]) -> List[Tuple[int, int]]:
    """Devuelve (numerador, denominador) de cada término de Lagrange en x=0."""
    terms = []
    # iteramos cada punto j
    for j, (xj, yj) in enumerate(points):
        # el numerador arranca en y_j para no multiplicar después
        num = yj
        den = 1
        for i, (xi, _) in enumerate(points):
            if i == j:
                continue
            # (0 - x_i): la base de Lagrange evaluada en x=0
            num *= -xi
            # (x_j - x_i) no puede ser 0: dos shares con la misma x
            diff = xj - xi
            if diff == 0:
                raise RecoveryError(
                    ErrorKind.DEGENERATE_GEOMETRY,
                    f"Valores x duplicados ({xj}). No se puede interpolar con Lagrange.",
                )
            den *= diff
        # guardamos la fracción sin dividir; cada modo decide cómo
        terms.append((num, den))
    return terms


def lagrange_at_zero(points: Sequence[SharePoint]) -> Fraction:
    """Valor exacto (racional) en x=0 del polinomio que pasa por ``points``."""
    total = Fraction(0)
    for num, den in lagrange_terms(points):
        # Fraction reduce en cada suma; el resultado es exacto
        total += Fraction(num, den)
    return total


def reconstruct_secret(points: Sequence[SharePoint], exact: Optional[bool] = None) -> int:
    """
    Recupera el término independiente a partir de los puntos seleccionados.

    - exact=True: suma exacta de fracciones; se trunca hacia cero sólo al final.
    - exact=False: cada término se divide truncando antes de sumar.
    Por defecto se usa ``config.EXACT_INTERPOLATION``.
    """
    if exact is None:
        exact = config.EXACT_INTERPOLATION
    points = list(points)
    # sin puntos no hay polinomio que interpolar
    if not points:
        raise InsufficientPointsError(0, 1)

    if exact:
        # int() sobre Fraction trunca hacia cero
        return int(lagrange_at_zero(points))
    # división entera por término: cada cociente se trunca antes de sumar
    return sum(_trunc_div(num, den) for num, den in lagrange_terms(points))


# ---------------------------
# PIPELINE COMPLETO
# ---------------------------
def recover_from_document(document: Mapping, exact: Optional[bool] = None) -> Recovery:
    """decodificar -> seleccionar k -> reconstruir."""
    decoded = decode_points(document)
    selected = select_shares(decoded.points, decoded.threshold)
    secret = reconstruct_secret(selected, exact=exact)
    logger.info(
        "Secreto reconstruido con k=%d de %d puntos válidos (%d descartados)",
        decoded.threshold,
        len(decoded.points),
        len(decoded.skipped),
    )
    return Recovery(secret, decoded.threshold, len(decoded.points), selected, decoded.skipped)
