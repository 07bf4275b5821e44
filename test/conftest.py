import importlib
import random
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def polynom(x, coeffs):
    """Evalúa sum(coeffs[i] * x**i) sin módulo."""
    total = 0
    for coeff in reversed(coeffs):
        total = total * x + coeff
    return total


def to_base(value, base):
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    value = abs(value)
    digits = []
    while value:
        value, rem = divmod(value, base)
        digits.append(DIGITS[rem])
    return sign + "".join(reversed(digits))


def build_document(coeffs, xs, k=None, bases=None):
    """Documento de shares con los puntos (x, p(x)) del polinomio ``coeffs``."""
    k = len(coeffs) if k is None else k
    rng = random.Random(len(xs))
    document = {"keys": {"n": len(xs), "k": k}}
    for index, x in enumerate(xs):
        base = bases[index] if bases else rng.randint(2, 36)
        document[str(x)] = {"base": base, "value": to_base(polynom(x, coeffs), base)}
    return document


@pytest.fixture
def make_document():
    return build_document


@pytest.fixture
def encode():
    return to_base


def _build_flask_app(monkeypatch, extra_env=None):
    monkeypatch.setenv("FRONTEND_ORIGIN", "http://127.0.0.1:5000")

    if extra_env:
        for key, value in extra_env.items():
            if value is None:
                monkeypatch.delenv(key, raising=False)
            else:
                monkeypatch.setenv(key, value)

    return importlib.reload(importlib.import_module("recovery_app.main"))


@pytest.fixture
def flask_env(monkeypatch):
    """Servidor Flask aislado sin rate limiting."""
    return _build_flask_app(monkeypatch, {"LIMITER_ENABLED": "false"})


@pytest.fixture
def limited_flask_env(monkeypatch):
    """Flask app con rate limiting habilitado y umbral bajo para pruebas."""
    extra_env = {
        "LIMITER_ENABLED": "true",
        "LIMITER_DEFAULT_RATE": "3 per minute",
    }
    return _build_flask_app(monkeypatch, extra_env)


@pytest.fixture
def sample_path():
    return PROJECT_ROOT / "samples" / "testcase1.json"
