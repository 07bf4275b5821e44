"""
Configuración centralizada de la reconstrucción de secretos
"""
import os

# Formato del documento de shares
THRESHOLD_ENTRY = "keys"   # Entrada reservada que contiene el umbral
THRESHOLD_FIELD = "k"      # Campo entero con el umbral dentro de THRESHOLD_ENTRY
VALUE_FIELD = "value"      # Cadena con la coordenada y codificada
BASE_FIELD = "base"        # Base numérica en la que viene VALUE_FIELD

# Bases admitidas por int(texto, base)
MIN_BASE = 2
MAX_BASE = 36

# Interpolación exacta (fracciones) o truncado por término como la referencia
EXACT_INTERPOLATION = os.getenv("SHAMIR_EXACT_INTERPOLATION", "true").lower() in {"1", "true", "yes"}

# Configuración del servidor
SERVER_HOST = os.getenv("SERVER_HOST", "127.0.0.1")
SERVER_PORT = int(os.getenv("SERVER_PORT", "5000"))
