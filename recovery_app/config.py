# Configuración del cliente
import os

from recovery.config import SERVER_HOST, SERVER_PORT

SERVER_URL = os.getenv("RECOVERY_SERVER_URL", f"http://{SERVER_HOST}:{SERVER_PORT}/api/reconstruct")
REQUEST_TIMEOUT = float(os.getenv("RECOVERY_REQUEST_TIMEOUT", "15"))

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
