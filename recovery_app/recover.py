"""
Recupera el secreto de uno o varios documentos de shares.

Uso:
    python -m recovery_app.recover samples/testcase1.json [otro.json ...]

Cada archivo se procesa de forma independiente; el código de salida es 1 si
alguno falla.
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from recovery.errors import RecoveryError
from recovery.shamir_core import recover_from_document
from recovery.share_loader import load_share_document
from recovery_app.config import LOG_FORMAT
from recovery_app.remote import request_reconstruction


def recover_file(path, exact=True, server_url=None) -> int:
    document = load_share_document(path)
    if server_url:
        return request_reconstruction(document, url=server_url, exact=exact)
    return recover_from_document(document, exact=exact).secret


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shamir-recover",
        description="Reconstruye el secreto (x=0) a partir de shares en JSON",
    )
    parser.add_argument("files", nargs="+", help="Documentos JSON con los shares")
    parser.add_argument(
        "--truncate-terms",
        action="store_true",
        help="Divide cada término de Lagrange truncando antes de sumar",
    )
    parser.add_argument("--server", metavar="URL", help="Delegar el cálculo en el servicio HTTP")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    # los secretos pueden superar los 4300 dígitos decimales
    if hasattr(sys, "set_int_max_str_digits"):
        sys.set_int_max_str_digits(0)
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)

    failures = 0
    for name in args.files:
        print(f"Procesando {name}...")
        try:
            secret = recover_file(name, exact=not args.truncate_terms, server_url=args.server)
        except RecoveryError as exc:
            failures += 1
            print(f"Error ({exc.kind.value}) en {name}: {exc.message}", file=sys.stderr)
            continue
        print(f"Secreto para {name}: {secret}")

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
