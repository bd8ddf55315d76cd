"""Read the public numbers (n, e) out of an RSA key file."""
from pathlib import Path
from typing import Tuple, Union

from Crypto.PublicKey import RSA

from .errors import InvalidKeyFile


def load_public_numbers(path: Union[str, Path]) -> Tuple[int, int]:
    """Return (n, e) from a PEM, DER or OpenSSH RSA key, public or private."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise InvalidKeyFile(f"cannot read {path}: {exc}") from exc
    try:
        key = RSA.import_key(data)
    except (ValueError, IndexError, TypeError) as exc:
        raise InvalidKeyFile(f"{path} is not an RSA key: {exc}") from exc
    return int(key.n), int(key.e)
