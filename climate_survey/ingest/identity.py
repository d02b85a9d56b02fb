import hashlib
import hmac
import uuid
from typing import Iterable


def hash_address(address: str, salt: str) -> str:
    return hmac.new(salt.encode("utf-8"), address.encode("utf-8"), hashlib.sha256).hexdigest()


def client_hash(address: str, salt: str, whitelist: Iterable[str] = ()) -> str:
    """
    Deterministic salted hash of the client address.
    Allow-listed addresses (shared kiosks) get a fresh hash per request so
    they never trip the one-submission-per-client constraint.
    """
    address = address or ""
    if address and address in set(whitelist):
        return hash_address(f"{address}:{uuid.uuid4()}", salt)
    return hash_address(address, salt)
