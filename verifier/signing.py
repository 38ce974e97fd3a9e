import hashlib
import logging
import secrets
import string
import time
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Ordered (name, value) pairs; sorted by name when signed
ParameterSet = List[Tuple[str, str]]

SIGNED_KEYS = ("app_id", "time_stamp", "nonce_str", "image")

NONCE_ALPHABET = string.ascii_lowercase


def generate_nonce(length: int = 30) -> str:
    """Random lowercase string used once per request"""
    return "".join(secrets.choice(NONCE_ALPHABET) for _ in range(length))


def build_parameters(
    app_id: int,
    image: str,
    time_stamp: Optional[str] = None,
    nonce_str: Optional[str] = None,
    nonce_length: int = 30,
) -> ParameterSet:
    """
    Build the four signed request parameters.

    Args:
        app_id: Tencent AI application id
        image: Escaped base64 JPEG payload
        time_stamp: Unix seconds; defaults to now
        nonce_str: Defaults to a fresh random string
    """
    if time_stamp is None:
        time_stamp = str(int(time.time()))
    if nonce_str is None:
        nonce_str = generate_nonce(nonce_length)

    return [
        ("app_id", str(app_id)),
        ("time_stamp", time_stamp),
        ("nonce_str", nonce_str),
        ("image", image),
    ]


@dataclass(frozen=True)
class SignedRequestForm:
    app_id: str
    time_stamp: str
    nonce_str: str
    image: str
    sign: str

    def encode(self) -> str:
        """
        Render the form body.

        Every value is already form-safe (digits, lowercase letters, hex and
        escaped base64), so the pairs are joined without further quoting and
        the service sees exactly the values that were signed.
        """
        fields = [
            ("app_id", self.app_id),
            ("time_stamp", self.time_stamp),
            ("nonce_str", self.nonce_str),
            ("image", self.image),
            ("sign", self.sign),
        ]
        return "&".join(f"{key}={value}" for key, value in fields)


class RequestSigner:
    """Computes the Tencent AI request signature over a parameter set"""

    def __init__(self, app_key: str):
        self._app_key = app_key

    def canonical_string(self, params: Iterable[Tuple[str, str]]) -> str:
        pairs = [f"{key}={value}" for key, value in sorted(params, key=lambda p: p[0])]
        pairs.append(f"app_key={self._app_key}")
        return "&".join(pairs)

    def sign(self, params: Iterable[Tuple[str, str]]) -> str:
        """Uppercase hex MD5 of the canonical string"""
        to_hash = self.canonical_string(params)
        return hashlib.md5(to_hash.encode("utf-8")).hexdigest().upper()

    def sign_form(self, params: ParameterSet) -> SignedRequestForm:
        values = dict(params)
        if len(values) != len(params) or set(values) != set(SIGNED_KEYS):
            raise ValueError(
                f"Parameter set must contain exactly {', '.join(SIGNED_KEYS)}; "
                f"got {', '.join(key for key, _ in params)}"
            )

        sign = self.sign(params)
        logger.debug("Request signature: %s", sign)

        return SignedRequestForm(
            app_id=values["app_id"],
            time_stamp=values["time_stamp"],
            nonce_str=values["nonce_str"],
            image=values["image"],
            sign=sign,
        )
