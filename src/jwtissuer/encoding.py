"""Serializacao canonica do header e das claims."""

import json
from typing import Any, Dict

from jwt.utils import base64url_encode

from jwtissuer.errors import EncodingError
from jwtissuer.signing import Header


def encode_json(data: Any, sort_keys: bool) -> bytes:
    """Serializa em JSON compacto UTF-8.

    Args:
        data (Any): Objeto a serializar.
        sort_keys (bool): Ordena as chaves de todos os objetos.

    Returns:
        bytes: Texto JSON em UTF-8.

    Raises:
        EncodingError: Se os dados nao forem representaveis em JSON.
    """
    try:
        text = json.dumps(
            data,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
            sort_keys=sort_keys,
        )
        return text.encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodingError("dados nao sao serializaveis em JSON") from exc


def b64url(data: bytes) -> str:
    return base64url_encode(data).decode("ascii")


class CanonicalEncoder:
    """Gera segmentos base64url identicos para conteudos semanticamente iguais."""

    def header_json(self, header: Header) -> bytes:
        # Header tem formato fixo: a ordem dos campos ja e deterministica.
        return encode_json(header.as_dict(), sort_keys=False)

    def claims_json(self, claims: Dict[str, Any]) -> bytes:
        for name in claims:
            if not isinstance(name, str):
                raise EncodingError(f"nome de claim deve ser string: {name!r}")
        return encode_json(claims, sort_keys=True)

    def encode_header(self, header: Header) -> str:
        return b64url(self.header_json(header))

    def encode_claims(self, claims: Dict[str, Any]) -> str:
        return b64url(self.claims_json(claims))
