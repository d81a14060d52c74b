"""Composicao do header JWS e despacho da assinatura por algoritmo.

Classes principais:
    - SignatureAlgorithm: Enum com os algoritmos suportados
    - HeaderComposer: Monta o header de acordo com o algoritmo
    - SigningDispatcher: Assina header.body e monta o token compacto
    - RSASigner: Primitiva RSASSA-PKCS1-v1_5 com SHA-256
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Protocol, Tuple, Union

from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey
from jwt.algorithms import RSAAlgorithm
from jwt.utils import base64url_encode

from jwtissuer.errors import KeyResolutionError, SigningError, UnsupportedAlgorithmError
from jwtissuer.keys import KeyResolver, SigningKey


class SignatureAlgorithm(Enum):
    """Algoritmos de assinatura suportados, com o codigo JWS de cada um."""

    NONE = "none"
    RSA_SHA256 = "RS256"


_ALGORITHM_ALIASES: Dict[str, SignatureAlgorithm] = {
    "NONE": SignatureAlgorithm.NONE,
    "SHA256WITHRSA": SignatureAlgorithm.RSA_SHA256,
    "RSA-SHA256": SignatureAlgorithm.RSA_SHA256,
    "RSA_SHA256": SignatureAlgorithm.RSA_SHA256,
    "RS256": SignatureAlgorithm.RSA_SHA256,
}


def parse_algorithm(value: Union[str, SignatureAlgorithm]) -> SignatureAlgorithm:
    """Converte o nome configurado do algoritmo para SignatureAlgorithm.

    Args:
        value: Enum ou nome do algoritmo (``NONE``, ``SHA256withRSA``, ``RS256``...).

    Returns:
        SignatureAlgorithm: Algoritmo correspondente.

    Raises:
        UnsupportedAlgorithmError: Se o algoritmo nao for suportado.
    """
    if isinstance(value, SignatureAlgorithm):
        return value
    if not isinstance(value, str) or not value.strip():
        raise UnsupportedAlgorithmError(f"algoritmo de assinatura invalido: {value!r}")
    try:
        return _ALGORITHM_ALIASES[value.strip().upper()]
    except KeyError:
        raise UnsupportedAlgorithmError(
            f"algoritmo de assinatura nao suportado: {value}"
        ) from None


@dataclass(frozen=True)
class Header:
    """Header JWS de formato fixo."""

    alg: str
    typ: str = "JWT"
    x5t: Optional[str] = None
    kid: Optional[str] = None

    def as_dict(self) -> Dict[str, str]:
        header = {"typ": self.typ, "alg": self.alg}
        if self.x5t is not None:
            header["x5t"] = self.x5t
        if self.kid is not None:
            header["kid"] = self.kid
        return header


class Signer(Protocol):
    """Interface para a primitiva de assinatura."""

    def sign(self, data: bytes, key: SigningKey) -> bytes:
        """Assina os bytes com a chave informada.

        Raises:
            SigningError: Se a assinatura falhar.
        """


class RSASigner:
    """Assinatura RS256 usando o RSAAlgorithm do PyJWT."""

    def __init__(self) -> None:
        self._algorithm = RSAAlgorithm(RSAAlgorithm.SHA256)

    def sign(self, data: bytes, key: SigningKey) -> bytes:
        private_key = getattr(key, "private_key", None)
        if not isinstance(private_key, RSAPrivateKey):
            raise SigningError("chave de assinatura nao e uma chave privada RSA")
        try:
            return self._algorithm.sign(data, private_key)
        except (TypeError, ValueError) as e:
            raise SigningError("falha ao assinar com RSA-SHA256") from e


class HeaderComposer:
    """Monta o header JWS de acordo com o algoritmo configurado."""

    def __init__(self, key_resolver: Optional[KeyResolver], logger: logging.Logger) -> None:
        self._key_resolver = key_resolver
        self._logger = logger

    def _resolve_key(self, tenant: str) -> SigningKey:
        if self._key_resolver is None:
            raise KeyResolutionError("nenhum key_resolver configurado para assinatura RSA")
        try:
            key = self._key_resolver.resolve_signing_key(tenant)
        except KeyResolutionError:
            raise
        except Exception as e:
            self._logger.exception("Falha inesperada ao obter chave. tenant=%s", tenant)
            raise KeyResolutionError(f"falha ao obter chave do tenant {tenant}") from e
        if key is None:
            raise KeyResolutionError(f"nenhum certificado disponivel para o tenant {tenant}")
        if not key.matches_certificate():
            raise KeyResolutionError(
                f"certificado do tenant {tenant} nao corresponde a chave privada"
            )
        return key

    def compose(
        self, algorithm: Union[str, SignatureAlgorithm], tenant: str
    ) -> Tuple[Header, Optional[SigningKey]]:
        """Monta o header e devolve a chave que sera usada na assinatura.

        Args:
            algorithm: Algoritmo de assinatura configurado.
            tenant (str): Dominio do tenant do usuario.

        Returns:
            Tuple[Header, Optional[SigningKey]]: Header e chave (None para ``NONE``).

        Raises:
            UnsupportedAlgorithmError: Se o algoritmo nao for suportado.
            KeyResolutionError: Se nao houver certificado para o tenant.
        """
        alg = parse_algorithm(algorithm)

        if alg is SignatureAlgorithm.NONE:
            return Header(alg=alg.value), None

        if alg is SignatureAlgorithm.RSA_SHA256:
            key = self._resolve_key(tenant)
            self._logger.debug("Certificado resolvido para o tenant %s", tenant)
            return Header(alg=alg.value, x5t=key.thumbprint, kid=key.key_id), key

        raise UnsupportedAlgorithmError(f"algoritmo de assinatura nao suportado: {alg}")


class SigningDispatcher:
    """Produz o token compacto ``header.body.signature``."""

    def __init__(self, signer: Signer, logger: logging.Logger) -> None:
        self._signer = signer
        self._logger = logger

    def assemble(
        self,
        header_segment: str,
        body_segment: str,
        algorithm: Union[str, SignatureAlgorithm],
        key: Optional[SigningKey] = None,
    ) -> str:
        """Assina (se necessario) e concatena os segmentos.

        Args:
            header_segment (str): Header em base64url.
            body_segment (str): Claims em base64url.
            algorithm: Algoritmo de assinatura.
            key (Optional[SigningKey]): Chave resolvida pelo HeaderComposer.

        Returns:
            str: Token JWS compacto.

        Raises:
            UnsupportedAlgorithmError: Se o algoritmo nao for suportado.
            SigningError: Se a assinatura falhar.
        """
        alg = parse_algorithm(algorithm)
        assertion = f"{header_segment}.{body_segment}"

        if alg is SignatureAlgorithm.NONE:
            return assertion + "."

        if alg is not SignatureAlgorithm.RSA_SHA256:
            raise UnsupportedAlgorithmError(f"algoritmo de assinatura nao suportado: {alg}")

        if key is None:
            raise SigningError("chave de assinatura ausente para RSA-SHA256")

        try:
            signature = self._signer.sign(assertion.encode("ascii"), key)
        except SigningError:
            raise
        except Exception as e:
            # Última barreira. Nunca devolver token parcialmente assinado.
            self._logger.exception("Falha inesperada ao assinar JWT")
            raise SigningError("falha inesperada ao assinar token") from e

        if not isinstance(signature, bytes) or not signature:
            raise SigningError("assinatura vazia retornada pelo signer")

        return f"{assertion}.{base64url_encode(signature).decode('ascii')}"
