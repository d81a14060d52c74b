"""Material de chave para assinatura assimetrica."""

from dataclasses import dataclass
from typing import Dict, Optional, Protocol, Union

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey
from jwt.utils import base64url_encode

from jwtissuer.errors import KeyResolutionError

PemData = Union[str, bytes]


@dataclass(frozen=True)
class SigningKey:
    """Chave privada RSA e o certificado publicado para um tenant."""

    private_key: RSAPrivateKey
    certificate: x509.Certificate
    key_id: Optional[str] = None

    @property
    def thumbprint(self) -> str:
        """Thumbprint SHA-1 do certificado em base64url (valor do header ``x5t``)."""
        digest = self.certificate.fingerprint(hashes.SHA1())
        return base64url_encode(digest).decode("ascii")

    def matches_certificate(self) -> bool:
        """Indica se a chave publica do certificado corresponde a chave privada."""
        try:
            cert_numbers = self.certificate.public_key().public_numbers()
            key_numbers = self.private_key.public_key().public_numbers()
        except AttributeError:
            return False
        return cert_numbers == key_numbers


class KeyResolver(Protocol):
    """Interface para provedores de chave de assinatura por tenant."""

    def resolve_signing_key(self, tenant: str) -> Optional[SigningKey]:
        """Obtem a chave de assinatura do tenant.

        Args:
            tenant (str): Dominio do tenant.

        Returns:
            Optional[SigningKey]: Chave do tenant ou None se nao houver chave.

        Raises:
            KeyResolutionError: Se o material de chave nao puder ser obtido.
        """


class InMemoryKeyResolver:
    """Resolve chaves a partir de um dicionario tenant -> SigningKey."""

    def __init__(
        self,
        keys: Optional[Dict[str, SigningKey]] = None,
        fallback: Optional[SigningKey] = None,
    ) -> None:
        self._keys: Dict[str, SigningKey] = dict(keys or {})
        self._fallback = fallback

    def resolve_signing_key(self, tenant: str) -> Optional[SigningKey]:
        return self._keys.get(tenant, self._fallback)


def _as_bytes(data: PemData) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return data


def load_signing_key(
    private_key_pem: PemData,
    certificate_pem: PemData,
    password: Optional[PemData] = None,
    key_id: Optional[str] = None,
) -> SigningKey:
    """Carrega uma SigningKey a partir de PEMs.

    Args:
        private_key_pem: Chave privada RSA em PEM (PKCS#1 ou PKCS#8).
        certificate_pem: Certificado X.509 em PEM correspondente a chave.
        password: Senha opcional da chave privada.
        key_id: Identificador opcional emitido no header ``kid``.

    Returns:
        SigningKey: Material de chave pronto para assinatura.

    Raises:
        KeyResolutionError: Se algum PEM for invalido ou a chave nao for RSA.
    """
    try:
        private_key = serialization.load_pem_private_key(
            _as_bytes(private_key_pem),
            password=_as_bytes(password) if password is not None else None,
        )
    except (TypeError, ValueError) as e:
        raise KeyResolutionError("chave privada invalida") from e

    if not isinstance(private_key, RSAPrivateKey):
        raise KeyResolutionError("chave privada deve ser RSA")

    try:
        certificate = x509.load_pem_x509_certificate(_as_bytes(certificate_pem))
    except ValueError as e:
        raise KeyResolutionError("certificado invalido") from e

    if key_id is not None and (not isinstance(key_id, str) or not key_id.strip()):
        raise KeyResolutionError("key_id deve ser uma string nao vazia")

    key = SigningKey(private_key=private_key, certificate=certificate, key_id=key_id)
    if not key.matches_certificate():
        raise KeyResolutionError("certificado nao corresponde a chave privada")
    return key
