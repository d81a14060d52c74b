import datetime
import logging

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

from jwtissuer import SigningKey, TokenConfig, load_token_config_from_dict


def _self_signed(private_key: rsa.RSAPrivateKey, common_name: str) -> x509.Certificate:
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.datetime.now(datetime.timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=30))
        .sign(private_key, hashes.SHA256())
    )


@pytest.fixture()
def logger() -> logging.Logger:
    logger = logging.getLogger("jwtissuer-tests")
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger


@pytest.fixture()
def config() -> TokenConfig:
    return load_token_config_from_dict(
        {
            "JWTISSUER_SIGNATURE_ALGORITHM": "SHA256withRSA",
            "JWTISSUER_TOKEN_URL": "https://km.example.com/oauth2/token",
            "JWTISSUER_TTL": 300,
        }
    )


@pytest.fixture()
def none_config() -> TokenConfig:
    return load_token_config_from_dict(
        {
            "JWTISSUER_SIGNATURE_ALGORITHM": "NONE",
            "JWTISSUER_TOKEN_URL": "https://km.example.com/oauth2/token",
            "JWTISSUER_TTL": 300,
        }
    )


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def certificate(rsa_private_key) -> x509.Certificate:
    return _self_signed(rsa_private_key, "carbon.super")


@pytest.fixture(scope="session")
def signing_key(rsa_private_key, certificate) -> SigningKey:
    return SigningKey(private_key=rsa_private_key, certificate=certificate, key_id="key-1")


@pytest.fixture(scope="session")
def private_key_pem(rsa_private_key) -> bytes:
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture(scope="session")
def certificate_pem(certificate) -> bytes:
    return certificate.public_bytes(serialization.Encoding.PEM)
