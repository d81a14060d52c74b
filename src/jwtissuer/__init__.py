"""Core package for self-contained JWS access token issuance."""

from jwtissuer.claims import (
    AttributeNormalizer,
    ClaimSet,
    ClaimSetBuilder,
    IssuanceRequest,
    SubscribedAPI,
    split_multi_valued,
)
from jwtissuer.core import JWTIssuer, TokenConfig, load_token_config_from_dict
from jwtissuer.encoding import CanonicalEncoder
from jwtissuer.errors import (
    ConfigurationError,
    EncodingError,
    JWTIssuerError,
    KeyResolutionError,
    SigningError,
    UnsupportedAlgorithmError,
)
from jwtissuer.keys import InMemoryKeyResolver, KeyResolver, SigningKey, load_signing_key
from jwtissuer.resolvers import (
    DEFAULT_ATTRIBUTE_SEPARATOR,
    SUPER_TENANT_DOMAIN,
    StaticIssuerResolver,
    StaticTTLResolver,
    TenantSeparatorResolver,
    tenant_from_subject,
)
from jwtissuer.signing import (
    Header,
    HeaderComposer,
    RSASigner,
    SignatureAlgorithm,
    Signer,
    SigningDispatcher,
    parse_algorithm,
)

__all__ = [
    "__version__",
    "JWTIssuer",
    "TokenConfig",
    "load_token_config_from_dict",
    "IssuanceRequest",
    "SubscribedAPI",
    "ClaimSet",
    "ClaimSetBuilder",
    "AttributeNormalizer",
    "split_multi_valued",
    "CanonicalEncoder",
    "Header",
    "HeaderComposer",
    "SigningDispatcher",
    "SignatureAlgorithm",
    "Signer",
    "RSASigner",
    "parse_algorithm",
    "SigningKey",
    "KeyResolver",
    "InMemoryKeyResolver",
    "load_signing_key",
    "StaticIssuerResolver",
    "StaticTTLResolver",
    "TenantSeparatorResolver",
    "tenant_from_subject",
    "DEFAULT_ATTRIBUTE_SEPARATOR",
    "SUPER_TENANT_DOMAIN",
    "JWTIssuerError",
    "ConfigurationError",
    "KeyResolutionError",
    "UnsupportedAlgorithmError",
    "EncodingError",
    "SigningError",
]

__version__ = "0.1.0"
