"""Hierarquia de erros da emissao de tokens."""


class JWTIssuerError(Exception):
    """Erro base para o JWTIssuer."""


class ConfigurationError(JWTIssuerError):
    """Lançado quando a URL do emissor ou a politica de TTL nao podem ser resolvidas."""


class KeyResolutionError(JWTIssuerError):
    """Lançado quando nao ha chave de assinatura ou certificado para o tenant."""


class UnsupportedAlgorithmError(JWTIssuerError, ValueError):
    """Lançado quando o algoritmo de assinatura configurado nao e suportado."""


class EncodingError(JWTIssuerError):
    """Lançado quando o header ou as claims nao podem ser serializados em JSON."""


class SigningError(JWTIssuerError):
    """Lançado quando a operacao de assinatura falha."""
