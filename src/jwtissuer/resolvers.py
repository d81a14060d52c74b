"""Resolvedores de configuracao consultados durante a emissao."""

from typing import Dict, Optional, Protocol

from jwtissuer.errors import ConfigurationError

SUPER_TENANT_DOMAIN = "carbon.super"
DEFAULT_ATTRIBUTE_SEPARATOR = ","


def tenant_from_subject(subject: str) -> str:
    """Extrai o dominio do tenant do nome do usuario (parte apos o ultimo ``@``).

    Args:
        subject (str): Nome do usuario, ex. ``alice@example.com``.

    Returns:
        str: Dominio do tenant ou ``carbon.super`` se o nome nao tiver dominio.
    """
    _, sep, domain = subject.rpartition("@")
    if sep and domain.strip():
        return domain.strip().lower()
    return SUPER_TENANT_DOMAIN


class TTLResolver(Protocol):
    """Interface para a politica de TTL por tenant."""

    def resolve_ttl(self, tenant: str) -> int:
        """Retorna o TTL em segundos dos tokens do tenant."""


class IssuerResolver(Protocol):
    """Interface para a configuracao do key manager."""

    def resolve_issuer_url(self) -> str:
        """Retorna a URL do emissor (claim ``iss``).

        Raises:
            ConfigurationError: Se a URL nao estiver configurada.
        """


class SeparatorResolver(Protocol):
    """Interface para o separador de atributos multivalorados por tenant."""

    def resolve_separator(self, tenant: str) -> Optional[str]:
        """Retorna o separador do tenant, ou None para usar o padrao."""


class StaticTTLResolver:
    """TTL fixo com sobrescritas opcionais por tenant."""

    def __init__(self, default_ttl: int, per_tenant: Optional[Dict[str, int]] = None) -> None:
        if not isinstance(default_ttl, int) or default_ttl <= 0:
            raise ConfigurationError("default_ttl deve ser um inteiro positivo")
        self._default_ttl = default_ttl
        self._per_tenant: Dict[str, int] = dict(per_tenant or {})

    def resolve_ttl(self, tenant: str) -> int:
        return self._per_tenant.get(tenant, self._default_ttl)


class StaticIssuerResolver:
    """URL do emissor fixa, vinda da configuracao."""

    def __init__(self, issuer_url: Optional[str]) -> None:
        self._issuer_url = issuer_url

    def resolve_issuer_url(self) -> str:
        if not isinstance(self._issuer_url, str) or not self._issuer_url.strip():
            raise ConfigurationError("URL do emissor (JWTISSUER_TOKEN_URL) nao configurada")
        return self._issuer_url


class TenantSeparatorResolver:
    """Separador por tenant com fallback para o separador padrao."""

    def __init__(
        self,
        per_tenant: Optional[Dict[str, str]] = None,
        default: str = DEFAULT_ATTRIBUTE_SEPARATOR,
    ) -> None:
        if not isinstance(default, str) or not default:
            raise ValueError("default deve ser uma string nao vazia")
        self._per_tenant: Dict[str, str] = dict(per_tenant or {})
        self._default = default

    def resolve_separator(self, tenant: str) -> Optional[str]:
        separator = self._per_tenant.get(tenant)
        if separator is None or not separator.strip():
            return self._default
        return separator
