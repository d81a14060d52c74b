"""Montagem das claims padrao e normalizacao de atributos multivalorados."""

import logging
import re
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from jwtissuer.errors import ConfigurationError
from jwtissuer.resolvers import IssuerResolver, tenant_from_subject

ClaimSet = Dict[str, Any]

RESERVED_CLAIMS = frozenset({"jti", "iss", "aud", "iat", "exp", "enduser", "subscribedAPIs"})


@dataclass(frozen=True)
class SubscribedAPI:
    """Descritor de uma API assinada pela aplicacao."""

    name: str
    context: str
    version: str
    publisher: Optional[str] = None
    subscription_tier: Optional[str] = None
    subscriber_tenant_domain: Optional[str] = None

    def as_claim(self) -> Dict[str, str]:
        claim = {
            "name": self.name,
            "context": self.context,
            "version": self.version,
            "publisher": self.publisher,
            "subscriptionTier": self.subscription_tier,
            "subscriberTenantDomain": self.subscriber_tenant_domain,
        }
        return {k: v for k, v in claim.items() if v is not None}


@dataclass(frozen=True)
class IssuanceRequest:
    """Dados de uma solicitacao de emissao de token."""

    subject: str
    audience: str
    subscribed_apis: Tuple[SubscribedAPI, ...] = ()
    tenant: Optional[str] = None
    attributes: Mapping[str, str] = field(default_factory=dict)

    @property
    def resolved_tenant(self) -> str:
        if self.tenant and self.tenant.strip():
            return self.tenant.strip()
        return tenant_from_subject(self.subject)


def split_multi_valued(value: str, separator: str) -> Union[str, List[str]]:
    """Divide um valor multivalorado pelo separador.

    Args:
        value (str): Valor da claim.
        separator (str): Separador do tenant.

    Returns:
        Union[str, List[str]]: O valor original se nao contiver o separador, ou a lista
            ordenada dos valores nao vazios (possivelmente vazia). Qualquer caractere do
            separador delimita valores, depois de confirmada a presenca do separador inteiro.
    """
    if not separator or separator not in value:
        return value
    parts = re.split("[" + re.escape(separator) + "]", value)
    return [part for part in parts if part.strip()]


class AttributeNormalizer:
    """Converte claims string com separador em listas de strings."""

    def normalize(self, claims: Mapping[str, Any], separator: str) -> ClaimSet:
        normalized: ClaimSet = {}
        for name, value in claims.items():
            if isinstance(value, str):
                # Lista vazia ainda e emitida.
                normalized[name] = split_multi_valued(value, separator)
            else:
                normalized[name] = value
        return normalized


class ClaimSetBuilder:
    """Monta o conjunto de claims padrao de uma emissao."""

    def __init__(
        self,
        issuer_resolver: IssuerResolver,
        logger: logging.Logger,
        jti_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self._issuer_resolver = issuer_resolver
        self._logger = logger
        self._jti_factory = jti_factory or (lambda: str(uuid.uuid4()))

    def _resolve_issuer(self) -> str:
        try:
            issuer = self._issuer_resolver.resolve_issuer_url()
        except ConfigurationError:
            raise
        except Exception as e:
            self._logger.exception("Falha inesperada ao resolver a URL do emissor")
            raise ConfigurationError("falha ao resolver a URL do emissor") from e
        if not isinstance(issuer, str) or not issuer.strip():
            raise ConfigurationError("URL do emissor nao configurada")
        return issuer

    def build(self, request: IssuanceRequest, ttl: int, now: int) -> ClaimSet:
        """Cria as claims do token.

        Args:
            request (IssuanceRequest): Solicitacao de emissao.
            ttl (int): Tempo de vida em segundos.
            now (int): Instante da emissao em segundos desde a epoca Unix.

        Returns:
            ClaimSet: Claims ``jti``, ``iss``, ``aud``, ``iat``, ``exp``, ``enduser``,
                ``subscribedAPIs`` e os atributos da solicitacao.

        Raises:
            ConfigurationError: Se o TTL for invalido ou a URL do emissor nao puder ser
                resolvida.
            ValueError: Se um atributo sobrescrever uma claim reservada.
        """
        if isinstance(ttl, bool) or not isinstance(ttl, int) or ttl <= 0:
            raise ConfigurationError(f"TTL invalido: {ttl!r}")

        issuer = self._resolve_issuer()
        jti = self._jti_factory()
        self._logger.debug("jti gerado: %s", jti)

        claims: ClaimSet = {
            "jti": jti,
            "iss": issuer,
            "aud": request.audience,
            "iat": now,
            "exp": now + ttl,
            "enduser": request.subject,
            "subscribedAPIs": [api.as_claim() for api in request.subscribed_apis],
        }

        for name, value in request.attributes.items():
            if name in RESERVED_CLAIMS:
                raise ValueError(f"atributo sobrescreve claim reservada: {name}")
            claims[name] = value

        return claims
