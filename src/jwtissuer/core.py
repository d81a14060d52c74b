"""Servico de emissao de tokens JWT auto-contidos para o gateway de APIs.

Este modulo orquestra a emissao de tokens de acesso com claims de identidade e
assinaturas de APIs, assinados por tenant com o certificado publicado.

Classes principais:
    - JWTIssuer: Servico de emissao de tokens JWS compactos
    - TokenConfig: Dataclass com a configuracao validada do servico
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

from jwtissuer.claims import AttributeNormalizer, ClaimSetBuilder, IssuanceRequest
from jwtissuer.encoding import CanonicalEncoder
from jwtissuer.errors import ConfigurationError
from jwtissuer.keys import KeyResolver
from jwtissuer.resolvers import (
    DEFAULT_ATTRIBUTE_SEPARATOR,
    IssuerResolver,
    SeparatorResolver,
    StaticIssuerResolver,
    StaticTTLResolver,
    TenantSeparatorResolver,
    TTLResolver,
)
from jwtissuer.signing import (
    HeaderComposer,
    RSASigner,
    SignatureAlgorithm,
    Signer,
    SigningDispatcher,
    parse_algorithm,
)


class JWTIssuer:
    """Servico para emissao de tokens JWT."""

    def __init__(
        self,
        config: "TokenConfig",
        logger: logging.Logger,
        key_resolver: Optional[KeyResolver] = None,
        ttl_resolver: Optional[TTLResolver] = None,
        issuer_resolver: Optional[IssuerResolver] = None,
        separator_resolver: Optional[SeparatorResolver] = None,
        signer: Optional[Signer] = None,
        jti_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        """Inicializa o emissor de tokens.

        Args:
            config (TokenConfig): Configuracoes validadas.
            logger: Logger do servico.
            key_resolver: Provedor de chaves/certificados por tenant (obrigatorio para RSA).
            ttl_resolver: Politica de TTL; usa ``config.ttl`` se nao fornecido.
            issuer_resolver: URL do emissor; usa ``config.issuer`` se nao fornecido.
            separator_resolver: Separador por tenant; usa ``config.attribute_separator``
                se nao fornecido.
            signer: Primitiva de assinatura; usa RSASigner se nao fornecido.
            jti_factory: Gerador opcional de jti (padrao: uuid4).
        """
        self._config = config
        self._logger = logger
        self._ttl_resolver = ttl_resolver or StaticTTLResolver(config.ttl)
        self._separator_resolver = separator_resolver or TenantSeparatorResolver(
            default=config.attribute_separator
        )
        self._claims_builder = ClaimSetBuilder(
            issuer_resolver or StaticIssuerResolver(config.issuer),
            logger,
            jti_factory=jti_factory,
        )
        self._normalizer = AttributeNormalizer()
        self._encoder = CanonicalEncoder()
        self._header_composer = HeaderComposer(key_resolver, logger)
        self._dispatcher = SigningDispatcher(signer or RSASigner(), logger)

        logger.debug("JWTIssuer inicializado com algoritmo: %s", config.algorithm.value)

    def _get_now(self) -> int:
        return int(time.time())

    def _resolve_ttl(self, tenant: str) -> int:
        try:
            return self._ttl_resolver.resolve_ttl(tenant)
        except ConfigurationError:
            raise
        except Exception as e:
            self._logger.exception("Falha inesperada ao resolver TTL. tenant=%s", tenant)
            raise ConfigurationError(f"falha ao resolver TTL do tenant {tenant}") from e

    def _resolve_separator(self, tenant: str) -> str:
        try:
            separator = self._separator_resolver.resolve_separator(tenant)
        except Exception as e:
            self._logger.exception("Falha inesperada ao resolver separador. tenant=%s", tenant)
            raise ConfigurationError(f"falha ao resolver separador do tenant {tenant}") from e
        if separator is not None and not isinstance(separator, str):
            raise ConfigurationError(f"separador invalido para o tenant {tenant}: {separator!r}")
        if not separator or not separator.strip():
            return self._config.attribute_separator
        return separator

    def emitir(self, request: IssuanceRequest) -> str:
        """Emite um token JWS compacto para a solicitacao.

        Args:
            request (IssuanceRequest): Usuario, audience, APIs assinadas e tenant opcional.

        Returns:
            str: Token ``header.payload.signature`` (assinatura vazia para ``NONE``).

        Raises:
            ValueError: Se subject ou audience forem vazios ou se um atributo sobrescrever
                uma claim reservada.
            ConfigurationError: Se a URL do emissor ou o TTL nao puderem ser resolvidos.
            KeyResolutionError: Se nao houver certificado para o tenant.
            UnsupportedAlgorithmError: Se o algoritmo nao for suportado.
            EncodingError: Se header ou claims nao forem serializaveis.
            SigningError: Se a assinatura falhar.
        """
        if not isinstance(request, IssuanceRequest):
            raise ValueError("request deve ser IssuanceRequest")
        if not isinstance(request.subject, str) or not request.subject.strip():
            raise ValueError("subject nao pode ser vazio")
        if not isinstance(request.audience, str) or not request.audience.strip():
            raise ValueError("audience deve ser uma string nao vazia")

        algorithm = self._config.algorithm
        tenant = request.resolved_tenant

        header, key = self._header_composer.compose(algorithm, tenant)

        ttl = self._resolve_ttl(tenant)
        claims = self._claims_builder.build(request, ttl, self._get_now())
        claims = self._normalizer.normalize(claims, self._resolve_separator(tenant))

        header_segment = self._encoder.encode_header(header)
        body_segment = self._encoder.encode_claims(claims)

        token = self._dispatcher.assemble(header_segment, body_segment, algorithm, key)
        self._logger.debug(
            "JWT emitido. enduser=%s tenant=%s alg=%s jti=%s",
            request.subject,
            tenant,
            header.alg,
            claims["jti"],
        )
        return token


@dataclass(frozen=True)
class TokenConfig:
    """Configuracao do JWTIssuer."""

    algorithm: Union[str, SignatureAlgorithm]
    issuer: Optional[str]
    ttl: int = 900
    attribute_separator: str = DEFAULT_ATTRIBUTE_SEPARATOR

    def __post_init__(self) -> None:
        if self.issuer is not None:
            if not isinstance(self.issuer, str) or not self.issuer.strip():
                raise ValueError("JWTISSUER_TOKEN_URL deve ser uma string nao vazia")

        if isinstance(self.ttl, bool) or not isinstance(self.ttl, int) or self.ttl <= 0:
            raise ValueError("JWTISSUER_TTL deve ser um inteiro positivo")

        if not isinstance(self.attribute_separator, str) or not self.attribute_separator:
            raise ValueError("JWTISSUER_ATTRIBUTE_SEPARATOR deve ser uma string nao vazia")

        # Falha cedo: algoritmo desconhecido nunca chega a emissao.
        object.__setattr__(self, "algorithm", parse_algorithm(self.algorithm))


def load_token_config_from_dict(app_config: Dict[str, Any]) -> TokenConfig:
    """Carrega configuracoes do JWTIssuer a partir de um dict.

    Args:
        app_config: Dicionario de configuracao da aplicacao.

    Returns:
        TokenConfig: Configuracao validada do servico.

    Raises:
        ValueError: Se algum valor for invalido.
        UnsupportedAlgorithmError: Se o algoritmo configurado nao for suportado.
    """
    app_config.setdefault("JWTISSUER_SIGNATURE_ALGORITHM", "SHA256withRSA")
    app_config.setdefault("JWTISSUER_TTL", 900)
    app_config.setdefault("JWTISSUER_ATTRIBUTE_SEPARATOR", DEFAULT_ATTRIBUTE_SEPARATOR)

    try:
        ttl = int(app_config.get("JWTISSUER_TTL"))
    except (TypeError, ValueError) as e:
        raise ValueError("JWTISSUER_TTL deve ser um inteiro positivo") from e

    return TokenConfig(
        algorithm=str(app_config.get("JWTISSUER_SIGNATURE_ALGORITHM")),
        issuer=(
            str(app_config.get("JWTISSUER_TOKEN_URL"))
            if app_config.get("JWTISSUER_TOKEN_URL")
            else None
        ),
        ttl=ttl,
        attribute_separator=str(app_config.get("JWTISSUER_ATTRIBUTE_SEPARATOR") or ""),
    )
