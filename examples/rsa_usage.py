import logging
import sys

from jwtissuer import (
    InMemoryKeyResolver,
    IssuanceRequest,
    JWTIssuer,
    TenantSeparatorResolver,
    load_signing_key,
    load_token_config_from_dict,
)


def main(private_key_path: str, certificate_path: str) -> None:
    config = load_token_config_from_dict(
        {
            "JWTISSUER_SIGNATURE_ALGORITHM": "SHA256withRSA",
            "JWTISSUER_TOKEN_URL": "https://localhost:9443/oauth2/token",
        }
    )

    with open(private_key_path, "rb") as key_file, open(certificate_path, "rb") as cert_file:
        signing_key = load_signing_key(key_file.read(), cert_file.read(), key_id="gateway")

    logging.basicConfig(level=logging.DEBUG)
    issuer = JWTIssuer(
        config=config,
        logger=logging.getLogger("jwt"),
        key_resolver=InMemoryKeyResolver(fallback=signing_key),
        separator_resolver=TenantSeparatorResolver({"example.com": "|"}),
    )

    token = issuer.emitir(
        IssuanceRequest(
            subject="bob@example.com",
            audience="mobile-app",
            attributes={"groups": "ops|dev"},
        )
    )
    print("token:", token)


if __name__ == "__main__":
    main(sys.argv[1], sys.argv[2])
