import logging

from jwtissuer import IssuanceRequest, JWTIssuer, SubscribedAPI, load_token_config_from_dict


def main() -> None:
    config = load_token_config_from_dict(
        {
            "JWTISSUER_SIGNATURE_ALGORITHM": "NONE",
            "JWTISSUER_TOKEN_URL": "https://localhost:9443/oauth2/token",
            "JWTISSUER_TTL": 900,
        }
    )

    logger = logging.getLogger("jwt")
    issuer = JWTIssuer(config=config, logger=logger)

    token = issuer.emitir(
        IssuanceRequest(
            subject="alice@example.com",
            audience="default-app",
            subscribed_apis=(
                SubscribedAPI(name="PizzaShack", context="/pizzashack/1.0.0", version="1.0.0"),
            ),
            attributes={"roles": "admin,subscriber"},
        )
    )

    print("token:", token)


if __name__ == "__main__":
    main()
