import json

import pytest
from jwt.utils import base64url_decode

from jwtissuer import CanonicalEncoder, EncodingError, Header


def test_claims_order_independent() -> None:
    encoder = CanonicalEncoder()
    first = {"jti": "1", "aud": "aud1", "exp": 10, "groups": ["b", "a"]}
    second = {"groups": ["b", "a"], "exp": 10, "aud": "aud1", "jti": "1"}

    assert encoder.encode_claims(first) == encoder.encode_claims(second)


def test_claims_sorted_at_every_level() -> None:
    encoder = CanonicalEncoder()
    claims = {"subscribedAPIs": [{"version": "v1", "name": "Orders"}], "aud": "x"}

    assert encoder.claims_json(claims) == (
        b'{"aud":"x","subscribedAPIs":[{"name":"Orders","version":"v1"}]}'
    )


def test_claims_keep_list_order() -> None:
    encoder = CanonicalEncoder()

    decoded = json.loads(base64url_decode(encoder.encode_claims({"groups": ["c", "a", "b"]})))

    assert decoded["groups"] == ["c", "a", "b"]


def test_claims_utf8_without_escapes() -> None:
    encoder = CanonicalEncoder()

    assert encoder.claims_json({"enduser": "joão"}) == '{"enduser":"joão"}'.encode("utf-8")


def test_segments_have_no_padding() -> None:
    encoder = CanonicalEncoder()

    segment = encoder.encode_claims({"a": "b"})

    assert "=" not in segment
    assert "+" not in segment and "/" not in segment


def test_none_header_exact_bytes() -> None:
    encoder = CanonicalEncoder()

    assert encoder.header_json(Header(alg="none")) == b'{"typ":"JWT","alg":"none"}'


def test_rsa_header_field_order() -> None:
    encoder = CanonicalEncoder()

    header = Header(alg="RS256", x5t="thumb", kid="k1")

    assert encoder.header_json(header) == b'{"typ":"JWT","alg":"RS256","x5t":"thumb","kid":"k1"}'


def test_claims_not_jsonable_raises() -> None:
    encoder = CanonicalEncoder()

    with pytest.raises(EncodingError, match="serializaveis"):
        encoder.encode_claims({"bad": {1, 2}})


def test_claims_nan_raises() -> None:
    encoder = CanonicalEncoder()

    with pytest.raises(EncodingError):
        encoder.encode_claims({"bad": float("nan")})


def test_claims_non_string_name_raises() -> None:
    encoder = CanonicalEncoder()

    with pytest.raises(EncodingError, match="nome de claim"):
        encoder.encode_claims({1: "x"})  # type: ignore[dict-item]


def test_claims_lone_surrogate_raises() -> None:
    encoder = CanonicalEncoder()

    with pytest.raises(EncodingError):
        encoder.encode_claims({"enduser": "a\ud800"})
