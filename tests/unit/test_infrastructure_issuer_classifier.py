"""Unit tests for IssuerClassifier.

Tests cover:
- Issuer matching (external, legacy, case-insensitive, trailing slash)
- External-only claims as fallback evidence
- Invalid tokens classified UNKNOWN without raising
- Bearer prefix handling and claim-set classification
"""

import jwt
import pytest

from src.domain.enums import TokenIssuerType
from src.infrastructure.security.issuer_classifier import IssuerClassifier

EXTERNAL_ISSUER = "https://idp.example/realms/corp"
LEGACY_ISSUER = "https://legacy.example"


def _token(claims: dict) -> str:
    return jwt.encode(claims, "test-signing-key-of-sufficient-length", algorithm="HS256")


@pytest.fixture
def classifier() -> IssuerClassifier:
    return IssuerClassifier(external_issuer=EXTERNAL_ISSUER, legacy_issuer=LEGACY_ISSUER)


@pytest.mark.unit
class TestClassify:
    """Test classify() decision order."""

    def test_external_issuer(self, classifier):
        token = _token({"iss": EXTERNAL_ISSUER, "sub": "u1"})

        assert classifier.classify(token) is TokenIssuerType.EXTERNAL

    def test_legacy_issuer(self, classifier):
        token = _token({"iss": LEGACY_ISSUER, "sub": "u1"})

        assert classifier.classify(token) is TokenIssuerType.LEGACY

    def test_unrecognized_issuer_with_realm_access_is_external(self, classifier):
        token = _token(
            {"iss": "https://other.example", "realm_access": {"roles": ["user"]}}
        )

        assert classifier.classify(token) is TokenIssuerType.EXTERNAL

    @pytest.mark.parametrize("claim", ["realm_access", "resource_access", "azp"])
    def test_external_only_claims_without_issuer(self, classifier, claim):
        assert classifier.classify(_token({claim: "x"})) is TokenIssuerType.EXTERNAL

    def test_unrecognized_issuer_without_evidence_is_unknown(self, classifier):
        token = _token({"iss": "https://other.example", "sub": "u1"})

        assert classifier.classify(token) is TokenIssuerType.UNKNOWN

    def test_issuer_match_takes_precedence_over_claims(self, classifier):
        token = _token({"iss": LEGACY_ISSUER, "azp": "legacy-client"})

        assert classifier.classify(token) is TokenIssuerType.LEGACY

    def test_issuer_comparison_is_case_insensitive(self, classifier):
        token = _token({"iss": EXTERNAL_ISSUER.upper()})

        assert classifier.classify(token) is TokenIssuerType.EXTERNAL

    def test_configured_trailing_slash_is_ignored(self):
        classifier = IssuerClassifier(
            external_issuer=EXTERNAL_ISSUER + "/", legacy_issuer=LEGACY_ISSUER
        )

        assert (
            classifier.classify(_token({"iss": EXTERNAL_ISSUER}))
            is TokenIssuerType.EXTERNAL
        )

    @pytest.mark.parametrize(
        "token",
        ["", "   ", "not-a-jwt", "a.b.c", "Bearer ", "Bearer garbage", None],
    )
    def test_invalid_tokens_are_unknown(self, classifier, token):
        assert classifier.classify(token) is TokenIssuerType.UNKNOWN

    def test_bearer_prefix_is_stripped(self, classifier):
        token = _token({"iss": LEGACY_ISSUER})

        assert classifier.classify(f"Bearer {token}") is TokenIssuerType.LEGACY
        assert classifier.classify(f"bearer {token}") is TokenIssuerType.LEGACY

    def test_expired_token_is_still_classified(self, classifier):
        token = _token({"iss": LEGACY_ISSUER, "exp": 1})

        assert classifier.classify(token) is TokenIssuerType.LEGACY

    def test_unconfigured_external_issuer(self):
        classifier = IssuerClassifier(external_issuer=None, legacy_issuer=LEGACY_ISSUER)

        assert (
            classifier.classify(_token({"iss": EXTERNAL_ISSUER}))
            is TokenIssuerType.UNKNOWN
        )

    def test_is_external_and_is_legacy(self, classifier):
        external = _token({"iss": EXTERNAL_ISSUER})
        legacy = _token({"iss": LEGACY_ISSUER})

        assert classifier.is_external(external) and not classifier.is_legacy(external)
        assert classifier.is_legacy(legacy) and not classifier.is_external(legacy)


@pytest.mark.unit
class TestClassifyClaims:
    """Test classify_claims() on already validated claim sets."""

    def test_same_order_as_tokens(self, classifier):
        assert classifier.classify_claims({"iss": EXTERNAL_ISSUER}) is (
            TokenIssuerType.EXTERNAL
        )
        assert classifier.classify_claims({"iss": LEGACY_ISSUER}) is (
            TokenIssuerType.LEGACY
        )
        assert classifier.classify_claims({"resource_access": {}}) is (
            TokenIssuerType.EXTERNAL
        )
        assert classifier.classify_claims({}) is TokenIssuerType.UNKNOWN

    def test_non_string_issuer_is_ignored(self, classifier):
        assert classifier.classify_claims({"iss": 42}) is TokenIssuerType.UNKNOWN
