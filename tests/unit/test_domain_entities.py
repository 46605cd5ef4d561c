"""Unit tests for domain value objects."""

import pytest

from src.domain.entities.database_credential import DatabaseCredential
from src.domain.entities.migration import SampleVerification
from src.domain.entities.token_family import TokenFamilyRevocation


@pytest.mark.unit
class TestDatabaseCredential:
    def test_first_load_is_not_rotation(self):
        credential = DatabaseCredential(username="v-identity-a", password="p")

        assert credential.is_rotation_of(None) is False

    def test_same_username_is_not_rotation(self):
        old = DatabaseCredential(username="v-identity-a", password="p", lease_id="1")
        renewed = DatabaseCredential(username="v-identity-a", password="q", lease_id="2")

        assert renewed.is_rotation_of(old) is False

    def test_new_username_is_rotation(self):
        old = DatabaseCredential(username="v-identity-a", password="p")
        new = DatabaseCredential(username="v-identity-b", password="p")

        assert new.is_rotation_of(old) is True

    def test_repr_hides_password(self):
        credential = DatabaseCredential(username="v-identity-a", password="hunter2")

        assert "hunter2" not in repr(credential)


@pytest.mark.unit
class TestSampleVerification:
    def test_match_rate(self):
        assert SampleVerification(sampled=3, matched=2).match_rate == 66.67

    def test_empty_sample(self):
        assert SampleVerification(sampled=0, matched=0).match_rate == 0.0


@pytest.mark.unit
def test_revoked_count():
    revocation = TokenFamilyRevocation(family_id="f", revoked_tokens=["f.a", "f.b"])

    assert revocation.revoked_count == 2
