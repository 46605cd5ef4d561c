"""Unit tests for the credential secret file reader."""

import json

import pytest

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.infrastructure.enums import InfrastructureErrorCode
from src.infrastructure.secrets.credential_file_reader import (
    parse_credential_document,
    read_credential_file,
)


@pytest.mark.unit
class TestReadCredentialFile:
    def test_reads_complete_document(self, write_credentials):
        path = write_credentials(username="v-identity-a", password="pw")

        result = read_credential_file(path)

        assert isinstance(result, Success)
        credential = result.value
        assert credential.username == "v-identity-a"
        assert credential.password == "pw"
        assert credential.lease_id == "database/creds/identity/v-identity-a"
        assert credential.lease_duration == 3600
        assert credential.renewable is True

    def test_field_names_are_case_insensitive(self, write_credentials):
        path = write_credentials(
            raw=json.dumps(
                {
                    "Username": "v-identity-b",
                    "PASSWORD": "pw",
                    "Lease_Id": "lease-1",
                    "LEASE_DURATION": "120",
                    "Renewable": "false",
                }
            )
        )

        credential = read_credential_file(path).value

        assert credential.username == "v-identity-b"
        assert credential.lease_id == "lease-1"
        assert credential.lease_duration == 120
        assert credential.renewable is False

    def test_missing_file(self, credential_path):
        result = read_credential_file(credential_path)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.CREDENTIALS_UNAVAILABLE
        assert result.error.infrastructure_code == InfrastructureErrorCode.SECRET_NOT_FOUND

    def test_invalid_json(self, write_credentials):
        path = write_credentials(raw="{not json")

        result = read_credential_file(path)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.CREDENTIALS_INVALID
        assert result.error.infrastructure_code == InfrastructureErrorCode.SECRET_MALFORMED

    @pytest.mark.parametrize(
        "raw",
        [
            "[" * 200_000 + "]" * 200_000,
            '{"username": "u", "password": "pw", "lease_duration": 1e400}',
        ],
        ids=["deeply-nested", "infinite-lease-duration"],
    )
    def test_hostile_documents_are_malformed(self, write_credentials, raw):
        path = write_credentials(raw=raw)

        result = read_credential_file(path)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.CREDENTIALS_INVALID
        assert result.error.infrastructure_code == InfrastructureErrorCode.SECRET_MALFORMED

    def test_password_never_in_error_details(self, write_credentials):
        path = write_credentials(raw=json.dumps({"password": "hunter2"}))

        result = read_credential_file(path)

        assert isinstance(result, Failure)
        assert "hunter2" not in str(result.error)
        assert "hunter2" not in json.dumps(result.error.details or {})

    def test_password_not_in_repr(self, write_credentials):
        credential = read_credential_file(write_credentials(password="hunter2")).value

        assert "hunter2" not in repr(credential)


@pytest.mark.unit
class TestParseCredentialDocument:
    @pytest.mark.parametrize(
        "document",
        [
            [],
            "text",
            {"password": "pw"},
            {"username": "", "password": "pw"},
            {"username": "u"},
            {"username": "u", "password": ""},
            {"username": "u", "password": "pw", "lease_duration": "soon"},
        ],
    )
    def test_rejects_incomplete_documents(self, credential_path, document):
        result = parse_credential_document(document, credential_path)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.CREDENTIALS_INVALID

    def test_optional_fields_default(self, credential_path):
        result = parse_credential_document(
            {"username": "u", "password": "pw"}, credential_path
        )

        assert result.value.lease_id is None
        assert result.value.lease_duration == 0
        assert result.value.renewable is False
