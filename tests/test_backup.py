"""Tests for validation/backup.py module."""

from unittest.mock import MagicMock, patch

import pytest

from jenkins_preflight.exceptions import SecretNotFoundError, SecretStoreError
from jenkins_preflight.models import BackupMode
from jenkins_preflight.store import InMemorySecretStore
from jenkins_preflight.validation.backup import BACKUP_VERIFIERS, verify_backup, verify_backup_amazon_s3

_S3_SECRET = ("default", "jenkins-operator-backup-credentials-example")


class TestBackupDispatch:
    """Tests for backup mode dispatch."""

    def test_no_backup_needs_no_lookups(self, make_jenkins):
        """Test NoBackup is valid without touching the store."""
        store = MagicMock()

        assert verify_backup(make_jenkins(), store) is True
        store.get.assert_not_called()

    def test_amazon_s3_registered(self):
        """Test the Amazon S3 verifier is registered for its mode."""
        assert BACKUP_VERIFIERS[BackupMode.AMAZON_S3] is verify_backup_amazon_s3
        assert BackupMode.NO_BACKUP not in BACKUP_VERIFIERS

    def test_dispatch_uses_table(self, make_jenkins):
        """Test verify_backup calls the verifier registered for the mode."""
        verifier = MagicMock(return_value=False)
        jenkins = make_jenkins(backup=BackupMode.AMAZON_S3)
        store = InMemorySecretStore()

        with patch.dict(BACKUP_VERIFIERS, {BackupMode.AMAZON_S3: verifier}):
            assert verify_backup(jenkins, store) is False

        verifier.assert_called_once_with(jenkins, store, None)


class TestAmazonS3Backup:
    """Tests for Amazon S3 credential checks."""

    def test_complete_credentials(self, make_jenkins, secret_store):
        """Test complete credentials are valid."""
        assert verify_backup(make_jenkins(backup=BackupMode.AMAZON_S3), secret_store) is True

    def test_missing_secret_key(self, make_jenkins):
        """Test credentials without secret-key are invalid without raising."""
        store = InMemorySecretStore({_S3_SECRET: {"access-key": b"AKIAEXAMPLE"}})

        with patch("jenkins_preflight.validation.backup.console.warning") as mock_warning:
            assert verify_backup(make_jenkins(backup=BackupMode.AMAZON_S3), store) is False

        assert "secret-key" in mock_warning.call_args[0][0]

    @pytest.mark.parametrize("empty_key", ["access-key", "secret-key"])
    def test_empty_credential(self, make_jenkins, s3_credentials, empty_key):
        """Test an empty credential value is invalid."""
        store = InMemorySecretStore({_S3_SECRET: {**s3_credentials, empty_key: b""}})

        assert verify_backup(make_jenkins(backup=BackupMode.AMAZON_S3), store) is False

    def test_reports_every_missing_key(self, make_jenkins):
        """Test both missing keys are reported."""
        store = InMemorySecretStore({_S3_SECRET: {}})

        with patch("jenkins_preflight.validation.backup.console.warning") as mock_warning:
            assert verify_backup(make_jenkins(backup=BackupMode.AMAZON_S3), store) is False

        assert mock_warning.call_count == 2

    def test_missing_secret_raises(self, make_jenkins):
        """Test a missing credentials secret propagates as an error."""
        with pytest.raises(SecretNotFoundError) as exc_info:
            verify_backup(make_jenkins(backup=BackupMode.AMAZON_S3), InMemorySecretStore())

        assert exc_info.value.name == "jenkins-operator-backup-credentials-example"

    def test_transport_error_raises(self, make_jenkins):
        """Test store failures propagate."""
        store = MagicMock()
        store.get.side_effect = SecretStoreError("forbidden")

        with pytest.raises(SecretStoreError, match="forbidden"):
            verify_backup(make_jenkins(backup=BackupMode.AMAZON_S3), store)

    def test_secret_name_follows_operator_name(self, make_jenkins, monkeypatch, s3_credentials):
        """Test the credentials secret name uses OPERATOR_NAME."""
        monkeypatch.setenv("OPERATOR_NAME", "custom-operator")
        store = MagicMock()
        store.get.return_value = s3_credentials

        assert verify_backup(make_jenkins(backup=BackupMode.AMAZON_S3), store) is True
        store.get.assert_called_once_with("default", "custom-operator-backup-credentials-example")

    def test_secret_name_follows_operator_name_argument(self, make_jenkins, monkeypatch, s3_credentials):
        """Test an explicit operator name wins over OPERATOR_NAME."""
        monkeypatch.setenv("OPERATOR_NAME", "from-env")
        store = MagicMock()
        store.get.return_value = s3_credentials

        assert verify_backup(make_jenkins(backup=BackupMode.AMAZON_S3), store, operator_name="custom") is True
        store.get.assert_called_once_with("default", "custom-backup-credentials-example")
