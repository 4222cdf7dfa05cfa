"""Backup precondition validation.

Each backup mode that needs credentials registers a verifier in
BACKUP_VERIFIERS. Modes without an entry need no preconditions.
"""

from collections.abc import Callable

from icecream import ic

from jenkins_preflight import console
from jenkins_preflight.models import BackupMode, Jenkins
from jenkins_preflight.naming import get_backup_credentials_secret_name
from jenkins_preflight.store import SecretStore

BACKUP_AMAZON_S3_SECRET_KEY = "secret-key"
BACKUP_AMAZON_S3_ACCESS_KEY = "access-key"

BackupVerifier = Callable[[Jenkins, SecretStore, str | None], bool]


def _verify_required_keys(
    jenkins: Jenkins, store: SecretStore, required_keys: tuple[str, ...], operator_name: str | None
) -> bool:
    """Check that the backup credentials secret holds every required key.

    Raises:
        SecretStoreError: If the secret cannot be read, including when it
            does not exist.

    """
    secret_name = get_backup_credentials_secret_name(jenkins, operator_name)
    data = store.get(jenkins.namespace, secret_name)
    ic(secret_name, sorted(data))

    valid = True
    for key in required_keys:
        if not data.get(key):
            console.warning(
                f"Secret {console.highlight(secret_name)} doesn't contain key: {console.highlight(key)}"
            )
            valid = False
    return valid


def verify_backup_amazon_s3(jenkins: Jenkins, store: SecretStore, operator_name: str | None = None) -> bool:
    """Verify that Amazon S3 credentials are present for the resource."""
    return _verify_required_keys(
        jenkins, store, (BACKUP_AMAZON_S3_SECRET_KEY, BACKUP_AMAZON_S3_ACCESS_KEY), operator_name
    )


BACKUP_VERIFIERS: dict[BackupMode, BackupVerifier] = {
    BackupMode.AMAZON_S3: verify_backup_amazon_s3,
}


def verify_backup(jenkins: Jenkins, store: SecretStore, operator_name: str | None = None) -> bool:
    """Verify the preconditions of the backup mode declared by the resource.

    Args:
        jenkins: The resource to validate.
        store: Secret store used to read backup credentials.
        operator_name: Overrides the operator name used to derive the
            credentials secret name.

    Returns:
        True if the mode needs no credentials or all of them are present,
        False if a required credential key is missing or empty.

    Raises:
        SecretStoreError: If the credentials secret cannot be read. A missing
            secret is reported this way too, since the backup was explicitly
            requested.

    """
    verifier = BACKUP_VERIFIERS.get(jenkins.spec.backup)
    if verifier is None:
        return True
    return verifier(jenkins, store, operator_name)
