"""Validation gate.

This module provides the Validator class which composes the seed job and
backup precondition validators into a single verdict.
"""

from icecream import ic

from jenkins_preflight.models import Jenkins
from jenkins_preflight.store import SecretStore
from jenkins_preflight.validation.backup import verify_backup
from jenkins_preflight.validation.seed_jobs import validate_seed_jobs


class Validator:
    """Decides whether a Jenkins resource is safe to reconcile.

    The validator holds no state besides its injected settings, so one
    instance may validate different resources concurrently.

    Attributes:
        store: Secret store used for every lookup.
        full_diagnostics: When True the backup stage runs even if the seed
            job stage already failed.
        operator_name: Overrides the operator name used to derive the
            backup credentials secret name.

    """

    def __init__(
        self, store: SecretStore, *, full_diagnostics: bool = False, operator_name: str | None = None
    ) -> None:
        self.store: SecretStore = store
        self.full_diagnostics: bool = full_diagnostics
        self.operator_name: str | None = operator_name

    def validate(self, jenkins: Jenkins) -> bool:
        """Validate a Jenkins resource.

        Args:
            jenkins: The resource to validate.

        Returns:
            True if the declared configuration is consistent and every
            referenced secret is present and well-formed.

        Raises:
            SecretStoreError: On an operational fault. The remaining stages
                are skipped.

        """
        seed_jobs_valid = validate_seed_jobs(jenkins, self.store)
        ic(seed_jobs_valid)
        if not seed_jobs_valid and not self.full_diagnostics:
            return False

        backup_valid = verify_backup(jenkins, self.store, self.operator_name)
        ic(backup_valid)
        return seed_jobs_valid and backup_valid

    def __repr__(self) -> str:
        """Return a detailed string representation for debugging."""
        return (
            f"Validator(store={self.store!r}, full_diagnostics={self.full_diagnostics!r}, "
            f"operator_name={self.operator_name!r})"
        )


def validate(
    jenkins: Jenkins, store: SecretStore, *, full_diagnostics: bool = False, operator_name: str | None = None
) -> bool:
    """Validate a Jenkins resource with a one-off Validator."""
    return Validator(store, full_diagnostics=full_diagnostics, operator_name=operator_name).validate(jenkins)
