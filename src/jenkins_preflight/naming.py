"""Naming policy for resources owned by the operator."""

import os

from jenkins_preflight.models import Jenkins

DEFAULT_OPERATOR_NAME = "jenkins-operator"


def get_operator_name() -> str:
    """Return the operator name from the OPERATOR_NAME environment variable.

    Falls back to ``jenkins-operator`` when the variable is unset or empty.
    """
    return os.environ.get("OPERATOR_NAME") or DEFAULT_OPERATOR_NAME


def get_backup_credentials_secret_name(jenkins: Jenkins, operator_name: str | None = None) -> str:
    """Return the conventional name of the backup credentials secret.

    Args:
        jenkins: The Jenkins resource.
        operator_name: Overrides the operator name read from the environment.

    Returns:
        A name of the form ``<operator>-backup-credentials-<jenkins name>``.

    """
    prefix = operator_name or get_operator_name()
    return f"{prefix}-backup-credentials-{jenkins.name}"
