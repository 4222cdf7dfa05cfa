"""Seed job validation.

Every seed job is checked even after an earlier one failed, so a single run
reports all misconfigurations of the resource.
"""

import re

from icecream import ic

from jenkins_preflight import console
from jenkins_preflight.exceptions import SecretNotFoundError
from jenkins_preflight.models import Jenkins, SeedJob
from jenkins_preflight.store import SecretStore
from jenkins_preflight.validation.keys import validate_private_key

_SSH_SCHEMES = ("ssh://", "git+ssh://", "ssh+git://")

# scp-like syntax: user@host:path
_SCP_LIKE = re.compile(r"^[\w.\-]+@[\w.\-]+:(?!//)")


def is_ssh_url(url: str) -> bool:
    """Return True if url addresses a repository over SSH.

    Args:
        url: Repository URL, e.g. ``git@github.com:org/repo.git``.

    """
    return url.lower().startswith(_SSH_SCHEMES) or _SCP_LIKE.match(url) is not None


def _warn(seed_job: SeedJob, message: str) -> None:
    label = seed_job.id or "<no id>"
    console.warning(f"Seed job {console.highlight(label)}: {message}")


def _validate_seed_job(seed_job: SeedJob, namespace: str, store: SecretStore) -> bool:
    """Run every applicable check against a single seed job.

    Raises:
        SecretStoreError: If the deploy key secret cannot be read for a
            reason other than its absence.

    """
    ic(seed_job)
    valid = True

    if not seed_job.id:
        _warn(seed_job, "seed job id can't be empty")
        valid = False

    if is_ssh_url(seed_job.repository_url) and seed_job.private_key is None:
        _warn(seed_job, "private key can't be empty while using ssh repository url")
        valid = False

    ref = seed_job.private_key
    if ref is None:
        return valid

    try:
        data = store.get(namespace, ref.name)
    except SecretNotFoundError:
        _warn(seed_job, f"secret {console.highlight(f'{namespace}/{ref.name}')} not found")
        return False

    private_key = data.get(ref.key, b"")
    if not private_key:
        _warn(seed_job, f"private key {console.highlight(ref.key)} in secret {console.highlight(ref.name)} is empty")
        return False

    result = validate_private_key(private_key)
    if not result.ok:
        _warn(seed_job, f"private key is invalid ({result.failure.value}): {result.reason}")
        return False

    return valid


def validate_seed_jobs(jenkins: Jenkins, store: SecretStore) -> bool:
    """Validate all seed jobs declared by a Jenkins resource.

    Args:
        jenkins: The resource to validate.
        store: Secret store used to read deploy keys.

    Returns:
        True only if every seed job passed every applicable check.

    Raises:
        SecretStoreError: If a deploy key lookup fails with a transport error.
            The remaining seed jobs are not checked.

    """
    valid = True
    for seed_job in jenkins.spec.seed_jobs:
        if not _validate_seed_job(seed_job, jenkins.namespace, store):
            valid = False
    return valid
