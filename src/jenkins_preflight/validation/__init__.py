"""Validators subpackage.

This package contains the private key, seed job and backup precondition
validators composed by the validation gate.
"""

from jenkins_preflight.validation.backup import BACKUP_VERIFIERS, verify_backup, verify_backup_amazon_s3
from jenkins_preflight.validation.keys import validate_private_key
from jenkins_preflight.validation.seed_jobs import is_ssh_url, validate_seed_jobs

__all__ = [
    # backup
    "BACKUP_VERIFIERS",
    "verify_backup",
    "verify_backup_amazon_s3",
    # keys
    "validate_private_key",
    # seed jobs
    "is_ssh_url",
    "validate_seed_jobs",
]
