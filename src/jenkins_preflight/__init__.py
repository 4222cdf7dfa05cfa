"""jenkins-preflight: pre-flight validation gate for Jenkins resources.

This package decides whether the configuration declared by a Jenkins
custom resource is safe to reconcile: seed jobs are well-formed, their
deploy keys exist and are valid RSA private keys, and the credentials
required by the declared backup mode are present.

Example usage:
    from jenkins_preflight import InMemorySecretStore, Validator

    store = InMemorySecretStore({("default", "deploy-key"): {"ssh-privatekey": pem}})
    valid = Validator(store).validate(jenkins)
"""

__version__ = "0.1.0"

from jenkins_preflight.cli import cli
from jenkins_preflight.exceptions import (
    ClusterConnectionError,
    ManifestParsingError,
    PreflightError,
    SecretNotFoundError,
    SecretStoreError,
)
from jenkins_preflight.gate import Validator, validate
from jenkins_preflight.models import BackupMode, Jenkins, JenkinsSpec, KeyCheck, KeyFailure, SecretKeyRef, SeedJob
from jenkins_preflight.store import InMemorySecretStore, KubernetesSecretStore, SecretStore

__all__ = [
    # Version
    "__version__",
    # Main CLI
    "cli",
    # Gate
    "Validator",
    "validate",
    # Secret stores
    "SecretStore",
    "InMemorySecretStore",
    "KubernetesSecretStore",
    # Models
    "BackupMode",
    "Jenkins",
    "JenkinsSpec",
    "KeyCheck",
    "KeyFailure",
    "SecretKeyRef",
    "SeedJob",
    # Exceptions
    "PreflightError",
    "ClusterConnectionError",
    "ManifestParsingError",
    "SecretNotFoundError",
    "SecretStoreError",
]
