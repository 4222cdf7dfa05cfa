"""Data models for jenkins-preflight.

This module provides type-safe data structures describing the Jenkins
custom resource and the outcome of private key checks.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple


class BackupMode(str, Enum):
    """Backup providers supported by the Jenkins resource.

    Inherits from str so the values can be compared directly with the
    ``spec.backup`` field of a manifest.
    """

    NO_BACKUP = "NoBackup"
    AMAZON_S3 = "AmazonS3"


class KeyFailure(str, Enum):
    """Kind of failure reported by the private key validator."""

    STRUCTURAL = "structural"
    MATH = "math"


class KeyCheck(NamedTuple):
    """Result of validating private key material.

    Attributes:
        failure: The failure kind, or None when the key is valid.
        reason: Human-readable description of the failure.

    """

    failure: KeyFailure | None
    reason: str = ""

    @property
    def ok(self) -> bool:
        """Whether the key passed every check."""
        return self.failure is None


@dataclass(frozen=True, slots=True)
class SecretKeyRef:
    """Reference to a single key of a secret in the resource namespace.

    Attributes:
        name: The name of the secret.
        key: The key inside the secret data.

    """

    name: str
    key: str


@dataclass(frozen=True, slots=True)
class SeedJob:
    """A seed job declared by the Jenkins resource.

    Attributes:
        id: Identifier of the seed job, must not be empty.
        repository_url: URL of the repository holding job definitions.
        private_key: Reference to the deploy key, required for SSH URLs.
        repository_branch: Branch to check out.
        targets: Job DSL script targets.
        description: Free-form description.

    """

    id: str
    repository_url: str = ""
    private_key: SecretKeyRef | None = None
    repository_branch: str = ""
    targets: str = ""
    description: str = ""


@dataclass(frozen=True, slots=True)
class JenkinsSpec:
    """Declared desired state of a Jenkins instance."""

    seed_jobs: tuple[SeedJob, ...] = ()
    backup: BackupMode = BackupMode.NO_BACKUP


@dataclass(frozen=True, slots=True)
class Jenkins:
    """A Jenkins custom resource.

    Attributes:
        name: The resource name.
        namespace: The namespace the resource and its secrets live in.
        spec: The declared desired state.

    """

    name: str
    namespace: str
    spec: JenkinsSpec = field(default_factory=JenkinsSpec)
