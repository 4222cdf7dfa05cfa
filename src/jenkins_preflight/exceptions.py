"""Custom exceptions for jenkins-preflight.

Validation failures are never raised: they are reported as a ``False``
verdict. The exceptions below describe operational faults that abort a
validation run and are expected to be retried by the caller later.
"""


class PreflightError(Exception):
    """Base exception for all jenkins-preflight errors.

    All custom exceptions in this package inherit from this class,
    allowing callers to catch all jenkins-preflight errors with a single
    except clause if desired.
    """

    pass


class SecretStoreError(PreflightError):
    """Raised when the secret store cannot be read.

    This can occur when:
    - The Kubernetes API is unreachable
    - The service account lacks permission to read secrets
    - The API returns a malformed secret payload
    """

    pass


class SecretNotFoundError(SecretStoreError):
    """Raised when the secret store reports that a secret does not exist.

    Unlike the other store errors this is an expected outcome of a
    misconfigured resource. Seed job validation turns it into an invalid
    verdict, while backup validation lets it propagate.

    Attributes:
        namespace: Namespace that was searched.
        name: Name of the missing secret.

    """

    def __init__(self, namespace: str, name: str) -> None:
        super().__init__(f"Secret '{namespace}/{name}' not found")
        self.namespace = namespace
        self.name = name


class ClusterConnectionError(PreflightError):
    """Raised when connection to the Kubernetes cluster fails.

    This can occur when:
    - The kubeconfig is invalid or missing
    - In-cluster configuration is requested outside of a pod
    """

    pass


class ManifestParsingError(PreflightError):
    """Raised when parsing a manifest file fails.

    This can occur when:
    - The file does not exist
    - The file is not valid YAML
    - The YAML does not describe a valid Jenkins resource or Secret
    """

    pass
