"""Read-only access to Kubernetes secrets.

Validators depend on the SecretStore protocol rather than on a concrete
client, so the same code runs against a live cluster or against secrets
loaded from local manifests.
"""

import base64
import binascii
from collections.abc import Mapping
from typing import Any, Protocol

from icecream import ic
from kubernetes import client
from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError

from jenkins_preflight.exceptions import SecretNotFoundError, SecretStoreError

SecretData = dict[str, bytes]


class SecretStore(Protocol):
    """Keyed blob store addressed by namespace and name."""

    def get(self, namespace: str, name: str) -> SecretData:
        """Return the data of a secret.

        Raises:
            SecretNotFoundError: If the secret does not exist.
            SecretStoreError: If the store cannot be read.

        """
        ...


class KubernetesSecretStore:
    """SecretStore backed by the Kubernetes core API.

    Every call reads the current state of the secret from the API server.

    Attributes:
        api: The CoreV1Api instance used for lookups.

    """

    def __init__(self, api: client.CoreV1Api | None = None) -> None:
        self.api: client.CoreV1Api = api if api is not None else client.CoreV1Api()

    def get(self, namespace: str, name: str) -> SecretData:
        """Read a secret from the cluster.

        Args:
            namespace: Namespace of the secret.
            name: Name of the secret.

        Returns:
            Mapping of secret keys to decoded values.

        Raises:
            SecretNotFoundError: If the API server returns 404.
            SecretStoreError: On any other API or connection failure.

        """
        ic(namespace, name)
        try:
            secret = self.api.read_namespaced_secret(name=name, namespace=namespace)
        except ApiException as e:
            if e.status == 404:
                raise SecretNotFoundError(namespace, name) from e
            raise SecretStoreError(
                f"Failed to read secret '{namespace}/{name}': {e.status} {e.reason}"
            ) from e
        except HTTPError as e:
            raise SecretStoreError(f"Failed to connect to the Kubernetes cluster: {e}") from e

        return _decode_secret(secret, namespace=namespace, name=name)


def _decode_secret(secret: Any, *, namespace: str, name: str) -> SecretData:
    """Convert a V1Secret into plain bytes values.

    ``data`` values arrive base64 encoded, ``string_data`` values as text.
    """
    result: SecretData = {}
    try:
        for key, value in (secret.data or {}).items():
            result[key] = base64.b64decode(value or "", validate=True)
    except (binascii.Error, ValueError) as e:
        raise SecretStoreError(f"Secret '{namespace}/{name}' contains malformed data: {e}") from e
    for key, value in (getattr(secret, "string_data", None) or {}).items():
        result[key] = (value or "").encode()
    return result


class InMemorySecretStore:
    """SecretStore serving a fixed set of secrets.

    Attributes:
        secrets: Mapping of (namespace, name) to secret data.

    """

    def __init__(self, secrets: Mapping[tuple[str, str], Mapping[str, bytes]] | None = None) -> None:
        self.secrets: dict[tuple[str, str], SecretData] = {
            coordinate: dict(data) for coordinate, data in (secrets or {}).items()
        }

    def get(self, namespace: str, name: str) -> SecretData:
        """Return a copy of the stored secret data.

        Raises:
            SecretNotFoundError: If no secret is stored under namespace/name.

        """
        try:
            return dict(self.secrets[(namespace, name)])
        except KeyError:
            raise SecretNotFoundError(namespace, name) from None

    def __repr__(self) -> str:
        """Return a detailed string representation for debugging."""
        return f"InMemorySecretStore(secrets={sorted(self.secrets)!r})"
