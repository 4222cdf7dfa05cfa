"""Kubernetes cluster interaction utilities.

This module provides the Cluster class which loads the cluster
configuration and hands out secret stores bound to it.
"""

import click
import questionary
from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException

from jenkins_preflight import console
from jenkins_preflight.exceptions import ClusterConnectionError
from jenkins_preflight.store import KubernetesSecretStore
from jenkins_preflight.styles import POINTER, PROMPT_STYLE, QMARK


class Cluster:
    """Manages the connection to a Kubernetes cluster.

    Attributes:
        context: The active Kubernetes context name, or ``in-cluster``.

    """

    def __init__(self, *, select_context: bool = False, in_cluster: bool = False) -> None:
        """Load the cluster configuration.

        Args:
            select_context: If True, prompt user to select a context.
            in_cluster: If True, use the pod service account instead of a kubeconfig.

        Raises:
            ClusterConnectionError: If the configuration cannot be loaded.

        """
        if in_cluster:
            try:
                config.load_incluster_config()
            except ConfigException as e:
                raise ClusterConnectionError(f"Failed to load in-cluster configuration: {e}") from e
            self.context: str = "in-cluster"
            console.action("Working with the in-cluster configuration")
        else:
            self.context = self._set_context(select_context=select_context)
            try:
                config.load_kube_config(context=self.context)
            except ConfigException as e:
                raise ClusterConnectionError(f"Invalid or missing kubeconfig: {e}") from e

    @staticmethod
    def _set_context(*, select_context: bool) -> str:
        """Set the Kubernetes context to use.

        Args:
            select_context: If True, prompt user to select a context.

        Returns:
            The selected or current context name.

        Raises:
            ClusterConnectionError: If kubeconfig is invalid or missing.
            click.Abort: If user cancels context selection.

        """
        try:
            contexts, current_context = config.list_kube_config_contexts()
        except ConfigException as e:
            raise ClusterConnectionError(f"Invalid or missing kubeconfig: {e}") from e
        if select_context:
            context_names: list[str] = [context["name"] for context in contexts]
            context: str | None = questionary.select(
                "Select context to validate against",
                choices=context_names,
                style=PROMPT_STYLE,
                pointer=POINTER,
                qmark=QMARK,
            ).ask()
            if context is None:
                console.warning("Context selection cancelled.")
                raise click.Abort()
        else:
            context = str(current_context["name"])
        console.action(f"Working with {console.highlight(context)} cluster")
        return context

    def secret_store(self) -> KubernetesSecretStore:
        """Return a secret store reading from this cluster."""
        return KubernetesSecretStore(client.CoreV1Api())

    def __repr__(self) -> str:
        """Return a detailed string representation for debugging."""
        return f"Cluster(context={self.context!r})"
