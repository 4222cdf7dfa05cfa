#!/usr/bin/env python
"""Command-line interface for jenkins-preflight.

This module provides the main CLI entry point, which loads a Jenkins
resource manifest, picks a secret store and runs the validation gate.
"""

import sys

import click
from icecream import ic

from jenkins_preflight import __version__, console
from jenkins_preflight.cluster import Cluster
from jenkins_preflight.exceptions import ClusterConnectionError, ManifestParsingError, SecretStoreError
from jenkins_preflight.gate import Validator
from jenkins_preflight.models import Jenkins
from jenkins_preflight.parsing import load_jenkins, load_secret_manifests
from jenkins_preflight.store import InMemorySecretStore, SecretStore

EXIT_INVALID = 1
EXIT_OPERATIONAL_ERROR = 3


def build_secret_store(
    *,
    secrets: str | None,
    namespace: str,
    select_context: bool,
    in_cluster: bool,
) -> SecretStore:
    """Create the secret store to validate against.

    Args:
        secrets: Path to Secret manifests for offline validation, or None
            to read secrets from the cluster.
        namespace: Namespace assigned to secret manifests without one.
        select_context: Prompt for the Kubernetes context.
        in_cluster: Use the in-cluster service account configuration.

    Raises:
        ManifestParsingError: If the secret manifests cannot be parsed.
        ClusterConnectionError: If the cluster configuration cannot be loaded.

    """
    if secrets is not None:
        console.info(f"Validating offline against secrets from {console.highlight(secrets)}")
        return InMemorySecretStore(load_secret_manifests(secrets, default_namespace=namespace))
    return Cluster(select_context=select_context, in_cluster=in_cluster).secret_store()


def print_summary(jenkins: Jenkins, valid: bool) -> None:
    """Print the verdict for a Jenkins resource."""
    console.summary_panel(
        "Pre-flight Validation",
        {
            "Resource": f"{jenkins.namespace}/{jenkins.name}",
            "Seed jobs": str(len(jenkins.spec.seed_jobs)),
            "Backup": jenkins.spec.backup.value,
            "Verdict": "valid" if valid else "configuration invalid",
        },
        ok=valid,
    )
    if valid:
        console.success(f"{console.highlight(jenkins.name)} is safe to reconcile")
    else:
        console.error(f"{console.highlight(jenkins.name)} has an invalid configuration")


@click.command(help="Validate a Jenkins resource before it is reconciled")
@click.argument("manifest", required=False, type=click.Path(dir_okay=False))
@click.option("--version", "-v", required=False, is_flag=True, help="print version")
@click.option("--debug", required=False, is_flag=True, help="print debug information")
@click.option(
    "--secrets",
    "-s",
    required=False,
    type=click.Path(exists=True, dir_okay=False, readable=True),
    help="validate offline against Secret manifests from this file",
)
@click.option(
    "--namespace", "-n", required=False, default="default", show_default=True, help="namespace for manifests without one"
)
@click.option("--select", required=False, is_flag=True, default=False, help="prompt for context select")
@click.option("--in-cluster", required=False, is_flag=True, default=False, help="use in-cluster configuration")
@click.option(
    "--full", required=False, is_flag=True, default=False, help="run backup checks even if seed jobs are invalid"
)
@click.option("--operator-name", required=False, help="operator name used to derive the backup credentials secret name")
def cli(
    manifest: str | None,
    version: bool,
    debug: bool,
    secrets: str | None,
    namespace: str,
    select: bool,
    in_cluster: bool,
    full: bool,
    operator_name: str | None,
) -> None:
    """Process CLI arguments and run the validation gate.

    Args:
        manifest: Path to the Jenkins resource manifest.
        version: Print version and exit.
        debug: Enable debug output.
        secrets: Path to Secret manifests for offline validation.
        namespace: Namespace for manifests without one.
        select: Prompt for Kubernetes context selection.
        in_cluster: Use in-cluster configuration.
        full: Run every stage instead of stopping after invalid seed jobs.
        operator_name: Operator name overriding the OPERATOR_NAME environment variable.

    """
    if not debug:
        ic.disable()

    if version:
        click.echo(__version__)
        return

    if manifest is None:
        raise click.UsageError("Missing argument 'MANIFEST'.")

    try:
        jenkins = load_jenkins(manifest, default_namespace=namespace)
        ic(jenkins)
        store = build_secret_store(
            secrets=secrets, namespace=jenkins.namespace, select_context=select, in_cluster=in_cluster
        )
    except ManifestParsingError as e:
        raise click.ClickException(str(e)) from None
    except ClusterConnectionError as e:
        console.error(f"Cluster connection failed: {e}")
        sys.exit(EXIT_OPERATIONAL_ERROR)

    console.action(f"Validating {console.highlight(f'{jenkins.namespace}/{jenkins.name}')}")
    validator = Validator(store, full_diagnostics=full, operator_name=operator_name)
    try:
        with console.spinner("Checking seed jobs and backup credentials..."):
            valid = validator.validate(jenkins)
    except SecretStoreError as e:
        console.error(f"Secret store error: {e}")
        sys.exit(EXIT_OPERATIONAL_ERROR)

    print_summary(jenkins, valid)
    if not valid:
        sys.exit(EXIT_INVALID)


if __name__ == "__main__":
    cli()
