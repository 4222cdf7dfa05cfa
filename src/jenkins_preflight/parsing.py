"""Manifest parsing utilities.

This module loads the Jenkins resource to validate and, for offline runs,
the Secret manifests it references from YAML files.
"""

import base64
import binascii
from typing import Any

import yaml

from jenkins_preflight.exceptions import ManifestParsingError
from jenkins_preflight.models import BackupMode, Jenkins, JenkinsSpec, SecretKeyRef, SeedJob
from jenkins_preflight.store import SecretData


def _load_documents(path: str) -> list[Any]:
    try:
        with open(path) as stream:
            return [doc for doc in yaml.safe_load_all(stream) if doc is not None]
    except FileNotFoundError as err:
        raise ManifestParsingError(f"Manifest file '{path}' does not exist") from err
    except OSError as err:
        raise ManifestParsingError(f"Manifest file '{path}' cannot be read: {err}") from err
    except yaml.YAMLError as err:
        raise ManifestParsingError(f"Manifest file '{path}' contains malformed YAML: {err}") from err


def parse_manifest_file(path: str) -> dict[str, Any] | None:
    """Parse a single-document YAML manifest file.

    Args:
        path: Path to the manifest file.

    Returns:
        The parsed YAML document as a dictionary, or None if empty.

    Raises:
        ManifestParsingError: If the file does not exist, contains multiple
            documents, contains malformed YAML, or is not a YAML mapping.

    """
    docs = _load_documents(path)
    if len(docs) > 1:
        raise ManifestParsingError(
            f"File '{path}' contains multiple YAML documents. Only single document files are supported."
        )
    if not docs:
        return None
    result = docs[0]
    if not isinstance(result, dict):
        raise ManifestParsingError(
            f"File '{path}' does not contain a valid YAML mapping. Expected a Kubernetes resource document."
        )
    return result


def _get_str(mapping: dict[str, Any], key: str, where: str) -> str:
    value = mapping.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ManifestParsingError(f"Field '{where}.{key}' must be a string")
    return value


def _parse_private_key(seed_job: dict[str, Any], where: str) -> SecretKeyRef | None:
    private_key = seed_job.get("privateKey") or {}
    if not isinstance(private_key, dict):
        raise ManifestParsingError(f"Field '{where}.privateKey' must be a mapping")
    ref = private_key.get("secretKeyRef")
    if ref is None:
        return None
    if not isinstance(ref, dict):
        raise ManifestParsingError(f"Field '{where}.privateKey.secretKeyRef' must be a mapping")
    return SecretKeyRef(
        name=_get_str(ref, "name", f"{where}.privateKey.secretKeyRef"),
        key=_get_str(ref, "key", f"{where}.privateKey.secretKeyRef"),
    )


def _parse_seed_job(seed_job: Any, index: int) -> SeedJob:
    where = f"spec.seedJobs[{index}]"
    if not isinstance(seed_job, dict):
        raise ManifestParsingError(f"Field '{where}' must be a mapping")
    return SeedJob(
        id=_get_str(seed_job, "id", where),
        repository_url=_get_str(seed_job, "repositoryUrl", where),
        private_key=_parse_private_key(seed_job, where),
        repository_branch=_get_str(seed_job, "repositoryBranch", where),
        targets=_get_str(seed_job, "targets", where),
        description=_get_str(seed_job, "description", where),
    )


def _parse_backup(value: Any) -> BackupMode:
    if not value:
        return BackupMode.NO_BACKUP
    try:
        return BackupMode(value)
    except ValueError:
        supported = ", ".join(mode.value for mode in BackupMode)
        raise ManifestParsingError(f"Unsupported backup type '{value}'. Supported types: {supported}") from None


def parse_jenkins(document: dict[str, Any], default_namespace: str = "default") -> Jenkins:
    """Build a Jenkins resource from a parsed manifest.

    Args:
        document: The parsed manifest.
        default_namespace: Namespace used when the manifest has none.

    Returns:
        The Jenkins resource.

    Raises:
        ManifestParsingError: If the manifest is not a well-formed Jenkins resource.

    """
    if document.get("kind") != "Jenkins":
        raise ManifestParsingError(f"Expected a Jenkins resource, got kind '{document.get('kind')}'")

    metadata = document.get("metadata") or {}
    if not isinstance(metadata, dict) or not metadata.get("name"):
        raise ManifestParsingError("Jenkins resource must have metadata.name")

    spec = document.get("spec") or {}
    if not isinstance(spec, dict):
        raise ManifestParsingError("Field 'spec' must be a mapping")

    seed_jobs = spec.get("seedJobs") or []
    if not isinstance(seed_jobs, list):
        raise ManifestParsingError("Field 'spec.seedJobs' must be a list")

    return Jenkins(
        name=str(metadata["name"]),
        namespace=str(metadata.get("namespace") or default_namespace),
        spec=JenkinsSpec(
            seed_jobs=tuple(_parse_seed_job(seed_job, index) for index, seed_job in enumerate(seed_jobs)),
            backup=_parse_backup(spec.get("backup")),
        ),
    )


def load_jenkins(path: str, default_namespace: str = "default") -> Jenkins:
    """Parse a manifest file holding a single Jenkins resource.

    Raises:
        ManifestParsingError: If the file is empty or not a Jenkins resource.

    """
    document = parse_manifest_file(path)
    if document is None:
        raise ManifestParsingError(f"Manifest file '{path}' is empty")
    return parse_jenkins(document, default_namespace=default_namespace)


def _secret_field(document: dict[str, Any], field: str, source: str) -> dict[str, Any]:
    value = document.get(field) or {}
    if not isinstance(value, dict):
        raise ManifestParsingError(f"Field '{field}' of Secret in '{source}' must be a mapping")
    return value


def _decode_secret_document(document: dict[str, Any], source: str) -> SecretData:
    data: SecretData = {}
    try:
        for key, value in _secret_field(document, "data", source).items():
            data[str(key)] = base64.b64decode(str(value or ""), validate=True)
    except (binascii.Error, ValueError) as err:
        raise ManifestParsingError(f"Secret in '{source}' contains malformed base64 data: {err}") from err
    for key, value in _secret_field(document, "stringData", source).items():
        data[str(key)] = str(value or "").encode()
    return data


def load_secret_manifests(path: str, default_namespace: str = "default") -> dict[tuple[str, str], SecretData]:
    """Load Secret manifests from a multi-document YAML file.

    Documents that are not Secrets are skipped.

    Args:
        path: Path to the YAML file.
        default_namespace: Namespace assigned to secrets without one.

    Returns:
        Mapping of (namespace, name) to decoded secret data.

    Raises:
        ManifestParsingError: If the file cannot be read or a Secret is malformed.

    """
    secrets: dict[tuple[str, str], SecretData] = {}
    for document in _load_documents(path):
        if not isinstance(document, dict) or document.get("kind") != "Secret":
            continue
        metadata = _secret_field(document, "metadata", path)
        name = metadata.get("name")
        if not name:
            raise ManifestParsingError(f"Secret in '{path}' must have metadata.name")
        namespace = metadata.get("namespace") or default_namespace
        secrets[(str(namespace), str(name))] = _decode_secret_document(document, path)
    return secrets
