"""Shared test fixtures for jenkins-preflight tests."""

from unittest.mock import MagicMock, patch

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from jenkins_preflight.models import BackupMode, Jenkins, JenkinsSpec, SecretKeyRef, SeedJob
from jenkins_preflight.store import InMemorySecretStore


@pytest.fixture(scope="session")
def rsa_key():
    """A freshly generated 2048-bit RSA private key."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_pem(rsa_key):
    """PKCS#1 PEM encoding of the RSA key."""
    return rsa_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture(scope="session")
def rsa_pkcs8_pem(rsa_key):
    """PKCS#8 PEM encoding of the RSA key."""
    return rsa_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture(scope="session")
def ec_pem():
    """PKCS#8 PEM encoding of an EC private key."""
    key = ec.generate_private_key(ec.SECP256R1())
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture(scope="session")
def inconsistent_rsa_pem(rsa_key):
    """PKCS#1 PEM of an RSA key whose private exponent does not match."""
    numbers = rsa_key.private_numbers()
    broken = rsa.RSAPrivateNumbers(
        p=numbers.p,
        q=numbers.q,
        d=numbers.d + 2,
        dmp1=numbers.dmp1,
        dmq1=numbers.dmq1,
        iqmp=numbers.iqmp,
        public_numbers=numbers.public_numbers,
    ).private_key(unsafe_skip_rsa_key_validation=True)
    return broken.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture
def deploy_key_job():
    """Seed job using an SSH repository with a deploy key reference."""
    return SeedJob(
        id="jenkins-operator",
        repository_url="git@github.com:jenkinsci/kubernetes-operator.git",
        private_key=SecretKeyRef(name="deploy-keys", key="jenkins-operator"),
    )


@pytest.fixture
def make_jenkins():
    """Factory building a Jenkins resource in the default namespace."""

    def _make(*seed_jobs: SeedJob, backup: BackupMode = BackupMode.NO_BACKUP, name: str = "example") -> Jenkins:
        return Jenkins(name=name, namespace="default", spec=JenkinsSpec(seed_jobs=tuple(seed_jobs), backup=backup))

    return _make


@pytest.fixture
def s3_credentials():
    """Complete Amazon S3 backup credentials."""
    return {"access-key": b"AKIAEXAMPLE", "secret-key": b"c2VjcmV0"}


@pytest.fixture
def secret_store(rsa_pem, s3_credentials):
    """In-memory store with a valid deploy key and backup credentials."""
    return InMemorySecretStore(
        {
            ("default", "deploy-keys"): {"jenkins-operator": rsa_pem},
            ("default", "jenkins-operator-backup-credentials-example"): s3_credentials,
        }
    )


@pytest.fixture(autouse=True)
def default_operator_name(monkeypatch):
    """Make the backup secret naming independent of the environment."""
    monkeypatch.delenv("OPERATOR_NAME", raising=False)


@pytest.fixture
def mock_kube_contexts():
    """Mock kubernetes config contexts."""
    with patch("kubernetes.config.list_kube_config_contexts") as mock:
        mock.return_value = ([{"name": "test-context"}], {"name": "test-context"})
        yield mock


@pytest.fixture
def mock_kube_config():
    """Mock kubernetes config loading."""
    with patch("kubernetes.config.load_kube_config") as mock:
        yield mock


@pytest.fixture
def mock_core_v1_api():
    """Mock CoreV1Api for secret lookups."""
    with patch("kubernetes.client.CoreV1Api") as mock:
        api_instance = MagicMock()
        mock.return_value = api_instance
        yield api_instance


@pytest.fixture
def sample_jenkins_yaml():
    """Sample Jenkins resource manifest."""
    return """apiVersion: virtuslab.com/v1alpha1
kind: Jenkins
metadata:
  name: example
  namespace: default
spec:
  backup: AmazonS3
  seedJobs:
  - id: jenkins-operator
    targets: "cicd/jobs/*.jenkins"
    description: "Jenkins Operator repository"
    repositoryBranch: master
    repositoryUrl: git@github.com:jenkinsci/kubernetes-operator.git
    privateKey:
      secretKeyRef:
        name: deploy-keys
        key: jenkins-operator
  - id: public
    repositoryUrl: https://github.com/jenkinsci/kubernetes-operator.git
"""
