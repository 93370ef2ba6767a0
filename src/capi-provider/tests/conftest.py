"""Test fixtures for the CAPI catalog provider."""

import base64
import os
from datetime import timedelta
from typing import Any, AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
import yaml
from httpx import ASGITransport, AsyncClient
from kubernetes import client

# Set test environment before importing settings
os.environ["ENV"] = "development"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_FORMAT"] = "text"

from shared.models import ProviderConfig, ProviderSchedule  # noqa: E402

from app.services.catalog import InMemoryCatalog  # noqa: E402
from app.services.kube_clients import HubClients  # noqa: E402
from app.services.kubeconfig import CAPI_CLUSTER_SECRET_TYPE  # noqa: E402
from app.services.provider import CAPIClusterProvider  # noqa: E402

TEST_CA_DATA = base64.b64encode(b"-----BEGIN CERTIFICATE-----\ntest\n-----END CERTIFICATE-----\n").decode()


def encode_kubeconfig(server: str, ca_data: str | None = None) -> str:
    """Base64 kubeconfig document as CAPI stores it in a secret."""
    cluster: dict[str, Any] = {"server": server}
    if ca_data:
        cluster["certificate-authority-data"] = ca_data
    document = {
        "apiVersion": "v1",
        "kind": "Config",
        "clusters": [{"name": "workload", "cluster": cluster}],
        "users": [{"name": "workload-admin", "user": {"token": "admin-token"}}],
        "contexts": [
            {"name": "workload-admin@workload", "context": {"cluster": "workload", "user": "workload-admin"}}
        ],
        "current-context": "workload-admin@workload",
    }
    return base64.b64encode(yaml.safe_dump(document).encode()).decode()


def make_secret(
    name: str,
    namespace: str = "default",
    value: str | None = None,
    secret_type: str = CAPI_CLUSTER_SECRET_TYPE,
) -> client.V1Secret:
    return client.V1Secret(
        metadata=client.V1ObjectMeta(name=name, namespace=namespace),
        type=secret_type,
        data={"value": value} if value is not None else None,
    )


def make_cluster_item(
    name: str,
    namespace: str | None = "default",
    annotations: dict[str, str] | None = None,
    infrastructure_kind: str | None = "DockerCluster",
    phase: str | None = "Provisioned",
) -> dict[str, Any]:
    """A CAPI Cluster object as returned by the custom objects API."""
    metadata: dict[str, Any] = {"name": name, "uid": f"uid-{name}", "generation": 1}
    if namespace is not None:
        metadata["namespace"] = namespace
    if annotations is not None:
        metadata["annotations"] = annotations

    spec: dict[str, Any] = {
        "controlPlaneRef": {
            "apiVersion": "controlplane.cluster.x-k8s.io/v1beta1",
            "kind": "KubeadmControlPlane",
            "name": f"{name}-control-plane",
        },
    }
    if infrastructure_kind is not None:
        spec["infrastructureRef"] = {
            "apiVersion": "infrastructure.cluster.x-k8s.io/v1beta1",
            "kind": infrastructure_kind,
            "name": name,
        }

    return {
        "apiVersion": "cluster.x-k8s.io/v1beta1",
        "kind": "Cluster",
        "metadata": metadata,
        "spec": spec,
        "status": {
            "phase": phase,
            "controlPlaneReady": phase == "Provisioned",
            "infrastructureReady": phase == "Provisioned",
        },
    }


@pytest.fixture
def root_config_data() -> dict[str, Any]:
    """Application config with one provider on one hub cluster."""
    return {
        "catalog": {
            "providers": {
                "capi": {
                    "hubClusterName": "cluster1",
                    "schedule": {
                        "frequency": {"minutes": 30},
                        "timeout": {"minutes": 10},
                    },
                },
            },
        },
        "kubernetes": {
            "clusterLocatorMethods": [
                {
                    "type": "config",
                    "clusters": [
                        {
                            "name": "cluster1",
                            "url": "https://cluster1.example.com:6443",
                            "serviceAccountToken": "TOKEN",
                            "skipTLSVerify": True,
                        },
                    ],
                },
            ],
        },
    }


@pytest.fixture
def schedule() -> ProviderSchedule:
    return ProviderSchedule(frequency=timedelta(minutes=30), timeout=timedelta(minutes=10))


@pytest.fixture
def provider_config() -> ProviderConfig:
    return ProviderConfig.model_validate({"id": "default", "hubClusterName": "cluster1"})


@pytest.fixture
def hub_clients() -> HubClients:
    """Hub clients with mocked API calls and no clusters on the hub."""
    custom_objects = MagicMock()
    custom_objects.list_cluster_custom_object.return_value = {"items": []}
    core = MagicMock()
    core.read_namespaced_secret.side_effect = client.ApiException(status=404, reason="Not Found")
    return HubClients(cluster_name="cluster1", custom_objects=custom_objects, core=core)


@pytest.fixture
def task_runner():
    runner = MagicMock()
    runner.run = AsyncMock()
    return runner


@pytest.fixture
def connection():
    conn = MagicMock()
    conn.apply_mutation = AsyncMock()
    return conn


@pytest.fixture
def provider(provider_config, hub_clients, task_runner) -> CAPIClusterProvider:
    return CAPIClusterProvider(provider_config, hub_clients, task_runner)


@pytest_asyncio.fixture
async def connected_provider(provider, connection) -> CAPIClusterProvider:
    await provider.connect(connection)
    return provider


@pytest_asyncio.fixture
async def test_client(connected_provider) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client."""
    from app.main import app

    # Override app state; the lifespan does not run under ASGITransport
    app.state.providers = [connected_provider]
    app.state.catalog = InMemoryCatalog()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
def cluster_item():
    """Factory for CAPI Cluster objects."""
    return make_cluster_item


@pytest.fixture
def kubeconfig_secret():
    """Factory for kubeconfig secrets."""
    return make_secret


@pytest.fixture
def encoded_kubeconfig():
    """Factory for base64 kubeconfig payloads."""
    return encode_kubeconfig


@pytest.fixture
def ca_data() -> str:
    return TEST_CA_DATA
