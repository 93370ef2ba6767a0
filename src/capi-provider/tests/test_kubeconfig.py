"""Tests for kubeconfig secret resolution."""

import base64
from unittest.mock import MagicMock

import pytest
from kubernetes.client.rest import ApiException

from shared.models import RemoteCluster

from app.services.kubeconfig import (
    KubeConfigDecodeError,
    credentials_from_secret,
    decode_kubeconfig,
    kubeconfig_secret_name,
    resolve_all_credentials,
    resolve_credentials,
)


def secrets_by_name(secrets):
    """read_namespaced_secret side effect serving a fixed set of secrets."""

    def read(name, namespace):
        secret = secrets.get((namespace, name))
        if secret is None:
            raise ApiException(status=404, reason="Not Found")
        return secret

    return read


class TestDecodeKubeconfig:
    def test_decodes_server_and_ca(self, encoded_kubeconfig, ca_data):
        credentials = decode_kubeconfig(encoded_kubeconfig("https://172.18.0.2:6443", ca_data))

        assert credentials.server == "https://172.18.0.2:6443"
        assert credentials.ca_data == ca_data

    def test_without_ca(self, encoded_kubeconfig):
        credentials = decode_kubeconfig(encoded_kubeconfig("https://172.18.0.2:6443"))

        assert credentials.ca_data is None

    def test_not_base64(self):
        with pytest.raises(KubeConfigDecodeError):
            decode_kubeconfig("not base64!")

    def test_not_a_mapping(self):
        with pytest.raises(KubeConfigDecodeError, match="mapping"):
            decode_kubeconfig(base64.b64encode(b"- a\n- b\n").decode())

    def test_no_clusters(self):
        with pytest.raises(KubeConfigDecodeError, match="no clusters"):
            decode_kubeconfig(base64.b64encode(b"apiVersion: v1\nclusters: []\n").decode())

    def test_cluster_without_server(self):
        payload = b"clusters:\n- name: c\n  cluster: {}\n"
        with pytest.raises(KubeConfigDecodeError, match="server"):
            decode_kubeconfig(base64.b64encode(payload).decode())


class TestCredentialsFromSecret:
    def test_capi_secret(self, kubeconfig_secret, encoded_kubeconfig):
        secret = kubeconfig_secret("c1-kubeconfig", value=encoded_kubeconfig("https://c1:6443"))

        assert credentials_from_secret(secret).server == "https://c1:6443"

    def test_wrong_type(self, kubeconfig_secret, encoded_kubeconfig):
        secret = kubeconfig_secret(
            "c1-kubeconfig",
            value=encoded_kubeconfig("https://c1:6443"),
            secret_type="Opaque",
        )

        assert credentials_from_secret(secret) is None

    def test_missing_value(self, kubeconfig_secret):
        assert credentials_from_secret(kubeconfig_secret("c1-kubeconfig")) is None

    def test_undecodable_value(self, kubeconfig_secret):
        assert credentials_from_secret(kubeconfig_secret("c1-kubeconfig", value="%%%")) is None


class TestResolveCredentials:
    async def test_reads_secret_in_cluster_namespace(self, kubeconfig_secret, encoded_kubeconfig):
        core = MagicMock()
        core.read_namespaced_secret.return_value = kubeconfig_secret(
            "c1-kubeconfig", namespace="team-a", value=encoded_kubeconfig("https://c1:6443")
        )

        credentials = await resolve_credentials(core, "team-a", "c1")

        core.read_namespaced_secret.assert_called_once_with("c1-kubeconfig", "team-a")
        assert credentials.server == "https://c1:6443"

    async def test_defaults_namespace(self):
        core = MagicMock()
        core.read_namespaced_secret.side_effect = ApiException(status=404, reason="Not Found")

        assert await resolve_credentials(core, None, "c1") is None
        core.read_namespaced_secret.assert_called_once_with("c1-kubeconfig", "default")

    async def test_api_error_yields_none(self):
        core = MagicMock()
        core.read_namespaced_secret.side_effect = ApiException(status=403, reason="Forbidden")

        assert await resolve_credentials(core, "default", "c1") is None

    def test_secret_name(self):
        assert kubeconfig_secret_name("c1") == "c1-kubeconfig"


class TestResolveAllCredentials:
    async def test_mixed_outcomes(self, kubeconfig_secret, encoded_kubeconfig, cluster_item):
        core = MagicMock()
        core.read_namespaced_secret.side_effect = secrets_by_name(
            {
                ("default", "c1-kubeconfig"): kubeconfig_secret(
                    "c1-kubeconfig", value=encoded_kubeconfig("https://c1:6443")
                ),
                ("team-a", "c2-kubeconfig"): kubeconfig_secret(
                    "c2-kubeconfig", namespace="team-a", value="garbage", secret_type="Opaque"
                ),
            }
        )
        clusters = [
            RemoteCluster.model_validate(cluster_item("c1")),
            RemoteCluster.model_validate(cluster_item("c2", namespace="team-a")),
            RemoteCluster.model_validate(cluster_item("c3")),
        ]

        credentials = await resolve_all_credentials(core, clusters)

        assert set(credentials) == {"default/c1", "team-a/c2", "default/c3"}
        assert credentials["default/c1"].server == "https://c1:6443"
        assert credentials["team-a/c2"] is None
        assert credentials["default/c3"] is None

    async def test_same_name_in_different_namespaces(
        self, kubeconfig_secret, encoded_kubeconfig, cluster_item
    ):
        core = MagicMock()
        core.read_namespaced_secret.side_effect = secrets_by_name(
            {
                ("a", "c1-kubeconfig"): kubeconfig_secret(
                    "c1-kubeconfig", namespace="a", value=encoded_kubeconfig("https://a:6443")
                ),
                ("b", "c1-kubeconfig"): kubeconfig_secret(
                    "c1-kubeconfig", namespace="b", value=encoded_kubeconfig("https://b:6443")
                ),
            }
        )
        clusters = [
            RemoteCluster.model_validate(cluster_item("c1", namespace="a")),
            RemoteCluster.model_validate(cluster_item("c1", namespace="b")),
        ]

        credentials = await resolve_all_credentials(core, clusters)

        assert credentials["a/c1"].server == "https://a:6443"
        assert credentials["b/c1"].server == "https://b:6443"

    async def test_no_clusters(self):
        assert await resolve_all_credentials(MagicMock(), []) == {}
