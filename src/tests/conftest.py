"""Pytest configuration and shared fixtures."""

import os
from typing import Any

import pytest

# Set test environment before importing settings
os.environ["ENV"] = "development"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_FORMAT"] = "text"


@pytest.fixture
def sample_cluster_object() -> dict[str, Any]:
    """A CAPI Cluster object as returned by the Kubernetes API."""
    return {
        "apiVersion": "cluster.x-k8s.io/v1beta1",
        "kind": "Cluster",
        "metadata": {
            "name": "workload-01",
            "namespace": "clusters",
            "uid": "0f6a2c3e-1d2b-4c5a-9e8f-7a6b5c4d3e2f",
            "annotations": {
                "cluster.x-k8s.io/cluster-owner": "group:platform",
                "cluster.x-k8s.io/cluster-tags": "edge,gpu",
            },
            "labels": {"cluster.x-k8s.io/cluster-name": "workload-01"},
        },
        "spec": {
            "paused": False,
            "controlPlaneRef": {
                "apiVersion": "controlplane.cluster.x-k8s.io/v1beta1",
                "kind": "KubeadmControlPlane",
                "name": "workload-01-control-plane",
                "namespace": "clusters",
            },
            "infrastructureRef": {
                "apiVersion": "infrastructure.cluster.x-k8s.io/v1beta1",
                "kind": "AWSCluster",
                "name": "workload-01",
                "namespace": "clusters",
            },
        },
        "status": {
            "phase": "Provisioned",
            "controlPlaneReady": True,
            "infrastructureReady": True,
        },
    }


@pytest.fixture
def sample_app_config() -> dict[str, Any]:
    """Application config with two named providers."""
    return {
        "app": {"title": "Developer Portal"},
        "catalog": {
            "providers": {
                "capi": {
                    "dev": {"hubClusterName": "hub-dev"},
                    "prod": {
                        "hubClusterName": "hub-prod",
                        "schedule": {"frequency": {"hours": 1}, "timeout": {"minutes": 15}},
                    },
                },
            },
        },
        "kubernetes": {
            "serviceLocatorMethod": {"type": "multiTenant"},
            "clusterLocatorMethods": [
                {
                    "type": "config",
                    "clusters": [
                        {
                            "name": "hub-dev",
                            "url": "https://hub-dev.example.com:6443",
                            "authProvider": "serviceAccount",
                            "serviceAccountToken": "dev-token",
                            "skipTLSVerify": True,
                        },
                        {
                            "name": "hub-prod",
                            "url": "https://hub-prod.example.com:6443",
                            "serviceAccountToken": "prod-token",
                            "caData": "Q0E=",
                        },
                    ],
                },
            ],
        },
    }
