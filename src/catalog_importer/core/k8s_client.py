"""Kubernetes API wrapper."""

from __future__ import annotations

import logging

from kubernetes import client, config

from catalog_importer.config.settings import Settings, settings as default_settings
from catalog_importer.errors import ClientInitError
from catalog_importer.models import LabelSelector, ResourceKind

logger = logging.getLogger(__name__)


class K8sClient:
    """Thin wrapper around the Kubernetes custom objects API.

    All resources handled here are cluster-scoped custom resources, so
    ``list``/``replace`` go through the cluster custom object endpoints.
    """

    def __init__(self, context: str | None = None, settings: Settings | None = None):
        self.context = context
        self.settings = settings or default_settings
        self._custom: client.CustomObjectsApi | None = None
        self._api_client: client.ApiClient | None = None

    def _load_config(self) -> client.ApiClient:
        if self._api_client is not None:
            return self._api_client
        try:
            cfg = client.Configuration()
            config.load_kube_config(
                context=self.context,
                client_configuration=cfg,
            )
            # Prevent indefinite hangs on unreachable clusters
            cfg.retries = 1
            self._api_client = client.ApiClient(configuration=cfg)
        except config.ConfigException:
            try:
                config.load_incluster_config()
            except config.ConfigException as e:
                raise ClientInitError(f"no kubeconfig or in-cluster configuration found: {e}") from e
            self._api_client = client.ApiClient()
        return self._api_client

    def connect(self) -> None:
        """Load the cluster configuration now instead of on first use."""
        self._load_config()
        logger.info("Dynamic client initialized successfully")

    @property
    def custom(self) -> client.CustomObjectsApi:
        if self._custom is None:
            self._custom = client.CustomObjectsApi(api_client=self._load_config())
        return self._custom

    def list_resources(self, kind: ResourceKind, selector: LabelSelector) -> list[dict]:
        """List cluster-scoped custom objects matching a label selector."""
        result = self.custom.list_cluster_custom_object(
            group=kind.group,
            version=kind.version,
            plural=kind.plural,
            label_selector=str(selector),
            _request_timeout=self.settings.k8s_request_timeout,
        )
        return result.get("items", [])

    def update_resource(self, kind: ResourceKind, obj: dict) -> dict:
        """Replace the whole object (metadata, spec and labels)."""
        return self.custom.replace_cluster_custom_object(
            group=kind.group,
            version=kind.version,
            plural=kind.plural,
            name=obj["metadata"]["name"],
            body=obj,
            _request_timeout=self.settings.k8s_request_timeout,
        )

    def update_resource_status(self, kind: ResourceKind, obj: dict) -> dict:
        """Replace only the status subresource of an object."""
        return self.custom.replace_cluster_custom_object_status(
            group=kind.group,
            version=kind.version,
            plural=kind.plural,
            name=obj["metadata"]["name"],
            body=obj,
            _request_timeout=self.settings.k8s_request_timeout,
        )
