"""Fakes shared by the catalog-importer tests."""
import copy
import json
from typing import Any, Dict, List, Optional

from kubernetes.client import ApiException

from catalog_importer.errors import CatalogAPIError
from catalog_importer.models import LabelSelector, ResourceKind


# ============================================================================
# HTTP fakes
# ============================================================================

class FakeResponse:
    """Just enough of requests.Response for the code under test."""

    def __init__(self, status_code: int = 200, content: bytes = b"", json_body: Any = None):
        self.status_code = status_code
        if json_body is not None:
            content = json.dumps(json_body).encode("utf-8")
        self.content = content

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")

    def json(self) -> Any:
        return json.loads(self.content)


# ============================================================================
# Kubernetes fake
# ============================================================================

class FakeK8s:
    """
    In-memory cluster holding applications and applicationversions.

    Records every update call in ``calls`` as (verb, plural, name) so tests
    can check ordering. ``fail_on`` maps (verb, name) to an HTTP status that
    the matching call raises as ApiException.
    """

    def __init__(self):
        self.objects: Dict[str, Dict[str, dict]] = {"applications": {}, "applicationversions": {}}
        self.calls: List[tuple] = []
        self.fail_on: Dict[tuple, int] = {}
        self.connected = False

    def add(self, plural: str, name: str, labels: Optional[Dict[str, str]] = None, status: Optional[dict] = None):
        obj = {"metadata": {"name": name}}
        if labels is not None:
            obj["metadata"]["labels"] = dict(labels)
        if status is not None:
            obj["status"] = dict(status)
        self.objects[plural][name] = obj
        return obj

    def get(self, plural: str, name: str) -> dict:
        return self.objects[plural][name]

    def connect(self) -> None:
        self.connected = True

    def _maybe_fail(self, verb: str, name: str) -> None:
        status = self.fail_on.get((verb, name))
        if status:
            raise ApiException(status=status, reason="Injected")

    def list_resources(self, kind: ResourceKind, selector: LabelSelector) -> List[dict]:
        self.calls.append(("list", kind.plural, str(selector)))
        self._maybe_fail("list", str(selector))
        return [
            copy.deepcopy(o)
            for o in self.objects[kind.plural].values()
            if (o["metadata"].get("labels") or {}).get(selector.key) == selector.value
        ]

    def update_resource(self, kind: ResourceKind, obj: dict) -> dict:
        name = obj["metadata"]["name"]
        self.calls.append(("update", kind.plural, name))
        self._maybe_fail("update", name)
        stored = self.objects[kind.plural][name]
        # Full update never touches status
        stored["metadata"] = copy.deepcopy(obj["metadata"])
        return copy.deepcopy(stored)

    def update_resource_status(self, kind: ResourceKind, obj: dict) -> dict:
        name = obj["metadata"]["name"]
        self.calls.append(("update_status", kind.plural, name))
        self._maybe_fail("update_status", name)
        stored = self.objects[kind.plural][name]
        stored["status"] = copy.deepcopy(obj.get("status", {}))
        return copy.deepcopy(stored)


# ============================================================================
# Catalog / download fakes
# ============================================================================

class FakeSession:
    """requests.Session stand-in serving canned responses by URL."""

    def __init__(self, responses: Optional[Dict[str, Any]] = None):
        self.responses = responses or {}
        self.requested: List[str] = []
        self.headers: Dict[str, str] = {}

    def get(self, url: str, timeout=None):
        self.requested.append(url)
        result = self.responses.get(url, FakeResponse(404))
        if isinstance(result, Exception):
            raise result
        return result


class FakeCatalog:
    """
    Records uploads as ("create", None) or ("version", app_id) tuples.

    ``fail_calls`` holds 1-based call numbers that fail with HTTP 500.
    """

    def __init__(self, fail_calls=()):
        self.calls: List[tuple] = []
        self.payloads: List[str] = []
        self.fail_calls = set(fail_calls)
        self._apps = 0

    def _check(self, url: str) -> None:
        if len(self.calls) in self.fail_calls:
            raise CatalogAPIError(url, 500, "internal error")

    def create_app(self, request) -> str:
        self.calls.append(("create", None))
        self.payloads.append(request.package)
        self._check("/apps")
        self._apps += 1
        return f"app-{self._apps}"

    def add_version(self, app_name: str, request) -> dict:
        self.calls.append(("version", app_name))
        self.payloads.append(request.package)
        self._check(f"/apps/{app_name}/versions")
        return {}
