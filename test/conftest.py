from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from attrs import define, field
from azure.core.pipeline import AsyncPipeline, Pipeline
from azure.core.pipeline.transport import AsyncHttpTransport, HttpTransport
from azure.core.rest import HttpRequest
from pytest import fixture

from fixarm.config import ArmConfig
from fixarm.manager import ArmManager
from fixarm.pipeline import create_async_pipeline, create_pipeline
from fixarm.task_group import TaskGroup
from fixarm.types import Json

Subscription = "00000000-0000-0000-0000-000000000000"


class StaticResponse:
    """
    Minimal http response: enough for the pipeline policies and the azure-core error mapping.
    """

    def __init__(self, request: HttpRequest, status_code: int = 200, body: Optional[Json] = None) -> None:
        self.request = request
        self.status_code = status_code
        self.reason = "OK" if status_code < 400 else "Error"
        self.headers: Dict[str, str] = {"Content-Type": "application/json"}
        self.content_type = "application/json"
        self.body = body if body is not None else {}

    def text(self, encoding: Optional[str] = None) -> str:
        return json.dumps(self.body)

    def json(self) -> Any:
        return self.body


def put_response(request: HttpRequest) -> StaticResponse:
    # echo the request body and add the id as ARM does
    body = json.loads(request.content) if request.content else {}
    body["id"] = request.url.split("?")[0].split("management.azure.com", 1)[-1]
    return StaticResponse(request, 200, body)


class StaticTransport(HttpTransport):  # type: ignore
    def __init__(self, status_code: int = 200) -> None:
        self.status_code = status_code
        self.requests: List[HttpRequest] = []

    def send(self, request: HttpRequest, **kwargs: Any) -> StaticResponse:
        self.requests.append(request)
        return StaticResponse(request, self.status_code)

    def open(self) -> None:
        pass

    def close(self) -> None:
        pass

    def __enter__(self) -> StaticTransport:
        return self

    def __exit__(self, *args: Any) -> None:
        pass


class AsyncStaticTransport(AsyncHttpTransport):  # type: ignore
    def __init__(self, status_code: int = 200) -> None:
        self.status_code = status_code
        self.requests: List[HttpRequest] = []

    async def send(self, request: HttpRequest, **kwargs: Any) -> StaticResponse:
        self.requests.append(request)
        if self.status_code >= 400:
            return StaticResponse(request, self.status_code, {"error": {"code": "Failed", "message": "failed"}})
        if request.method == "PUT":
            return put_response(request)
        return StaticResponse(request, self.status_code)

    async def open(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def __aenter__(self) -> AsyncStaticTransport:
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@define(eq=False)
class StaticParent:
    """
    A parent resource, that is created as part of a task group.
    """

    name: str
    resource_group_name: Optional[str]
    task_group: TaskGroup = field(factory=TaskGroup)
    created: int = 0

    def __attrs_post_init__(self) -> None:
        self.task_group.work = self.create

    async def create(self) -> StaticParent:
        self.created += 1
        return self


@fixture
def config() -> ArmConfig:
    return ArmConfig(retry_total=0)


@fixture
def transport() -> StaticTransport:
    return StaticTransport()


@fixture
def async_transport() -> AsyncStaticTransport:
    return AsyncStaticTransport()


@fixture
def pipeline(config: ArmConfig, transport: StaticTransport) -> Pipeline:
    return create_pipeline(config, transport=transport)


@fixture
def async_pipeline(config: ArmConfig, async_transport: AsyncStaticTransport) -> AsyncPipeline:
    return create_async_pipeline(config, transport=async_transport)


@fixture
def manager(config: ArmConfig, async_pipeline: AsyncPipeline) -> ArmManager:
    return ArmManager(config, Subscription, pipeline=async_pipeline)
