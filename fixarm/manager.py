from __future__ import annotations

from typing import Any, Dict, Optional

from azure.core.exceptions import (
    ClientAuthenticationError,
    HttpResponseError,
    ResourceExistsError,
    ResourceNotFoundError,
    map_error,
)
from azure.core.pipeline import AsyncPipeline
from azure.core.pipeline.transport import AsyncHttpTransport
from azure.core.rest import AsyncHttpResponse, HttpRequest
from azure.mgmt.core.exceptions import ARMErrorFormat

from fixarm.config import ArmConfig, AsyncAzureCredentials
from fixarm.logger import log
from fixarm.pipeline import create_async_pipeline
from fixarm.types import Json

ErrorMap = {
    401: ClientAuthenticationError,
    404: ResourceNotFoundError,
    409: ResourceExistsError,
}


class ArmManager:
    """
    Handle to the Azure Resource Manager of one subscription.
    Independent children receive this handle to perform their service calls.
    """

    def __init__(
        self,
        config: ArmConfig,
        subscription_id: str,
        pipeline: Optional[AsyncPipeline] = None,
        transport: Optional[AsyncHttpTransport] = None,
    ) -> None:
        self.config = config
        self.subscription_id = subscription_id
        # a credential created here is owned by the manager and closed with it
        self.credential: Optional[AsyncAzureCredentials] = None
        if pipeline is None:
            self.credential = config.credentials()
            pipeline = create_async_pipeline(config, self.credential, transport)
        self.pipeline = pipeline

    def url(self, path: str) -> str:
        return self.config.endpoint.rstrip("/") + "/" + path.lstrip("/")

    def subscription_path(self, path: str) -> str:
        return f"/subscriptions/{self.subscription_id}/{path.lstrip('/')}"

    async def send(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Json] = None,
        api_version: Optional[str] = None,
        params: Optional[Dict[str, str]] = None,
        **kwargs: Any,
    ) -> AsyncHttpResponse:
        """
        Send a request to the resource manager.
        Raises an HttpResponseError (or one of the mapped subclasses), if the response status is not 2xx.
        """
        query = {"api-version": api_version or self.config.api_version, **(params or {})}
        request = HttpRequest(method=method, url=self.url(path), params=query, json=json)
        pipeline_response = await self.pipeline.run(request, **kwargs)
        response: AsyncHttpResponse = pipeline_response.http_response
        if not 200 <= response.status_code < 300:
            log.debug(f"{method} {path} failed with status {response.status_code}")
            map_error(status_code=response.status_code, response=response, error_map=ErrorMap)
            raise HttpResponseError(response=response, error_format=ARMErrorFormat)
        return response

    async def close(self) -> None:
        await self.pipeline.__aexit__()
        if self.credential is not None:
            await self.credential.close()
