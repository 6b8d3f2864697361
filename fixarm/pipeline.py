from typing import Any, List, Optional

from azure.core.credentials import TokenCredential
from azure.core.credentials_async import AsyncTokenCredential
from azure.core.pipeline import AsyncPipeline, Pipeline
from azure.core.pipeline.policies import (
    AsyncBearerTokenCredentialPolicy,
    AsyncRetryPolicy,
    BearerTokenCredentialPolicy,
    HeadersPolicy,
    NetworkTraceLoggingPolicy,
    RetryPolicy,
    UserAgentPolicy,
)
from azure.core.pipeline.transport import AioHttpTransport, AsyncHttpTransport, HttpTransport, RequestsTransport

from fixarm.config import ArmConfig
from fixarm.logger import log
from fixarm.policies import AddDatePolicy, AsyncAddDatePolicy

SdkMoniker = "fixarm/1.0.0"


def create_pipeline(
    config: ArmConfig,
    credential: Optional[TokenCredential] = None,
    transport: Optional[HttpTransport] = None,
) -> Pipeline:
    """
    Create a synchronous pipeline with the policies defined by the config.
    The date policy is placed after the retry policy, so that every attempt carries the time it was sent.
    """
    policies: List[Any] = [
        HeadersPolicy(),
        UserAgentPolicy(base_user_agent=config.user_agent, sdk_moniker=SdkMoniker),
        RetryPolicy(retry_total=config.retry_total),
    ]
    if credential is not None:
        policies.append(BearerTokenCredentialPolicy(credential, *config.credential_scopes))
    if config.add_date_header:
        policies.append(AddDatePolicy())
    policies.append(NetworkTraceLoggingPolicy(logging_enable=config.network_trace))
    log.debug(f"Create pipeline with policies: {[type(p).__name__ for p in policies]}")
    return Pipeline(transport=transport or RequestsTransport(), policies=policies)


def create_async_pipeline(
    config: ArmConfig,
    credential: Optional[AsyncTokenCredential] = None,
    transport: Optional[AsyncHttpTransport] = None,
) -> AsyncPipeline:
    """
    Async version of create_pipeline.
    If no transport is given, the aiohttp based transport of azure-core is used.
    """
    policies: List[Any] = [
        HeadersPolicy(),
        UserAgentPolicy(base_user_agent=config.user_agent, sdk_moniker=SdkMoniker),
        AsyncRetryPolicy(retry_total=config.retry_total),
    ]
    if credential is not None:
        policies.append(AsyncBearerTokenCredentialPolicy(credential, *config.credential_scopes))
    if config.add_date_header:
        policies.append(AsyncAddDatePolicy())
    policies.append(NetworkTraceLoggingPolicy(logging_enable=config.network_trace))
    log.debug(f"Create async pipeline with policies: {[type(p).__name__ for p in policies]}")
    return AsyncPipeline(transport=transport or AioHttpTransport(), policies=policies)
