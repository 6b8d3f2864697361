from typing import ClassVar, Optional, List, Union

import cattrs
from attr import define, field
from azure.identity.aio import ClientSecretCredential, DefaultAzureCredential

from fixarm.types import Json

AsyncAzureCredentials = Union[DefaultAzureCredential, ClientSecretCredential]


@define
class ArmClientSecretConfig:
    kind: ClassVar[str] = "arm_client_secret"
    tenant_id: str = field(metadata={"description": "Azure tenant ID"})
    client_id: str = field(metadata={"description": "Azure client ID"})
    client_secret: str = field(metadata={"description": "Azure client secret"})


@define
class ArmConfig:
    kind: ClassVar[str] = "arm"

    endpoint: str = field(
        default="https://management.azure.com",
        metadata={"description": "Base url of the Azure Resource Manager endpoint."},
    )
    api_version: str = field(
        default="2021-04-01",
        metadata={"description": "Default api version, if a request does not define one."},
    )
    credential_scopes: List[str] = field(
        factory=lambda: ["https://management.azure.com/.default"],
        metadata={"description": "Scopes to request for the bearer token."},
    )
    add_date_header: bool = field(
        default=True,
        metadata={"description": "Add a Date header in RFC 1123 format to every outgoing request."},
    )
    user_agent: Optional[str] = field(
        default=None,
        metadata={"description": "Additional user agent string sent with every request."},
    )
    retry_total: int = field(
        default=3,
        metadata={"description": "Number of retries for failed requests. Set to 0 to disable retries."},
    )
    network_trace: bool = field(
        default=False,
        metadata={"description": "Log all requests and responses including headers. Use for debugging only!"},
    )
    client_secret: Optional[ArmClientSecretConfig] = field(
        default=None,
        metadata={
            "description": "If you can not provide access via the environment, define access with a client secret.\n"
            "If no secret is provided the default credential chain will be used."
        },
    )

    def credentials(self) -> AsyncAzureCredentials:
        if cs := self.client_secret:
            return ClientSecretCredential(
                tenant_id=cs.tenant_id,
                client_id=cs.client_id,
                client_secret=cs.client_secret,
            )

        return DefaultAzureCredential(process_timeout=300)

    @staticmethod
    def from_json(js: Json) -> "ArmConfig":
        return cattrs.structure(js, ArmConfig)
