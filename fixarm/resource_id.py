from __future__ import annotations

from typing import Optional, List, Tuple

from attrs import frozen

from fixarm.error import InvalidResourceIdError
from fixarm.utils import case_insensitive_eq


@frozen
class ResourceId:
    """
    Parsed representation of an Azure Resource Manager resource id.

    Example:
    "/subscriptions/S/resourceGroups/RG/providers/Microsoft.Sql/servers/srv/databases/db"
    is parsed into name="db", resource_type="databases", provider_namespace="Microsoft.Sql"
    and a parent with name="srv" and resource_type="servers".
    """

    id: str
    subscription_id: str
    resource_group_name: Optional[str]
    provider_namespace: Optional[str]
    resource_type: Optional[str]
    name: str
    parent: Optional[ResourceId] = None

    @property
    def full_resource_type(self) -> Optional[str]:
        if self.provider_namespace is None or self.resource_type is None:
            return None
        types: List[str] = []
        current: Optional[ResourceId] = self
        while current is not None and current.resource_type is not None:
            types.insert(0, current.resource_type)
            current = current.parent
        return "/".join([self.provider_namespace, *types])

    @staticmethod
    def from_string(resource_id: str) -> ResourceId:
        """
        Parse the given id.
        Raises InvalidResourceIdError if the id does not follow the ARM path format.
        """
        if not resource_id:
            raise InvalidResourceIdError(str(resource_id), "empty id")
        parts = resource_id.strip("/").split("/")
        if len(parts) < 2 or not case_insensitive_eq(parts[0], "subscriptions") or not parts[1]:
            raise InvalidResourceIdError(resource_id, "id has to start with /subscriptions/{subscriptionId}")
        subscription_id = parts[1]
        rest = parts[2:]

        group_name: Optional[str] = None
        if len(rest) >= 2 and case_insensitive_eq(rest[0], "resourceGroups"):
            group_name = rest[1]
            rest = rest[2:]
        elif rest and case_insensitive_eq(rest[0], "resourceGroups"):
            raise InvalidResourceIdError(resource_id, "resource group name is missing")

        if not rest:
            # subscription or resource group itself
            name = group_name if group_name is not None else subscription_id
            parent = None
            if group_name is not None:
                subscription = f"/subscriptions/{subscription_id}"
                parent = ResourceId(subscription, subscription_id, None, None, None, subscription_id)
            return ResourceId(resource_id, subscription_id, group_name, None, None, name, parent)

        if not case_insensitive_eq(rest[0], "providers") or len(rest) < 2:
            raise InvalidResourceIdError(resource_id, "expected providers/{namespace}")
        namespace = rest[1]
        segments = rest[2:]
        if not segments or len(segments) % 2 != 0 or not all(segments):
            raise InvalidResourceIdError(resource_id, "resource type and name have to come in pairs")

        prefix = f"/subscriptions/{subscription_id}"
        if group_name is not None:
            prefix += f"/resourceGroups/{group_name}"
        prefix += f"/providers/{namespace}"

        pairs: List[Tuple[str, str]] = [(segments[i], segments[i + 1]) for i in range(0, len(segments), 2)]
        current: Optional[ResourceId] = None
        path = prefix
        for resource_type, name in pairs:
            path = f"{path}/{resource_type}/{name}"
            current = ResourceId(path, subscription_id, group_name, namespace, resource_type, name, current)
        assert current is not None
        # keep the id as it was given
        return ResourceId(
            resource_id,
            current.subscription_id,
            current.resource_group_name,
            current.provider_namespace,
            current.resource_type,
            current.name,
            current.parent,
        )


def group_from_resource_id(resource_id: Optional[str]) -> Optional[str]:
    if resource_id is None:
        return None
    return ResourceId.from_string(resource_id).resource_group_name


def subscription_from_resource_id(resource_id: Optional[str]) -> Optional[str]:
    if resource_id is None:
        return None
    return ResourceId.from_string(resource_id).subscription_id


def name_from_resource_id(resource_id: Optional[str]) -> Optional[str]:
    if resource_id is None:
        return None
    return ResourceId.from_string(resource_id).name
