import pytest

from fixarm.error import InvalidResourceIdError
from fixarm.resource_id import (
    ResourceId,
    group_from_resource_id,
    name_from_resource_id,
    subscription_from_resource_id,
)

ChildId = "/subscriptions/S/resourceGroups/RG/providers/P/parents/PARENT1/children/CHILD1"


def test_parse_child_id() -> None:
    rid = ResourceId.from_string(ChildId)
    assert rid.id == ChildId
    assert rid.subscription_id == "S"
    assert rid.resource_group_name == "RG"
    assert rid.provider_namespace == "P"
    assert rid.resource_type == "children"
    assert rid.name == "CHILD1"
    assert rid.full_resource_type == "P/parents/children"
    assert rid.parent is not None
    assert rid.parent.name == "PARENT1"
    assert rid.parent.resource_type == "parents"
    assert rid.parent.id == "/subscriptions/S/resourceGroups/RG/providers/P/parents/PARENT1"
    assert rid.parent.parent is None


def test_parse_keywords_case_insensitive() -> None:
    rid = ResourceId.from_string("/SUBSCRIPTIONS/S/resourcegroups/rg/PROVIDERS/Microsoft.Sql/servers/srv")
    assert rid.subscription_id == "S"
    assert rid.resource_group_name == "rg"
    assert rid.provider_namespace == "Microsoft.Sql"
    assert rid.name == "srv"


def test_parse_group_and_subscription() -> None:
    group = ResourceId.from_string("/subscriptions/S/resourceGroups/RG")
    assert group.name == "RG"
    assert group.resource_group_name == "RG"
    assert group.parent is not None and group.parent.name == "S"
    subscription = ResourceId.from_string("/subscriptions/S")
    assert subscription.name == "S"
    assert subscription.resource_group_name is None
    assert subscription.full_resource_type is None


def test_parse_subscription_level_resource() -> None:
    rid = ResourceId.from_string("/subscriptions/S/providers/Microsoft.Authorization/roleDefinitions/r1")
    assert rid.resource_group_name is None
    assert rid.name == "r1"


@pytest.mark.parametrize(
    "invalid",
    [
        "",
        "/foo/bar",
        "/subscriptions/",
        "/subscriptions/S/resourceGroups",
        "/subscriptions/S/resourceGroups/RG/foo/bla",
        "/subscriptions/S/resourceGroups/RG/providers/P",
        "/subscriptions/S/resourceGroups/RG/providers/P/parents",
        "/subscriptions/S/resourceGroups/RG/providers/P/parents/PARENT1/children",
    ],
)
def test_invalid_ids(invalid: str) -> None:
    with pytest.raises(InvalidResourceIdError):
        ResourceId.from_string(invalid)


def test_invalid_id_is_value_error() -> None:
    with pytest.raises(ValueError):
        group_from_resource_id("/foo")


def test_helpers() -> None:
    assert group_from_resource_id(ChildId) == "RG"
    assert subscription_from_resource_id(ChildId) == "S"
    assert name_from_resource_id(ChildId) == "CHILD1"
    assert group_from_resource_id(None) is None
    assert subscription_from_resource_id(None) is None
    assert name_from_resource_id(None) is None
