from __future__ import annotations

from typing import Any, Awaitable, Callable, Generic, Optional, Protocol, TypeVar

from attrs import define, field

from fixarm.logger import log
from fixarm.resource_id import ResourceId, group_from_resource_id
from fixarm.task_group import Creatable, TaskGroup

ChildT = TypeVar("ChildT")
ParentT = TypeVar("ParentT", bound="ParentResource")
InnerT = TypeVar("InnerT")
ManagerT = TypeVar("ManagerT")


class ParentResource(Protocol):
    """
    A resource that lives in a resource group and can act as parent of an independent child.
    """

    @property
    def name(self) -> str: ...

    @property
    def resource_group_name(self) -> Optional[str]: ...


def inner_id(inner: Any) -> Optional[str]:
    """
    The id of a raw service model: either a json dict or an object with an id attribute.
    """
    if inner is None:
        return None
    if isinstance(inner, dict):
        return inner.get("id")
    return getattr(inner, "id", None)


@define(eq=False)
class IndependentChild(Generic[ChildT, ParentT, InnerT, ManagerT]):
    """
    A child resource that can be created and updated independently of its parent resource.

    The parent can either be an existing resource (with_existing_parent_resource, with_existing_parent)
    or a resource, that is created as part of the same task group (with_new_parent_resource).
    The service call to create or update the child is done by the create_child coroutine function.

    The child is in create mode as long as the raw model does not carry an id.
    """

    name: str
    _inner: InnerT
    _manager: ManagerT
    create_child: Callable[[IndependentChild[ChildT, ParentT, InnerT, ManagerT]], Awaitable[ChildT]]
    task_group: TaskGroup = field(factory=TaskGroup, kw_only=True)
    _group_name: Optional[str] = field(default=None, init=False)
    _parent_name: Optional[str] = field(default=None, init=False)
    _creatable_parent_key: Optional[str] = field(default=None, init=False)

    def __attrs_post_init__(self) -> None:
        self.task_group.work = self.create_resource_async
        self.set_parent_name(self._inner)

    @property
    def manager(self) -> ManagerT:
        return self._manager

    @property
    def inner(self) -> InnerT:
        return self._inner

    @property
    def key(self) -> str:
        return self.task_group.key

    @property
    def id(self) -> Optional[str]:
        return inner_id(self._inner)

    @property
    def resource_group_name(self) -> Optional[str]:
        """
        The explicitly defined resource group or the one derived from the resource id.
        None if neither is available: accessing it before the parent is defined is a usage error.
        """
        if self._group_name is None:
            return group_from_resource_id(self.id)
        return self._group_name

    @property
    def parent_name(self) -> Optional[str]:
        return self._parent_name

    @property
    def is_in_create_mode(self) -> bool:
        return self.id is None

    def with_existing_parent_resource(
        self, group_name: str, parent_name: str
    ) -> IndependentChild[ChildT, ParentT, InnerT, ManagerT]:
        self._group_name = group_name
        self._parent_name = parent_name
        return self

    def with_existing_parent(self, parent: ParentT) -> IndependentChild[ChildT, ParentT, InnerT, ManagerT]:
        return self.with_existing_parent_resource(parent.resource_group_name, parent.name)  # type: ignore

    def with_new_parent_resource(self, parent: Creatable) -> IndependentChild[ChildT, ParentT, InnerT, ManagerT]:
        """
        Create the parent as dependency of this child.
        Only the first parent is registered, subsequent calls are ignored.
        """
        if not self.__set_creatable_parent_key_if_absent(parent):
            log.debug(f"Child {self.name} already has a parent to create. Ignore {parent.task_group.key}.")
        return self

    def update(self) -> IndependentChild[ChildT, ParentT, InnerT, ManagerT]:
        return self

    def set_inner(self, inner: InnerT) -> None:
        self._inner = inner
        self.set_parent_name(inner)

    def set_parent_name(self, inner: InnerT) -> None:
        # resources without parent segment in the id keep the defined parent name
        if (resource_id := inner_id(inner)) is not None:
            if (parent := ResourceId.from_string(resource_id).parent) is not None:
                self._parent_name = parent.name

    async def create_resource_async(self) -> ChildT:
        if self._creatable_parent_key is not None:
            parent: ParentT = self.task_group.task_result(self._creatable_parent_key)
            self.with_existing_parent(parent)
        return await self.create_child(self)

    async def create_async(self) -> ChildT:
        """
        Create all dependencies and afterward this child.
        A parent created here is discarded as dependency afterward, the resolved parent names are kept.
        """
        return await self.__invoke()

    async def apply_async(self) -> ChildT:
        """
        Apply all changes of this child.
        ARM uses create-or-update semantics, so this is the same work as create.
        """
        return await self.__invoke()

    async def __invoke(self) -> ChildT:
        result: ChildT = await self.task_group.invoke()
        if (key := self._creatable_parent_key) is not None:
            self.task_group.remove_dependency(key)
            self._creatable_parent_key = None
        return result

    def __set_creatable_parent_key_if_absent(self, parent: Creatable) -> bool:
        if self._creatable_parent_key is not None:
            return False
        self._creatable_parent_key = self.task_group.add_dependency(parent)
        return True
