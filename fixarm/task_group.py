from __future__ import annotations

import asyncio
import uuid
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol

from attrs import define, field

from fixarm.error import ArmError, CyclicDependencyError
from fixarm.logger import log

Work = Callable[[], Awaitable[Any]]


class Creatable(Protocol):
    """
    Anything that can be created as part of a task group.
    The creation work is owned by the task group of the creatable.
    """

    @property
    def task_group(self) -> TaskGroup: ...


@define(eq=False)
class TaskGroup:
    """
    A node in the graph of creation tasks.
    Every creatable owns exactly one task group. Dependencies are other task groups that
    need to be completed, before the work of this group can be executed.
    The results of all completed dependencies (direct and transitive) are available via task_result.
    """

    work: Optional[Work] = None
    key: str = field(factory=lambda: str(uuid.uuid4()))
    _dependencies: Dict[str, TaskGroup] = field(factory=dict)
    _results: Dict[str, Any] = field(factory=dict)

    @property
    def dependency_keys(self) -> List[str]:
        return list(self._dependencies.keys())

    def depends_on(self, key: str) -> bool:
        return any(dep.key == key or dep.depends_on(key) for dep in self._dependencies.values())

    def add_dependency(self, creatable: Creatable) -> str:
        """
        Register the task group of the given creatable as dependency of this group.
        :return: the key to look up the result of the dependency via task_result.
        """
        dependency = creatable.task_group
        if dependency.key == self.key or dependency.depends_on(self.key):
            raise CyclicDependencyError(self.key, dependency.key)
        self._dependencies[dependency.key] = dependency
        return dependency.key

    def remove_dependency(self, key: str) -> None:
        """
        Discard a dependency together with its result.
        A later invocation will not execute the dependency again.
        """
        self._dependencies.pop(key, None)
        self._results.pop(key, None)

    def task_result(self, key: str) -> Any:
        """
        Result of a completed dependency.
        Raises KeyError, if the dependency has not been executed.
        """
        return self._results[key]

    async def invoke(self) -> Any:
        """
        Execute all dependencies and afterward the work of this group.
        Independent dependencies are executed concurrently, a dependency shared by several groups only once.
        """
        scheduled: Dict[str, asyncio.Future[Any]] = {}
        try:
            return await self.__schedule(scheduled)
        except BaseException:
            # one task failed or the caller was cancelled: stop all work of this invocation
            for task in scheduled.values():
                if not task.done():
                    task.cancel()
            # retrieve all outcomes, so no other failure stays unobserved
            await asyncio.gather(*scheduled.values(), return_exceptions=True)
            raise

    def __schedule(self, scheduled: Dict[str, asyncio.Future[Any]]) -> asyncio.Future[Any]:
        if (existing := scheduled.get(self.key)) is not None:
            return existing
        task = asyncio.ensure_future(self.__run(scheduled))
        scheduled[self.key] = task
        return task

    async def __run(self, scheduled: Dict[str, asyncio.Future[Any]]) -> Any:
        dependencies = list(self._dependencies.values())
        if dependencies:
            log.debug(f"Task group {self.key}: wait for {len(dependencies)} dependencies")
            results = await asyncio.gather(*[dep.__schedule(scheduled) for dep in dependencies])
            for dependency, result in zip(dependencies, results):
                self._results.update(dependency._results)
                self._results[dependency.key] = result
        if self.work is None:
            raise ArmError(f"Task group {self.key} has no work assigned")
        result = await self.work()
        self._results[self.key] = result
        return result
