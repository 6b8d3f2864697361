class ArmError(Exception):
    pass


class InvalidResourceIdError(ArmError, ValueError):
    def __init__(self, resource_id: str, reason: str):
        super().__init__(f"Invalid resource id {resource_id}: {reason}")
        self.resource_id = resource_id


class CyclicDependencyError(ArmError):
    def __init__(self, key: str, dependency_key: str):
        super().__init__(f"Adding {dependency_key} as dependency of {key} would create a cycle!")
        self.key = key
        self.dependency_key = dependency_key
