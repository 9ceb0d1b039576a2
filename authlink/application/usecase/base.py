"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

RequestT = TypeVar("RequestT")
ResultT = TypeVar("ResultT")


class BaseUseCase(ABC, Generic[RequestT, ResultT]):
    """One application operation: takes a request model, returns a result."""

    @abstractmethod
    async def execute(self, request: RequestT) -> ResultT: ...
