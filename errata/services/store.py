"""
Remote error store port and its implementations.

The store is a graph database exposing named queries over HTTP: each query is
a POST to ``{store_url}/{queryName}`` with a JSON body. ``ErrorStore`` is the
port the ingester and catalog depend on; ``HelixErrorStore`` talks to the real
service and ``InMemoryErrorStore`` backs tests and offline runs.
"""

import time
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx

from errata.errors import NotFoundError, UpstreamUnavailableError
from errata.models.store import (
    APIDefinition,
    ErrorSolutions,
    StoredErrorPattern,
    StoredParameter,
    StoredSolution,
)
from errata.utils.logging import get_logger, log_store_call

logger = get_logger(__name__, stage="store")


class ErrorStore(ABC):
    """Port to the remote error store."""

    @abstractmethod
    async def create_api(self, definition: APIDefinition) -> str:
        """Create the API node and return its id."""
        pass

    @abstractmethod
    async def create_error_pattern(
        self,
        api_id: str,
        code: str,
        message: str,
        description: str,
        resource: str,
        method: str,
        http_status: int,
        severity: str,
    ) -> str:
        """Create an error pattern linked to an API and return its id."""
        pass

    @abstractmethod
    async def create_solution(
        self,
        error_id: str,
        title: str,
        description: str,
        code_example: str,
        source_url: str,
        upvotes: int,
    ) -> str:
        """Create a solution linked to an error pattern and return its id."""
        pass

    @abstractmethod
    async def create_parameter(
        self,
        error_id: str,
        name: str,
        param_type: str,
        required: bool,
        description: str,
        example: str,
    ) -> str:
        """Create a parameter linked to an error pattern and return its id."""
        pass

    @abstractmethod
    async def get_api_errors(self, api_name: str) -> List[StoredErrorPattern]:
        """All error patterns of an API."""
        pass

    @abstractmethod
    async def find_solutions_by_error_code(self, error_code: str) -> ErrorSolutions:
        """
        Error pattern for a code together with its solutions.

        Raises:
            NotFoundError: If no pattern has this code
        """
        pass

    async def close(self) -> None:
        """Release connections held by the store."""
        pass

    async def __aenter__(self) -> "ErrorStore":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


class InMemoryErrorStore(ErrorStore):
    """Dictionary-backed store with the same behaviour as the remote one."""

    def __init__(self):
        self.apis: Dict[str, APIDefinition] = {}
        self.patterns: Dict[str, StoredErrorPattern] = {}
        self.solutions: Dict[str, StoredSolution] = {}
        self.parameters: Dict[str, StoredParameter] = {}
        self._api_of_pattern: Dict[str, str] = {}

    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex

    async def create_api(self, definition: APIDefinition) -> str:
        api_id = self._new_id()
        self.apis[api_id] = definition
        return api_id

    async def create_error_pattern(
        self,
        api_id: str,
        code: str,
        message: str,
        description: str,
        resource: str,
        method: str,
        http_status: int,
        severity: str,
    ) -> str:
        if api_id not in self.apis:
            raise NotFoundError(f"API node '{api_id}' not found")

        error_id = self._new_id()
        self.patterns[error_id] = StoredErrorPattern(
            id=error_id,
            code=code,
            message=message,
            description=description,
            resource=resource,
            method=method,
            http_status=http_status,
            severity=severity,
        )
        self._api_of_pattern[error_id] = api_id
        return error_id

    async def create_solution(
        self,
        error_id: str,
        title: str,
        description: str,
        code_example: str,
        source_url: str,
        upvotes: int,
    ) -> str:
        if error_id not in self.patterns:
            raise NotFoundError(f"Error pattern '{error_id}' not found")

        solution_id = self._new_id()
        self.solutions[solution_id] = StoredSolution(
            id=solution_id,
            error_id=error_id,
            title=title,
            description=description,
            code_example=code_example,
            source_url=source_url,
            upvotes=upvotes,
        )
        return solution_id

    async def create_parameter(
        self,
        error_id: str,
        name: str,
        param_type: str,
        required: bool,
        description: str,
        example: str,
    ) -> str:
        if error_id not in self.patterns:
            raise NotFoundError(f"Error pattern '{error_id}' not found")

        parameter_id = self._new_id()
        self.parameters[parameter_id] = StoredParameter(
            id=parameter_id,
            error_id=error_id,
            name=name,
            param_type=param_type,
            required=required,
            description=description,
            example=example,
        )
        return parameter_id

    async def get_api_errors(self, api_name: str) -> List[StoredErrorPattern]:
        api_ids = {
            api_id for api_id, definition in self.apis.items()
            if definition.name.lower() == api_name.lower()
        }
        return [
            pattern for error_id, pattern in self.patterns.items()
            if self._api_of_pattern[error_id] in api_ids
        ]

    async def find_solutions_by_error_code(self, error_code: str) -> ErrorSolutions:
        for pattern in self.patterns.values():
            if pattern.code == error_code:
                solutions = [s for s in self.solutions.values() if s.error_id == pattern.id]
                solutions.sort(key=lambda s: s.upvotes, reverse=True)
                return ErrorSolutions(error=pattern, solutions=solutions)

        raise NotFoundError(f"Error code '{error_code}' not found in store")


class HelixErrorStore(ErrorStore):
    """
    HTTP adapter for the graph database query service.

    Transport failures and non-success responses are raised as
    ``UpstreamUnavailableError``; there is no retry.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the adapter.

        Args:
            base_url: Store endpoint; ``settings.store_url`` when None
            timeout: Request timeout in seconds; ``settings.store_timeout_seconds`` when None
            client: Preconfigured client, mainly for tests
        """
        from errata.config import settings

        self.base_url = (base_url or settings.store_url).rstrip("/")
        if timeout is None:
            timeout = settings.store_timeout_seconds
        self._client = client or httpx.AsyncClient(timeout=timeout)

        logger.info(f"HelixErrorStore initialized for {self.base_url}")

    async def _query(self, operation: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Run one named query.

        Raises:
            UpstreamUnavailableError: On transport failure, non-2xx status or
                a body that is not a JSON object
        """
        url = f"{self.base_url}/{operation}"
        start_time = time.time()

        try:
            response = await self._client.post(url, json=payload)
        except httpx.HTTPError as e:
            duration_ms = (time.time() - start_time) * 1000
            log_store_call(logger, operation, duration_ms=duration_ms, error=str(e))
            raise UpstreamUnavailableError(operation, str(e)) from e

        duration_ms = (time.time() - start_time) * 1000

        if response.is_error:
            detail = f"HTTP {response.status_code}"
            log_store_call(logger, operation, response.status_code, duration_ms, error=detail)
            raise UpstreamUnavailableError(operation, detail, response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            log_store_call(logger, operation, response.status_code, duration_ms, error="invalid JSON")
            raise UpstreamUnavailableError(operation, "response is not valid JSON", response.status_code) from e

        if not isinstance(data, dict):
            raise UpstreamUnavailableError(operation, "response is not a JSON object", response.status_code)

        log_store_call(logger, operation, response.status_code, duration_ms)
        return data

    @staticmethod
    def _extract_id(data: Dict[str, Any], node: str, operation: str) -> str:
        """Node id from either ``{node: {id}}`` or a flat ``{id}`` response."""
        nested = data.get(node)
        if isinstance(nested, dict) and nested.get("id") is not None:
            return str(nested["id"])
        if data.get("id") is not None:
            return str(data["id"])
        raise UpstreamUnavailableError(operation, f"response carries no {node} id")

    async def create_api(self, definition: APIDefinition) -> str:
        data = await self._query("createAPI", {
            "name": definition.name,
            "base_url": definition.base_url,
            "version": definition.version,
            "docs_url": definition.docs_url,
        })
        return self._extract_id(data, "api", "createAPI")

    async def create_error_pattern(
        self,
        api_id: str,
        code: str,
        message: str,
        description: str,
        resource: str,
        method: str,
        http_status: int,
        severity: str,
    ) -> str:
        data = await self._query("createErrorPattern", {
            "api_id": api_id,
            "code": code,
            "message": message,
            "description": description,
            "resource": resource,
            "method": method,
            "http_status": http_status,
            "severity": severity,
        })
        return self._extract_id(data, "error", "createErrorPattern")

    async def create_solution(
        self,
        error_id: str,
        title: str,
        description: str,
        code_example: str,
        source_url: str,
        upvotes: int,
    ) -> str:
        data = await self._query("createSolution", {
            "error_id": error_id,
            "title": title,
            "description": description,
            "code_example": code_example,
            "source_url": source_url,
            "upvotes": upvotes,
        })
        return self._extract_id(data, "solution", "createSolution")

    async def create_parameter(
        self,
        error_id: str,
        name: str,
        param_type: str,
        required: bool,
        description: str,
        example: str,
    ) -> str:
        data = await self._query("createParameter", {
            "error_id": error_id,
            "name": name,
            "param_type": param_type,
            "required": required,
            "description": description,
            "example": example,
        })
        return self._extract_id(data, "parameter", "createParameter")

    async def get_api_errors(self, api_name: str) -> List[StoredErrorPattern]:
        data = await self._query("getAPIErrors", {"api_name": api_name})
        return [StoredErrorPattern(**self._stringify_id(e)) for e in data.get("errors") or []]

    async def find_solutions_by_error_code(self, error_code: str) -> ErrorSolutions:
        data = await self._query("findSolutionsByErrorCode", {"error_code": error_code})

        # The service names the pattern "errors" even though it is a single node
        error = data.get("errors") or data.get("error")
        if isinstance(error, list):
            error = error[0] if error else None
        if not error:
            raise NotFoundError(f"Error code '{error_code}' not found in store")

        solutions = [
            StoredSolution(**self._stringify_id(s)) for s in data.get("solutions") or []
        ]
        return ErrorSolutions(error=StoredErrorPattern(**self._stringify_id(error)), solutions=solutions)

    @staticmethod
    def _stringify_id(node: Dict[str, Any]) -> Dict[str, Any]:
        node = dict(node)
        for key in ("id", "error_id"):
            if node.get(key) is not None:
                node[key] = str(node[key])
        return node

    async def close(self) -> None:
        await self._client.aclose()
