"""Per-operation access rules for the sales tracker resources.

Every resource exposes four operations (select, insert, update, delete), each
guarded by its own predicate. All predicates permit by default; replacing one
with a real check through :meth:`AccessPolicy.set_rule` leaves the rest of the
application untouched.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from fastapi import Depends, HTTPException, Request, status

from .errors import AuthorizationError

LOGGER = logging.getLogger(__name__)


class Resource(str, enum.Enum):
    SALES = "sales"
    AD_SPEND = "ad_spend"


class Operation(str, enum.Enum):
    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class AccessContext:
    """Information handed to access predicates."""

    resource: Resource
    operation: Operation
    client_host: Optional[str] = None


AccessPredicate = Callable[[AccessContext], bool]


def allow_all(_: AccessContext) -> bool:
    return True


class AccessPolicy:
    """Holds one predicate per ``(resource, operation)`` pair."""

    def __init__(self) -> None:
        self._rules: Dict[Tuple[Resource, Operation], AccessPredicate] = {}
        self.reset()

    def reset(self) -> None:
        """Restore the permissive default for every rule."""

        self._rules = {
            (resource, operation): allow_all
            for resource in Resource
            for operation in Operation
        }

    def set_rule(
        self, resource: Resource, operation: Operation, predicate: AccessPredicate
    ) -> None:
        self._rules[(Resource(resource), Operation(operation))] = predicate

    def rule(self, resource: Resource, operation: Operation) -> AccessPredicate:
        return self._rules[(Resource(resource), Operation(operation))]

    def is_allowed(self, context: AccessContext) -> bool:
        return bool(self.rule(context.resource, context.operation)(context))

    def enforce(
        self,
        resource: Resource,
        operation: Operation,
        *,
        client_host: Optional[str] = None,
    ) -> AccessContext:
        context = AccessContext(
            resource=Resource(resource),
            operation=Operation(operation),
            client_host=client_host,
        )
        if not self.is_allowed(context):
            LOGGER.warning(
                "Denied %s on %s for %s",
                context.operation.value,
                context.resource.value,
                client_host or "unknown client",
            )
            raise AuthorizationError(
                f"Operation '{context.operation.value}' on '{context.resource.value}' is not allowed"
            )
        return context


access_policy = AccessPolicy()


def get_access_policy() -> AccessPolicy:
    """FastAPI dependency returning the process-wide access policy."""

    return access_policy


def require_permission(resource: Resource, operation: Operation) -> Callable[..., AccessContext]:
    """Build a FastAPI dependency that enforces one access rule."""

    def dependency(
        request: Request,
        policy: AccessPolicy = Depends(get_access_policy),
    ) -> AccessContext:
        client_host = request.client.host if request.client else None
        try:
            return policy.enforce(resource, operation, client_host=client_host)
        except AuthorizationError as exc:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc

    return dependency
