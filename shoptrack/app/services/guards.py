"""
Shared use case guards

Helpers every entity use case runs before touching a repository.
"""

import functools
import logging
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from config import ApplicationConfig
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.policy import PolicyViolation
from shoptrack.libs.result import Error, Return

logger = logging.getLogger(__name__)


def no_tenant_error() -> Error:
    return Error("NO_TENANT_ASSIGNED", "Your account is not assigned to a tenant")


def not_found_error(entity: str) -> Error:
    return Error("NOT_FOUND", f"{entity} not found")


def require_tenant(caller: CallerContext) -> Optional[Error]:
    """Tenant-scoped services refuse callers without a tenant"""
    if caller.tenant_id is None:
        return no_tenant_error()
    return None


def page_window(limit: Optional[int] = None, offset: Optional[int] = None) -> Tuple[int, int]:
    """Clamp requested pagination to configured bounds"""
    if limit is None:
        limit = ApplicationConfig.DEFAULT_PAGE_SIZE
    limit = max(1, min(limit, ApplicationConfig.MAX_PAGE_SIZE))
    offset = max(0, offset or 0)
    return limit, offset


def translate_store_errors(execute):
    """
    Turn failures raised below a use case into Result errors.

    - PolicyViolation -> the policy's own error
    - IntegrityError (check/unique/foreign key) -> VALIDATION_FAILED
    - any other SQLAlchemyError -> STORE_ERROR
    """

    @functools.wraps(execute)
    async def wrapper(self, *args, **kwargs):
        use_case = type(self).__name__
        try:
            return await execute(self, *args, **kwargs)
        except PolicyViolation as exc:
            return Return.err(exc.error)
        except IntegrityError as exc:
            logger.warning(f"{use_case}: constraint violated: {exc.orig}")
            return Return.err(
                Error("VALIDATION_FAILED", "The submitted data violates a data constraint")
            )
        except SQLAlchemyError:
            logger.exception(f"{use_case}: store failure")
            return Return.err(Error("STORE_ERROR", "The data store could not complete the request"))

    return wrapper


def blank_to_none(value: Optional[str]) -> Optional[str]:
    """Optional text fields store NULL rather than empty strings"""
    if value is None or not value.strip():
        return None
    return value.strip()
