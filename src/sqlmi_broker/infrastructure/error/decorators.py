"""Exception handling decorators for the interface layer."""

import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from pydantic import ValidationError as PydanticValidationError

from sqlmi_broker.domain.base.exceptions import DomainException
from sqlmi_broker.infrastructure.logging.logger import get_logger

F = TypeVar("F", bound=Callable[..., Awaitable[dict[str, Any]]])


def error_response(error: DomainException) -> dict[str, Any]:
    """Build the structured failure payload for a domain error."""
    return {
        "success": False,
        "error": error.error_code,
        "message": error.message,
        "details": error.details,
    }


def handle_interface_exceptions(context: str, interface_type: str = "cli") -> Callable[[F], F]:
    """
    Convert errors raised by an async interface handler into failure payloads.

    Domain errors keep their code, message and details unchanged. Pydantic
    input errors become VALIDATION_ERROR. Anything else is logged with its
    traceback and reported as UNEXPECTED_ERROR with the original message.
    """

    def decorator(func: F) -> F:
        logger = get_logger(f"interface.{interface_type}")

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> dict[str, Any]:
            try:
                return await func(*args, **kwargs)
            except DomainException as e:
                logger.error("%s failed: [%s] %s", context, e.error_code, e.message)
                return error_response(e)
            except PydanticValidationError as e:
                logger.error("%s rejected invalid input: %s", context, e)
                return {
                    "success": False,
                    "error": "VALIDATION_ERROR",
                    "message": f"Invalid input for {context}",
                    "details": {
                        "errors": e.errors(
                            include_url=False, include_context=False, include_input=False
                        )
                    },
                }
            except Exception as e:
                logger.exception("Unexpected error in %s", context)
                return {
                    "success": False,
                    "error": "UNEXPECTED_ERROR",
                    "message": str(e),
                    "details": {"original_exception_type": type(e).__name__},
                }

        return wrapper  # type: ignore[return-value]

    return decorator
