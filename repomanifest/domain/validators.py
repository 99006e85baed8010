"""
Cross-field checks for the manifest models.

Pydantic runs "after" model validators only once every field is valid,
so a record with a bad description and a misplaced workspace would
report just the description. The models instead use wrap validators
that inspect the raw input up front and report their findings together
with whatever the field validation turned up.
"""

from typing import Any, Callable, List, Tuple

from pydantic import ValidationError as PydanticValidationError
from pydantic_core import InitErrorDetails, PydanticCustomError

Problem = Tuple[Tuple[Any, ...], PydanticCustomError]


def _line_error(loc, error: PydanticCustomError, value: Any) -> InitErrorDetails:
    return {'type': error, 'loc': tuple(loc), 'input': value}


def _replayed(exc: PydanticValidationError) -> List[InitErrorDetails]:
    # Rendered messages are carried over as-is; no context is re-applied
    return [
        _line_error(err['loc'], PydanticCustomError(err['type'], err['msg']), err['input'])
        for err in exc.errors(include_url=False)
    ]


def validate_with_problems(
    title: str,
    data: Any,
    handler: Callable[[Any], Any],
    problems: List[Problem],
) -> Any:
    """
    Run the field validation and report problems alongside its errors.

    Args:
        title: Model name used in the raised error
        data: Raw input handed to the wrap validator
        handler: Pydantic's inner validator
        problems: (location, error) pairs found by the caller's own checks

    Raises:
        pydantic.ValidationError: with field errors followed by problems
    """
    try:
        model = handler(data)
    except PydanticValidationError as e:
        if not problems:
            raise
        line_errors = _replayed(e) + [_line_error(loc, error, data) for loc, error in problems]
        raise PydanticValidationError.from_exception_data(title, line_errors) from None

    if problems:
        raise PydanticValidationError.from_exception_data(
            title, [_line_error(loc, error, data) for loc, error in problems]
        )
    return model
