"""
Manifest serialization and deserialization.

JSON read/write with validation against the schema in repomanifest.domain.
Every operation here consults those models; no constraint is restated.

Failures:
- ParseError when text is not well-formed JSON
- ValidationError, listing every violation, when the value breaks the schema
"""

import json
from typing import Any, Dict, Iterable, List, Mapping, Type, TypeVar, Union

import pydantic
from pydantic import BaseModel

from .domain import Repository, RepositoryManifest
from .errors import ROOT_LOCATION, ParseError, ValidationError, Violation

ModelT = TypeVar('ModelT', bound=BaseModel)

JSON_INDENT = 2


def format_location(loc: Iterable[Union[str, int]]) -> str:
    """
    Render a pydantic error location as a readable path.

    ('repositories', 2, 'upstreamSync', 'branch') -> "repositories[2].upstreamSync.branch"
    """
    path = ''
    for part in loc:
        if isinstance(part, int):
            path += f'[{part}]'
        elif path:
            path += f'.{part}'
        else:
            path = str(part)
    return path or ROOT_LOCATION


def violations_from(exc: pydantic.ValidationError) -> List[Violation]:
    """Convert every pydantic error into a Violation."""
    return [
        Violation(location=format_location(err['loc']), message=err['msg'])
        for err in exc.errors(include_url=False)
    ]


def _as_input(value: Any) -> Any:
    """
    Turn a model back into plain data so that it is validated from scratch.

    Models built with model_copy() are not re-checked by pydantic, so
    they are always dumped and validated again.
    """
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True)
    if isinstance(value, Mapping) and not isinstance(value, dict):
        return dict(value)
    return value


def _parse(model: Type[ModelT], value: Any, subject: str) -> ModelT:
    try:
        return model.model_validate(_as_input(value))
    except pydantic.ValidationError as e:
        raise ValidationError(violations_from(e), subject=subject) from None


def parse_manifest(value: Any) -> RepositoryManifest:
    """
    Validate a manifest (model or mapping) and return the typed model.

    Raises:
        ValidationError: listing every violated constraint
    """
    return _parse(RepositoryManifest, value, "manifest")


def parse_repository(value: Any) -> Repository:
    """
    Validate a single repository record and return the typed model.

    Used to check a new record before appending it to an in-memory manifest.

    Raises:
        ValidationError: listing every violated constraint
    """
    return _parse(Repository, value, "repository")


def validate_manifest(value: Any) -> bool:
    """
    Validate a RepositoryManifest.

    Returns:
        True if valid

    Raises:
        ValidationError: listing every violated constraint
    """
    parse_manifest(value)
    return True


def validate_repository(value: Any) -> bool:
    """
    Validate a single Repository.

    Returns:
        True if valid

    Raises:
        ValidationError: listing every violated constraint
    """
    parse_repository(value)
    return True


def manifest_to_dict(manifest: Any) -> Dict[str, Any]:
    """Validated, JSON-ready dict with camelCase keys in schema order."""
    return parse_manifest(manifest).model_dump(mode='json', by_alias=True)


def repository_to_dict(repository: Any) -> Dict[str, Any]:
    """Validated, JSON-ready dict for a single repository record."""
    return parse_repository(repository).model_dump(mode='json', by_alias=True)


def serialize_manifest(manifest: Any) -> str:
    """
    Serialize a RepositoryManifest to a JSON string.

    Output is pretty-printed with a stable key order, so serializing the
    same manifest always yields the same text.

    Args:
        manifest: RepositoryManifest model or equivalent mapping

    Returns:
        JSON text (no trailing newline)

    Raises:
        ValidationError: if the manifest is invalid
    """
    return json.dumps(manifest_to_dict(manifest), indent=JSON_INDENT, ensure_ascii=False)


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def load_json(text: Union[str, bytes, bytearray]) -> Any:
    """
    Parse JSON text strictly.

    NaN and Infinity literals are refused, as is nesting too deep to decode.

    Raises:
        ParseError: if the text is not well-formed JSON
    """
    if not isinstance(text, (str, bytes, bytearray)):
        raise ParseError(f"expected text, got {type(text).__name__}")
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ParseError(e.msg, line=e.lineno, column=e.colno) from e
    except (ValueError, UnicodeDecodeError, RecursionError) as e:
        raise ParseError(str(e)) from e


def deserialize_manifest(text: Union[str, bytes, bytearray]) -> RepositoryManifest:
    """
    Deserialize a JSON string to a RepositoryManifest.

    Args:
        text: JSON text

    Returns:
        Parsed RepositoryManifest

    Raises:
        ParseError: if the text is not well-formed JSON
        ValidationError: if the JSON does not match the schema
    """
    return parse_manifest(load_json(text))
