"""Tag-path driven XML decoding into pydantic records.

Record fields declare where their value lives with ``xml_field(path)``.
Paths are relative to the document root element and use ``>`` between tag
names; a final ``@name`` step reads an attribute instead of element text.
Fields typed as a list of records collect every matching element; fields
typed as a record decode the first matching element recursively. Anything
absent from the document is left out so the field default applies.
"""

from __future__ import annotations

import typing
import xml.etree.ElementTree as ET
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError

from omreport.errors import ReportParseError

XML_PATH_KEY = "xml"

M = TypeVar("M", bound=BaseModel)


def xml_field(path: str, default: Any = None, **kwargs: Any) -> Any:
    """Declare a record field read from ``path``."""
    return Field(default, json_schema_extra={XML_PATH_KEY: path}, **kwargs)


def xml_list_field(path: str, **kwargs: Any) -> Any:
    """Declare a repeated record field read from every element at ``path``."""
    return Field(default_factory=list, json_schema_extra={XML_PATH_KEY: path}, **kwargs)


def _split_path(path: str) -> tuple[str, Optional[str]]:
    """Split ``A>B>@attr`` into (``A/B``, ``attr``)."""
    steps = [step.strip() for step in path.split(">")]
    attr = None
    if steps and steps[-1].startswith("@"):
        attr = steps.pop()[1:]
    return "/".join(steps), attr


def _unwrap_optional(annotation: Any) -> Any:
    if typing.get_origin(annotation) is typing.Union:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _strip_annotated(annotation: Any) -> Any:
    if typing.get_origin(annotation) is typing.Annotated:
        return typing.get_args(annotation)[0]
    return annotation


def _record_type(annotation: Any) -> Optional[Type[BaseModel]]:
    annotation = _unwrap_optional(_strip_annotated(annotation))
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    return None


def _list_item_type(annotation: Any) -> Optional[Any]:
    annotation = _unwrap_optional(_strip_annotated(annotation))
    if typing.get_origin(annotation) in (list, typing.List):
        (item,) = typing.get_args(annotation)
        return item
    return None


def _is_text(annotation: Any) -> bool:
    return _unwrap_optional(_strip_annotated(annotation)) is str


def _find(element: ET.Element, path: str) -> Optional[ET.Element]:
    if not path:
        return element
    return element.find(path)


def _findall(element: ET.Element, path: str) -> list[ET.Element]:
    if not path:
        return [element]
    return element.findall(path)


def _scalar(element: ET.Element, path: str, text_field: bool) -> Optional[str]:
    element_path, attr = _split_path(path)
    target = _find(element, element_path)
    if target is None:
        return None
    if attr is not None:
        return target.get(attr)
    value = (target.text or "").strip()
    if not value and not text_field:
        return None
    return value


def collect(model_cls: Type[BaseModel], element: ET.Element) -> Dict[str, Any]:
    """Gather raw field values for ``model_cls`` from ``element``.

    Returns a dict suitable for ``model_cls.model_validate``.
    """
    values: Dict[str, Any] = {}
    for name, info in model_cls.model_fields.items():
        extra = info.json_schema_extra
        if not isinstance(extra, dict) or XML_PATH_KEY not in extra:
            continue
        path = extra[XML_PATH_KEY]

        item_type = _list_item_type(info.annotation)
        if item_type is not None:
            element_path, _ = _split_path(path)
            matches = _findall(element, element_path)
            item_record = _record_type(item_type)
            if item_record is not None:
                values[name] = [collect(item_record, match) for match in matches]
            else:
                values[name] = [(match.text or "").strip() for match in matches]
            continue

        record = _record_type(info.annotation)
        if record is not None:
            element_path, _ = _split_path(path)
            target = _find(element, element_path)
            if target is not None:
                values[name] = collect(record, target)
            continue

        value = _scalar(element, path, _is_text(info.annotation))
        if value is not None:
            values[name] = value
    return values


def decode_document(model_cls: Type[M], data: bytes) -> M:
    """Decode an omreport XML document into ``model_cls``.

    Raises:
        ReportParseError: malformed XML or values the record rejects
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise ReportParseError(f"malformed omreport XML for {model_cls.__name__}: {exc}") from exc

    try:
        return model_cls.model_validate(collect(model_cls, root))
    except ValidationError as exc:
        raise ReportParseError(f"invalid omreport output for {model_cls.__name__}: {exc}") from exc
