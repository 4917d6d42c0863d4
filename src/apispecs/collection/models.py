"""
api-specs Collection Model

In-memory representation of a Postman-style request collection and
environment. Fields that accept more than one JSON shape (URL as string
or object, request as string or object, item as request or folder) are
modelled as separate dataclasses picked by a type probe in from_dict.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union

from ..errors import ParseError


def _as_text(value: Any) -> str:
    """Coerce a variable/header value to text (numbers and booleans as JSON)."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _require_dict(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ParseError(f"Expected object for {what}, got {type(data).__name__}")
    return data


def _require_list(data: Any, what: str) -> List[Any]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise ParseError(f"Expected array for {what}, got {type(data).__name__}")
    return data


@dataclass
class KeyValue:
    """A key/value pair with a disabled flag (headers, query params, form fields)."""

    key: str
    value: str = ""
    disabled: bool = False

    @classmethod
    def from_dict(cls, data: Any, what: str = "key/value pair") -> 'KeyValue':
        data = _require_dict(data, what)
        if 'key' not in data:
            raise ParseError(f"Missing 'key' in {what}")
        return cls(
            key=_as_text(data['key']),
            value=_as_text(data.get('value')),
            disabled=bool(data.get('disabled', False))
        )


# Headers share the key/value shape
Header = KeyValue


@dataclass
class Variable:
    """A collection or environment variable."""

    key: str
    value: str = ""
    type: Optional[str] = None
    enabled: bool = True

    @classmethod
    def from_dict(cls, data: Any) -> 'Variable':
        data = _require_dict(data, "variable")
        if 'key' not in data:
            raise ParseError("Missing 'key' in variable")
        return cls(
            key=_as_text(data['key']),
            value=_as_text(data.get('value')),
            type=data.get('type'),
            enabled=bool(data.get('enabled', True))
        )


@dataclass
class RawUrl:
    """URL given as a plain string."""

    raw: str


@dataclass
class UrlObject:
    """Structured URL. Only raw is used when sending."""

    raw: Optional[str] = None
    protocol: Optional[str] = None
    host: List[str] = field(default_factory=list)
    path: List[str] = field(default_factory=list)
    query: List[KeyValue] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UrlObject':
        host = data.get('host') or []
        if isinstance(host, str):
            host = host.split('.')
        path = data.get('path') or []
        if isinstance(path, str):
            path = [p for p in path.split('/') if p]

        return cls(
            raw=data.get('raw'),
            protocol=data.get('protocol'),
            host=[_as_text(h) for h in host],
            path=[_as_text(p) for p in path],
            query=[KeyValue.from_dict(q, "query param") for q in _require_list(data.get('query'), "url.query")]
        )


Url = Union[RawUrl, UrlObject]


def parse_url(data: Any) -> Url:
    """Probe the URL shape: string or structured object."""
    if isinstance(data, str):
        return RawUrl(raw=data)
    if isinstance(data, dict):
        return UrlObject.from_dict(data)
    raise ParseError(f"Unsupported url value: {type(data).__name__}")


@dataclass
class Body:
    """Request body. Only mode 'raw' is sent over the wire."""

    mode: str
    raw: Optional[str] = None
    urlencoded: List[KeyValue] = field(default_factory=list)
    formdata: List[KeyValue] = field(default_factory=list)
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def raw_language(self) -> Optional[str]:
        """Language hint from options.raw.language (json, xml, text, ...)."""
        raw_options = self.options.get('raw') if isinstance(self.options, dict) else None
        if isinstance(raw_options, dict):
            return raw_options.get('language')
        return None

    @classmethod
    def from_dict(cls, data: Any) -> 'Body':
        data = _require_dict(data, "body")
        raw = data.get('raw')
        return cls(
            mode=_as_text(data.get('mode', 'raw')),
            raw=_as_text(raw) if raw is not None else None,
            urlencoded=[KeyValue.from_dict(kv, "urlencoded field")
                        for kv in _require_list(data.get('urlencoded'), "body.urlencoded")],
            formdata=[KeyValue.from_dict(kv, "formdata field")
                      for kv in _require_list(data.get('formdata'), "body.formdata")],
            options=data.get('options') or {}
        )


@dataclass
class SimpleRequest:
    """Request given as a bare URL string."""

    url: str


@dataclass
class RequestSpec:
    """Full request definition."""

    method: str
    url: Url
    header: List[Header] = field(default_factory=list)
    body: Optional[Body] = None
    auth: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RequestSpec':
        for required in ('method', 'url'):
            if required not in data:
                raise ParseError(f"Missing '{required}' in request")

        body = data.get('body')
        return cls(
            method=_as_text(data['method']),
            url=parse_url(data['url']),
            header=[KeyValue.from_dict(h, "header") for h in _require_list(data.get('header'), "request.header")],
            body=Body.from_dict(body) if body else None,
            auth=data.get('auth')
        )


Request = Union[SimpleRequest, RequestSpec]


def parse_request(data: Any) -> Request:
    """Probe the request shape: bare URL string or full object."""
    if isinstance(data, str):
        return SimpleRequest(url=data)
    if isinstance(data, dict):
        return RequestSpec.from_dict(data)
    raise ParseError(f"Unsupported request value: {type(data).__name__}")


@dataclass
class RequestItem:
    """Leaf of the collection tree."""

    name: str
    request: Request
    response: List[Any] = field(default_factory=list)


@dataclass
class Folder:
    """Folder of items, possibly nested."""

    name: str
    item: List['Item'] = field(default_factory=list)
    description: Optional[str] = None


Item = Union[RequestItem, Folder]


def parse_item(data: Any) -> Item:
    """
    Probe an item: objects with 'item' are folders, objects with 'request' are requests.

    Raises:
        ParseError: If the item is neither
    """
    data = _require_dict(data, "item")
    name = _as_text(data.get('name', ''))

    if 'item' in data:
        return Folder(
            name=name,
            item=[parse_item(child) for child in _require_list(data['item'], f"items of folder '{name}'")],
            description=_description_text(data.get('description'))
        )
    if 'request' in data:
        return RequestItem(
            name=name,
            request=parse_request(data['request']),
            response=_require_list(data.get('response'), f"responses of '{name}'")
        )
    raise ParseError(f"Item '{name}' is neither a request nor a folder")


def _description_text(description: Any) -> Optional[str]:
    # Descriptions may be a string or {"content": ..., "type": ...}
    if isinstance(description, dict):
        return description.get('content')
    return description


@dataclass
class CollectionInfo:
    """Collection metadata."""

    name: str
    description: Optional[str] = None
    schema: Optional[str] = None


@dataclass
class Collection:
    """
    A request collection: a tree of folders and requests plus collection variables.

    Example:
        collection = Collection.from_dict(json.load(f))
        for item in collection.iter_requests():
            print(item.name)
    """

    info: CollectionInfo
    item: List[Item] = field(default_factory=list)
    variable: List[Variable] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> 'Collection':
        """Create collection from parsed JSON."""
        data = _require_dict(data, "collection")
        info = _require_dict(data.get('info'), "collection info")
        if 'name' not in info:
            raise ParseError("Missing 'name' in collection info")
        if 'item' not in data:
            raise ParseError("Missing 'item' in collection")

        return cls(
            info=CollectionInfo(
                name=_as_text(info['name']),
                description=_description_text(info.get('description')),
                schema=info.get('schema')
            ),
            item=[parse_item(item) for item in _require_list(data['item'], "collection items")],
            variable=[Variable.from_dict(v) for v in _require_list(data.get('variable'), "collection variables")]
        )

    def iter_requests(self) -> Iterator[RequestItem]:
        """Yield request items depth-first, children in listed order."""
        yield from _walk(self.item)

    def get_all_requests(self) -> List[RequestItem]:
        """Flatten the tree into execution order."""
        return list(self.iter_requests())

    def variables(self) -> Dict[str, str]:
        """Collection-scope variables as a mapping."""
        return {v.key: v.value for v in self.variable}


def _walk(items: List[Item]) -> Iterator[RequestItem]:
    for item in items:
        if isinstance(item, Folder):
            yield from _walk(item.item)
        else:
            yield item


@dataclass
class Environment:
    """Flat set of variable overrides."""

    name: str
    values: List[Variable] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> 'Environment':
        """Create environment from parsed JSON."""
        data = _require_dict(data, "environment")
        return cls(
            name=_as_text(data.get('name', '')),
            values=[Variable.from_dict(v) for v in _require_list(data.get('values'), "environment values")]
        )

    def variables(self) -> Dict[str, str]:
        """Enabled environment variables as a mapping."""
        return {v.key: v.value for v in self.values if v.enabled}
