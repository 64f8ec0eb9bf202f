"""
Request and response models shared by the cURL parser, the code generator
and the request executor.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlencode


HTTP_METHODS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'HEAD', 'OPTIONS']

DEFAULT_TIMEOUT_MS = 30000

CONTENT_TYPES = [
    {'value': 'application/json', 'label': 'JSON'},
    {'value': 'application/xml', 'label': 'XML'},
    {'value': 'application/x-www-form-urlencoded', 'label': 'Form URL Encoded'},
    {'value': 'multipart/form-data', 'label': 'Multipart Form'},
    {'value': 'text/plain', 'label': 'Plain Text'},
    {'value': 'text/html', 'label': 'HTML'},
    {'value': 'text/xml', 'label': 'XML (text)'},
    {'value': 'custom', 'label': 'Custom'},
]

# Content types a Content-Type header can map onto without falling back to 'custom'
KNOWN_CONTENT_TYPES = [ct['value'] for ct in CONTENT_TYPES if ct['value'] != 'custom']

AUTH_TYPES = [
    {'value': 'none', 'label': 'No Auth', 'description': 'No authentication'},
    {'value': 'basic', 'label': 'Basic Auth', 'description': 'Username and password'},
    {'value': 'bearer', 'label': 'Bearer Token', 'description': 'JWT or OAuth token'},
    {'value': 'api-key', 'label': 'API Key', 'description': 'API key in header or query'},
    {'value': 'custom', 'label': 'Custom Header', 'description': 'Custom auth header'},
]

BODY_TYPES = ['none', 'json', 'raw', 'x-www-form-urlencoded', 'form-data']


def _as_text(value: Any) -> str:
    """Coerce a body-like value to text; objects and arrays become JSON."""
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def _as_mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_rows(value: Any) -> List[Dict[str, Any]]:
    """Keep only the dict rows of a header/param/field list."""
    if not isinstance(value, list):
        return []
    return [row for row in value if isinstance(row, dict)]


def _as_bool(value: Any, default: bool = True) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() not in ('false', '0', 'no', 'off', '')
    return bool(value)


@dataclass
class Header:
    """A single request header row."""
    key: str
    value: str = ''
    enabled: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {'key': self.key, 'value': self.value, 'enabled': self.enabled}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Header':
        return cls(
            key=str(data.get('key', '')),
            value=str(data.get('value', '')),
            enabled=_as_bool(data.get('enabled'))
        )


@dataclass
class QueryParam(Header):
    """A single query string parameter row."""


@dataclass
class AuthConfig:
    """Authentication settings attached to a RequestConfig."""
    type: str = 'none'  # 'none', 'basic', 'bearer', 'api-key', 'custom'
    username: Optional[str] = None
    password: Optional[str] = None
    token: Optional[str] = None
    api_key_name: Optional[str] = None
    api_key_value: Optional[str] = None
    api_key_location: Optional[str] = None  # 'header' or 'query'
    custom_header_name: Optional[str] = None
    custom_header_value: Optional[str] = None

    def query_credential(self) -> Optional[Tuple[str, str]]:
        """Return the (name, value) pair when an API key travels in the query string."""
        if (self.type == 'api-key' and self.api_key_location == 'query'
                and self.api_key_name and self.api_key_value):
            return self.api_key_name, self.api_key_value
        return None

    def to_dict(self) -> Dict[str, Any]:
        result = {'type': self.type}
        for name in ('username', 'password', 'token', 'api_key_name', 'api_key_value',
                     'api_key_location', 'custom_header_name', 'custom_header_value'):
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        return result

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'AuthConfig':
        data = _as_mapping(data)
        return cls(
            type=data.get('type') or 'none',
            username=data.get('username'),
            password=data.get('password'),
            token=data.get('token'),
            api_key_name=data.get('api_key_name'),
            api_key_value=data.get('api_key_value'),
            api_key_location=data.get('api_key_location'),
            custom_header_name=data.get('custom_header_name'),
            custom_header_value=data.get('custom_header_value')
        )


@dataclass
class RequestConfig:
    """Structured form of an HTTP request, as parsed from or rendered to a cURL command."""
    url: str = ''
    method: str = 'GET'
    headers: List[Header] = field(default_factory=list)
    query_params: List[QueryParam] = field(default_factory=list)
    body: str = ''
    content_type: str = 'application/json'
    custom_content_type: Optional[str] = None
    auth: AuthConfig = field(default_factory=AuthConfig)
    timeout: Optional[int] = DEFAULT_TIMEOUT_MS  # milliseconds
    follow_redirects: bool = True
    verify_ssl: bool = True

    def effective_content_type(self) -> Optional[str]:
        """Content type that should be sent, resolving the 'custom' marker."""
        if self.content_type == 'custom':
            return self.custom_content_type
        return self.content_type

    def sends_body(self) -> bool:
        """Whether the body travels with this request."""
        return bool(self.body) and self.method not in ('GET', 'HEAD')

    def full_url(self, extra_params: Optional[List[Tuple[str, str]]] = None) -> str:
        """URL with enabled query params (and any extra pairs) appended."""
        pairs = [(p.key, p.value) for p in self.query_params if p.enabled and p.key]
        if extra_params:
            pairs.extend(extra_params)
        if not pairs:
            return self.url

        separator = '&' if '?' in self.url else '?'
        return self.url + separator + urlencode(pairs, safe='*')

    def to_dict(self) -> Dict[str, Any]:
        return {
            'url': self.url,
            'method': self.method,
            'headers': [h.to_dict() for h in self.headers],
            'query_params': [p.to_dict() for p in self.query_params],
            'body': self.body,
            'content_type': self.content_type,
            'custom_content_type': self.custom_content_type,
            'auth': self.auth.to_dict(),
            'timeout': self.timeout,
            'follow_redirects': self.follow_redirects,
            'verify_ssl': self.verify_ssl
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], verify_ssl_default: bool = True) -> 'RequestConfig':
        timeout = data.get('timeout', DEFAULT_TIMEOUT_MS)
        try:
            timeout = int(timeout) if timeout is not None else None
        except (TypeError, ValueError):
            timeout = DEFAULT_TIMEOUT_MS

        return cls(
            url=str(data.get('url', '')),
            method=str(data.get('method', 'GET')).upper(),
            headers=[Header.from_dict(h) for h in _as_rows(data.get('headers'))],
            query_params=[QueryParam.from_dict(p) for p in _as_rows(data.get('query_params'))],
            body=_as_text(data.get('body')),
            content_type=str(data.get('content_type') or 'application/json'),
            custom_content_type=data.get('custom_content_type'),
            auth=AuthConfig.from_dict(data.get('auth')),
            timeout=timeout,
            follow_redirects=_as_bool(data.get('follow_redirects')),
            verify_ssl=_as_bool(data.get('verify_ssl'), verify_ssl_default)
        )


@dataclass
class ResponseData:
    """Result of executing a RequestConfig."""
    status: int
    status_text: str
    headers: Dict[str, str]
    body: str
    content_type: str
    duration: int  # milliseconds
    size: int  # bytes

    def to_dict(self) -> Dict[str, Any]:
        return {
            'status': self.status,
            'status_text': self.status_text,
            'headers': dict(self.headers),
            'body': self.body,
            'content_type': self.content_type,
            'duration': self.duration,
            'size': self.size
        }


# ========== Code generation model ==========

@dataclass
class KeyValue:
    """Generic enabled/disabled key-value row (headers, params, urlencoded fields)."""
    key: str
    value: str = ''
    enabled: bool = True
    id: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'KeyValue':
        return cls(
            key=str(data.get('key', '')),
            value=str(data.get('value', '')),
            enabled=_as_bool(data.get('enabled')),
            id=str(data.get('id', ''))
        )

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'key': self.key, 'value': self.value, 'enabled': self.enabled}


@dataclass
class FormDataField:
    """A multipart form field, either text or a file reference."""
    key: str
    value: str = ''
    type: str = 'text'  # 'text' or 'file'
    file_name: Optional[str] = None
    enabled: bool = True
    id: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FormDataField':
        return cls(
            key=str(data.get('key', '')),
            value=str(data.get('value', '')),
            type=data.get('type') or 'text',
            file_name=data.get('file_name'),
            enabled=_as_bool(data.get('enabled')),
            id=str(data.get('id', ''))
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'key': self.key,
            'value': self.value,
            'type': self.type,
            'file_name': self.file_name,
            'enabled': self.enabled
        }


@dataclass
class ApiAuth:
    """Authentication as the code generator understands it."""
    type: str = 'none'  # 'none', 'basic', 'bearer', 'apikey'
    bearer_token: Optional[str] = None
    basic_username: Optional[str] = None
    basic_password: Optional[str] = None
    api_key: Optional[str] = None
    api_value: Optional[str] = None
    api_location: Optional[str] = None  # 'header' or 'query'

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ApiAuth':
        data = _as_mapping(data)
        return cls(
            type=data.get('type') or 'none',
            bearer_token=data.get('bearer_token'),
            basic_username=data.get('basic_username'),
            basic_password=data.get('basic_password'),
            api_key=data.get('api_key'),
            api_value=data.get('api_value'),
            api_location=data.get('api_location')
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {'type': self.type}
        for name in ('bearer_token', 'basic_username', 'basic_password',
                     'api_key', 'api_value', 'api_location'):
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        return result


@dataclass
class RequestSettings:
    follow_redirects: bool = True
    ssl_verification: bool = True
    timeout: int = 0

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'RequestSettings':
        data = _as_mapping(data)
        try:
            timeout = int(data.get('timeout') or 0)
        except (TypeError, ValueError):
            timeout = 0
        return cls(
            follow_redirects=_as_bool(data.get('follow_redirects')),
            ssl_verification=_as_bool(data.get('ssl_verification')),
            timeout=timeout
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'follow_redirects': self.follow_redirects,
            'ssl_verification': self.ssl_verification,
            'timeout': self.timeout
        }


@dataclass
class ApiRequest:
    """Request description consumed by the code snippet generator."""
    method: str = 'GET'
    url: str = ''
    headers: List[KeyValue] = field(default_factory=list)
    params: List[KeyValue] = field(default_factory=list)
    auth: ApiAuth = field(default_factory=ApiAuth)
    body_type: str = 'none'
    body: str = ''
    body_form_data: List[FormDataField] = field(default_factory=list)
    body_form_url_encoded: List[KeyValue] = field(default_factory=list)
    settings: RequestSettings = field(default_factory=RequestSettings)
    id: str = ''
    name: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ApiRequest':
        body_type = data.get('body_type') or 'none'
        if body_type not in BODY_TYPES:
            body_type = 'raw'
        return cls(
            method=str(data.get('method', 'GET')).upper(),
            url=str(data.get('url', '')),
            headers=[KeyValue.from_dict(h) for h in _as_rows(data.get('headers'))],
            params=[KeyValue.from_dict(p) for p in _as_rows(data.get('params'))],
            auth=ApiAuth.from_dict(data.get('auth')),
            body_type=body_type,
            body=_as_text(data.get('body')),
            body_form_data=[FormDataField.from_dict(f) for f in _as_rows(data.get('body_form_data'))],
            body_form_url_encoded=[KeyValue.from_dict(f) for f in _as_rows(data.get('body_form_url_encoded'))],
            settings=RequestSettings.from_dict(data.get('settings')),
            id=str(data.get('id', '')),
            name=str(data.get('name', ''))
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'method': self.method,
            'url': self.url,
            'headers': [h.to_dict() for h in self.headers],
            'params': [p.to_dict() for p in self.params],
            'auth': self.auth.to_dict(),
            'body_type': self.body_type,
            'body': self.body,
            'body_form_data': [f.to_dict() for f in self.body_form_data],
            'body_form_url_encoded': [f.to_dict() for f in self.body_form_url_encoded],
            'settings': self.settings.to_dict()
        }
