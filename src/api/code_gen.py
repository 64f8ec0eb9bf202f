"""
Code snippet generator.
Renders an ApiRequest as ready-to-run client code in 31 languages and libraries.
"""

import base64
import json
import logging
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlencode, urlsplit

from jinja2 import Environment

from api.body_formatter import escape_double_quoted, escape_single_quoted
from api.models import ApiRequest
from config.snippet_templates import SNIPPET_TEMPLATES

logger = logging.getLogger(__name__)

# Methods whose body the generated code actually sends
PAYLOAD_METHODS = ('POST', 'PUT', 'PATCH')

LANGUAGES = [
    {'id': 'curl', 'name': 'cURL', 'group': 'Shell', 'highlight': 'bash'},
    {'id': 'shell_httpie', 'name': 'HTTPie', 'group': 'Shell', 'highlight': 'bash'},
    {'id': 'shell_wget', 'name': 'Wget', 'group': 'Shell', 'highlight': 'bash'},
    {'id': 'http_raw', 'name': 'HTTP/1.1 Raw', 'group': 'HTTP', 'highlight': 'http'},
    {'id': 'javascript_fetch', 'name': 'Fetch API', 'group': 'JavaScript', 'highlight': 'javascript'},
    {'id': 'javascript_axios', 'name': 'Axios', 'group': 'JavaScript', 'highlight': 'javascript'},
    {'id': 'javascript_jquery', 'name': 'jQuery (AJAX)', 'group': 'JavaScript', 'highlight': 'javascript'},
    {'id': 'javascript_xhr', 'name': 'XMLHttpRequest', 'group': 'JavaScript', 'highlight': 'javascript'},
    {'id': 'nodejs_axios', 'name': 'Axios', 'group': 'Node.js', 'highlight': 'javascript'},
    {'id': 'python_requests', 'name': 'Requests', 'group': 'Python', 'highlight': 'python'},
    {'id': 'python_http_client', 'name': 'http.client / urllib', 'group': 'Python', 'highlight': 'python'},
    {'id': 'go_native', 'name': 'net/http', 'group': 'Go', 'highlight': 'go'},
    {'id': 'c_libcurl', 'name': 'libcurl', 'group': 'C', 'highlight': 'c'},
    {'id': 'csharp_httpclient', 'name': 'HttpClient', 'group': 'C#', 'highlight': 'csharp'},
    {'id': 'csharp_restsharp', 'name': 'RestSharp', 'group': 'C#', 'highlight': 'csharp'},
    {'id': 'java_okhttp', 'name': 'OkHttp', 'group': 'Java', 'highlight': 'java'},
    {'id': 'java_net_http', 'name': 'java.net.http', 'group': 'Java', 'highlight': 'java'},
    {'id': 'java_asynchttpclient', 'name': 'AsyncHttpClient', 'group': 'Java', 'highlight': 'java'},
    {'id': 'java_unirest', 'name': 'Unirest', 'group': 'Java', 'highlight': 'java'},
    {'id': 'kotlin_okhttp', 'name': 'OkHttp', 'group': 'Kotlin', 'highlight': 'kotlin'},
    {'id': 'php_guzzle', 'name': 'Guzzle', 'group': 'PHP', 'highlight': 'php'},
    {'id': 'php_curl', 'name': 'cURL', 'group': 'PHP', 'highlight': 'php'},
    {'id': 'powershell_restmethod', 'name': 'Invoke-RestMethod', 'group': 'PowerShell', 'highlight': 'powershell'},
    {'id': 'powershell_webrequest', 'name': 'Invoke-WebRequest', 'group': 'PowerShell', 'highlight': 'powershell'},
    {'id': 'ruby_net_http', 'name': 'Net::HTTP', 'group': 'Ruby', 'highlight': 'ruby'},
    {'id': 'rust_reqwest', 'name': 'Reqwest', 'group': 'Rust', 'highlight': 'rust'},
    {'id': 'swift_nsurlsession', 'name': 'NSURLSession', 'group': 'Swift', 'highlight': 'swift'},
    {'id': 'objectivec_nsurlsession', 'name': 'NSURLSession', 'group': 'Objective-C', 'highlight': 'objectivec'},
    {'id': 'clojure_clj_http', 'name': 'clj-http', 'group': 'Clojure', 'highlight': 'clojure'},
    {'id': 'ocaml_cohttp', 'name': 'cohttp', 'group': 'OCaml', 'highlight': 'ocaml'},
    {'id': 'r_httr', 'name': 'httr', 'group': 'R', 'highlight': 'r'},
]

_LANGUAGE_IDS = {lang['id'] for lang in LANGUAGES}

# (true, false, null), mapping open/close, key separator
_LITERAL_STYLES = {
    'python': (('True', 'False', 'None'), '{', '}', ': '),
    'php': (('true', 'false', 'null'), '[', ']', ' => '),
}


def get_languages() -> List[Dict[str, str]]:
    """Return the catalog of supported snippet languages."""
    return [dict(lang) for lang in LANGUAGES]


def is_supported_language(language: str) -> bool:
    return language in _LANGUAGE_IDS


def safe_parse(body: str) -> Any:
    """Parse a JSON body, falling back to the raw string. An empty body parses as {}."""
    try:
        return json.loads(body or '{}')
    except ValueError:
        return body


def _basic_token(username: str, password: Optional[str]) -> str:
    credentials = f"{username}:{password or ''}"
    return base64.b64encode(credentials.encode('utf-8')).decode('ascii')


def get_active_headers(request: ApiRequest) -> Dict[str, str]:
    """
    Build the header mapping a snippet sends.

    Enabled headers come first, then auth headers, then the Content-Type
    implied by the body type for methods that carry a payload.
    """
    headers = {}
    for item in request.headers:
        if item.enabled and item.key:
            headers[item.key] = item.value

    auth = request.auth
    if auth.type == 'bearer' and auth.bearer_token:
        headers['Authorization'] = f"Bearer {auth.bearer_token}"
    if auth.type == 'basic' and auth.basic_username:
        headers['Authorization'] = f"Basic {_basic_token(auth.basic_username, auth.basic_password)}"
    if auth.type == 'apikey' and auth.api_key and auth.api_value and auth.api_location == 'header':
        headers[auth.api_key] = auth.api_value

    if request.method in PAYLOAD_METHODS:
        if request.body_type == 'json':
            headers['Content-Type'] = 'application/json'
        elif request.body_type == 'x-www-form-urlencoded':
            headers['Content-Type'] = 'application/x-www-form-urlencoded'

    return headers


def _render_literal(value: Any, style: str, indent: int = 4, level: int = 0) -> str:
    """Render JSON-like data as a Python or PHP literal, laid out like indented JSON."""
    keywords, mapping_open, mapping_close, key_separator = _LITERAL_STYLES[style]

    if isinstance(value, bool):
        return keywords[0] if value else keywords[1]
    if value is None:
        return keywords[2]
    if isinstance(value, (int, float)):
        return json.dumps(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)

    padding = ' ' * (indent * (level + 1))
    closing = ' ' * (indent * level)

    if isinstance(value, dict):
        if not value:
            return mapping_open + mapping_close
        items = [
            f"{padding}{json.dumps(str(k), ensure_ascii=False)}{key_separator}"
            f"{_render_literal(v, style, indent, level + 1)}"
            for k, v in value.items()
        ]
        return mapping_open + '\n' + ',\n'.join(items) + '\n' + closing + mapping_close

    if isinstance(value, list):
        if not value:
            return '[]'
        items = [f"{padding}{_render_literal(v, style, indent, level + 1)}" for v in value]
        return '[\n' + ',\n'.join(items) + '\n' + closing + ']'

    return json.dumps(str(value), ensure_ascii=False)


def _double_quoted(text: str) -> str:
    return escape_double_quoted(text).replace('\r', '\\r').replace('\n', '\\n')


def _powershell_quoted(text: str) -> str:
    return text.replace('`', '``').replace('"', '`"').replace('$', '`$')


def _go_raw(text: str) -> str:
    return text.replace('`', '` + "`" + `')


def _clojure_map(headers: Dict[str, str]) -> str:
    pairs = [f'"{_double_quoted(k)}" "{_double_quoted(v)}"' for k, v in headers.items()]
    return '{' + ', '.join(pairs) + '}'


def _create_environment() -> Environment:
    env = Environment(trim_blocks=True, lstrip_blocks=True, autoescape=False)
    env.filters['dq'] = _double_quoted
    env.filters['sq'] = escape_single_quoted
    env.filters['ps'] = _powershell_quoted
    env.filters['go_raw'] = _go_raw
    env.filters['to_json'] = lambda value, indent=None: json.dumps(value, indent=indent, ensure_ascii=False)
    env.filters['py_literal'] = lambda value: _render_literal(value, 'python')
    env.filters['clojure_map'] = _clojure_map
    return env


_environment = _create_environment()
_templates = {name: _environment.from_string(source) for name, source in SNIPPET_TEMPLATES.items()}


def _parse_url(url: str) -> Dict[str, str]:
    """Split a URL into the pieces raw HTTP snippets need."""
    try:
        parts = urlsplit(url)
        # Accessing the port validates it
        parts.port
    except ValueError as e:
        raise ValueError(f"Invalid URL: {url}") from e

    if not parts.scheme or not parts.netloc:
        raise ValueError(f"Invalid URL: {url}")

    return {
        'scheme': parts.scheme.lower(),
        'host': parts.netloc.rpartition('@')[2],
        'path': parts.path or '/',
        'search': f"?{parts.query}" if parts.query else ''
    }


def _enabled_pairs(fields) -> List[tuple]:
    return [(f.key, f.value) for f in fields if f.enabled and f.key]


def _base_context(request: ApiRequest, headers: Dict[str, str]) -> Dict[str, Any]:
    return {
        'method': request.method,
        'url': request.url,
        'headers': headers,
        'body': request.body,
        'body_type': request.body_type,
        'has_body': bool(request.body) and request.body_type != 'none',
        'content_type': headers.get('Content-Type', 'text/plain'),
        'follow_redirects': request.settings.follow_redirects,
        'timeout_seconds': request.settings.timeout // 1000 if request.settings.timeout else 0,
    }


# ========== Command-line and raw snippets ==========

def _build_curl(request: ApiRequest, headers: Dict[str, str]) -> str:
    sq = escape_single_quoted
    parts = [f"curl -X {request.method} '{sq(request.url)}'"]
    parts.extend(f"-H '{sq(k)}: {sq(v)}'" for k, v in headers.items())

    if request.method in PAYLOAD_METHODS:
        if request.body_type in ('json', 'raw'):
            parts.append(f"-d '{sq(request.body)}'")
        elif request.body_type == 'x-www-form-urlencoded':
            parts.extend(f"--data-urlencode '{sq(k)}={sq(v)}'"
                         for k, v in _enabled_pairs(request.body_form_url_encoded))
        elif request.body_type == 'form-data':
            for field in request.body_form_data:
                if not (field.enabled and field.key):
                    continue
                if field.type == 'file':
                    parts.append(f"-F '{sq(field.key)}=@{sq(field.file_name or 'file')}'")
                else:
                    parts.append(f"-F '{sq(field.key)}={sq(field.value)}'")

    return ' \\\n  '.join(parts)


def _build_httpie(request: ApiRequest, headers: Dict[str, str]) -> str:
    snippet = f"http {request.method} {request.url}"
    for key, value in headers.items():
        snippet += f" '{escape_single_quoted(key)}:{escape_single_quoted(value)}'"
    if request.body_type == 'json' and request.body:
        snippet += f" <<< '{escape_single_quoted(request.body)}'"
    return snippet


def _build_wget(request: ApiRequest, headers: Dict[str, str]) -> str:
    target = _parse_url(request.url)
    snippet = f"wget --method={request.method} --header='Host: {target['host']}'"
    for key, value in headers.items():
        snippet += f" --header='{escape_single_quoted(key)}: {escape_single_quoted(value)}'"
    if request.body and request.body_type != 'none':
        snippet += f" --body-data='{escape_single_quoted(request.body)}'"
    snippet += f" '{request.url}'"
    return snippet


def _build_http_raw(request: ApiRequest, headers: Dict[str, str]) -> str:
    target = _parse_url(request.url)
    lines = [
        f"{request.method} {target['path']}{target['search']} HTTP/1.1",
        f"Host: {target['host']}"
    ]
    lines.extend(f"{k}: {v}" for k, v in headers.items())
    raw = '\n'.join(lines)
    if request.body and request.body_type != 'none':
        raw += f"\n\n{request.body}"
    return raw


# ========== Per-language template extras ==========

def _fetch_context(request: ApiRequest, headers: Dict[str, str]) -> Dict[str, Any]:
    fetch_body = ''
    if request.method in PAYLOAD_METHODS:
        if request.body_type == 'json':
            payload = request.body or '{}'
            fetch_body = f"\n  body: JSON.stringify({payload}),"
        elif request.body_type == 'x-www-form-urlencoded':
            encoded = urlencode(_enabled_pairs(request.body_form_url_encoded))
            fetch_body = f"\n  body: new URLSearchParams('{encoded}'),"
        elif request.body_type == 'form-data':
            fetch_body = "\n  body: formData, // the browser sets the multipart boundary"
        elif request.body_type == 'raw':
            fetch_body = f"\n  body: '{escape_single_quoted(request.body)}',"
    return {'fetch_body': fetch_body}


def _axios_context(request: ApiRequest, headers: Dict[str, str]) -> Dict[str, Any]:
    config = {
        'method': request.method.lower(),
        'url': request.url,
        'headers': headers
    }
    if request.method in PAYLOAD_METHODS:
        if request.body_type == 'json':
            config['data'] = safe_parse(request.body)
        elif request.body_type == 'x-www-form-urlencoded':
            config['data'] = urlencode(_enabled_pairs(request.body_form_url_encoded))
        elif request.body_type == 'raw':
            config['data'] = request.body
    return {'axios_config': config}


def _python_requests_context(request: ApiRequest, headers: Dict[str, str]) -> Dict[str, Any]:
    data_argument = ''
    if request.method in PAYLOAD_METHODS:
        if request.body_type == 'json':
            data_argument = f", json={_render_literal(safe_parse(request.body), 'python')}"
        elif request.body_type == 'x-www-form-urlencoded':
            data = dict(_enabled_pairs(request.body_form_url_encoded))
            data_argument = f", data={_render_literal(data, 'python')}"
        elif request.body_type == 'form-data':
            data = {f.key: f.value for f in request.body_form_data
                    if f.enabled and f.key and f.type != 'file'}
            data_argument = f", data={_render_literal(data, 'python')}"
        elif request.body_type == 'raw':
            data_argument = f', data="""{escape_double_quoted(request.body)}"""'
    return {'data_argument': data_argument}


def _python_http_client_context(request: ApiRequest, headers: Dict[str, str]) -> Dict[str, Any]:
    return {'target': _parse_url(request.url)}


def _guzzle_context(request: ApiRequest, headers: Dict[str, str]) -> Dict[str, Any]:
    options = [f"'headers' => {_render_literal(headers, 'php', level=1)}"]
    if request.method in PAYLOAD_METHODS:
        if request.body_type == 'json':
            options.append(f"'json' => {_render_literal(safe_parse(request.body), 'php', level=1)}")
        elif request.body_type == 'x-www-form-urlencoded':
            data = dict(_enabled_pairs(request.body_form_url_encoded))
            options.append(f"'form_params' => {_render_literal(data, 'php', level=1)}")
        elif request.body_type == 'raw':
            options.append(f"'body' => '{escape_single_quoted(request.body)}'")
    return {'guzzle_options': options}


def _okhttp_context(request: ApiRequest, headers: Dict[str, str]) -> Dict[str, Any]:
    java_body = 'null'
    if request.method in PAYLOAD_METHODS:
        java_body = 'RequestBody.create(null, new byte[0])'
        if request.body_type == 'json':
            java_body = f'RequestBody.create(MediaType.parse("application/json"), "{_double_quoted(request.body)}")'
        elif request.body_type == 'x-www-form-urlencoded':
            fields = ''.join(f'\n      .add("{_double_quoted(k)}", "{_double_quoted(v)}")'
                             for k, v in _enabled_pairs(request.body_form_url_encoded))
            java_body = f"new FormBody.Builder(){fields}\n      .build()"
        elif request.body_type == 'raw':
            java_body = f'RequestBody.create(mediaType, "{_double_quoted(request.body)}")'
    return {'java_body': java_body}


_TEMPLATE_CONTEXTS: Dict[str, Callable[[ApiRequest, Dict[str, str]], Dict[str, Any]]] = {
    'javascript_fetch': _fetch_context,
    'javascript_axios': _axios_context,
    'nodejs_axios': _axios_context,
    'python_requests': _python_requests_context,
    'python_http_client': _python_http_client_context,
    'php_guzzle': _guzzle_context,
    'java_okhttp': _okhttp_context,
}

_BUILDERS: Dict[str, Callable[[ApiRequest, Dict[str, str]], str]] = {
    'curl': _build_curl,
    'shell_httpie': _build_httpie,
    'shell_wget': _build_wget,
    'http_raw': _build_http_raw,
}


def _render_template(language: str, request: ApiRequest, headers: Dict[str, str]) -> str:
    context = _base_context(request, headers)
    extras = _TEMPLATE_CONTEXTS.get(language)
    if extras:
        context.update(extras(request, headers))
    return _templates[language].render(**context)


def generate_code_snippet(language: str, request: ApiRequest) -> str:
    """
    Generate client code for a request.

    Args:
        language: Language id from LANGUAGES
        request: Request to render

    Returns:
        The snippet text. Unknown languages get a placeholder comment.

    Raises:
        ValueError: If the language needs the URL's host or path and the URL cannot be parsed
    """
    headers = get_active_headers(request)

    if language in _BUILDERS:
        snippet = _BUILDERS[language](request, headers)
    elif language in _templates:
        snippet = _render_template(language, request, headers)
    else:
        logger.debug("No snippet generator for language: %s", language)
        return f"// Code generation for {language} coming soon..."

    logger.debug("Generated %s snippet for %s %s", language, request.method, request.url)
    return snippet
