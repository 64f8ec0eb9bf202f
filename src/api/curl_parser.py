"""
cURL command parser.
Turns a shell-style cURL command into a RequestConfig and back again.
"""

import base64
import binascii
import logging
import re
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qsl, quote, unquote_plus, urlsplit

from api.body_formatter import escape_single_quoted, repair_json
from api.models import (
    HTTP_METHODS, KNOWN_CONTENT_TYPES, ApiAuth, ApiRequest, AuthConfig, Header,
    KeyValue, QueryParam, RequestConfig, RequestSettings
)

logger = logging.getLogger(__name__)

_LINE_CONTINUATION = re.compile(r'\\\s*\n')
_WHITESPACE = re.compile(r'\s+')
_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')

_DEFAULT_PORTS = {'http': 80, 'https': 443, 'ws': 80, 'wss': 443, 'ftp': 21}

# Flags that are accepted but carry no meaning for the request model
_IGNORED_FLAGS = {'-v', '--verbose', '-s', '--silent', '-S', '--show-error', '-i', '--include'}

# Flags whose argument is consumed and dropped
_SKIPPED_ARGUMENT_FLAGS = {
    '-o', '--output', '-O', '--remote-name', '-c', '--cookie-jar', '-w', '--write-out'
}

_DATA_FLAGS = {'-d', '--data', '--data-raw', '--data-binary'}

# Flags that simply add a fixed header with the argument as value
_HEADER_FLAGS = {
    '-A': 'User-Agent', '--user-agent': 'User-Agent',
    '-e': 'Referer', '--referer': 'Referer',
    '-b': 'Cookie', '--cookie': 'Cookie',
}


def tokenize(command: str) -> List[str]:
    """Split a command line into tokens, honouring quotes and backslash escapes."""
    tokens = []
    current = ''
    in_quote = None
    escaped = False

    for char in command:
        if escaped:
            if in_quote == "'" and char == "'":
                current += "'"
            elif in_quote == '"' and char == '"':
                current += '"'
            elif char == 'n':
                current += '\n'
            elif char == 't':
                current += '\t'
            elif char == 'r':
                current += '\r'
            else:
                current += char
            escaped = False
            continue

        if char == '\\':
            escaped = True
            continue

        if in_quote:
            if char == in_quote:
                in_quote = None
            else:
                current += char
            continue

        if char in ('"', "'"):
            in_quote = char
            continue

        if char in (' ', '\t'):
            if current:
                tokens.append(current)
                current = ''
            continue

        current += char

    if current:
        tokens.append(current)

    return tokens


def clean_quotes(text: str) -> str:
    """Remove one pair of matching surrounding quotes."""
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ('"', "'"):
        return text[1:-1]
    return text


def encode_uri_component(text: str) -> str:
    """Percent-encode text with the same unreserved set as JavaScript's encodeURIComponent."""
    return quote(text, safe="!~*'()")


def split_form_body(body: str) -> List[Tuple[str, str]]:
    """Split an urlencoded body into pairs, decoding each segment before its first '='."""
    pairs = []
    for segment in body.split('&'):
        if not segment:
            continue
        key, _, value = unquote_plus(segment).partition('=')
        pairs.append((key, value))
    return pairs


def parse_auth_header(value: str) -> AuthConfig:
    """Classify an Authorization header value."""
    lower_value = value.lower()

    if lower_value.startswith('basic '):
        try:
            decoded = base64.b64decode(value[6:].strip(), validate=True).decode('latin-1')
        except (binascii.Error, ValueError):
            decoded = ''
        colon_idx = decoded.find(':')
        if colon_idx > 0:
            return AuthConfig(
                type='basic',
                username=decoded[:colon_idx],
                password=decoded[colon_idx + 1:]
            )
        return AuthConfig(type='custom', custom_header_name='Authorization', custom_header_value=value)

    if lower_value.startswith('bearer '):
        return AuthConfig(type='bearer', token=value[7:])

    return AuthConfig(type='custom', custom_header_name='Authorization', custom_header_value=value)


def _parse_int(text: str) -> Optional[int]:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def _split_query(url: str) -> Tuple[str, List[Tuple[str, str]]]:
    """Split an absolute URL into origin+path and its decoded query pairs."""
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError:
        return url, []

    if not parts.scheme or not parts.netloc or not parts.hostname:
        return url, []

    scheme = parts.scheme.lower()
    host = parts.netloc.rpartition('@')[2].lower()
    if port is not None and _DEFAULT_PORTS.get(scheme) == port:
        host = host.rsplit(':', 1)[0]

    base = f"{scheme}://{host}{parts.path or '/'}"
    return base, parse_qsl(parts.query, keep_blank_values=True)


def parse_curl(curl_command: str) -> RequestConfig:
    """
    Parse a cURL command string into a RequestConfig.

    Parsing is best effort: unknown flags are skipped and the function never
    raises on malformed input. A missing URL shows up as an empty ``url``.
    """
    config = RequestConfig()

    normalized = _LINE_CONTINUATION.sub(' ', curl_command)
    normalized = _WHITESPACE.sub(' ', normalized).strip()

    if normalized.lower().startswith('curl '):
        normalized = normalized[5:].strip()

    tokens = tokenize(normalized)

    def argument(index: int) -> Optional[str]:
        return tokens[index + 1] if index + 1 < len(tokens) else None

    i = 0
    while i < len(tokens):
        token = tokens[i]

        # URL: first non-flag argument
        if not token.startswith('-') and not config.url:
            config.url = clean_quotes(token)
            i += 1
            continue

        arg = argument(i)

        if token in ('-X', '--request'):
            if arg is None:
                i += 1
                continue
            method = arg.upper()
            if method in HTTP_METHODS:
                config.method = method
            i += 2

        elif token in ('-H', '--header'):
            if arg is None:
                i += 1
                continue
            _apply_header(config, clean_quotes(arg))
            i += 2

        elif token in _DATA_FLAGS:
            if arg is None:
                i += 1
                continue
            config.body = repair_json(clean_quotes(arg))
            if config.method == 'GET':
                config.method = 'POST'
            i += 2

        elif token == '--data-urlencode':
            if arg is None:
                i += 1
                continue
            encoded = encode_uri_component(clean_quotes(arg))
            config.body = f"{config.body}&{encoded}" if config.body else encoded
            config.content_type = 'application/x-www-form-urlencoded'
            if config.method == 'GET':
                config.method = 'POST'
            i += 2

        elif token in ('-u', '--user'):
            if arg is None:
                i += 1
                continue
            user_pass = clean_quotes(arg)
            colon_idx = user_pass.find(':')
            if colon_idx > 0:
                config.auth = AuthConfig(
                    type='basic',
                    username=user_pass[:colon_idx],
                    password=user_pass[colon_idx + 1:]
                )
            else:
                config.auth = AuthConfig(type='basic', username=user_pass, password='')
            i += 2

        elif token == '--url':
            if arg is None:
                i += 1
                continue
            config.url = clean_quotes(arg)
            i += 2

        elif token in ('-L', '--location'):
            config.follow_redirects = True
            i += 1

        elif token in ('-m', '--max-time'):
            if arg is None:
                i += 1
                continue
            seconds = _parse_int(arg)
            if seconds is not None:
                config.timeout = seconds * 1000
            i += 2

        elif token in _HEADER_FLAGS:
            if arg is None:
                i += 1
                continue
            config.headers.append(Header(key=_HEADER_FLAGS[token], value=clean_quotes(arg)))
            i += 2

        elif token == '--compressed':
            if not any(h.key.lower() == 'accept-encoding' for h in config.headers):
                config.headers.append(Header(key='Accept-Encoding', value='gzip, deflate, br'))
            i += 1

        elif token in ('-k', '--insecure'):
            config.verify_ssl = False
            i += 1

        elif token in ('-I', '--head'):
            config.method = 'HEAD'
            i += 1

        elif token in _IGNORED_FLAGS:
            i += 1

        elif token in _SKIPPED_ARGUMENT_FLAGS:
            i += 2

        else:
            if not token.startswith('-') and not config.url:
                config.url = clean_quotes(token)
            i += 1

    if config.url:
        base, pairs = _split_query(config.url)
        config.url = base
        config.query_params.extend(QueryParam(key=k, value=v) for k, v in pairs)

    logger.debug("Parsed cURL command: %s %s (%d headers)",
                 config.method, config.url, len(config.headers))
    return config


def _apply_header(config: RequestConfig, header: str) -> None:
    colon_idx = header.find(':')
    if colon_idx <= 0:
        return

    key = header[:colon_idx].strip()
    value = header[colon_idx + 1:].strip()
    lower_key = key.lower()

    if lower_key == 'content-type':
        if value in KNOWN_CONTENT_TYPES:
            config.content_type = value
        else:
            config.content_type = 'custom'
            config.custom_content_type = value
    elif lower_key == 'authorization':
        config.auth = parse_auth_header(value)
    else:
        config.headers.append(Header(key=key, value=value))


def to_curl(config: RequestConfig) -> str:
    """Render a RequestConfig as a multi-line cURL command."""
    parts = ['curl']

    if config.method != 'GET':
        parts.append(f"-X {config.method}")

    query_credential = config.auth.query_credential()
    url = config.full_url([query_credential] if query_credential else None)
    parts.append(f"'{url}'")

    for header in config.headers:
        if header.enabled and header.key:
            parts.append(f"-H '{header.key}: {header.value}'")

    if config.sends_body():
        content_type = config.effective_content_type()
        if content_type:
            parts.append(f"-H 'Content-Type: {content_type}'")

    auth = config.auth
    if auth.type == 'basic':
        if auth.username:
            parts.append(f"-u '{auth.username}:{auth.password or ''}'")
    elif auth.type == 'bearer':
        if auth.token:
            parts.append(f"-H 'Authorization: Bearer {auth.token}'")
    elif auth.type == 'api-key':
        if auth.api_key_name and auth.api_key_value and auth.api_key_location == 'header':
            parts.append(f"-H '{auth.api_key_name}: {auth.api_key_value}'")
    elif auth.type == 'custom':
        if auth.custom_header_name and auth.custom_header_value:
            parts.append(f"-H '{auth.custom_header_name}: {auth.custom_header_value}'")

    if not config.verify_ssl:
        parts.append('-k')

    if config.sends_body():
        parts.append(f"-d '{escape_single_quoted(config.body)}'")

    return ' \\\n  '.join(parts)


def validate_url(url: str) -> Dict[str, Any]:
    """
    Validate a URL for execution.

    Returns:
        Dict with 'valid' and, when invalid, 'error'
    """
    if not url or not url.strip():
        return {'valid': False, 'error': 'URL is required'}

    try:
        parts = urlsplit(url.strip())
        # Accessing the port validates it
        parts.port
    except ValueError:
        return {'valid': False, 'error': 'Invalid URL format'}

    scheme = parts.scheme.lower()
    if not scheme:
        return {'valid': False, 'error': 'Invalid URL format'}

    if scheme in ('http', 'https'):
        if not parts.hostname or any(c.isspace() for c in parts.netloc):
            return {'valid': False, 'error': 'Invalid URL format'}
        return {'valid': True}

    return {'valid': False, 'error': 'Only HTTP and HTTPS URLs are supported'}


def to_api_request(config: RequestConfig, name: str = '') -> ApiRequest:
    """Convert a parsed RequestConfig into the model used by the code generator."""
    headers = [KeyValue(key=h.key, value=h.value, enabled=h.enabled) for h in config.headers]
    params = [KeyValue(key=p.key, value=p.value, enabled=p.enabled) for p in config.query_params]

    auth = ApiAuth()
    extra_params = None
    source = config.auth
    if source.type == 'basic':
        auth = ApiAuth(type='basic', basic_username=source.username, basic_password=source.password)
    elif source.type == 'bearer':
        auth = ApiAuth(type='bearer', bearer_token=source.token)
    elif source.type == 'api-key':
        location = source.api_key_location or 'header'
        auth = ApiAuth(type='apikey', api_key=source.api_key_name,
                       api_value=source.api_key_value, api_location=location)
        query_credential = source.query_credential()
        if query_credential:
            extra_params = [query_credential]
    elif source.type == 'custom' and source.custom_header_name:
        headers.append(KeyValue(key=source.custom_header_name, value=source.custom_header_value or ''))

    request = ApiRequest(
        method=config.method,
        url=config.full_url(extra_params),
        headers=headers,
        params=params,
        auth=auth,
        settings=RequestSettings(
            follow_redirects=config.follow_redirects,
            ssl_verification=config.verify_ssl,
            timeout=config.timeout or 0
        ),
        name=name
    )

    if config.body:
        content_type = (config.effective_content_type() or '').lower()
        if 'json' in content_type:
            request.body_type = 'json'
            request.body = config.body
        elif content_type == 'application/x-www-form-urlencoded':
            request.body_type = 'x-www-form-urlencoded'
            request.body = config.body
            request.body_form_url_encoded = [
                KeyValue(key=k, value=v) for k, v in split_form_body(config.body)
            ]
        else:
            request.body_type = 'raw'
            request.body = config.body
            if content_type:
                headers.append(KeyValue(key='Content-Type', value=config.effective_content_type()))

    return request
