"""
Request executor.
Sends a RequestConfig over HTTP with requests and reports the response.
"""

import base64
import json
import logging
import time
from typing import Any, Dict, List, Optional

import requests
import urllib3
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from api.curl_parser import validate_url
from api.exceptions import InvalidUrlError, RequestExecutionError, RequestTimeoutError
from api.models import DEFAULT_TIMEOUT_MS, RequestConfig, ResponseData
from config.settings import get_api_client_settings

logger = logging.getLogger(__name__)


def build_url(config: RequestConfig) -> str:
    """Request URL with enabled query params and any query-string API key."""
    credential = config.auth.query_credential()
    return config.full_url([credential] if credential else None)


def build_headers(config: RequestConfig, settings: Optional[Dict[str, Any]] = None) -> Dict[str, str]:
    """Headers sent for a request, including Content-Type and auth."""
    headers = {}
    for header in config.headers:
        if header.enabled and header.key:
            headers[header.key] = header.value

    if config.sends_body():
        content_type = config.effective_content_type()
        if content_type:
            headers['Content-Type'] = content_type

    auth = config.auth
    if auth.type == 'basic':
        if auth.username:
            credentials = f"{auth.username}:{auth.password or ''}".encode('utf-8')
            headers['Authorization'] = f"Basic {base64.b64encode(credentials).decode('ascii')}"
    elif auth.type == 'bearer':
        if auth.token:
            headers['Authorization'] = f"Bearer {auth.token}"
    elif auth.type == 'api-key':
        if auth.api_key_location == 'header' and auth.api_key_name and auth.api_key_value:
            headers[auth.api_key_name] = auth.api_key_value
    elif auth.type == 'custom':
        if auth.custom_header_name and auth.custom_header_value:
            headers[auth.custom_header_name] = auth.custom_header_value

    user_agent = (settings or {}).get('user_agent')
    if user_agent and not any(key.lower() == 'user-agent' for key in headers):
        headers['User-Agent'] = user_agent

    return headers


def _build_session(settings: Dict[str, Any], verify_ssl: bool) -> requests.Session:
    """Create a session with the configured retry strategy."""
    session = requests.Session()

    # Only idempotent methods are retried
    retry_strategy = Retry(
        total=int(settings.get('retries', 0) or 0),
        backoff_factor=settings.get('backoff_factor', 0.5),
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=['HEAD', 'GET', 'OPTIONS'],
        respect_retry_after_header=True,
        raise_on_status=False
    )
    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    if not verify_ssl:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    return session


def execute_request(config: RequestConfig,
                    session: Optional[requests.Session] = None,
                    settings: Optional[Dict[str, Any]] = None) -> ResponseData:
    """
    Execute a request described by a RequestConfig.

    Args:
        config: Request to send
        session: Optional session to send it with; one is created and closed otherwise
        settings: api_client settings; defaults to the loaded configuration

    Returns:
        ResponseData for any HTTP status

    Raises:
        InvalidUrlError: If the URL fails validation
        RequestTimeoutError: If no response arrives within the timeout
        RequestExecutionError: For other transport failures
    """
    if settings is None:
        settings = get_api_client_settings()

    validation = validate_url(config.url)
    if not validation['valid']:
        raise InvalidUrlError(validation['error'])

    url = build_url(config)
    headers = build_headers(config, settings)
    data = config.body.encode('utf-8') if config.sends_body() else None
    timeout_seconds = (config.timeout or settings.get('timeout_ms') or DEFAULT_TIMEOUT_MS) / 1000

    own_session = session is None
    if own_session:
        session = _build_session(settings, config.verify_ssl)

    logger.info("Executing %s %s", config.method, url)
    start_time = time.perf_counter()

    try:
        response = session.request(
            config.method,
            url,
            headers=headers,
            data=data,
            allow_redirects=config.follow_redirects,
            verify=config.verify_ssl,
            timeout=timeout_seconds
        )
    except requests.exceptions.Timeout as e:
        logger.warning("Request to %s timed out after %gs", url, timeout_seconds)
        raise RequestTimeoutError(f"Request timed out after {timeout_seconds:g} seconds") from e
    except requests.exceptions.RequestException as e:
        logger.warning("Request to %s failed: %s", url, e)
        raise RequestExecutionError(f"Request failed: {str(e)}") from e
    finally:
        if own_session:
            session.close()

    duration = round((time.perf_counter() - start_time) * 1000)
    body = response.text
    response_headers = {key.lower(): value for key, value in response.headers.items()}

    logger.info("%s %s -> %s in %d ms", config.method, url, response.status_code, duration)

    return ResponseData(
        status=response.status_code,
        status_text=response.reason or '',
        headers=response_headers,
        body=body,
        content_type=response_headers.get('content-type', ''),
        duration=duration,
        size=len(body.encode('utf-8'))
    )


def format_size(size: int) -> str:
    """Human-readable byte size."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def format_duration(ms: int) -> str:
    """Human-readable duration."""
    if ms < 1000:
        return f"{ms} ms"
    return f"{ms / 1000:.2f} s"


def get_status_class(status: int) -> str:
    """Classify a status code as success, redirect, client_error or server_error."""
    if 200 <= status < 300:
        return 'success'
    if 300 <= status < 400:
        return 'redirect'
    if 400 <= status < 500:
        return 'client_error'
    if status >= 500:
        return 'server_error'
    return 'unknown'


def format_response_body(body: str, content_type: str) -> str:
    """Pretty-print JSON responses; anything else is returned unchanged."""
    if 'application/json' in (content_type or ''):
        try:
            return json.dumps(json.loads(body), indent=2, ensure_ascii=False)
        except ValueError:
            return body
    return body


def is_content_type_accepted(content_type: str, accepted: Optional[List[str]]) -> bool:
    """Whether a response content type matches one of the accepted types (substring match)."""
    if not accepted:
        return True
    content_type = (content_type or '').lower()
    return any(ct.lower() in content_type for ct in accepted)
