"""
Test cases for the code snippet generator.
Each language gets a smoke test; auth, header and body handling are checked in detail.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))

from api.code_gen import (
    LANGUAGES, generate_code_snippet, get_active_headers, get_languages,
    is_supported_language, safe_parse
)
from api.curl_parser import parse_curl
from api.models import ApiAuth, ApiRequest, FormDataField, KeyValue


def make_request(**overrides):
    values = {
        'id': '1',
        'name': 'Test Request',
        'method': 'GET',
        'url': 'https://api.example.com/data',
        'headers': [KeyValue(key='Accept', value='application/json', id='h1')],
    }
    values.update(overrides)
    return ApiRequest(**values)


def make_post(**overrides):
    values = {'method': 'POST', 'body_type': 'json', 'body': '{"foo": "bar"}'}
    values.update(overrides)
    return make_request(**values)


class TestCatalog:
    def test_catalog_has_every_language(self):
        assert len(LANGUAGES) == 31
        assert len({lang['id'] for lang in LANGUAGES}) == 31

    def test_get_languages_returns_copies(self):
        languages = get_languages()
        languages[0]['name'] = 'changed'
        assert LANGUAGES[0]['name'] == 'cURL'

    def test_is_supported_language(self):
        assert is_supported_language('python_requests')
        assert not is_supported_language('cobol')


class TestSafeParse:
    def test_valid_json(self):
        assert safe_parse('{"a": 1}') == {'a': 1}

    def test_empty_is_empty_object(self):
        assert safe_parse('') == {}

    def test_invalid_returns_string(self):
        assert safe_parse('invalid json {') == 'invalid json {'


class TestActiveHeaders:
    def test_enabled_headers_only(self):
        request = make_request(headers=[
            KeyValue(key='Accept', value='application/json'),
            KeyValue(key='X-Custom', value='disabled', enabled=False),
            KeyValue(key='', value='no key'),
        ])
        assert get_active_headers(request) == {'Accept': 'application/json'}

    def test_bearer(self):
        request = make_request(auth=ApiAuth(type='bearer', bearer_token='token123'))
        assert get_active_headers(request)['Authorization'] == 'Bearer token123'

    def test_basic(self):
        request = make_request(auth=ApiAuth(type='basic', basic_username='user', basic_password='pass'))
        assert get_active_headers(request)['Authorization'] == 'Basic dXNlcjpwYXNz'

    def test_basic_encodes_utf8(self):
        request = make_request(auth=ApiAuth(type='basic', basic_username='josé'))
        assert get_active_headers(request)['Authorization'] == 'Basic am9zw6k6'

    def test_api_key_header(self):
        request = make_request(auth=ApiAuth(type='apikey', api_key='X-API-Key',
                                            api_value='secret123', api_location='header'))
        assert get_active_headers(request)['X-API-Key'] == 'secret123'

    def test_api_key_query_is_not_a_header(self):
        request = make_request(auth=ApiAuth(type='apikey', api_key='api_key',
                                            api_value='secret123', api_location='query'))
        assert 'api_key' not in get_active_headers(request)

    @pytest.mark.parametrize('method', ['POST', 'PUT', 'PATCH'])
    def test_json_content_type_for_payload_methods(self, method):
        request = make_request(method=method, body_type='json', body='{}')
        assert get_active_headers(request)['Content-Type'] == 'application/json'

    def test_no_content_type_for_get(self):
        request = make_request(body_type='json', body='{}')
        assert 'Content-Type' not in get_active_headers(request)

    def test_urlencoded_content_type(self):
        request = make_request(method='POST', body_type='x-www-form-urlencoded')
        assert get_active_headers(request)['Content-Type'] == 'application/x-www-form-urlencoded'


class TestCurlSnippet:
    def test_basic_get(self):
        result = generate_code_snippet('curl', make_request())
        assert result == "curl -X GET 'https://api.example.com/data' \\\n  -H 'Accept: application/json'"

    def test_bearer(self):
        result = generate_code_snippet('curl', make_request(auth=ApiAuth(type='bearer', bearer_token='token123')))
        assert "-H 'Authorization: Bearer token123'" in result

    def test_json_post(self):
        result = generate_code_snippet('curl', make_post())
        assert "-H 'Content-Type: application/json'" in result
        assert "-d '{\"foo\": \"bar\"}'" in result

    def test_form_urlencoded(self):
        request = make_request(method='POST', body_type='x-www-form-urlencoded', body_form_url_encoded=[
            KeyValue(key='username', value='john'),
            KeyValue(key='password', value='secret'),
        ])
        result = generate_code_snippet('curl', request)
        assert "--data-urlencode 'username=john'" in result
        assert "--data-urlencode 'password=secret'" in result
        assert 'Content-Type: application/x-www-form-urlencoded' in result

    def test_form_data(self):
        request = make_request(method='POST', body_type='form-data', body_form_data=[
            FormDataField(key='name', value='John'),
            FormDataField(key='file', type='file', file_name='doc.pdf'),
            FormDataField(key='upload', type='file'),
            FormDataField(key='disabled', value='no', enabled=False),
        ])
        result = generate_code_snippet('curl', request)
        assert "-F 'name=John'" in result
        assert "-F 'file=@doc.pdf'" in result
        assert "-F 'upload=@file'" in result
        assert 'disabled=no' not in result

    def test_body_ignored_for_get(self):
        result = generate_code_snippet('curl', make_request(body_type='raw', body='hello'))
        assert '-d' not in result

    def test_api_key_in_query_not_emitted(self):
        request = make_request(auth=ApiAuth(type='apikey', api_key='api_key',
                                            api_value='secret123', api_location='query'))
        assert 'api_key: secret123' not in generate_code_snippet('curl', request)

    def test_single_quotes_in_body_are_escaped(self):
        request = make_post(body_type='raw', body="it's")
        assert "-d 'it\\'s'" in generate_code_snippet('curl', request)
        assert "--body-data='it\\'s'" in generate_code_snippet('shell_wget', request)
        json_request = make_post(body='{"name": "O\'Brien"}')
        assert "<<< '{\"name\": \"O\\'Brien\"}'" in generate_code_snippet('shell_httpie', json_request)

    def test_generated_curl_parses_back(self):
        request = make_post(body_type='raw', body="it's \\ fine",
                            headers=[KeyValue(key='Content-Type', value='text/plain')])
        config = parse_curl(generate_code_snippet('curl', request))
        assert config.method == 'POST'
        assert config.body == "it's \\ fine"


class TestShellAndRawSnippets:
    def test_httpie(self):
        result = generate_code_snippet('shell_httpie', make_post())
        assert result.startswith('http POST https://api.example.com/data')
        assert "'Accept:application/json'" in result
        assert "<<< '{\"foo\": \"bar\"}'" in result

    def test_wget(self):
        result = generate_code_snippet('shell_wget', make_request())
        assert result.startswith("wget --method=GET --header='Host: api.example.com'")
        assert result.endswith("'https://api.example.com/data'")

    def test_http_raw(self):
        result = generate_code_snippet('http_raw', make_request(url='https://api.example.com/data?x=1'))
        assert result == 'GET /data?x=1 HTTP/1.1\nHost: api.example.com\nAccept: application/json'

    def test_http_raw_with_body(self):
        result = generate_code_snippet('http_raw', make_post())
        assert result.endswith('\n\n{"foo": "bar"}')

    @pytest.mark.parametrize('language', ['shell_wget', 'http_raw', 'python_http_client'])
    def test_invalid_url_raises(self, language):
        with pytest.raises(ValueError, match='Invalid URL'):
            generate_code_snippet(language, make_request(url='not a url'))


class TestTemplateSnippets:
    def test_fetch(self):
        result = generate_code_snippet('javascript_fetch', make_request())
        assert "await fetch('https://api.example.com/data'" in result
        assert '"Accept": "application/json"' in result
        assert 'body:' not in result

    def test_fetch_json_body(self):
        result = generate_code_snippet('javascript_fetch', make_post())
        assert 'body: JSON.stringify({"foo": "bar"}),' in result

    def test_fetch_urlencoded_body(self):
        request = make_request(method='POST', body_type='x-www-form-urlencoded',
                               body_form_url_encoded=[KeyValue(key='q', value='a b')])
        result = generate_code_snippet('javascript_fetch', request)
        assert "body: new URLSearchParams('q=a+b')," in result

    def test_axios(self):
        result = generate_code_snippet('javascript_axios', make_post())
        assert result.startswith("import axios from 'axios';")
        assert '"method": "post"' in result
        assert '"url": "https://api.example.com/data"' in result
        assert '"foo": "bar"' in result

    def test_nodejs_axios_basic_auth(self):
        request = make_request(auth=ApiAuth(type='basic', basic_username='user', basic_password='pass'))
        result = generate_code_snippet('nodejs_axios', request)
        assert "const axios = require('axios')" in result
        assert '"Authorization": "Basic dXNlcjpwYXNz"' in result

    def test_jquery(self):
        result = generate_code_snippet('javascript_jquery', make_request())
        assert '$.ajax' in result
        assert "method: 'GET'," in result

    def test_xhr(self):
        result = generate_code_snippet('javascript_xhr', make_request())
        assert 'new XMLHttpRequest()' in result
        assert "xhr.open('GET', 'https://api.example.com/data');" in result
        assert "xhr.setRequestHeader('Accept', 'application/json');" in result
        assert 'xhr.send(null);' in result

    def test_python_requests_get(self):
        result = generate_code_snippet('python_requests', make_request())
        assert 'import requests' in result
        assert 'response = requests.request("GET", url, headers=headers)' in result

    def test_python_requests_json(self):
        result = generate_code_snippet('python_requests', make_post(body='{"ok": true, "n": null}'))
        assert 'json={' in result
        assert '"ok": True' in result
        assert '"n": None' in result

    def test_python_requests_invalid_json(self):
        result = generate_code_snippet('python_requests', make_post(body='invalid json {'))
        assert 'json="invalid json {"' in result

    def test_python_requests_form_data_skips_files(self):
        request = make_request(method='POST', body_type='form-data', body_form_data=[
            FormDataField(key='name', value='John'),
            FormDataField(key='doc', type='file', file_name='a.pdf'),
        ])
        result = generate_code_snippet('python_requests', request)
        assert '"name": "John"' in result
        assert 'doc' not in result

    def test_python_http_client(self):
        result = generate_code_snippet('python_http_client', make_request(url='http://api.example.com:8080/data?x=1'))
        assert 'import http.client' in result
        assert 'http.client.HTTPConnection("api.example.com:8080")' in result
        assert 'conn.request("GET", "/data?x=1", payload, headers)' in result

    def test_python_http_client_https(self):
        result = generate_code_snippet('python_http_client', make_request())
        assert 'HTTPSConnection("api.example.com")' in result

    def test_go(self):
        result = generate_code_snippet('go_native', make_request())
        assert 'package main' in result
        assert 'http.NewRequest' in result
        assert 'var payload io.Reader' in result
        assert '"strings"' not in result

    def test_go_post(self):
        result = generate_code_snippet('go_native', make_post())
        assert 'payload := strings.NewReader(`{"foo": "bar"}`)' in result
        assert '"strings"' in result

    def test_c_libcurl_escapes_body(self):
        result = generate_code_snippet('c_libcurl', make_post(body='{"a":\n1}'))
        assert '#include <curl/curl.h>' in result
        assert 'curl_easy_init' in result
        assert 'CURLOPT_POSTFIELDS, "{\\"a\\":\\n1}");' in result
        assert 'failed: %s\\n"' in result

    def test_csharp_httpclient_moves_content_type_to_content(self):
        result = generate_code_snippet('csharp_httpclient', make_post())
        assert 'new HttpRequestMessage(new HttpMethod("POST"), "https://api.example.com/data")' in result
        assert 'request.Headers.Add("Content-Type"' not in result
        assert 'new StringContent("{\\"foo\\": \\"bar\\"}", null, "application/json")' in result

    def test_csharp_restsharp(self):
        result = generate_code_snippet('csharp_restsharp', make_request())
        assert 'new RestClient("https://api.example.com/data")' in result
        assert 'Method.Get' in result

    def test_java_okhttp(self):
        result = generate_code_snippet('java_okhttp', make_request())
        assert 'import okhttp3' in result
        assert 'RequestBody body = null;' in result

    def test_java_okhttp_form(self):
        request = make_request(method='POST', body_type='x-www-form-urlencoded',
                               body_form_url_encoded=[KeyValue(key='a', value='1')])
        result = generate_code_snippet('java_okhttp', request)
        assert 'new FormBody.Builder()\n      .add("a", "1")\n      .build()' in result
        assert 'MediaType mediaType' not in result

    def test_java_net_http(self):
        result = generate_code_snippet('java_net_http', make_request())
        assert 'HttpRequest.BodyPublishers.noBody()' in result

    def test_java_unirest(self):
        result = generate_code_snippet('java_unirest', make_request())
        assert 'Unirest.get("https://api.example.com/data")' in result

    def test_kotlin(self):
        result = generate_code_snippet('kotlin_okhttp', make_request())
        assert 'Request.Builder()' in result
        assert 'val mediaType = "text/plain".toMediaType()' in result

    def test_php_guzzle(self):
        result = generate_code_snippet('php_guzzle', make_post())
        assert '$client = new \\GuzzleHttp\\Client();' in result
        assert "'headers' => [" in result
        assert '"Accept" => "application/json"' in result
        assert "'json' => [" in result
        assert '"foo" => "bar"' in result

    def test_php_curl(self):
        result = generate_code_snippet('php_curl', make_request())
        assert 'curl_init' in result
        assert "'Accept: application/json'," in result
        assert 'CURLOPT_FOLLOWLOCATION => true' in result

    def test_powershell_escapes_quotes(self):
        result = generate_code_snippet('powershell_restmethod', make_post())
        assert 'Invoke-RestMethod' in result
        assert '$body = "{`"foo`": `"bar`"}"' in result
        assert '-Body $body' in result

    def test_powershell_webrequest(self):
        result = generate_code_snippet('powershell_webrequest', make_request())
        assert 'Invoke-WebRequest' in result
        assert '-Body' not in result

    def test_ruby_https(self):
        result = generate_code_snippet('ruby_net_http', make_request())
        assert "require 'net/http'" in result
        assert 'http.use_ssl = true' in result
        assert 'Net::HTTP::Get.new(url)' in result

    def test_ruby_http(self):
        result = generate_code_snippet('ruby_net_http', make_request(url='http://api.example.com/data'))
        assert 'use_ssl' not in result

    def test_rust(self):
        result = generate_code_snippet('rust_reqwest', make_request())
        assert 'async fn main' in result
        assert 'headers.insert("accept", HeaderValue::from_static("application/json"));' in result

    def test_swift(self):
        result = generate_code_snippet('swift_nsurlsession', make_request())
        assert 'import Foundation' in result
        assert '"Accept": "application/json"' in result

    def test_swift_without_headers(self):
        result = generate_code_snippet('swift_nsurlsession', make_request(headers=[]))
        assert 'let headers: [String: String] = [:]' in result

    def test_objective_c(self):
        result = generate_code_snippet('objectivec_nsurlsession', make_request())
        assert '#import <Foundation/Foundation.h>' in result
        assert '@"Accept": @"application/json"' in result

    def test_clojure(self):
        result = generate_code_snippet('clojure_clj_http', make_request())
        assert "(require '[clj-http.client :as client])" in result
        assert '{:headers {"Accept" "application/json"}' in result

    def test_ocaml(self):
        result = generate_code_snippet('ocaml_cohttp', make_request())
        assert 'open Cohttp' in result
        assert 'Client.call ~headers ~body `GET uri' in result

    def test_r(self):
        result = generate_code_snippet('r_httr', make_post())
        assert 'library(httr)' in result
        assert 'add_headers(headers), body = body)' in result


class TestAllLanguages:
    @pytest.mark.parametrize('language', [lang['id'] for lang in LANGUAGES])
    def test_renders_without_template_leftovers(self, language):
        for request in (make_request(), make_post()):
            result = generate_code_snippet(language, request)
            assert result
            assert '{{' not in result
            assert '{%' not in result

    @pytest.mark.parametrize('language', [lang['id'] for lang in LANGUAGES])
    def test_disabled_headers_never_appear(self, language):
        request = make_request(headers=[
            KeyValue(key='Accept', value='application/json'),
            KeyValue(key='X-Hidden', value='secret', enabled=False),
        ])
        assert 'X-Hidden' not in generate_code_snippet(language, request)

    def test_unknown_language(self):
        assert generate_code_snippet('cobol', make_request()) == '// Code generation for cobol coming soon...'
