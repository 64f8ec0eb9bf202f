# Code snippet templates, rendered with Jinja2 (trim_blocks and lstrip_blocks enabled)
#
# Every template receives:
#   method, url, headers (active header mapping), body, body_type,
#   has_body, content_type, follow_redirects, timeout_seconds
# plus the per-language extras prepared by api.code_gen.

C_LIBCURL_TEMPLATE = r'''#include <stdio.h>
#include <curl/curl.h>

int main(void) {
  CURL *curl;
  CURLcode res;

  curl = curl_easy_init();
  if(curl) {
    struct curl_slist *headers = NULL;
    {% for key, value in headers.items() %}
    headers = curl_slist_append(headers, "{{ key }}: {{ value | dq }}");
    {% endfor %}

    curl_easy_setopt(curl, CURLOPT_URL, "{{ url }}");
    curl_easy_setopt(curl, CURLOPT_CUSTOMREQUEST, "{{ method }}");
    curl_easy_setopt(curl, CURLOPT_HTTPHEADER, headers);
    {% if has_body %}
    curl_easy_setopt(curl, CURLOPT_POSTFIELDS, "{{ body | dq }}");
    {% endif %}

    res = curl_easy_perform(curl);
    if(res != CURLE_OK)
      fprintf(stderr, "curl_easy_perform() failed: %s\n", curl_easy_strerror(res));

    curl_easy_cleanup(curl);
    curl_slist_free_all(headers);
  }
  return 0;
}'''

JAVASCRIPT_FETCH_TEMPLATE = r'''const response = await fetch('{{ url }}', {
  method: '{{ method }}',
  headers: {{ headers | to_json(2) | indent(2) }},{{ fetch_body }}
});
const data = await response.json();'''

JAVASCRIPT_AXIOS_TEMPLATE = r'''import axios from 'axios';

const response = await axios({{ axios_config | to_json(2) }});
console.log(response.data);'''

NODEJS_AXIOS_TEMPLATE = r'''const axios = require('axios');

const response = await axios({{ axios_config | to_json(2) }});
console.log(response.data);'''

JAVASCRIPT_JQUERY_TEMPLATE = r'''$.ajax({
  url: '{{ url }}',
  method: '{{ method }}',
  headers: {{ headers | to_json(2) | indent(2) }},
  {% if body_type == 'json' %}
  data: JSON.stringify({{ body or '{}' }}),
  {% else %}
  data: {{ body | to_json }},
  {% endif %}
  success: function(data) {
    console.log(data);
  }
});'''

JAVASCRIPT_XHR_TEMPLATE = r'''{% if body_type == 'json' %}
const data = JSON.stringify({{ body or '{}' }});
{% else %}
const data = '{{ body | sq }}';
{% endif %}
const xhr = new XMLHttpRequest();
xhr.withCredentials = true;

xhr.addEventListener('readystatechange', function() {
  if (this.readyState === this.DONE) {
    console.log(this.responseText);
  }
});

xhr.open('{{ method }}', '{{ url }}');
{% for key, value in headers.items() %}
xhr.setRequestHeader('{{ key }}', '{{ value | sq }}');
{% endfor %}

xhr.send({{ 'null' if body_type == 'none' else 'data' }});'''

PYTHON_REQUESTS_TEMPLATE = r'''import requests

url = "{{ url }}"
headers = {{ headers | py_literal }}

response = requests.request("{{ method }}", url, headers=headers{{ data_argument }})
print(response.text)'''

PYTHON_HTTP_CLIENT_TEMPLATE = r'''import http.client

conn = http.client.{{ 'HTTPSConnection' if target.scheme == 'https' else 'HTTPConnection' }}("{{ target.host }}")
payload = {{ (body if has_body else '') | py_literal }}
headers = {{ headers | py_literal }}
conn.request("{{ method }}", "{{ target.path }}{{ target.search }}", payload, headers)
res = conn.getresponse()
data = res.read()
print(data.decode("utf-8"))'''

GO_NATIVE_TEMPLATE = r'''package main

import (
    "fmt"
    "io"
    "net/http"
    {% if has_body %}
    "strings"
    {% endif %}
)

func main() {
    url := "{{ url }}"
    method := "{{ method }}"

    {% if has_body %}
    payload := strings.NewReader(`{{ body | go_raw }}`)
    {% else %}
    var payload io.Reader
    {% endif %}

    client := &http.Client{}
    req, err := http.NewRequest(method, url, payload)
    if err != nil {
        fmt.Println(err)
        return
    }

    {% for key, value in headers.items() %}
    req.Header.Add("{{ key }}", "{{ value | dq }}")
    {% endfor %}

    res, err := client.Do(req)
    if err != nil {
        fmt.Println(err)
        return
    }
    defer res.Body.Close()

    body, err := io.ReadAll(res.Body)
    if err != nil {
        fmt.Println(err)
        return
    }
    fmt.Println(string(body))
}'''

CSHARP_HTTPCLIENT_TEMPLATE = r'''using var client = new HttpClient();
var request = new HttpRequestMessage(new HttpMethod("{{ method }}"), "{{ url }}");
{% for key, value in headers.items() if not (has_body and key | lower == 'content-type') %}
request.Headers.Add("{{ key }}", "{{ value | dq }}");
{% endfor %}
{% if has_body %}
request.Content = new StringContent("{{ body | dq }}", null, "{{ content_type }}");
{% endif %}

var response = await client.SendAsync(request);
response.EnsureSuccessStatusCode();
Console.WriteLine(await response.Content.ReadAsStringAsync());'''

CSHARP_RESTSHARP_TEMPLATE = r'''var client = new RestClient("{{ url }}");
var request = new RestRequest("", Method.{{ method | capitalize }});
{% for key, value in headers.items() %}
request.AddHeader("{{ key }}", "{{ value | dq }}");
{% endfor %}
{% if has_body %}
request.AddParameter("{{ content_type }}", "{{ body | dq }}", ParameterType.RequestBody);
{% endif %}

RestResponse response = await client.ExecuteAsync(request);
Console.WriteLine(response.Content);'''

JAVA_OKHTTP_TEMPLATE = r'''import okhttp3.*;
import java.io.IOException;

public class Main {
  public static void main(String[] args) throws IOException {
    OkHttpClient client = new OkHttpClient().newBuilder().build();
    {% if body_type != 'x-www-form-urlencoded' %}
    MediaType mediaType = MediaType.parse("{{ content_type }}");
    {% endif %}
    RequestBody body = {{ java_body }};
    Request request = new Request.Builder()
      .url("{{ url }}")
      .method("{{ method }}", body)
      {% for key, value in headers.items() %}
      .addHeader("{{ key }}", "{{ value | dq }}")
      {% endfor %}
      .build();
    Response response = client.newCall(request).execute();
    System.out.println(response.body().string());
  }
}'''

JAVA_NET_HTTP_TEMPLATE = r'''HttpClient client = HttpClient.newHttpClient();
HttpRequest request = HttpRequest.newBuilder()
  .uri(URI.create("{{ url }}"))
  {% if has_body %}
  .method("{{ method }}", HttpRequest.BodyPublishers.ofString("{{ body | dq }}"))
  {% else %}
  .method("{{ method }}", HttpRequest.BodyPublishers.noBody())
  {% endif %}
  {% for key, value in headers.items() %}
  .setHeader("{{ key }}", "{{ value | dq }}")
  {% endfor %}
  .build();

HttpResponse<String> response = client.send(request, HttpResponse.BodyHandlers.ofString());
System.out.println(response.body());'''

JAVA_ASYNCHTTPCLIENT_TEMPLATE = r'''AsyncHttpClient client = Dsl.asyncHttpClient();
client.prepare("{{ method }}", "{{ url }}")
  {% for key, value in headers.items() %}
  .setHeader("{{ key }}", "{{ value | dq }}")
  {% endfor %}
  {% if has_body %}
  .setBody("{{ body | dq }}")
  {% endif %}
  .execute()
  .toCompletableFuture()
  .thenAccept(s -> System.out.println(s.getResponseBody()))
  .join();

client.close();'''

JAVA_UNIREST_TEMPLATE = r'''HttpResponse<String> response = Unirest.{{ method | lower }}("{{ url }}")
  {% for key, value in headers.items() %}
  .header("{{ key }}", "{{ value | dq }}")
  {% endfor %}
  {% if has_body %}
  .body("{{ body | dq }}")
  {% endif %}
  .asString();

System.out.println(response.getBody());'''

KOTLIN_OKHTTP_TEMPLATE = r'''val client = OkHttpClient()
val mediaType = "{{ content_type }}".toMediaType()
{% if has_body %}
val body = "{{ body | dq }}".toRequestBody(mediaType)
{% else %}
val body = "".toRequestBody(null)
{% endif %}
val request = Request.Builder()
  .url("{{ url }}")
  .method("{{ method }}", body)
  {% for key, value in headers.items() %}
  .addHeader("{{ key }}", "{{ value | dq }}")
  {% endfor %}
  .build()

val response = client.newCall(request).execute()
println(response.body?.string())'''

PHP_GUZZLE_TEMPLATE = r'''<?php

require 'vendor/autoload.php';

$client = new \GuzzleHttp\Client();
$response = $client->request('{{ method }}', '{{ url }}', [
    {% for option in guzzle_options %}
    {{ option }}{{ ',' if not loop.last else '' }}
    {% endfor %}
]);

echo $response->getBody();'''

PHP_CURL_TEMPLATE = r'''<?php

$curl = curl_init();

curl_setopt_array($curl, [
  CURLOPT_URL => '{{ url }}',
  CURLOPT_RETURNTRANSFER => true,
  CURLOPT_ENCODING => '',
  CURLOPT_MAXREDIRS => 10,
  CURLOPT_TIMEOUT => {{ timeout_seconds }},
  CURLOPT_FOLLOWLOCATION => {{ 'true' if follow_redirects else 'false' }},
  CURLOPT_HTTP_VERSION => CURL_HTTP_VERSION_1_1,
  CURLOPT_CUSTOMREQUEST => '{{ method }}',
  {% if has_body %}
  CURLOPT_POSTFIELDS => '{{ body | sq }}',
  {% endif %}
  CURLOPT_HTTPHEADER => [
    {% for key, value in headers.items() %}
    '{{ key }}: {{ value | sq }}',
    {% endfor %}
  ],
]);

$response = curl_exec($curl);

curl_close($curl);
echo $response;'''

POWERSHELL_RESTMETHOD_TEMPLATE = r'''$headers = New-Object "System.Collections.Generic.Dictionary[[String],[String]]"
{% for key, value in headers.items() %}
$headers.Add("{{ key }}", "{{ value | ps }}")
{% endfor %}
{% if has_body %}

$body = "{{ body | ps }}"
{% endif %}

$response = Invoke-RestMethod '{{ url }}' -Method '{{ method }}' -Headers $headers{{ ' -Body $body' if has_body else '' }}
$response | ConvertTo-Json'''

POWERSHELL_WEBREQUEST_TEMPLATE = r'''$headers = New-Object "System.Collections.Generic.Dictionary[[String],[String]]"
{% for key, value in headers.items() %}
$headers.Add("{{ key }}", "{{ value | ps }}")
{% endfor %}
{% if has_body %}

$body = "{{ body | ps }}"
{% endif %}

$response = Invoke-WebRequest -Uri '{{ url }}' -Method '{{ method }}' -Headers $headers{{ ' -Body $body' if has_body else '' }}
$response.Content'''

RUBY_NET_HTTP_TEMPLATE = r'''require 'uri'
require 'net/http'

url = URI("{{ url }}")

http = Net::HTTP.new(url.host, url.port)
{% if url.startswith('https') %}
http.use_ssl = true
{% endif %}

request = Net::HTTP::{{ method | capitalize }}.new(url)
{% for key, value in headers.items() %}
request["{{ key }}"] = "{{ value | dq }}"
{% endfor %}
{% if has_body %}
request.body = '{{ body | sq }}'
{% endif %}

response = http.request(request)
puts response.read_body'''

RUST_REQWEST_TEMPLATE = r'''use reqwest::header::{HeaderMap, HeaderValue};

#[tokio::main]
async fn main() -> Result<(), Box<dyn std::error::Error>> {
    let mut headers = HeaderMap::new();
    {% for key, value in headers.items() %}
    headers.insert("{{ key | lower }}", HeaderValue::from_static("{{ value | dq }}"));
    {% endfor %}

    let client = reqwest::Client::builder()
        .build()?;

    let res = client.{{ method | lower }}("{{ url }}")
        .headers(headers)
        {% if has_body %}
        .body("{{ body | dq }}")
        {% endif %}
        .send()
        .await?;

    println!("{}", res.text().await?);
    Ok(())
}'''

SWIFT_NSURLSESSION_TEMPLATE = r'''import Foundation

{% if headers %}
let headers = [
  {% for key, value in headers.items() %}
  "{{ key }}": "{{ value | dq }}"{{ ',' if not loop.last else '' }}
  {% endfor %}
]
{% else %}
let headers: [String: String] = [:]
{% endif %}
{% if has_body %}

let postData = "{{ body | dq }}".data(using: .utf8)
{% endif %}

var request = URLRequest(url: URL(string: "{{ url }}")!, timeoutInterval: Double.infinity)
request.httpMethod = "{{ method }}"
request.allHTTPHeaderFields = headers
{% if has_body %}
request.httpBody = postData
{% endif %}

let task = URLSession.shared.dataTask(with: request) { data, response, error in
  guard let data = data else {
    print(String(describing: error))
    return
  }
  print(String(data: data, encoding: .utf8)!)
}

task.resume()'''

OBJECTIVEC_NSURLSESSION_TEMPLATE = r'''#import <Foundation/Foundation.h>

NSDictionary *headers = @{
  {% for key, value in headers.items() %}
  @"{{ key }}": @"{{ value | dq }}"{{ ',' if not loop.last else '' }}
  {% endfor %}
};
{% if has_body %}

NSData *postData = [[NSData alloc] initWithData:[@"{{ body | dq }}" dataUsingEncoding:NSUTF8StringEncoding]];
{% endif %}

NSMutableURLRequest *request = [NSMutableURLRequest requestWithURL:[NSURL URLWithString:@"{{ url }}"]
                                                       cachePolicy:NSURLRequestUseProtocolCachePolicy
                                                   timeoutInterval:10.0];
[request setHTTPMethod:@"{{ method }}"];
[request setAllHTTPHeaderFields:headers];
{% if has_body %}
[request setHTTPBody:postData];
{% endif %}

NSURLSession *session = [NSURLSession sharedSession];
NSURLSessionDataTask *dataTask = [session dataTaskWithRequest:request
                                            completionHandler:^(NSData *data, NSURLResponse *response, NSError *error) {
                                                if (error) {
                                                    NSLog(@"%@", error);
                                                } else {
                                                    NSString *responseString = [[NSString alloc] initWithData:data encoding:NSUTF8StringEncoding];
                                                    NSLog(@"%@", responseString);
                                                }
                                            }];
[dataTask resume];'''

CLOJURE_CLJ_HTTP_TEMPLATE = r'''(require '[clj-http.client :as client])

(client/{{ method | lower }} "{{ url }}"
  {:headers {{ headers | clojure_map }}
   {% if has_body %}
   :body "{{ body | dq }}"
   {% endif %}
   :throw-exceptions false})'''

OCAML_COHTTP_TEMPLATE = r'''open Lwt
open Cohttp
open Cohttp_lwt_unix

let main () =
  let uri = Uri.of_string "{{ url }}" in
  let headers = Header.of_list [
    {% for key, value in headers.items() %}
    ("{{ key }}", "{{ value | dq }}"){{ ';' if not loop.last else '' }}
    {% endfor %}
  ] in
  {% if has_body %}
  let body = Cohttp_lwt.Body.of_string "{{ body | dq }}" in
  {% else %}
  let body = Cohttp_lwt.Body.empty in
  {% endif %}
  Client.call ~headers ~body `{{ method }} uri >>= fun (resp, body) ->
  let code = resp |> Response.status |> Code.code_of_status in
  Printf.printf "Response code: %d\n" code;
  body |> Cohttp_lwt.Body.to_string >|= fun body ->
  Printf.printf "Body of length: %d\n" (String.length body);
  body

let () =
  let body = Lwt_main.run (main ()) in
  print_endline body'''

R_HTTR_TEMPLATE = r'''library(httr)

headers = c(
  {% for key, value in headers.items() %}
  "{{ key }}" = "{{ value | dq }}"{{ ',' if not loop.last else '' }}
  {% endfor %}
)
{% if has_body %}

body = "{{ body | dq }}"
{% endif %}

res <- VERB("{{ method }}", url = "{{ url }}", add_headers(headers){{ ', body = body' if has_body else '' }})

cat(content(res, "text"))'''


SNIPPET_TEMPLATES = {
    'c_libcurl': C_LIBCURL_TEMPLATE,
    'javascript_fetch': JAVASCRIPT_FETCH_TEMPLATE,
    'javascript_axios': JAVASCRIPT_AXIOS_TEMPLATE,
    'javascript_jquery': JAVASCRIPT_JQUERY_TEMPLATE,
    'javascript_xhr': JAVASCRIPT_XHR_TEMPLATE,
    'nodejs_axios': NODEJS_AXIOS_TEMPLATE,
    'python_requests': PYTHON_REQUESTS_TEMPLATE,
    'python_http_client': PYTHON_HTTP_CLIENT_TEMPLATE,
    'go_native': GO_NATIVE_TEMPLATE,
    'csharp_httpclient': CSHARP_HTTPCLIENT_TEMPLATE,
    'csharp_restsharp': CSHARP_RESTSHARP_TEMPLATE,
    'java_okhttp': JAVA_OKHTTP_TEMPLATE,
    'java_net_http': JAVA_NET_HTTP_TEMPLATE,
    'java_asynchttpclient': JAVA_ASYNCHTTPCLIENT_TEMPLATE,
    'java_unirest': JAVA_UNIREST_TEMPLATE,
    'kotlin_okhttp': KOTLIN_OKHTTP_TEMPLATE,
    'php_guzzle': PHP_GUZZLE_TEMPLATE,
    'php_curl': PHP_CURL_TEMPLATE,
    'powershell_restmethod': POWERSHELL_RESTMETHOD_TEMPLATE,
    'powershell_webrequest': POWERSHELL_WEBREQUEST_TEMPLATE,
    'ruby_net_http': RUBY_NET_HTTP_TEMPLATE,
    'rust_reqwest': RUST_REQWEST_TEMPLATE,
    'swift_nsurlsession': SWIFT_NSURLSESSION_TEMPLATE,
    'objectivec_nsurlsession': OBJECTIVEC_NSURLSESSION_TEMPLATE,
    'clojure_clj_http': CLOJURE_CLJ_HTTP_TEMPLATE,
    'ocaml_cohttp': OCAML_COHTTP_TEMPLATE,
    'r_httr': R_HTTR_TEMPLATE,
}
