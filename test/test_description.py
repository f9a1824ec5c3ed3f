import pytest

from netresource import HttpMethod, Ok, Request, Resource


def noop(content, response):
    return Ok(None)


@pytest.mark.parametrize(
    ("request_", "expected"),
    [
        (Request(url="http://x/y", method="POST", body=b"hi"), "POST http://x/y hi"),
        (Request(url="http://x/y", method="DELETE"), "DELETE http://x/y "),
        (Request(), "GET <no url> "),
        (Request(url="http://x/y", body=b"\xff\xfe"), "GET http://x/y "),
    ],
    ids=("with-body", "without-body", "empty", "binary-body"),
)
def test_description(request_, expected):
    assert str(Resource(request=request_, parse=noop)) == expected


def test_description_of_built_resource():
    resource = Resource.json_body(HttpMethod.PUT, "http://127.0.0.1/people/1", {"name": "Alice"})
    assert str(resource) == 'PUT http://127.0.0.1/people/1 {"name":"Alice"}'


@pytest.mark.parametrize(
    ("resource", "expected"),
    [
        (
            Resource.no_content(HttpMethod.GET, "http://127.0.0.1/people", query={"name": "Alice Smith"}),
            "curl -X GET 'http://127.0.0.1/people?name=Alice%20Smith'",
        ),
        (
            Resource.json_body(HttpMethod.POST, "http://127.0.0.1/people", {"name": "Alice"}),
            "curl -X POST -H 'Accept: application/json' -H 'Content-Type: application/json' "
            """-d '{"name":"Alice"}' http://127.0.0.1/people""",
        ),
        (
            Resource.no_content(HttpMethod.DELETE, "http://127.0.0.1/people/1", headers={"X-Empty": ""}),
            "curl -X DELETE -H 'X-Empty;' http://127.0.0.1/people/1",
        ),
    ],
    ids=("query", "json-body", "empty-header"),
)
def test_as_curl_command(resource, expected):
    assert resource.as_curl_command() == expected


def test_as_curl_command_insecure():
    resource = Resource.no_content(HttpMethod.GET, "http://127.0.0.1/people")
    assert resource.as_curl_command(verify=False) == "curl -X GET --insecure http://127.0.0.1/people"
