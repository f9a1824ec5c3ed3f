import pytest

from netresource import (
    Err,
    GenericError,
    HttpError,
    HttpMethod,
    NoData,
    Ok,
    ParseError,
    Resource,
    Response,
    ResponseError,
    classify,
)
from netresource.transport import deliver

from ..utils import PEOPLE_JSON, Person

URL = "http://127.0.0.1/people"


def make_response(status_code=200, content=b""):
    return Response(status_code=status_code, headers={}, content=content, url=URL)


@pytest.fixture
def resource():
    return Resource.json(HttpMethod.GET, URL, into=list[Person])


def test_transport_error_wins(resource):
    error = ConnectionError("Connection refused")
    result = classify(resource, content=PEOPLE_JSON, response=make_response(content=PEOPLE_JSON), error=error)
    assert result == Err(GenericError(error))
    assert result.err().error is error


def test_missing_response(resource):
    assert classify(resource, content=PEOPLE_JSON, response=None, error=None) == Err(ResponseError())


@pytest.mark.parametrize("status_code", [None, "200", True])
def test_invalid_status_code(resource, status_code):
    response = make_response(content=PEOPLE_JSON)
    response.status_code = status_code
    assert classify(resource, content=PEOPLE_JSON, response=response, error=None) == Err(ResponseError())


@pytest.mark.parametrize("status_code", [101, 301, 404, 500])
def test_unexpected_status(resource, status_code):
    response = make_response(status_code, PEOPLE_JSON)
    result = classify(resource, content=PEOPLE_JSON, response=response, error=None)
    assert result == Err(HttpError(status_code))
    assert result.err().response is response


def test_status_checked_before_parsing(mocker):
    parse = mocker.Mock(return_value=Ok(None))
    resource = Resource.build(HttpMethod.GET, URL, parse=parse)
    classify(resource, content=b"", response=make_response(503), error=None)
    parse.assert_not_called()


def test_parser_receives_content_and_response(mocker):
    parse = mocker.Mock(return_value=Ok(42))
    resource = Resource.build(HttpMethod.GET, URL, parse=parse, expected_status=lambda code: code == 404)
    response = make_response(404, b"missing")
    assert classify(resource, content=b"missing", response=response, error=None) == Ok(42)
    parse.assert_called_once_with(b"missing", response)


def test_parser_result_is_returned(resource):
    response = make_response(content=PEOPLE_JSON)
    assert classify(resource, content=PEOPLE_JSON, response=response, error=None) == Ok(
        [Person(name="Alice"), Person(name="Bob")]
    )
    assert classify(resource, content=b"", response=make_response(), error=None) == Err(NoData())


def test_parser_exception():
    exc = RuntimeError("Boom")

    def parse(content, response):
        raise exc

    resource = Resource.build(HttpMethod.GET, URL, parse=parse)
    result = classify(resource, content=b"{}", response=make_response(), error=None)
    assert result == Err(ParseError(exc))
    assert str(result.err()) == "Failed to parse response: RuntimeError: Boom"


def test_deliver_passes_result(mocker):
    on_complete = mocker.Mock()
    task = mocker.Mock()
    task.result.return_value = Ok(1)
    deliver(on_complete)(task)
    on_complete.assert_called_once_with(Ok(1))


def test_deliver_failed_task(mocker):
    on_complete = mocker.Mock()
    task = mocker.Mock()
    task.result.side_effect = ValueError("Broken")
    deliver(on_complete)(task)
    (result,), _ = on_complete.call_args
    assert isinstance(result.err(), GenericError)
    assert isinstance(result.err().error, ValueError)
