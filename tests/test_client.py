"""
Tests for the requests based API client.
"""

import json

import requests

from lesson_hub_client import LessonHubAPI


def make_response(status_code, body=None, url="http://api.test/"):
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response._content = json.dumps(body).encode("utf-8") if body is not None else b""
    return response


class RecordingSession:
    """Minimal stand-in for ``requests.Session`` returning canned responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, **kwargs):
        self.calls.append(kwargs)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def test_list_lessons_passes_search():
    session = RecordingSession(make_response(200, [{"id": "1", "topic": "Mathematics"}]))
    api = LessonHubAPI(base_url="http://api.test/", session=session)

    lessons, error = api.list_lessons(search="math")

    assert error is None
    assert lessons[0]["topic"] == "Mathematics"
    assert session.calls[0]["url"] == "http://api.test/api/lessons"
    assert session.calls[0]["params"] == {"search": "math"}


def test_create_order_sends_camel_case_body():
    session = RecordingSession(make_response(201, {"id": "o1", "totalPrice": 120}))
    api = LessonHubAPI(base_url="http://api.test", session=session)

    order, error = api.create_order(
        name="John Smith",
        phone_number="+44 7700 900123",
        lesson_ids=["a", "b"],
        number_of_spaces=2,
    )

    assert error is None
    assert order["totalPrice"] == 120
    assert session.calls[0]["method"] == "POST"
    assert session.calls[0]["json"] == {
        "name": "John Smith",
        "phoneNumber": "+44 7700 900123",
        "lessonIDs": ["a", "b"],
        "numberOfSpaces": 2,
    }


def test_http_error_is_reported():
    session = RecordingSession(make_response(404, {"message": "Lesson not found"}))
    api = LessonHubAPI(base_url="http://api.test", session=session)

    lesson, error = api.get_lesson("abc")

    assert lesson is None
    assert error == {"status_code": 404, "message": "Lesson not found"}


def test_connection_error_is_reported():
    session = RecordingSession(requests.ConnectionError("refused"))
    api = LessonHubAPI(base_url="http://api.test", session=session)

    orders, error = api.list_orders()

    assert orders == []
    assert error["status_code"] is None
    assert "refused" in error["message"]


def test_adjust_space_uses_space_path():
    session = RecordingSession(make_response(200, {"id": "l1", "space": 3}))
    api = LessonHubAPI(base_url="http://api.test", session=session)

    lesson, error = api.adjust_space("l1", -1)

    assert lesson["space"] == 3
    assert session.calls[0]["url"] == "http://api.test/api/lessons/l1/space"
    assert session.calls[0]["json"] == {"change": -1}
