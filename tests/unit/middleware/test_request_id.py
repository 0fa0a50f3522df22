"""Unit tests for RequestIDMiddleware."""

import uuid

from django.http import HttpResponse
from django.test import RequestFactory, SimpleTestCase

from notifications.constants import REQUEST_ID_HEADER
from notifications.logging.context import get_request_id
from notifications.middleware import RequestIDMiddleware


class TestRequestIDMiddleware(SimpleTestCase):
    def setUp(self):
        self.factory = RequestFactory()
        self.seen = []

        def view(request):
            self.seen.append((request.request_id, get_request_id()))
            return HttpResponse("ok")

        self.middleware = RequestIDMiddleware(view)

    def test_generates_id(self):
        response = self.middleware(self.factory.get("/"))

        request_id = response[REQUEST_ID_HEADER]
        uuid.UUID(request_id)
        self.assertEqual(self.seen, [(request_id, request_id)])

    def test_honours_incoming_id(self):
        response = self.middleware(
            self.factory.get("/", HTTP_X_REQUEST_ID="client-supplied-id")
        )

        self.assertEqual(response[REQUEST_ID_HEADER], "client-supplied-id")

    def test_clears_id_after_response(self):
        self.middleware(self.factory.get("/"))

        self.assertIsNone(get_request_id())

    def test_clears_id_when_view_raises(self):
        def broken(request):
            raise RuntimeError("boom")

        middleware = RequestIDMiddleware(broken)

        with self.assertRaises(RuntimeError):
            middleware(self.factory.get("/"))
        self.assertIsNone(get_request_id())
