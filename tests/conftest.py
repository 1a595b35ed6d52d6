import json

import httpx
import pytest

from src.services.pipeline_service import PipelineAI


def _completion_body(content):
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
        ],
    }


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler):
        self.requests = []

        def _record(request):
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    def last_payload(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def make_pipeline_ai():
    def _make(handler, api_key="sk-test"):
        transport = RecordingTransport(handler)
        return PipelineAI(api_key=api_key, transport=transport), transport

    return _make


@pytest.fixture
def failing_handler():
    def _handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    return _handler


@pytest.fixture
def completion_body():
    return _completion_body
