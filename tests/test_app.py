from types import SimpleNamespace

import pytest
from google.api_core import exceptions as api_exceptions

import app as app_module
from cloud_backend import LoggingBackend
from conftest import FakeCloudLogger
from contextual_logger import LoggerFactory


@pytest.fixture
def client():
    app_module.app.config["TESTING"] = True
    return app_module.app.test_client()


def test_hello_logs_console_fallback(client, monkeypatch, capsys):
    monkeypatch.setattr(app_module, "loggers", LoggerFactory())

    response = client.get("/?name=Ada", headers={"Function-Execution-Id": "exec-1"})

    assert response.status_code == 200
    assert response.get_json() == {"message": "Hello, Ada!"}
    assert "[HELLO] Request received | name: 'Ada'\n" in capsys.readouterr().out


def test_hello_logs_sends_tagged_entries(client, monkeypatch, cloud_logger):
    monkeypatch.setattr(app_module, "loggers", LoggerFactory(LoggingBackend(cloud_logger)))

    response = client.get("/", headers={"Function-Execution-Id": "exec-2"})

    assert response.status_code == 200
    assert [(e["severity"], e["labels"]) for e in cloud_logger.sent] == [
        ("INFO", {"execution_id": "exec-2"}),
        ("NOTICE", {"execution_id": "exec-2"}),
    ]


def test_hello_logs_flush_failure_returns_500(client, monkeypatch):
    cloud_logger = FakeCloudLogger(error=api_exceptions.InternalServerError("boom"))
    monkeypatch.setattr(app_module, "loggers", LoggerFactory(LoggingBackend(cloud_logger)))

    response = client.post("/?name=Ada")

    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to flush logs"}


def test_hello_event_tags_entries_with_event_id(monkeypatch, cloud_logger):
    monkeypatch.setattr(app_module, "loggers", LoggerFactory(LoggingBackend(cloud_logger)))
    context = SimpleNamespace(
        event_id="evt-77",
        timestamp="2024-01-01T00:00:00.000Z",
        event_type="google.storage.object.finalize",
        resource="projects/_/buckets/b",
    )

    app_module.hello_event({}, context)

    assert [(e["severity"], e["payload"], e["labels"]) for e in cloud_logger.sent] == [
        ("INFO", "[EVENT] Received | type: google.storage.object.finalize | resource: projects/_/buckets/b",
         {"execution_id": "evt-77"}),
        ("WARNING", "[EVENT] Empty payload", {"execution_id": "evt-77"}),
    ]
