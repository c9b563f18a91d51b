import contextvars
from types import SimpleNamespace

import metadata


def test_from_context_without_metadata():
    assert metadata.from_context(None) is None
    assert metadata.from_context(contextvars.copy_context()) is None


def test_new_context_does_not_touch_the_original():
    original = contextvars.copy_context()
    derived = metadata.new_context(metadata.Metadata(event_id="evt-1"), original)

    assert metadata.from_context(derived).event_id == "evt-1"
    assert metadata.from_context(original) is None


def test_from_event_context():
    event_ctx = SimpleNamespace(
        event_id="1234567",
        timestamp="2024-01-01T00:00:00.000Z",
        event_type="google.pubsub.topic.publish",
        resource={"name": "projects/p/topics/t"},
    )

    meta = metadata.from_event_context(event_ctx)

    assert meta == metadata.Metadata(
        event_id="1234567",
        timestamp="2024-01-01T00:00:00.000Z",
        event_type="google.pubsub.topic.publish",
        resource={"name": "projects/p/topics/t"},
    )
