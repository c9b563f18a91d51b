import pytest

import config
import contextual_logger


class FakeBatch:
    def __init__(self, error=None):
        self.entries = []
        self.committed = False
        self.error = error

    def log_text(self, text, **kw):
        self.entries.append(dict(payload=text, **kw))

    def commit(self):
        if self.error is not None:
            raise self.error
        self.committed = True


class FakeCloudLogger:
    """Stands in for google.cloud.logging.Logger; records every batch it hands out."""

    def __init__(self, error=None):
        self.batches = []
        self.error = error

    def batch(self):
        batch = FakeBatch(self.error)
        self.batches.append(batch)
        return batch

    @property
    def sent(self):
        return [entry for batch in self.batches if batch.committed for entry in batch.entries]


@pytest.fixture
def cloud_logger():
    return FakeCloudLogger()


@pytest.fixture
def no_function_env(monkeypatch):
    monkeypatch.setattr(config, "GCP_PROJECT", None)
    monkeypatch.setattr(config, "FUNCTION_NAME", None)
    monkeypatch.setattr(config, "FUNCTION_REGION", None)
    monkeypatch.setattr(contextual_logger, "_default_factory", None)
