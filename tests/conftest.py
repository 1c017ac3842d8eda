import json
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

import core.metadata_store as store_module
from backend.api import app

CREDENTIAL_ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_ASSISTANT_ID",
    "GOOGLE_GEMINI_API_KEY",
    "GOOGLE_GEMINI_IMAGE_MODEL",
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
)


def make_scenario(index: int) -> dict:
    return {
        "id": f"scenario-{index}",
        "title": f"Scenario {index}",
        "summary": f"Summary for scenario {index}",
        "setting": "Sunlit kitchen counter",
        "shotList": ["Close-up of hands", "Wide shot of counter"],
        "hook": "POV: your morning just got easier",
    }


def make_scenario_reply(count: int = 6) -> str:
    return json.dumps({"scenarios": [make_scenario(i) for i in range(1, count + 1)]})


# ============================================================================
# Fake OpenAI Assistants client
# ============================================================================


class FakeRuns:
    def __init__(self, statuses: list[str]):
        self._statuses = list(statuses)
        self.created: list[dict] = []
        self.retrieved = 0

    def _next(self, run_id: str) -> SimpleNamespace:
        status = self._statuses.pop(0) if len(self._statuses) > 1 else self._statuses[0]
        return SimpleNamespace(id=run_id, status=status)

    def create(self, thread_id: str, assistant_id: str, instructions: str):
        self.created.append(
            {"thread_id": thread_id, "assistant_id": assistant_id, "instructions": instructions}
        )
        return self._next("run_1")

    def retrieve(self, run_id: str, thread_id: str):
        self.retrieved += 1
        return self._next(run_id)


class FakeMessages:
    def __init__(self, reply: str | None):
        self.reply = reply
        self.created: list[dict] = []

    def create(self, thread_id: str, role: str, content: str):
        self.created.append({"thread_id": thread_id, "role": role, "content": content})

    def list(self, thread_id: str, order: str, limit: int):
        data = []
        if self.reply is not None:
            data.append(
                SimpleNamespace(
                    role="assistant",
                    content=[
                        SimpleNamespace(type="text", text=SimpleNamespace(value=self.reply))
                    ],
                )
            )
        for message in self.created:
            data.append(
                SimpleNamespace(
                    role=message["role"],
                    content=[
                        SimpleNamespace(
                            type="text", text=SimpleNamespace(value=message["content"])
                        )
                    ],
                )
            )
        return SimpleNamespace(data=data)


class FakeThreads:
    def __init__(self, reply: str | None, statuses: list[str]):
        self.messages = FakeMessages(reply)
        self.runs = FakeRuns(statuses)
        self.created = 0

    def create(self):
        self.created += 1
        return SimpleNamespace(id="thread_abc123")


class FakeOpenAI:
    def __init__(self, reply: str | None = None, statuses: list[str] | None = None):
        self.threads = FakeThreads(reply, statuses or ["completed"])
        self.beta = SimpleNamespace(threads=self.threads)


# ============================================================================
# Fake Gemini HTTP + Supabase
# ============================================================================


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text or json.dumps(payload)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


def gemini_image_payload(data: str = "aW1hZ2UtYnl0ZXM=", mime_type: str = "image/png"):
    return {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {"text": "Here is your image"},
                        {"inlineData": {"mimeType": mime_type, "data": data}},
                    ]
                }
            }
        ]
    }


class FakeGemini:
    """Records outbound calls; replies with the queued responses in order."""

    def __init__(self, responses: list[FakeResponse] | None = None):
        self.responses = list(responses or [])
        self.calls: list[dict] = []

    def post(self, url, headers=None, json=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        if self.responses:
            return self.responses.pop(0)
        index = len(self.calls)
        return FakeResponse(payload=gemini_image_payload(data=f"ZGF0YS0{index}"))


class FakeSupabase:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.inserts: list[tuple[str, list[dict]]] = []
        self._table = None
        self._rows = None

    def table(self, name: str):
        self._table = name
        return self

    def insert(self, rows: list[dict]):
        self._rows = rows
        return self

    def execute(self):
        if self.fail:
            raise RuntimeError("supabase is down")
        self.inserts.append((self._table, self._rows))
        return SimpleNamespace(data=self._rows)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for key in CREDENTIAL_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    store_module._create_supabase_client.cache_clear()
    app.dependency_overrides.clear()
    yield
    app.dependency_overrides.clear()
    store_module._create_supabase_client.cache_clear()


@pytest.fixture()
def api_client():
    return TestClient(app)


@pytest.fixture()
def assistant_env(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_ASSISTANT_ID", "asst_test")


@pytest.fixture()
def gemini_env(monkeypatch):
    monkeypatch.setenv("GOOGLE_GEMINI_API_KEY", "gemini-test")


@pytest.fixture()
def fake_gemini(monkeypatch):
    fake = FakeGemini()
    monkeypatch.setattr("core.agents.image_renderer.requests.post", fake.post)
    return fake


@pytest.fixture()
def fake_supabase(monkeypatch):
    fake = FakeSupabase()
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service-role")
    monkeypatch.setattr(
        store_module, "create_client", lambda url, key, options=None: fake
    )
    return fake
