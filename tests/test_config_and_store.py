from conftest import FakeSupabase, make_scenario
import core.config as config
import core.metadata_store as store_module
from core.metadata_store import MetadataStore, build_records, get_supabase_client
from core.schemas import GeneratedImage, GenerationSettings, Scenario

SETTINGS = GenerationSettings(
    focus_on_product=2,
    shots=4,
    visual_style="Golden hour",
    tone="Minimal",
    orientation="Landscape",
    quality="Ultra",
    include_captions=True,
)


def make_images(count: int) -> list[GeneratedImage]:
    return [
        GeneratedImage(
            mime_type="image/png", data="ZGF0YQ==", scenario=Scenario(**make_scenario(i))
        )
        for i in range(1, count + 1)
    ]


# ============================================================================
# Config
# ============================================================================


def test_get_config_dot_notation(tmp_path, monkeypatch):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("api:\n  port: 9100\nassistant:\n  max_polls: 7\n")
    monkeypatch.setattr(config, "CONFIG_FILE", config_file)

    assert config.get_api_port() == 9100
    assert config.get_api_base_url() == "http://localhost:9100"
    assert config.get_run_max_polls() == 7
    assert config.get_config("api.missing.deeper", "fallback") == "fallback"
    assert config.get_metadata_table() == "ugc_generations"


def test_missing_config_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "CONFIG_FILE", tmp_path / "absent.yaml")
    assert config.load_config() == {}
    assert config.get_api_host() == "0.0.0.0"
    assert config.get_gemini_image_model() == config.DEFAULT_IMAGE_MODEL


def test_blank_credentials_count_as_missing(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "   ")
    assert config.get_openai_api_key() is None


# ============================================================================
# Metadata store
# ============================================================================


def test_store_disabled_without_credentials(monkeypatch):
    def fail_create(url, key, options=None):
        raise AssertionError("client must not be created")

    monkeypatch.setattr(store_module, "create_client", fail_create)
    assert get_supabase_client() is None
    assert MetadataStore().record_generations(make_images(1), SETTINGS) is False


def test_client_is_created_once_per_process(fake_supabase, monkeypatch):
    created = []

    def counting_create(url, key, options=None):
        created.append((url, key))
        return fake_supabase

    monkeypatch.setattr(store_module, "create_client", counting_create)
    assert get_supabase_client() is get_supabase_client()
    assert created == [("https://example.supabase.co", "service-role")]


def test_client_does_not_keep_an_auth_session(fake_supabase, monkeypatch):
    passed = {}

    def capturing_create(url, key, options=None):
        passed["options"] = options
        return fake_supabase

    monkeypatch.setattr(store_module, "create_client", capturing_create)
    get_supabase_client()
    assert passed["options"].auto_refresh_token is False
    assert passed["options"].persist_session is False


def test_records_mirror_metadata_only():
    records = build_records(make_images(2), SETTINGS, thread_id=None)
    assert [r.scenario_id for r in records] == ["scenario-1", "scenario-2"]
    assert records[0].thread_id is None
    assert records[0].settings == {
        "focusOnProduct": 2,
        "shots": 4,
        "visualStyle": "Golden hour",
        "tone": "Minimal",
        "orientation": "Landscape",
        "quality": "Ultra",
        "includeCaptions": True,
    }
    assert records[0].created_at == records[1].created_at


def test_insert_failure_is_swallowed(monkeypatch, caplog):
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service-role")
    monkeypatch.setattr(
        store_module,
        "create_client",
        lambda url, key, options=None: FakeSupabase(fail=True),
    )

    with caplog.at_level("WARNING"):
        assert MetadataStore().record_generations(make_images(1), SETTINGS) is False
    assert "Failed to persist generation metadata" in caplog.text


def test_insert_writes_configured_table(fake_supabase):
    assert MetadataStore(table="custom_log").record_generations(make_images(3), SETTINGS)
    table, rows = fake_supabase.inserts[0]
    assert table == "custom_log"
    assert len(rows) == 3
