from docgate.api.documents import media_type
from docgate.core.config import Settings
from docgate.schemas.documents import Document
from docgate.services.prompt_builder import build_summary_prompt


def test_build_summary_prompt_embeds_title_and_content() -> None:
    prompt = build_summary_prompt(Document(title="季度报告", content="收入增长了 12%。"))

    assert prompt == "请总结以下内容：\n标题：季度报告\n内容：收入增长了 12%。"


def test_settings_default_to_local_services() -> None:
    settings = Settings(_env_file=None)

    assert settings.mongodb_url == "mongodb://localhost:27017"
    assert settings.mongodb_database == "mydb"
    assert settings.mongodb_collection == "documents"
    assert settings.ollama_base_url == "http://localhost:11434"
    assert settings.model_name == "deepseek-r1:8b"
    assert settings.port == 8080
    assert settings.upload_timeout_sec == 5.0
    assert settings.summarize_timeout_sec == 10.0


def test_settings_read_prefixed_environment(monkeypatch) -> None:
    monkeypatch.setenv("DOCGATE_PORT", "9090")
    monkeypatch.setenv("DOCGATE_MODEL_NAME", "llama3")

    settings = Settings(_env_file=None)

    assert settings.port == 9090
    assert settings.model_name == "llama3"


def test_media_type_ignores_parameters() -> None:
    assert media_type("application/json") == "application/json"
    assert media_type("Application/JSON; charset=utf-8") == "application/json"
    assert media_type("") == ""
