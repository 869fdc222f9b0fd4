import pytest

from promptlib.config import load_settings

_ENV_KEYS = (
    "PROMPTLIB_DB_PATH",
    "APP_ENV",
    "PROMPTLIB_JWT_SECRET",
    "PROMPTLIB_TOKEN_HOURS",
    "PROMPTLIB_ALLOWED_PROVIDERS",
    "PROMPTLIB_ALLOWED_DOMAIN",
    "PROMPTLIB_CALLBACK_SECRET",
    "PROMPTLIB_LOG_LEVEL",
    "PROMPTLIB_ADMIN_EMAILS",
)


@pytest.fixture()
def clean_env(monkeypatch):
    for k in _ENV_KEYS:
        monkeypatch.delenv(k, raising=False)
    return monkeypatch


def test_defaults_without_config(tmp_path, clean_env):
    s = load_settings(str(tmp_path / "missing.yaml"))
    assert s.db_path.endswith("prompts.db")
    assert s.app_env == "development"
    assert s.allowed_providers == ["google"]
    assert s.token_expire_hours == 8
    assert not s.is_production


def test_yaml_values(tmp_path, clean_env):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        "db_path: /data/prompts.db\n"
        "test_db_path: /tmp/prompts_test.db\n"
        "app_env: production\n"
        "jwt_secret: prod-secret\n"
        "admin_emails: [Boss@Corp.Example]\n"
        "token_expire_hours: 2\n"
        "allowed_providers: [google, azure-ad]\n"
        "allowed_domain: '@Corp.Example'\n"
        "log_level: debug\n",
        encoding="utf-8",
    )
    s = load_settings(str(cfg))
    # running under pytest selects test_db_path
    assert s.db_path == "/tmp/prompts_test.db"
    assert s.is_production
    assert s.token_expire_hours == 2
    assert s.allowed_providers == ["google", "azure-ad"]
    assert s.allowed_domain == "corp.example"
    assert s.log_level == "DEBUG"
    assert s.admin_emails == ["boss@corp.example"]


def test_env_overrides_yaml(tmp_path, clean_env):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("db_path: /data/prompts.db\njwt_secret: from-yaml\n", encoding="utf-8")
    clean_env.setenv("PROMPTLIB_DB_PATH", "/elsewhere/p.db")
    clean_env.setenv("PROMPTLIB_JWT_SECRET", "from-env")
    clean_env.setenv("PROMPTLIB_ALLOWED_PROVIDERS", "google, github")
    clean_env.setenv("PROMPTLIB_TOKEN_HOURS", "24")
    s = load_settings(str(cfg))
    assert s.db_path == "/elsewhere/p.db"
    assert s.jwt_secret == "from-env"
    assert s.allowed_providers == ["google", "github"]
    assert s.token_expire_hours == 24


def test_non_mapping_yaml_is_rejected(tmp_path, clean_env):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(str(cfg))


def test_production_requires_jwt_secret(tmp_path, clean_env):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("app_env: production\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(str(cfg))

    clean_env.setenv("PROMPTLIB_JWT_SECRET", "from-env")
    assert load_settings(str(cfg)).jwt_secret == "from-env"


def test_admin_emails_from_env(tmp_path, clean_env):
    clean_env.setenv("PROMPTLIB_ADMIN_EMAILS", "Ops@Example.com, lead@example.com")
    s = load_settings(str(tmp_path / "missing.yaml"))
    assert s.admin_emails == ["ops@example.com", "lead@example.com"]
    assert s.callback_secret is None
