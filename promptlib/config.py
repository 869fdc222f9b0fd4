from __future__ import annotations

# promptlib/config.py
import os
from dataclasses import dataclass, field

import yaml

# 配置解析顺序：
# 1) 环境变量（最高优先级）
# 2) 项目根 config.yaml（测试环境下 test_db_path 优先于 db_path）
# 3) 代码内默认值
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_DEFAULT_DB = os.path.join(_PROJECT_ROOT, "prompts.db")

_YAML_KEYS = (
    "db_path",
    "test_db_path",
    "app_env",
    "jwt_secret",
    "token_expire_hours",
    "allowed_providers",
    "allowed_domain",
    "callback_secret",
    "admin_emails",
    "log_level",
    "cors_origins",
)

DEFAULT_JWT_SECRET = "change-me-in-production"

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


@dataclass
class Settings:
    db_path: str = _DEFAULT_DB
    app_env: str = "development"
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    token_expire_hours: int = 8
    allowed_providers: list[str] = field(default_factory=lambda: ["google"])
    allowed_domain: str | None = None
    callback_secret: str | None = None
    admin_emails: list[str] = field(default_factory=list)
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


def _read_config_yaml(path: str | None = None) -> dict:
    cfg_path = path or os.path.join(_PROJECT_ROOT, "config.yaml")
    if not os.path.exists(cfg_path):
        return {}
    with open(cfg_path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"config file {cfg_path} must contain a mapping")
    out = {}
    for k in _YAML_KEYS:
        v = cfg.get(k)
        if isinstance(v, str):
            v = v.strip()
            if not v:
                continue
        if v is not None:
            out[k] = v
    return out


def _split_csv(value: str) -> list[str]:
    return [x.strip() for x in value.split(",") if x.strip()]


def _is_test_env() -> bool:
    return (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)


def load_settings(config_path: str | None = None) -> Settings:
    cfg = _read_config_yaml(config_path)
    s = Settings()

    if _is_test_env() and cfg.get("test_db_path"):
        s.db_path = cfg["test_db_path"]
    elif cfg.get("db_path"):
        s.db_path = cfg["db_path"]
    s.app_env = cfg.get("app_env", s.app_env)
    s.jwt_secret = cfg.get("jwt_secret", s.jwt_secret)
    s.token_expire_hours = int(cfg.get("token_expire_hours", s.token_expire_hours))
    providers = cfg.get("allowed_providers")
    if isinstance(providers, str):
        providers = _split_csv(providers)
    if providers:
        s.allowed_providers = [str(p) for p in providers]
    s.allowed_domain = cfg.get("allowed_domain", s.allowed_domain)
    s.callback_secret = cfg.get("callback_secret", s.callback_secret)
    s.log_level = str(cfg.get("log_level", s.log_level)).upper()
    if cfg.get("cors_origins"):
        s.cors_origins = list(cfg["cors_origins"])
    admins = cfg.get("admin_emails")
    if isinstance(admins, str):
        admins = _split_csv(admins)
    if admins:
        s.admin_emails = [str(a) for a in admins]

    env = os.environ
    if env.get("PROMPTLIB_DB_PATH"):
        s.db_path = env["PROMPTLIB_DB_PATH"]
    if env.get("APP_ENV"):
        s.app_env = env["APP_ENV"]
    if env.get("PROMPTLIB_JWT_SECRET"):
        s.jwt_secret = env["PROMPTLIB_JWT_SECRET"]
    if env.get("PROMPTLIB_TOKEN_HOURS"):
        s.token_expire_hours = int(env["PROMPTLIB_TOKEN_HOURS"])
    if env.get("PROMPTLIB_ALLOWED_PROVIDERS"):
        s.allowed_providers = _split_csv(env["PROMPTLIB_ALLOWED_PROVIDERS"])
    if env.get("PROMPTLIB_ALLOWED_DOMAIN"):
        s.allowed_domain = env["PROMPTLIB_ALLOWED_DOMAIN"].strip()
    if env.get("PROMPTLIB_CALLBACK_SECRET"):
        s.callback_secret = env["PROMPTLIB_CALLBACK_SECRET"]
    if env.get("PROMPTLIB_LOG_LEVEL"):
        s.log_level = env["PROMPTLIB_LOG_LEVEL"].upper()
    if env.get("PROMPTLIB_ADMIN_EMAILS"):
        s.admin_emails = _split_csv(env["PROMPTLIB_ADMIN_EMAILS"])

    if s.allowed_domain:
        s.allowed_domain = s.allowed_domain.lstrip("@").lower()
    s.admin_emails = [a.strip().lower() for a in s.admin_emails if a.strip()]
    # 生产环境不允许沿用默认 JWT 密钥
    if s.is_production and s.jwt_secret == DEFAULT_JWT_SECRET:
        raise ValueError("jwt_secret must be set in production")
    return s
