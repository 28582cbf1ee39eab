import json, os, pathlib, sys

DEFAULT_PATH = pathlib.Path("config/appsettings.json")

def load_appsettings(path: str | os.PathLike | None = None) -> dict:
    p = pathlib.Path(path) if path else pathlib.Path(os.environ.get("AADUSERS_SETTINGS", DEFAULT_PATH))
    if not p.exists():
        return {}
    try:
        text = p.read_text(encoding="utf-8").strip()
        if not text:
            return {}
        data = json.loads(text)
    except (OSError, ValueError):
        # malformed JSON → fall back to defaults
        return {}
    return data if isinstance(data, dict) else {}

def _int_setting(cfg: dict, key: str, default: int) -> int:
    try:
        return int(cfg.get(key, default))
    except (TypeError, ValueError):
        print(f"[config] {key}={cfg.get(key)!r} is not a number, using {default}", file=sys.stderr)
        return default

def get_http_config(settings: dict | None = None) -> dict:
    cfg = (settings if settings is not None else load_appsettings()).get("http", {})
    return {
        "timeout_seconds": _int_setting(cfg, "timeout_seconds", 30),
        "max_retries": _int_setting(cfg, "max_retries", 4),
    }

def get_graph_config(settings: dict | None = None) -> dict:
    cfg = (settings if settings is not None else load_appsettings()).get("graph", {})
    return {
        "base_url": str(cfg.get("base_url", "https://graph.microsoft.com")).rstrip("/"),
        "api_version": str(cfg.get("api_version", "v1.0")).strip("/"),
    }

def get_auth_config(settings: dict | None = None) -> dict:
    cfg = (settings if settings is not None else load_appsettings()).get("auth", {})
    # environment wins over the file so secrets can stay out of it
    return {
        "tenant_id": os.environ.get("AZURE_TENANT_ID") or cfg.get("tenant_id", ""),
        "client_id": os.environ.get("AZURE_CLIENT_ID") or cfg.get("client_id", ""),
        "client_secret": os.environ.get("AZURE_CLIENT_SECRET") or cfg.get("client_secret", ""),
    }
