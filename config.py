from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).parent
ENV_PATH = BASE_DIR / ".env"
TEMPLATES_DIR = BASE_DIR / "templates"

load_dotenv(ENV_PATH)

SUPPORTED_SERVICES = ("gemini", "openai", "grok")

# (fast tier, pro tier) per service
DEFAULT_MODELS: dict[str, tuple[str, str]] = {
    "gemini": ("gemini-3-flash-preview", "gemini-3.1-pro-preview"),
    "openai": ("gpt-4.1-mini", "gpt-4.1-2025-04-14"),
    "grok": ("grok-2-vision-latest", "grok-4"),
}


def load_env_file(path: Path | None = None) -> tuple[dict[str, str], bool]:
    env_path = path or ENV_PATH
    if not env_path.exists():
        return {}, False
    values: dict[str, str] = {}
    for line in env_path.read_text().splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        values[key.strip()] = value.strip()
    return values, True


def update_env_file(updates: dict[str, str], path: Path | None = None) -> None:
    env_path = path or ENV_PATH
    existing_lines = []
    if env_path.exists():
        existing_lines = env_path.read_text().splitlines()

    remaining = dict(updates)
    output_lines = []
    for line in existing_lines:
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            output_lines.append(line)
            continue
        key, _ = stripped.split("=", 1)
        key = key.strip()
        if key in remaining:
            value = remaining.pop(key)
            if value:
                output_lines.append(f"{key}={value}")
            continue
        output_lines.append(line)

    for key, value in remaining.items():
        if value:
            output_lines.append(f"{key}={value}")

    if output_lines:
        env_path.write_text("\n".join(output_lines).strip() + "\n")


def clean_env_value(value: str) -> str:
    cleaned = value.strip()
    if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in {"'", '"'}:
        return cleaned[1:-1]
    return cleaned


def service_key_name(service: str) -> str:
    service = service.lower()
    if service == "grok":
        return "GROK_API_KEY"
    if service == "openai":
        return "OPENAI_API_KEY"
    return "GEMINI_API_KEY"


def resolve_service_key(service: str, env_values: dict[str, str] | None = None) -> str:
    """Look up the API key for ``service``; the process environment wins over the .env file."""
    if env_values is None:
        env_values, _ = load_env_file()
    merged = {**env_values, **{k: v for k, v in os.environ.items() if v}}
    service = service.lower()
    if service in ("grok", "openai"):
        return clean_env_value(merged.get(service_key_name(service), ""))
    gemini_key = merged.get("GEMINI_API_KEY") or merged.get("GOOGLE_AI_STUDIO_API") or ""
    return clean_env_value(gemini_key)


@dataclass(frozen=True)
class Settings:
    service: str = "gemini"
    fast_model: str = DEFAULT_MODELS["gemini"][0]
    pro_model: str = DEFAULT_MODELS["gemini"][1]
    log_level: str = "INFO"


def get_settings() -> Settings:
    service = (os.environ.get("LENSCRAFT_SERVICE") or "gemini").strip().lower()
    if service not in SUPPORTED_SERVICES:
        raise ValueError(
            f"Unsupported LENSCRAFT_SERVICE {service!r}; expected one of {', '.join(SUPPORTED_SERVICES)}."
        )
    fast_default, pro_default = DEFAULT_MODELS[service]
    return Settings(
        service=service,
        fast_model=os.environ.get("LENSCRAFT_FAST_MODEL") or fast_default,
        pro_model=os.environ.get("LENSCRAFT_PRO_MODEL") or pro_default,
        log_level=(os.environ.get("LENSCRAFT_LOG_LEVEL") or "INFO").upper(),
    )
