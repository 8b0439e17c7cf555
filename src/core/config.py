import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

_DEFAULT_BASE_URL = "https://v3.football.api-sports.io"


@dataclass
class Settings:
    football_api_key: Optional[str]
    port: int

    api_football_base_url: str
    api_football_timeout: Optional[float]

    fixtures_api_url: str

    def require_api_key(self) -> str:
        if not self.football_api_key:
            raise ValueError("FOOTBALL_API_KEY non impostata. Aggiungi a .env: FOOTBALL_API_KEY=LA_TUA_CHIAVE")
        return self.football_api_key

    @classmethod
    def from_env(cls) -> "Settings":
        def _int(name: str, default: int) -> int:
            raw = os.getenv(name)
            if not raw:
                return default
            try:
                return int(raw)
            except ValueError as e:
                raise ValueError(f"Variabile {name} deve essere un intero (valore: {raw!r})") from e

        def _opt_float(name: str) -> Optional[float]:
            raw = os.getenv(name)
            if not raw:
                return None
            try:
                return float(raw)
            except ValueError as e:
                raise ValueError(f"Variabile {name} deve essere un numero (valore: {raw!r})") from e

        key = os.getenv("FOOTBALL_API_KEY") or None
        port = _int("PORT", 3000)

        base_url = os.getenv("API_FOOTBALL_BASE_URL", _DEFAULT_BASE_URL).rstrip("/")
        timeout = _opt_float("API_FOOTBALL_TIMEOUT")

        fixtures_api_url = os.getenv("FIXTURES_API_URL") or f"http://localhost:{port}"

        return cls(
            football_api_key=key,
            port=port,
            api_football_base_url=base_url,
            api_football_timeout=timeout,
            fixtures_api_url=fixtures_api_url.rstrip("/"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def _reset_settings_cache_for_tests() -> None:
    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "_reset_settings_cache_for_tests"]
