"""Remote oracle configuration."""
import os
from dataclasses import dataclass

ORACLE_CONFIG = {
    'url': os.getenv('ORACLE_URL', 'http://localhost:3002/decide'),
    'api_key': os.getenv('ORACLE_API_KEY', ''),
    'model': os.getenv('ORACLE_MODEL', 'gemini-3-flash-preview'),
    'timeout_ms': os.getenv('ORACLE_TIMEOUT_MS', '20000'),
    'temperature': os.getenv('ORACLE_TEMPERATURE', '0.1'),
    'workers': os.getenv('ORACLE_WORKERS', '4'),
}


def get_oracle_url():
    """Get the oracle endpoint URL."""
    return ORACLE_CONFIG['url']


@dataclass(frozen=True)
class OracleConfig:
    """Connection settings for the remote decision oracle.

    Built once per process and handed to RemoteDecisionClient.
    """
    url: str
    api_key: str = ""
    model: str = "gemini-3-flash-preview"
    timeout_ms: int = 20000
    temperature: float = 0.1
    workers: int = 4

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    @classmethod
    def from_env(cls) -> "OracleConfig":
        c = ORACLE_CONFIG
        return cls(
            url=get_oracle_url(),
            api_key=c['api_key'],
            model=c['model'],
            timeout_ms=int(c['timeout_ms']),
            temperature=float(c['temperature']),
            workers=int(c['workers']),
        )
