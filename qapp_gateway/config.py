from pydantic import field_validator
from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from pathlib import Path
from typing import Optional, Tuple

root_dir = Path(__file__).parent.parent
env_path = root_dir / ".env"
load_dotenv(env_path)


def parse_listen_addr(addr: str) -> Tuple[str, int]:
    """
    Découpe une adresse d'écoute host:port, l'hôte étant optionnel (':9100').

    Lève ValueError si le port est absent, non numérique ou hors de 0-65535.
    """
    host, sep, port = addr.rpartition(":")
    if not sep:
        raise ValueError(f"missing port in address {addr!r}")
    if not (port.isascii() and port.isdigit()) or int(port) > 65535:
        raise ValueError(f"invalid port {port!r} in address {addr!r}")
    return host.strip("[]") or "0.0.0.0", int(port)


class Settings(BaseSettings):
    # Compte Qiniu utilisé par qappctl
    ACCESS_KEY: str = ""
    SECRET_KEY: str = ""

    # Outils externes
    QAPPCTL_BIN: str = "qappctl"
    DOCKER_BIN: str = "docker"

    # Serveur HTTP
    LISTEN_ADDR: str = ":9100"

    # Application
    APP_NAME: str = "QApp Gateway"
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    @field_validator("LISTEN_ADDR")
    @classmethod
    def check_listen_addr(cls, value: str) -> str:
        parse_listen_addr(value)
        return value

    @property
    def listen_host(self) -> str:
        return parse_listen_addr(self.LISTEN_ADDR)[0]

    @property
    def listen_port(self) -> int:
        return parse_listen_addr(self.LISTEN_ADDR)[1]

    @property
    def secrets(self) -> Tuple[str, ...]:
        """Valeurs masquées dans les logs"""
        return (self.ACCESS_KEY, self.SECRET_KEY)

    class Config:
        env_file = ".env"
        env_file_encoding = 'utf-8'
        extra = "ignore"
        case_sensitive = True


settings = Settings()
