import logging
import re
import sys
from typing import Iterable, Optional

MASK = "***"

# Valeur qui suit --ak / --sk sur une ligne de commande qappctl
_CREDENTIAL_FLAG_RE = re.compile(r"(--(?:ak|sk)(?:=|\s+))(\S+)")


class CredentialFilter(logging.Filter):
    """Masque les identifiants Qiniu dans les messages avant leur écriture"""

    def __init__(self, secrets: Iterable[str] = ()):
        super().__init__()
        self.secrets = [secret for secret in secrets if secret]

    def mask(self, message: str) -> str:
        message = _CREDENTIAL_FLAG_RE.sub(lambda m: m.group(1) + MASK, message)
        for secret in self.secrets:
            message = message.replace(secret, MASK)
        return message

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = self.mask(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    secrets: Iterable[str] = (),
    format_string: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
) -> None:
    """
    Configure le logging de la passerelle (stdout et fichier optionnel)

    Args:
        level: Niveau de log (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Fichier de log optionnel
        secrets: Valeurs à masquer dans tous les messages (access key, secret key)
        format_string: Format des lignes de log
    """
    formatter = logging.Formatter(format_string)
    credential_filter = CredentialFilter(secrets)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    # La CLI reconfigure le logging après l'import du module principal
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(credential_filter)
        root_logger.addHandler(handler)

    # uvicorn écrit ses journaux d'accès sans passer par nos modules
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
