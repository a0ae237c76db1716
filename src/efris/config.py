"""
Client configuration: taxpayer/device identity, endpoint and key material.

Persisted as JSON at ~/.efris/config.json for the CLI.
"""

import json
from pathlib import Path
from typing import Optional

from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey
from pydantic import BaseModel, ValidationError

from efris.crypto import load_private_key

PRODUCTION_URL = "https://efrisws.ura.go.ug/ws/taapp/getInformation"
SANDBOX_URL = "https://efristest.ura.go.ug/efrisws/ws/taapp/getInformation"

CONFIG_FILE = Path.home() / ".efris" / "config.json"


class ClientConfig(BaseModel):
    tin: str
    device_no: str
    url: str = PRODUCTION_URL
    timeout: float = 30.0
    time_zone: Optional[str] = None
    private_key_path: Optional[str] = None
    private_key_password: Optional[str] = None
    brn: str = ""
    device_mac: str = "FFFFFFFFFFFF"
    longitude: str = "32.5825"
    latitude: str = "0.3476"
    user_name: str = "admin"
    operator_name: str = "administrator"
    taxpayer_id: str = "1"
    app_id: str = "AP04"
    version: str = "1.1.20191201"

    def load_private_key(self) -> RSAPrivateKey:
        """Load the RSA private key named by ``private_key_path``."""
        if not self.private_key_path:
            raise ValueError("private_key_path is not configured")
        return load_private_key(self.private_key_path, self.private_key_password)


def load_config(path: Path = CONFIG_FILE) -> Optional[ClientConfig]:
    try:
        return ClientConfig.model_validate_json(path.read_text())
    except (FileNotFoundError, ValidationError):
        return None


def save_config(config: ClientConfig, path: Path = CONFIG_FILE) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.model_dump(exclude_none=True), indent=2))
