"""Shared fixtures: a test RSA key pair and an in-process fake EFRIS endpoint."""

import base64
import json
from typing import Any, Optional

import httpx
import pytest
import pytest_asyncio
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from efris.client import AsyncEFRIS
from efris.crypto import aes_encrypt
from efris.models.envelope import Envelope

SESSION_KEY = bytes(range(16))
TIN = "1000000000"
DEVICE_NO = "TCS0001"


@pytest.fixture(scope="session")
def private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


def password_blob(public_key: rsa.RSAPublicKey, key: bytes) -> str:
    """What T104 returns in passowrdDes for ``key``."""
    encrypted = public_key.encrypt(base64.b64encode(key), padding.PKCS1v15())
    return base64.b64encode(encrypted).decode()


def plain_content(payload: Any) -> str:
    return base64.b64encode(json.dumps(payload).encode()).decode()


def response_envelope(
    interface_code: str,
    content: Optional[str] = "",
    code_type: str = "0",
    encrypt_code: str = "1",
    return_code: Optional[str] = "00",
    return_message: str = "SUCCESS",
) -> dict[str, Any]:
    envelope: dict[str, Any] = {
        "globalInfo": {
            "appId": "AP04",
            "version": "1.1.20191201",
            "dataExchangeId": "9230489223014123",
            "interfaceCode": interface_code,
            "requestCode": "TP",
            "requestTime": "2024-01-01 10:00:00",
            "responseCode": "TA",
            "deviceNo": DEVICE_NO,
            "tin": TIN,
        },
        "data": {
            "content": content,
            "signature": "",
            "dataDescription": {"codeType": code_type, "encryptCode": encrypt_code, "zipCode": "0"},
        },
    }
    if return_code is not None:
        envelope["returnStateInfo"] = {"returnCode": return_code, "returnMessage": return_message}
    return envelope


def parse(envelope: dict[str, Any]) -> Envelope:
    return Envelope.model_validate(envelope)


class FakeEFRISServer:
    """Answers request envelopes the way the EFRIS endpoint does, issuing SESSION_KEY on T104."""

    def __init__(self, public_key: rsa.RSAPublicKey, session_key: bytes = SESSION_KEY):
        self.public_key = public_key
        self.session_key = session_key
        self.requests: list[dict[str, Any]] = []
        self.replies: dict[str, dict[str, Any]] = {}
        self.key_exchange_code = "00"

    @property
    def bootstrap_calls(self) -> int:
        return sum(1 for r in self.requests if r["globalInfo"]["interfaceCode"] == "T104")

    def last_request(self, interface_code: str) -> dict[str, Any]:
        return [r for r in self.requests if r["globalInfo"]["interfaceCode"] == interface_code][-1]

    def reply(
        self,
        interface_code: str,
        payload: Any = None,
        *,
        encrypted: bool = False,
        return_code: str = "00",
        return_message: str = "SUCCESS",
    ) -> None:
        if payload is None:
            content = ""
        elif encrypted:
            content = aes_encrypt(json.dumps(payload).encode(), self.session_key)
        else:
            content = plain_content(payload)
        self.replies[interface_code] = response_envelope(
            interface_code, content,
            code_type="1" if encrypted else "0",
            encrypt_code="2" if encrypted else "1",
            return_code=return_code, return_message=return_message,
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)
        code = body["globalInfo"]["interfaceCode"]
        if code == "T104":
            return httpx.Response(200, json=self._key_exchange())
        if code not in self.replies:
            return httpx.Response(200, json=response_envelope(code, return_code="99", return_message="Unknown interface"))
        return httpx.Response(200, json=self.replies[code])

    def _key_exchange(self) -> dict[str, Any]:
        if self.key_exchange_code != "00":
            return response_envelope("T104", "", return_code=self.key_exchange_code,
                                     return_message="The device is not registered")
        content = plain_content({"passowrdDes": password_blob(self.public_key, self.session_key), "sign": "x"})
        return response_envelope("T104", content)


@pytest.fixture
def server(private_key) -> FakeEFRISServer:
    return FakeEFRISServer(private_key.public_key())


@pytest_asyncio.fixture
async def client(private_key, server):
    c = AsyncEFRIS(tin=TIN, device_no=DEVICE_NO, private_key=private_key, transport=httpx.MockTransport(server))
    yield c
    await c.close()
