"""AI servis sınırı - Amazon Bedrock (Nova) entegrasyonu.

Dashboard'un doğal dil özetleri, kontrol listeleri ve tahminleri bu
istemci üzerinden üretilir. Servis deterministik değildir; hatalar
AIServiceError olarak çağırana iletilir.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Iterator, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from profit_dashboard.config import DEFAULT_MODEL_ID, DEFAULT_REGION

logger = logging.getLogger(__name__)

_JSON_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class AIServiceError(Exception):
    """AI servisine erişim hatası."""
    pass


class AIResponseFormatError(AIServiceError):
    """AI yanıtı beklenen formatta değil."""
    pass


class BedrockClient:
    """Bedrock runtime üzerinden Nova modelini çağıran istemci."""

    def __init__(
        self,
        model_id: str = DEFAULT_MODEL_ID,
        region_name: str = DEFAULT_REGION,
        bedrock_runtime_client: Optional[Any] = None,
    ):
        self.model_id = model_id
        self.region_name = region_name

        # dependency injection destekli
        self.bedrock_runtime = bedrock_runtime_client or boto3.client(
            "bedrock-runtime", region_name=region_name
        )
        logger.info("AI istemcisi başlatıldı (model: %s)", model_id)

    def _request_body(self, prompt: str, max_tokens: int, temperature: float) -> str:
        return json.dumps(
            {
                "messages": [{"role": "user", "content": [{"text": prompt}]}],
                "inferenceConfig": {
                    "max_new_tokens": max_tokens,
                    "temperature": temperature,
                },
            }
        )

    def invoke(self, prompt: str, max_tokens: int = 1000, temperature: float = 0.7) -> str:
        """Modeli çağırır ve metin yanıtını döndürür."""
        try:
            response = self.bedrock_runtime.invoke_model(
                modelId=self.model_id,
                contentType="application/json",
                accept="application/json",
                body=self._request_body(prompt, max_tokens, temperature),
            )
            result = json.loads(response["body"].read())
        except (ClientError, BotoCoreError) as e:
            logger.error("Bedrock API hatası: %s", e)
            raise AIServiceError(f"AI servisiyle iletişim kurulamadı: {e}") from e
        except json.JSONDecodeError as e:
            logger.error("Bedrock yanıtı çözümlenemedi: %s", e)
            raise AIResponseFormatError(f"AI servisi okunamayan bir yanıt döndürdü: {e}") from e

        message = result.get("output", {}).get("message", {}) if isinstance(result, dict) else {}
        content = message.get("content") or []
        if not content or not isinstance(content[0], dict):
            raise AIResponseFormatError("AI servisi boş bir yanıt döndürdü.")
        return content[0].get("text", "")

    def stream(self, prompt: str, max_tokens: int = 1000, temperature: float = 0.7) -> Iterator[str]:
        """Modeli akış modunda çağırır, metin parçalarını sırayla üretir."""
        try:
            response = self.bedrock_runtime.invoke_model_with_response_stream(
                modelId=self.model_id,
                contentType="application/json",
                accept="application/json",
                body=self._request_body(prompt, max_tokens, temperature),
            )
            for event in response["body"]:
                chunk = event.get("chunk")
                if not chunk:
                    continue
                payload = json.loads(chunk["bytes"])
                text = payload.get("contentBlockDelta", {}).get("delta", {}).get("text")
                if text:
                    yield text
        except (ClientError, BotoCoreError) as e:
            logger.error("Bedrock stream hatası: %s", e)
            raise AIServiceError(f"AI servisiyle iletişim kurulamadı: {e}") from e
        except json.JSONDecodeError as e:
            logger.error("Bedrock stream parçası çözümlenemedi: %s", e)
            raise AIResponseFormatError(f"AI servisi okunamayan bir yanıt döndürdü: {e}") from e

    def invoke_json(self, prompt: str, max_tokens: int = 2000, temperature: float = 0.2) -> Any:
        """Modelden JSON yanıt ister ve çözümler."""
        text = self.invoke(prompt, max_tokens=max_tokens, temperature=temperature)
        return parse_json_response(text)


def parse_json_response(text: str) -> Any:
    """Model yanıtındaki JSON'u çözümler; markdown kod bloğu varsa ayıklar."""
    cleaned = text.strip()
    match = _JSON_FENCE.match(cleaned)
    if match:
        cleaned = match.group(1)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise AIResponseFormatError("AI geçerli JSON döndürmedi.") from e
