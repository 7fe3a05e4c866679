# gemini_engine.py
import base64
import logging
import time
from typing import List, Optional

from openai import OpenAI, OpenAIError

import config
from errors import AssistantError, UpstreamError, ValidationError
from normalizer import normalize_reply
from prompts import (
    AUDIO_ONLY_INSTRUCTION,
    AUDIO_WITH_TEXT_INSTRUCTION,
    DESCRIPTION_PREFIX,
    JSON_ONLY_INSTRUCTION,
    build_form_assistant_prompt,
)
from schemas import AssistantRequest, AssistantResponse, Product, User
from utils import elapsed_ms

logger = logging.getLogger(__name__)

PLACEHOLDER_CONFIDENCE = 0.95
MISSING_INPUT_MESSAGE = "É necessário fornecer pelo menos uma descrição (texto) ou um arquivo de áudio"
UNSUPPORTED_AUDIO_MESSAGE = "Formato de áudio não suportado. Envie um arquivo de áudio (MP3, WAV, M4A, OGG...)"

# MIME subtypes the OpenAI-compatible endpoint knows under another name
_AUDIO_FORMATS = {
    "mpeg": "mp3",
    "mp3": "mp3",
    "x-wav": "wav",
    "wave": "wav",
    "vnd.wave": "wav",
    "x-m4a": "m4a",
    "mp4": "m4a",
}


def audio_format(mime_type: str) -> str:
    subtype = (mime_type or "").split(";")[0].strip().lower().split("/")[-1]
    return _AUDIO_FORMATS.get(subtype, subtype)


class ReportAssistant:
    """Sends a report (text and/or audio) to Gemini and returns form-ready data."""

    def __init__(self, api_key: str, model_name: str = "gemini-2.0-flash",
                 products: Optional[List[Product]] = None, users: Optional[List[User]] = None,
                 client=None):
        if not api_key:
            raise ValueError("GEMINI_API_KEY é obrigatória")
        self._model_name = model_name
        self.products = list(products or [])
        self.users = list(users or [])
        self.prompt = build_form_assistant_prompt(self.products, self.users)
        self.client = client or OpenAI(api_key=api_key, base_url=config.GEMINI_BASE_URL)

    @property
    def model_name(self) -> str:
        return self._model_name

    def build_content(self, req: AssistantRequest) -> list:
        parts = [{"type": "text", "text": self.prompt}]

        if req.has_description:
            parts.append({"type": "text", "text": f"{DESCRIPTION_PREFIX}{req.description}"})

        if req.has_audio and req.audio_mime_type:
            parts.append({
                "type": "input_audio",
                "input_audio": {
                    "data": base64.b64encode(req.audio).decode("ascii"),
                    "format": audio_format(req.audio_mime_type),
                },
            })
            parts.append({
                "type": "text",
                "text": AUDIO_WITH_TEXT_INSTRUCTION if req.has_description else AUDIO_ONLY_INSTRUCTION,
            })

        parts.append({"type": "text", "text": JSON_ONLY_INSTRUCTION})
        return parts

    def generate(self, req: AssistantRequest) -> str:
        start = time.perf_counter()
        try:
            response = self.client.chat.completions.create(
                model=self._model_name,
                temperature=config.MODEL_TEMPERATURE,
                top_p=config.MODEL_TOP_P,
                max_tokens=config.MAX_OUTPUT_TOKENS,
                response_format={"type": "json_object"},
                messages=[{"role": "user", "content": self.build_content(req)}],
            )
        except OpenAIError as e:
            logger.error("Gemini call failed after %s: %s", elapsed_ms(start), e)
            raise UpstreamError(f"Erro ao processar relatório com IA: {e}") from e
        logger.info("Gemini (%s) answered in %s", self._model_name, elapsed_ms(start))
        if not response.choices:
            raise UpstreamError("Resposta da IA veio vazia")
        return response.choices[0].message.content or ""

    def process_report(self, req: AssistantRequest) -> AssistantResponse:
        start = time.perf_counter()

        try:
            if not req.has_description and not req.has_audio:
                raise ValidationError(MISSING_INPUT_MESSAGE)
            if req.has_audio and not req.audio_mime_type:
                raise ValidationError(UNSUPPORTED_AUDIO_MESSAGE)
            text = self.generate(req)
            data = normalize_reply(text, self.products, self.users)
        except AssistantError as e:
            return AssistantResponse(
                success=False, error=e.message, processed_in=elapsed_ms(start), status_code=e.status_code
            )
        except Exception as e:
            logger.exception("Erro inesperado ao processar relatório")
            return AssistantResponse(
                success=False,
                error=str(e) or "Erro ao processar relatório com IA",
                processed_in=elapsed_ms(start),
                status_code=500,
            )

        return AssistantResponse(
            success=True,
            data=data,
            confidence=PLACEHOLDER_CONFIDENCE,
            processed_in=elapsed_ms(start),
        )
