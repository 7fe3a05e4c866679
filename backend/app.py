# app.py
import logging
import mimetypes
from datetime import datetime, timezone

from flask import Flask, request, jsonify
from flask_cors import CORS
from werkzeug.exceptions import RequestEntityTooLarge

import config
from catalog import load_catalog
from errors import AssistantError, ServiceUnavailableError, ValidationError
from gemini_engine import MISSING_INPUT_MESSAGE, UNSUPPORTED_AUDIO_MESSAGE, ReportAssistant
from schemas import AssistantRequest

# ---------------------------
# Setup
# ---------------------------
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
# Room for the form fields next to a full-size audio file
app.config["MAX_CONTENT_LENGTH"] = config.MAX_AUDIO_BYTES + 64 * 1024

CORS(
    app,
    resources={r"/*": {"origins": config.ALLOWED_ORIGINS}},
    methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# ---------------------------
# Catalog & Gemini assistant
# ---------------------------
products, users = load_catalog(config.PRODUCTS_PATH, config.USERS_PATH)

assistant = None
if not config.api_key_configured(config.GEMINI_API_KEY):
    logger.warning("GEMINI_API_KEY não configurada. O serviço de IA não funcionará corretamente.")
    logger.warning("Configure a variável GEMINI_API_KEY no arquivo .env")
else:
    try:
        assistant = ReportAssistant(config.GEMINI_API_KEY, config.GEMINI_MODEL, products, users)
        logger.info("Gemini configurado com o modelo: %s", assistant.model_name)
    except Exception:
        logger.exception("Erro ao inicializar ReportAssistant")


def error_response(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def _audio_mime_type(upload):
    """Audio MIME type of an upload, guessed from the file name when the client sent none."""
    mime = upload.mimetype
    if not mime or mime == "application/octet-stream":
        mime = mimetypes.guess_type(upload.filename or "")[0]
    return mime if mime and mime.startswith("audio/") else None


def parse_assistant_request() -> AssistantRequest:
    """Read ``description`` (and ``audio``) from a JSON or multipart body."""
    if request.mimetype == "multipart/form-data":
        description = request.form.get("description")
        audio, audio_mime = None, None
        upload = request.files.get("audio")
        if upload is not None:
            audio = upload.read()
            if len(audio) > config.MAX_AUDIO_BYTES:
                raise RequestEntityTooLarge()
            if audio:
                audio_mime = _audio_mime_type(upload)
                if audio_mime is None:
                    raise ValidationError(UNSUPPORTED_AUDIO_MESSAGE)
        return AssistantRequest(description=description, audio=audio or None, audio_mime_type=audio_mime)

    data = request.get_json(silent=True) or {}
    description = data.get("description") if isinstance(data, dict) else None
    return AssistantRequest(description=description if isinstance(description, str) else None)


# ---------------------------
# Routes
# ---------------------------
@app.route("/")
def index():
    return {"message": "Bem-vindo ao Assistente de IA", "status": "online"}, 200


@app.route("/health")
def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}, 200


@app.route("/api/assistant", methods=["POST", "OPTIONS"])
def assistant_route():
    if request.method == "OPTIONS":
        return ("", 204)

    try:
        if assistant is None:
            raise ServiceUnavailableError(
                "Serviço de IA não está disponível. Verifique a configuração da GEMINI_API_KEY."
            )

        req = parse_assistant_request()
        if not req.has_description and not req.has_audio:
            raise ValidationError(MISSING_INPUT_MESSAGE)

        result = assistant.process_report(req)
        if not result.success:
            logger.info("Relatório rejeitado: %s (%s)", result.error, result.processed_in)
        return jsonify(result.to_json()), result.status_code

    except (AssistantError, RequestEntityTooLarge):
        raise
    except Exception as e:
        logger.exception("Erro ao processar relatório")
        return error_response(str(e) or "Erro interno do servidor", 500)


@app.errorhandler(AssistantError)
def assistant_error(e):
    return error_response(e.message, e.status_code)


@app.errorhandler(RequestEntityTooLarge)
def too_large(e):
    mb = config.MAX_AUDIO_BYTES // (1024 * 1024)
    return error_response(f"Arquivo de áudio excede o limite de {mb}MB", 413)


@app.errorhandler(500)
def internal_error(e):
    logger.error("Erro não tratado: %s", e)
    return error_response("Erro interno do servidor", 500)


# ---------------------------
# Entrypoint
# ---------------------------
def run():
    """Start the development server. Run from the repository root as ``python -m backend.app``
    (or the ``report-assistant`` script); ``python backend/app.py`` cannot import the top-level modules."""
    logger.info("Servidor rodando em http://%s:%s", config.HOST, config.PORT)
    app.run(host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
