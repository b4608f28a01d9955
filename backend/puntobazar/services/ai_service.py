# Overview: Text generation passthrough (product descriptions, campaign drafts).
"""
Outbound calls to a Responses-style text generation API.

Failures never reach the HTTP caller as errors: missing configuration,
transport problems and non-2xx answers all degrade to ``ok: False`` with
empty fields, and the front end falls back to its local templates.
No retries, no caching: every call is a fresh request.
"""
from __future__ import annotations

import logging
import re
from typing import Any

import httpx

from ..validation import normalize_list, to_text

logger = logging.getLogger(__name__)

EXTENSION_KEY = "puntobazar.ai"

DESCRIPTION_MAX_TOKENS = 280
CAMPAIGN_MAX_TOKENS = 320
DEFAULT_MAX_TOKENS = 256

CAMPAIGN_FIELDS = ("titulo", "cuerpo", "cta", "hashtags")

# Section label -> (result field, prefix to strip). Blocks whose label is not
# listed here are dropped.
_CAMPAIGN_SECTIONS = (
    (("TÍTULO", "TITULO"), "titulo", re.compile(r"^T[ÍI]TULO:\s*", re.IGNORECASE)),
    (("TEXTO",), "cuerpo", re.compile(r"^TEXTO:\s*", re.IGNORECASE)),
    (("CTA",), "cta", re.compile(r"^CTA:\s*", re.IGNORECASE)),
    (("HASHTAGS",), "hashtags", re.compile(r"^HASHTAGS:\s*", re.IGNORECASE)),
)

_BLOCK_SEPARATOR = re.compile(r"\n\s*\n")


class UpstreamError(Exception):
    """The generation service was unreachable or answered with an error."""


class TextGenerator:
    def __init__(
        self,
        *,
        api_key: str,
        api_url: str,
        model: str,
        timeout: float = 20.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.model = model
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_config(cls, config, transport: httpx.BaseTransport | None = None) -> "TextGenerator":
        return cls(
            api_key=config.get("OPENAI_API_KEY", ""),
            api_url=config.get("OPENAI_API_URL", ""),
            model=config.get("OPENAI_MODEL", ""),
            timeout=float(config.get("AI_TIMEOUT_SECONDS", 20)),
            transport=transport,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def generate(self, prompt: str, max_output_tokens: int = DEFAULT_MAX_TOKENS) -> str | None:
        """Generated text, or None when generation is unavailable."""
        if not self.configured:
            logger.warning("OPENAI_API_KEY is not configured; AI endpoints answer ok=false")
            return None
        try:
            return self._request(prompt, max_output_tokens)
        except UpstreamError as exc:
            logger.error("Text generation failed: %s", exc)
            return None

    def _request(self, prompt: str, max_output_tokens: int) -> str | None:
        body = {
            "model": self.model,
            "input": prompt,
            "max_output_tokens": max_output_tokens or DEFAULT_MAX_TOKENS,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(self.api_url, json=body, headers=headers)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"{type(exc).__name__}: {exc}") from exc

        if not response.is_success:
            raise UpstreamError(f"HTTP {response.status_code}: {response.text[:500]}")

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamError("Response body is not JSON") from exc

        return extract_output_text(data) or None


def extract_output_text(data: Any) -> str:
    """
    Pull the generated text out of a Responses API payload: the
    ``output_text`` convenience field when present, else the concatenated
    ``output[].content[]`` parts of type ``output_text``.
    """
    if not isinstance(data, dict):
        return ""
    text = data.get("output_text")
    if isinstance(text, str) and text.strip():
        return text
    output = data.get("output")
    if not isinstance(output, list):
        return ""
    parts = []
    for message in output:
        contents = message.get("content") if isinstance(message, dict) else None
        if not isinstance(contents, list):
            continue
        for content in contents:
            if not isinstance(content, dict) or content.get("type") != "output_text":
                continue
            if isinstance(content.get("text"), str):
                parts.append(content["text"])
    return "".join(parts)


def product_description_prompt(payload: dict) -> str:
    return (
        "Sos el redactor de fichas de producto de un catálogo de bazar. "
        "Escribí una descripción clara y vendedora en español neutro, 3 a 5 frases, sin emojis.\n\n"
        f"Nombre del producto: {to_text(payload.get('nombre'))}\n"
        f"Categoría: {to_text(payload.get('categoria'))}\n"
        f"Colores: {', '.join(normalize_list(payload.get('colores')))}\n"
        f"Tamaños: {', '.join(normalize_list(payload.get('tamanos')))}\n"
        f"Detalles adicionales: {to_text(payload.get('detalles'))}\n\n"
        "El texto tiene que ser fácil de leer por WhatsApp y apto para clientes finales."
    )


def campaign_prompt(payload: dict) -> str:
    return (
        "Sos especialista en marketing para revendedores de catálogo. "
        "Generá una campaña breve para usar en historias, estados de WhatsApp o flyers.\n\n"
        f"Idea base: {to_text(payload.get('idea'))}\n"
        f"Tipo de campaña: {to_text(payload.get('tipo')) or 'historias'}\n"
        f"Tono: {to_text(payload.get('tono')) or 'energico'}\n\n"
        "Devolvé un texto en formato:\n"
        "TÍTULO:\n...\n\n"
        "TEXTO:\n...\n\n"
        "CTA:\n...\n\n"
        "HASHTAGS:\n..."
    )


def parse_campaign_text(text: str) -> dict:
    """
    Split a generated campaign into its four labelled sections.

    Blocks are separated by blank lines and must start with one of the
    labels TÍTULO/TITULO, TEXTO, CTA, HASHTAGS (any case). Anything else is
    discarded; missing sections stay "".
    """
    parts = {name: "" for name in CAMPAIGN_FIELDS}
    for block in _BLOCK_SEPARATOR.split(text or ""):
        b = block.strip()
        if not b:
            continue
        upper = b.upper()
        for labels, field, prefix in _CAMPAIGN_SECTIONS:
            if upper.startswith(labels):
                parts[field] = prefix.sub("", b, count=1).strip()
                break
    return parts


def describe_product(generator: TextGenerator, payload: Any) -> dict:
    if payload is not None and not isinstance(payload, dict):
        return {"ok": False, "texto": ""}
    texto = generator.generate(product_description_prompt(payload or {}), DESCRIPTION_MAX_TOKENS)
    if not texto:
        return {"ok": False, "texto": ""}
    return {"ok": True, "texto": texto}


def draft_campaign(generator: TextGenerator, payload: Any) -> dict:
    """Non-object bodies get the same ok=false answer as an upstream failure."""
    if payload is not None and not isinstance(payload, dict):
        return {"ok": False, **{name: "" for name in CAMPAIGN_FIELDS}}
    texto = generator.generate(campaign_prompt(payload or {}), CAMPAIGN_MAX_TOKENS)
    if not texto:
        return {"ok": False, **{name: "" for name in CAMPAIGN_FIELDS}}
    return {"ok": True, **parse_campaign_text(texto)}
