#!/usr/bin/env python3
"""
GPT Provider - Optional remote generation of the daily idea or a full app.
Requires network access and OPENAI_API_KEY (any OpenAI-compatible endpoint).

APIs:
- generate_project_idea(key): idea metadata { title, domain, why, features, slug }
- generate_project_app(key): a complete single-file HTML mini project
"""

import json
import re
import unicodedata
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import requests
from bs4 import BeautifulSoup, Comment

from config import DEFAULT_OPENAI_BASE_URL, DEFAULT_OPENAI_MODEL, PREVIEWS_DIR, setup_logging
from generate_preview import Idea
from seeded_rng import seed_from_key

logger = setup_logging("gpt_provider")

IDEA_TIMEOUT = 60
APP_TIMEOUT = 120
SNIPPET_LIMIT = 3200

DEFAULT_FEATURES = ["CRUD básico", "Persistência local", "UX clara"]

CREATIVE_DIRECTIONS = [
    "misture rotinas de foco com pequenos rituais de revisão",
    "conecte produtividade pessoal com decisões rápidas do dia",
    "transforme anotações soltas em rotinas de prática diárias",
    "aproveite timers e sugestões para criar assistentes úteis",
    "gere painéis que unam planejamento e acompanhamento de metas",
    "crie ferramentas que convertam listas em ações concretas",
]

CREATIVE_ANGLES = [
    "inclua métricas simples e objetivos acionáveis",
    "priorize acessibilidade e uso rápido no dia a dia",
    "forneça fichas técnicas baixáveis para revisar o plano",
    "permita registrar decisões e compromissos em poucos cliques",
    "ofereça feedback visual claro e motivações curtas",
    "combine checklists com timers contextuais",
]


class ProviderError(RuntimeError):
    """Remote generation is unavailable or returned an unusable payload."""


@dataclass
class RemoteApp:
    """Full app returned by the provider; ``html`` may be empty."""
    title: str
    slug: str
    html: str = ""


def slugify(value: str) -> str:
    normalized = unicodedata.normalize("NFKD", str(value or ""))
    ascii_only = "".join(c for c in normalized if not unicodedata.combining(c)).lower()
    return re.sub(r"[^a-z0-9]+", "-", ascii_only).strip("-")


def _select(items: List[str], seed: int, shift: int = 0) -> str:
    if not items:
        return ""
    return items[(seed >> shift) % len(items)]


def build_creative_brief(seed: int) -> Dict[str, str]:
    return {
        "direction": _select(CREATIVE_DIRECTIONS, seed, 0),
        "angle": _select(CREATIVE_ANGLES, seed, 5),
    }


def html_to_snippet(markup: str, limit: int = SNIPPET_LIMIT) -> str:
    """Visible text of an HTML page, whitespace collapsed and truncated."""
    if not markup:
        return ""
    soup = BeautifulSoup(markup, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()
    text = re.sub(r"\s+", " ", soup.get_text(" ")).strip()
    return text[:limit]


def extract_title(markup: str) -> Optional[str]:
    if not markup:
        return None
    soup = BeautifulSoup(markup, "html.parser")
    if soup.title and soup.title.string:
        return soup.title.string.strip()
    return None


def _safe_read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError:
        return ""


class GptProvider:
    """Calls an OpenAI-compatible chat completions endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = DEFAULT_OPENAI_BASE_URL,
        model: str = DEFAULT_OPENAI_MODEL,
        previews_dir: Path = PREVIEWS_DIR,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = (api_key or "").strip()
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.previews_dir = Path(previews_dir)
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings) -> "GptProvider":
        return cls(
            api_key=settings.api_key,
            base_url=settings.base_url,
            model=settings.model,
            previews_dir=Path(settings.preview_path).parent,
        )

    def _require_key(self) -> None:
        if not self.api_key:
            raise ProviderError("OPENAI_API_KEY ausente")

    def _load_preview_context(self) -> Dict[str, str]:
        p1 = _safe_read(self.previews_dir / "preview-1.html")
        p2 = _safe_read(self.previews_dir / "preview-2.html")
        return {
            "preview1": html_to_snippet(p1),
            "preview2": html_to_snippet(p2),
            "preview1_title": extract_title(p1) or "Preview 1",
            "preview2_title": extract_title(p2) or "Preview 2 atual",
        }

    def _chat_json(self, messages: List[Dict], temperature: float, timeout: int) -> Dict:
        """POST a chat completion asking for a JSON object and parse it."""
        logger.info("Requesting chat completion from %s (model %s)", self.base_url, self.model)
        response = self.session.post(
            f"{self.base_url}/chat/completions",
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json={
                "model": self.model,
                "messages": messages,
                "temperature": temperature,
                "response_format": {"type": "json_object"},
            },
            timeout=timeout,
        )
        response.raise_for_status()

        data = response.json()
        content = (data.get("choices") or [{}])[0].get("message", {}).get("content") or "{}"
        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as e:
            raise ProviderError(f"Resposta JSON inválida: {e}") from e
        if not isinstance(parsed, dict):
            raise ProviderError("Resposta JSON não é um objeto")
        return parsed

    def generate_project_idea(self, key: str) -> Idea:
        """Ask for one project idea for the UTC day ``key``."""
        self._require_key()

        context = self._load_preview_context()
        brief = build_creative_brief(seed_from_key(key))

        system = (
            "Você é um assistente que gera ideias de projetos diários úteis para devs iniciantes. "
            "Use as referências fornecidas como base e responda apenas JSON."
        )
        prompt = f"""Gere uma única ideia de projeto para a data UTC {key}.
Requisitos:
- deve ser útil e acionável, sem depender de backend
- considere como reutilizar ou evoluir elementos de "{context['preview1_title']}" e "{context['preview2_title']}"
- apresente domínio, justificativa e 3 features essenciais e distintas
- mantenha linguagem em português do Brasil

Direção criativa do dia: {brief['direction']}; {brief['angle']}.

Formato JSON:
{{
  "title": string,
  "domain": string,
  "why": string,
  "features": [string, string, string]
}}"""

        messages = [
            {"role": "system", "content": system},
            {"role": "user", "content": prompt},
        ]
        if context["preview1"]:
            messages.append({
                "role": "user",
                "content": f"Resumo do Preview 1 ({context['preview1_title']}):\n{context['preview1']}",
            })
        if context["preview2"]:
            messages.append({
                "role": "user",
                "content": f"Resumo do Preview 2 atual ({context['preview2_title']}):\n{context['preview2']}",
            })

        parsed = self._chat_json(messages, temperature=0.85, timeout=IDEA_TIMEOUT)

        title = str(parsed.get("title") or "Projeto do Dia")
        features = parsed.get("features")
        if isinstance(features, list) and features:
            features = [str(f) for f in features[:3]]
        else:
            features = list(DEFAULT_FEATURES)

        return Idea(
            key=key,
            title=title,
            domain=str(parsed.get("domain") or "Produtividade"),
            why=str(parsed.get("why") or "resolve um problema direto e recorrente."),
            features=features,
            slug=slugify(title),
        )

    def generate_project_app(self, key: str) -> RemoteApp:
        """Ask for a complete single-file HTML app for the UTC day ``key``."""
        self._require_key()

        context = self._load_preview_context()
        brief = build_creative_brief(seed_from_key(key))

        system = (
            "Você é um gerador de miniprojetos front-end autocontidos, sem dependências externas. "
            "Responda apenas JSON."
        )
        prompt = f"""Crie um único arquivo HTML COMPLETO (doctype, head, body) com CSS e JS inline.
Referência central: use "{context['preview1_title']}" como guia para a estrutura limpa e navegável, porém entregue uma identidade visual inédita (paleta, ritmo, grafismos).
Referência complementar: "{context['preview2_title']}" pode inspirar microinterações e animações sutis.

Requisitos:
- Visual minimalista com blocos/grids, respiros generosos e foco em elementos visuais; evite parágrafos longos.
- Interface compreensível em poucos segundos, textos super curtos e acionáveis.
- Acessível (roles ARIA básicos, foco visível)
- Sem frameworks, sem fontes externas
- Interativo: mínimo 3 elementos com comportamento (ex.: selects, timers, checklists).
- Botão "Reset" e link "Voltar" para '../../../index.html'.
- Disponibilize um botão que gere ficha técnica em texto (download) descrevendo o projeto.
- Linguagem e textos em pt-BR.

Direção criativa do dia: {brief['direction']}; {brief['angle']}.
Formato JSON: {{ "title": string, "html": string }}"""

        messages = [
            {"role": "system", "content": system},
            {"role": "user", "content": prompt},
        ]
        if context["preview1"]:
            messages.append({
                "role": "user",
                "content": f"Referência Preview 1 ({context['preview1_title']}):\n{context['preview1']}",
            })
        if context["preview2"]:
            messages.append({
                "role": "user",
                "content": f"Referência Preview 2 atual ({context['preview2_title']}):\n{context['preview2']}",
            })

        parsed = self._chat_json(messages, temperature=0.65, timeout=APP_TIMEOUT)

        title = str(parsed.get("title") or "Mini App do Dia")
        return RemoteApp(title=title, slug=slugify(title), html=str(parsed.get("html") or ""))
