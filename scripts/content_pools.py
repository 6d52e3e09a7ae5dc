#!/usr/bin/env python3
"""
Static catalogs for the procedural preview.

Copy fragments, local idea catalogs, theme presets, font stacks, layout and
background-pattern variants. These tables are read-only; selectors only ever
pick from them.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Tuple


# --- Local idea catalogs (used when no remote idea is available) ---

LOCAL_DOMAINS: Tuple[Dict[str, str], ...] = (
    {"name": "Produtividade", "why": "ajuda a organizar o dia e manter o foco."},
    {"name": "Saúde", "why": "promove hábitos saudáveis com metas simples."},
    {"name": "Estudos", "why": "facilita revisão e prática constante."},
    {"name": "Finanças", "why": "torna controle de gastos acessível e claro."},
    {"name": "DevTools", "why": "agiliza tarefas repetitivas do desenvolvedor."},
)

LOCAL_IDEAS: Tuple[Dict[str, str], ...] = (
    {"title": "Tracker de Hábitos Minimalista", "slug": "habit-tracker"},
    {"title": "Timer Pomodoro com Relatórios", "slug": "pomodoro-tracker"},
    {"title": "Lista de Tarefas por Prioridade", "slug": "priority-todo"},
    {"title": "Orçamento Semanal Simples", "slug": "weekly-budget"},
    {"title": "Flashcards de Terminal", "slug": "term-flashcards"},
    {"title": "Gerador de README Inicial", "slug": "readme-seed"},
    {"title": "Checklist de Deploy", "slug": "deploy-checklist"},
)

LOCAL_FEATURES: Tuple[str, ...] = (
    "CRUD básico (criar, listar, editar, excluir)",
    "Persistência local (LocalStorage/JSON) sem backend",
    "Filtros e busca simples",
    "Exportar/Importar dados (.json)",
    "Atalhos de teclado",
    "Tema claro/escuro",
)


# --- Copy fragments ---

TRAINING_RITUALS: Tuple[str, ...] = (
    "Revisar prioridades antes de começar",
    "Simular o fluxo principal em 5 minutos",
    "Mapear pontos de atrito do dia",
    "Sincronizar metas com o time",
    "Definir respostas rápidas a imprevistos",
    "Ajustar atalhos e preferências padrão",
    "Ensaiar a rotina de revisão semanal",
    "Validar sinais de progresso",
    "Checar o que evoluiu nos últimos dias",
    "Planejar blocos de foco por período",
    "Registrar decisões em uma linha",
    "Documentar o plano da tarde",
)

FOCUS_POINTS: Tuple[str, ...] = (
    "Controle de ritmo antes das entregas",
    "Execução de blocos de foco coordenados",
    "Contexto visível em todas as telas",
    "Decisão rápida após cada revisão",
    "Rotação curta entre tarefas",
    "Sincronização de lembretes",
    "Comunicação de prazos-chave",
    "Cobertura dos primeiros minutos do dia",
    "Atalhos para ações frequentes",
    "Fechamento do dia com resumo",
    "Proteção da tarefa principal",
    "Reset inteligente após pausas",
)

POWER_LINES: Tuple[str, ...] = (
    "Transforme cada ideia em plano acionável.",
    "Micro decisões alinhadas ao objetivo do dia.",
    "Disciplina diária gera resultados consistentes.",
    "Visualize, planeje e execute sem fricção.",
    "Informação clara virando hábitos reais.",
    "Treinos com foco cirúrgico nas próximas entregas.",
)


# --- Mockup vocabularies ---

LIST_LABELS: Tuple[str, ...] = (
    "Revisar PRs abertos",
    "Atualizar changelog",
    "Rodar testes de fumaça",
    "Conferir variáveis de ambiente",
    "Publicar notas da versão",
    "Validar migrações",
    "Responder feedback",
    "Planejar próxima sprint",
    "Limpar branches antigas",
    "Ajustar métricas do painel",
)

BUDGET_CATEGORIES: Tuple[str, ...] = ("Fixos", "Flex", "Meta", "Saldo")

FLASHCARD_WORDS: Tuple[str, ...] = ("grep", "chmod", "rsync", "awk", "xargs", "tmux", "curl", "sed")

FLASHCARD_HINTS: Tuple[str, ...] = (
    "buscar padrões",
    "permissões",
    "sincronizar pastas",
    "processar colunas",
    "encadear comandos",
    "sessões persistentes",
)

STAT_LABELS: Tuple[str, ...] = ("Foco", "Ritmo", "Consistência", "Energia", "Entrega", "Meta semanal")

TIMER_SEGMENTS: Tuple[str, ...] = ("Foco", "Pausa", "Revisão", "Respiro")


# --- Typography ---

FONT_STACKS: Tuple[Dict[str, str], ...] = (
    {"body": '"Inter", system-ui, -apple-system, "Segoe UI", sans-serif', "heading": '"Space Grotesk", system-ui, sans-serif'},
    {"body": '"Manrope", system-ui, -apple-system, "Segoe UI", sans-serif', "heading": '"Manrope", system-ui, sans-serif'},
    {"body": 'system-ui, -apple-system, "Segoe UI", sans-serif', "heading": 'system-ui, -apple-system, "Segoe UI", sans-serif'},
    {"body": '"Work Sans", system-ui, sans-serif', "heading": '"Work Sans", system-ui, sans-serif'},
    {"body": '"Source Sans Pro", system-ui, sans-serif', "heading": '"Poppins", system-ui, sans-serif'},
    {"body": '"IBM Plex Sans", system-ui, sans-serif', "heading": '"IBM Plex Sans Condensed", system-ui, sans-serif'},
    {"body": '"Merriweather", Georgia, serif', "heading": '"Playfair Display", Georgia, serif'},
)


# --- Theme presets ---

THEME_PRESETS: Tuple[Dict, ...] = (
    {
        "id": "nebula",
        "base": "#050910",
        "surface": "#0b1629",
        "panel": "#101f37",
        "surface_soft": "#0f1a33",
        "text": "#e5e7eb",
        "muted": "rgba(148, 163, 184, 0.82)",
        "border": "rgba(56, 189, 248, 0.24)",
        "accents": ("#38bdf8", "#22d3ee", "#60a5fa"),
        "highlights": ("#f472b6", "#a855f7", "#f97316"),
        "background_layers": (
            {"shape": "radial", "size": "1050px 720px", "position": "-12% -18%", "color": "accent", "stop": "60%"},
            {"shape": "radial", "size": "820px 640px", "position": "118% -24%", "color": "highlight", "stop": "64%"},
        ),
        "shadow": "0 28px 60px rgba(15, 23, 42, 0.52)",
        "success": "#34d399",
        "warning": "#f97316",
    },
    {
        "id": "solstice",
        "base": "#f8fafc",
        "surface": "#ffffff",
        "panel": "#f1f5f9",
        "surface_soft": "#e2e8f0",
        "text": "#0f172a",
        "muted": "rgba(71, 85, 105, 0.82)",
        "border": "rgba(148, 163, 184, 0.35)",
        "accents": ("#2563eb", "#0ea5e9", "#f97316"),
        "highlights": ("#22c55e", "#8b5cf6", "#facc15"),
        "background_layers": (
            {"shape": "radial", "size": "980px 660px", "position": "-18% -22%", "color": "accent", "stop": "64%"},
            {"shape": "radial", "size": "860px 700px", "position": "112% -18%", "color": "highlight", "stop": "68%"},
        ),
        "shadow": "0 24px 52px rgba(15, 23, 42, 0.12)",
        "success": "#16a34a",
        "warning": "#dc2626",
    },
    {
        "id": "ember",
        "base": "#1b0f12",
        "surface": "#26141a",
        "panel": "#301a21",
        "surface_soft": "#3a222b",
        "text": "#f8fafc",
        "muted": "rgba(249, 168, 212, 0.86)",
        "border": "rgba(248, 113, 113, 0.28)",
        "accents": ("#fb7185", "#f97316", "#f43f5e"),
        "highlights": ("#a855f7", "#22d3ee", "#facc15"),
        "background_layers": (
            {"shape": "radial", "size": "960px 640px", "position": "-10% -18%", "color": "accent", "stop": "58%"},
            {"shape": "radial", "size": "780px 600px", "position": "118% -20%", "color": "highlight", "stop": "64%"},
        ),
        "shadow": "0 32px 68px rgba(12, 10, 14, 0.62)",
        "success": "#34d399",
        "warning": "#f97316",
    },
    {
        "id": "forest",
        "base": "#0f1712",
        "surface": "#132015",
        "panel": "#1a2c1d",
        "surface_soft": "#213723",
        "text": "#e2f5e9",
        "muted": "rgba(148, 225, 179, 0.82)",
        "border": "rgba(56, 189, 148, 0.28)",
        "accents": ("#34d399", "#22c55e", "#4ade80"),
        "highlights": ("#38bdf8", "#f97316", "#facc15"),
        "background_layers": (
            {"shape": "radial", "size": "960px 700px", "position": "-14% -22%", "color": "accent", "stop": "60%"},
            {"shape": "radial", "size": "840px 660px", "position": "118% -18%", "color": "highlight", "stop": "64%"},
        ),
        "shadow": "0 28px 62px rgba(7, 32, 18, 0.58)",
        "success": "#22c55e",
        "warning": "#fbbf24",
    },
    {
        "id": "paper",
        "base": "#f7f3ea",
        "surface": "#fffdf8",
        "panel": "#f1eadb",
        "surface_soft": "#e9dfcb",
        "text": "#2b2418",
        "muted": "rgba(87, 72, 48, 0.78)",
        "border": "rgba(120, 98, 64, 0.26)",
        "accents": ("#c2410c", "#b45309", "#0f766e"),
        "highlights": ("#1d4ed8", "#be185d", "#4d7c0f"),
        "background_layers": (
            {"shape": "radial", "size": "900px 620px", "position": "-16% -20%", "color": "accent", "stop": "62%"},
            {"shape": "radial", "size": "760px 560px", "position": "114% -16%", "color": "highlight", "stop": "66%"},
        ),
        "shadow": "0 22px 48px rgba(43, 36, 24, 0.14)",
        "success": "#15803d",
        "warning": "#b91c1c",
        "weight": 0.8,
    },
    {
        "id": "dusk",
        "base": "#120d1f",
        "surface": "#1a1430",
        "panel": "#221a3d",
        "surface_soft": "#2a2148",
        "text": "#f5f3ff",
        "muted": "rgba(196, 181, 253, 0.8)",
        "border": "rgba(167, 139, 250, 0.26)",
        "accents": ("#a78bfa", "#c084fc", "#818cf8"),
        "highlights": ("#fbbf24", "#2dd4bf", "#fb7185"),
        "background_layers": (
            {"shape": "radial", "size": "1000px 700px", "position": "-12% -20%", "color": "accent", "stop": "60%"},
            {"shape": "radial", "size": "800px 620px", "position": "116% -22%", "color": "highlight", "stop": "62%"},
        ),
        "shadow": "0 30px 64px rgba(10, 6, 22, 0.6)",
        "success": "#4ade80",
        "warning": "#fb923c",
    },
)


# --- Layout variants ---

@dataclass(frozen=True)
class LayoutVariant:
    """Grid arrangement of the hero, preview stage, features and pin panel."""
    id: str
    weight: float
    hero_mode: str
    feature_count: int
    css: str


LAYOUT_VARIANTS: Tuple[LayoutVariant, ...] = (
    LayoutVariant(
        id="focus-center",
        weight=3,
        hero_mode="centered",
        feature_count=3,
        css="""
      .page { max-width: 960px; grid-template-areas: "hero" "stage" "features" "pin"; }
      .hero { text-align: center; align-items: center; }
      .hero__tags { justify-content: center; }""",
    ),
    LayoutVariant(
        id="sidekick",
        weight=2,
        hero_mode="split",
        feature_count=4,
        css="""
      .page {
        grid-template-columns: minmax(0, 1.45fr) minmax(0, 1fr);
        grid-template-areas: "hero hero" "stage pin" "features pin";
      }""",
    ),
    LayoutVariant(
        id="tower",
        weight=2,
        hero_mode="stacked",
        feature_count=3,
        css="""
      .page { max-width: 720px; grid-template-areas: "hero" "features" "stage" "pin"; }
      .stage { padding: 20px; }""",
    ),
    LayoutVariant(
        id="gallery",
        weight=2,
        hero_mode="banner",
        feature_count=4,
        css="""
      .page {
        grid-template-columns: repeat(3, minmax(0, 1fr));
        grid-template-areas: "hero hero hero" "stage stage features" "pin pin pin";
      }
      .features ul { grid-template-columns: minmax(0, 1fr); }""",
    ),
    LayoutVariant(
        id="stacked",
        weight=1.5,
        hero_mode="compact",
        feature_count=5,
        css="""
      .page { max-width: 1040px; grid-template-areas: "hero" "stage" "features" "pin"; }
      .hero h1 { font-size: clamp(1.5rem, 3.4vw, 2.1rem); }
      .features ul { grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); }""",
    ),
    LayoutVariant(
        id="poster",
        weight=1,
        hero_mode="poster",
        feature_count=3,
        css="""
      .page {
        grid-template-columns: minmax(0, 1fr) minmax(0, 1fr);
        grid-template-areas: "hero stage" "features pin";
      }
      .hero h1 { font-size: clamp(2.4rem, 6vw, 4.2rem); line-height: 1.02; }""",
    ),
)


# --- Background pattern variants ---

@dataclass(frozen=True)
class PatternVariant:
    """Background texture recipe resolved against a theme."""
    id: str
    weight: float
    build: Callable


def _halo(theme) -> str:
    return theme.background


def _grid(theme) -> str:
    return (
        f"linear-gradient({theme.accent_soft} 1px, transparent 1px) 0 0 / 32px 32px, "
        f"linear-gradient(90deg, {theme.accent_soft} 1px, transparent 1px) 0 0 / 32px 32px, "
        f"{theme.background}"
    )


def _dots(theme) -> str:
    return (
        f"radial-gradient(circle at 1px 1px, {theme.highlight_soft} 1.5px, transparent 0) 0 0 / 22px 22px, "
        f"{theme.background}"
    )


def _diagonal(theme) -> str:
    return (
        f"repeating-linear-gradient(135deg, {theme.accent_soft} 0 2px, transparent 2px 18px), "
        f"{theme.background}"
    )


def _rings(theme) -> str:
    return (
        f"repeating-radial-gradient(circle at 82% 12%, {theme.highlight_soft} 0 1px, transparent 1px 42px), "
        f"{theme.background}"
    )


def _mesh(theme) -> str:
    return (
        f"conic-gradient(from 180deg at 70% 30%, {theme.accent_soft}, transparent 35%, "
        f"{theme.highlight_soft} 65%, transparent 90%), "
        f"{theme.background}"
    )


PATTERN_VARIANTS: Tuple[PatternVariant, ...] = (
    PatternVariant(id="halo", weight=3, build=_halo),
    PatternVariant(id="grid", weight=2, build=_grid),
    PatternVariant(id="dots", weight=2, build=_dots),
    PatternVariant(id="diagonal", weight=1.5, build=_diagonal),
    PatternVariant(id="rings", weight=1, build=_rings),
    PatternVariant(id="mesh", weight=1, build=_mesh),
)

# Default pin-panel weights (theme / layout / pattern)
DEFAULT_WEIGHTS: Dict[str, float] = {"theme": 0.42, "layout": 0.33, "pattern": 0.25}
