#!/usr/bin/env python3
"""
Mockup Builders - one visual widget per app archetype.

Each builder takes the shared seeded stream, the resolved theme and the idea,
and returns a self-contained HTML/CSS fragment plus a signature capturing the
random choices that make the instance unique.

Draw order inside every builder is: archetype body, then palette swatches
(one draw per swatch), then the mini stat card (label, value, tone) for the
archetypes that carry one. Changing this order changes every historical
preview for a given day key.
"""

import html
import unicodedata
from dataclasses import dataclass, field
from typing import Callable, Sequence, Tuple

from content_pools import (
    BUDGET_CATEGORIES,
    FLASHCARD_HINTS,
    FLASHCARD_WORDS,
    LIST_LABELS,
    STAT_LABELS,
    TIMER_SEGMENTS,
)
from seeded_rng import Rng, pick_many, random_int, random_pick


@dataclass(frozen=True)
class Mockup:
    """Rendered widget for the preview stage."""
    id: str
    signature: str
    html: str
    css: str
    parts: Tuple[str, ...] = field(default_factory=tuple)
    script: str = ""


PALETTE_CSS = """
      .mk-palette { display: flex; gap: 8px; margin-top: 14px; }
      .mk-swatch { width: 28px; height: 28px; border-radius: 8px; border: 1px solid var(--border); }"""

STAT_CSS = """
      .mk-stat {
        margin-top: 14px; padding: 12px 14px; border-radius: 14px;
        background: var(--panel); border: 1px solid var(--border);
        display: grid; gap: 6px;
      }
      .mk-stat__row { display: flex; justify-content: space-between; font-size: 0.82rem; color: var(--muted); }
      .mk-stat__value { font-weight: 700; color: var(--text); }
      .mk-stat__bar { height: 6px; border-radius: 99px; background: var(--surface-soft); overflow: hidden; }
      .mk-stat__bar span { display: block; height: 100%; border-radius: inherit; }
      .mk-stat--accent .mk-stat__bar span { background: var(--accent); }
      .mk-stat--highlight .mk-stat__bar span { background: var(--highlight); }"""


def _palette_block(rng: Rng, theme) -> str:
    colors = list(theme.palette())
    chosen = pick_many(colors, min(4, len(colors)), rng)
    swatches = "".join(
        f'<span class="mk-swatch" style="background:{color}" title="{color}"></span>' for color in chosen
    )
    return f'<div class="mk-palette" aria-label="Paleta do dia">{swatches}</div>'


def _stat_card(rng: Rng) -> str:
    label = random_pick(STAT_LABELS, rng) or STAT_LABELS[0]
    value = random_int(rng, 40, 98)
    tone = "accent" if rng() < 0.5 else "highlight"
    return f"""<div class="mk-stat mk-stat--{tone}">
          <div class="mk-stat__row"><span>{html.escape(label)}</span><span class="mk-stat__value">{value}%</span></div>
          <div class="mk-stat__bar"><span style="width:{value}%"></span></div>
        </div>"""


def _frame(mockup_id: str, title: str, body: str, extras: str) -> str:
    return f"""<div class="mk mk--{mockup_id}" data-mockup="{mockup_id}">
        <div class="mk__bar"><i></i><i></i><i></i><span>{html.escape(title)}</span></div>
        <div class="mk__body">
        {body}
        {extras}
        </div>
      </div>"""


def build_timer_mockup(rng: Rng, theme, idea) -> Mockup:
    """Pomodoro ring. Draws: minutes, seconds, progress, cycle, 4 segment weights."""
    minutes = random_int(rng, 15, 50)
    seconds = random_int(rng, 0, 59)
    progress = random_int(rng, 12, 92)
    cycle = random_int(rng, 1, 4)
    weights = [random_int(rng, 1, 5) for _ in TIMER_SEGMENTS]
    total = sum(weights)
    segments = "".join(
        f'<li style="flex:{w}"><span>{html.escape(label)}</span><b>{round(w * 100 / total)}%</b></li>'
        for label, w in zip(TIMER_SEGMENTS, weights)
    )
    cycles = "".join(
        f'<i class="{"on" if index < cycle else ""}"></i>' for index in range(4)
    )
    body = f"""<div class="mk-timer" style="--progress:{progress}">
          <div class="mk-timer__ring"><div class="mk-timer__face">{minutes:02d}:{seconds:02d}</div></div>
          <div class="mk-timer__cycles" aria-label="Ciclo {cycle} de 4">{cycles}</div>
          <ul class="mk-timer__segments">{segments}</ul>
        </div>"""
    extras = _palette_block(rng, theme) + _stat_card(rng)
    css = """
      .mk-timer { display: grid; justify-items: center; gap: 14px; }
      .mk-timer__ring {
        width: 168px; height: 168px; border-radius: 50%; display: grid; place-items: center;
        background: conic-gradient(var(--accent) calc(var(--progress) * 1%), var(--surface-soft) 0);
      }
      .mk-timer__face {
        width: 132px; height: 132px; border-radius: 50%; display: grid; place-items: center;
        background: var(--surface); font: 700 1.9rem/1 var(--font-heading); letter-spacing: 0.04em;
      }
      .mk-timer__cycles { display: flex; gap: 6px; }
      .mk-timer__cycles i { width: 10px; height: 10px; border-radius: 50%; background: var(--surface-soft); }
      .mk-timer__cycles i.on { background: var(--highlight); }
      .mk-timer__segments { list-style: none; margin: 0; padding: 0; display: flex; gap: 6px; width: 100%; }
      .mk-timer__segments li {
        display: grid; gap: 2px; padding: 8px; border-radius: 10px;
        background: var(--panel); font-size: 0.72rem; color: var(--muted);
      }
      .mk-timer__segments b { color: var(--text); }""" + PALETTE_CSS + STAT_CSS
    return Mockup(
        id="timer",
        signature=f"timer:p{progress}:c{cycle}",
        html=_frame("timer", "Sessão de foco", body, extras),
        css=css,
        parts=("ring", "cycles", "segments", "palette", "stat"),
    )


def _habit_cell(roll: float) -> str:
    if roll > 0.64:
        return "strong"
    if roll > 0.30:
        return "mid"
    return "off"


def build_habit_mockup(rng: Rng, theme, idea) -> Mockup:
    """7x4 habit grid. Draws: 28 cells, streak, target offset."""
    cells = [_habit_cell(rng()) for _ in range(28)]
    streak = random_int(rng, 3, 16)
    target = streak + random_int(rng, 2, 6)
    grid = "".join(f'<i class="mk-habit__cell mk-habit__cell--{c}"></i>' for c in cells)
    days = "".join(f"<span>{d}</span>" for d in ("S", "T", "Q", "Q", "S", "S", "D"))
    body = f"""<div class="mk-habit">
          <div class="mk-habit__head"><strong>{streak} dias</strong><span>meta {target}</span></div>
          <div class="mk-habit__days">{days}</div>
          <div class="mk-habit__grid">{grid}</div>
        </div>"""
    extras = _palette_block(rng, theme) + _stat_card(rng)
    css = """
      .mk-habit { display: grid; gap: 10px; }
      .mk-habit__head { display: flex; justify-content: space-between; align-items: baseline; }
      .mk-habit__head strong { font: 700 1.4rem/1 var(--font-heading); }
      .mk-habit__head span { color: var(--muted); font-size: 0.82rem; }
      .mk-habit__days, .mk-habit__grid { display: grid; grid-template-columns: repeat(7, 1fr); gap: 6px; }
      .mk-habit__days span { text-align: center; font-size: 0.7rem; color: var(--muted); }
      .mk-habit__cell { aspect-ratio: 1; border-radius: 6px; background: var(--surface-soft); }
      .mk-habit__cell--mid { background: var(--accent-soft); }
      .mk-habit__cell--strong { background: var(--accent); }""" + PALETTE_CSS + STAT_CSS
    return Mockup(
        id="habit",
        signature=f"habit:{streak}:{target}:{'-'.join(cells[:6])}",
        html=_frame("habit", "Sequência atual", body, extras),
        css=css,
        parts=("streak", "grid", "palette", "stat"),
    )


def _list_state(roll: float) -> str:
    if roll > 0.66:
        return "complete"
    if roll > 0.30:
        return "progress"
    return "idle"


def build_list_mockup(rng: Rng, theme, idea) -> Mockup:
    """Task list. Draws per row: label, fill, state (5 rows)."""
    slug = (getattr(idea, "slug", "") or "").lower()
    tag = "Deploy" if "deploy" in slug else "Prioridades"
    rows = []
    for _ in range(5):
        label = random_pick(LIST_LABELS, rng) or LIST_LABELS[0]
        fill = random_int(rng, 30, 90)
        state = _list_state(rng())
        rows.append((label, fill, state))
    items = "".join(
        f"""<li class="mk-list__row mk-list__row--{state}">
            <i class="mk-list__check"></i>
            <span>{html.escape(label)}</span>
            <em><b style="width:{fill}%"></b></em>
          </li>"""
        for label, fill, state in rows
    )
    done = sum(1 for _, _, state in rows if state == "complete")
    body = f"""<div class="mk-list">
          <div class="mk-list__head"><span class="mk-list__tag">{tag}</span><span>{done}/5</span></div>
          <ul>{items}</ul>
        </div>"""
    extras = _palette_block(rng, theme) + _stat_card(rng)
    css = """
      .mk-list__head { display: flex; justify-content: space-between; margin-bottom: 10px; color: var(--muted); font-size: 0.8rem; }
      .mk-list__tag { padding: 3px 10px; border-radius: 99px; background: var(--accent-soft); color: var(--text); }
      .mk-list ul { list-style: none; margin: 0; padding: 0; display: grid; gap: 8px; }
      .mk-list__row {
        display: grid; grid-template-columns: 18px 1fr 72px; align-items: center; gap: 10px;
        padding: 8px 10px; border-radius: 10px; background: var(--panel); font-size: 0.86rem;
      }
      .mk-list__check { width: 16px; height: 16px; border-radius: 5px; border: 2px solid var(--border); }
      .mk-list__row--complete .mk-list__check { background: var(--success); border-color: var(--success); }
      .mk-list__row--complete span { text-decoration: line-through; color: var(--muted); }
      .mk-list__row--progress .mk-list__check { border-color: var(--accent); }
      .mk-list__row em { height: 5px; border-radius: 99px; background: var(--surface-soft); overflow: hidden; }
      .mk-list__row em b { display: block; height: 100%; background: var(--accent); }""" + PALETTE_CSS + STAT_CSS
    return Mockup(
        id="list",
        signature=f"list:{tag}:{rows[0][0]}|{rows[1][0]}:{rows[0][1]}|{rows[1][1]}",
        html=_frame("list", "Lista do dia", body, extras),
        css=css,
        parts=("header", "rows", "palette", "stat"),
    )


def format_brl(amount: float) -> str:
    """Format an amount as Brazilian reais, e.g. 1234.5 -> 'R$ 1.234,50'."""
    text = f"{amount:,.2f}"
    return "R$ " + text.replace(",", "_").replace(".", ",").replace("_", ".")


def build_budget_mockup(rng: Rng, theme, idea) -> Mockup:
    """Budget rows. Draws: fill and amount per category, then pie slice."""
    rows = []
    for category in BUDGET_CATEGORIES:
        fill = random_int(rng, 35, 90)
        amount = random_int(rng, 800, 3000)
        rows.append((category, fill, amount))
    pie_slice = random_int(rng, 28, 80)
    projected = sum(amount for _, _, amount in rows)
    items = "".join(
        f"""<li><span>{category}</span><em><b style="width:{fill}%"></b></em><strong>{format_brl(amount)}</strong></li>"""
        for category, fill, amount in rows
    )
    body = f"""<div class="mk-budget">
          <div class="mk-budget__top">
            <div class="mk-budget__pie" style="--slice:{pie_slice}"></div>
            <div><small>Projeção do mês</small><strong>{format_brl(projected)}</strong></div>
          </div>
          <ul>{items}</ul>
        </div>"""
    extras = _palette_block(rng, theme) + _stat_card(rng)
    css = """
      .mk-budget__top { display: flex; align-items: center; gap: 16px; margin-bottom: 12px; }
      .mk-budget__top small { display: block; color: var(--muted); font-size: 0.75rem; }
      .mk-budget__top strong { font: 700 1.3rem/1.2 var(--font-heading); }
      .mk-budget__pie {
        width: 72px; height: 72px; border-radius: 50%;
        background: conic-gradient(var(--highlight) calc(var(--slice) * 1%), var(--accent-soft) 0);
      }
      .mk-budget ul { list-style: none; margin: 0; padding: 0; display: grid; gap: 8px; }
      .mk-budget li { display: grid; grid-template-columns: 56px 1fr auto; gap: 10px; align-items: center; font-size: 0.84rem; }
      .mk-budget li em { height: 6px; border-radius: 99px; background: var(--surface-soft); overflow: hidden; }
      .mk-budget li em b { display: block; height: 100%; background: var(--accent); }""" + PALETTE_CSS + STAT_CSS
    return Mockup(
        id="budget",
        signature=f"budget:s{pie_slice}:{rows[0][1]}|{rows[1][1]}",
        html=_frame("budget", "Orçamento", body, extras),
        css=css,
        parts=("pie", "rows", "palette", "stat"),
    )


def build_flashcards_mockup(rng: Rng, theme, idea) -> Mockup:
    """Flashcard pair. Draws: word, hint."""
    word = random_pick(FLASHCARD_WORDS, rng) or FLASHCARD_WORDS[0]
    hint = random_pick(FLASHCARD_HINTS, rng) or FLASHCARD_HINTS[0]
    body = f"""<div class="mk-cards">
          <button type="button" class="mk-card mk-card--active" data-flip>
            <span class="mk-card__front">{html.escape(word)}</span>
            <span class="mk-card__back">{html.escape(hint)}</span>
          </button>
          <div class="mk-card mk-card--ghost"><span>dica: {html.escape(hint)}</span></div>
        </div>"""
    extras = _palette_block(rng, theme)
    css = """
      .mk-cards { position: relative; display: grid; gap: 12px; }
      .mk-card {
        display: grid; place-items: center; min-height: 140px; border-radius: 16px;
        border: 1px solid var(--border); background: var(--panel); color: var(--text);
        font: 700 1.8rem/1 var(--font-heading); cursor: pointer;
      }
      .mk-card--active { box-shadow: 0 0 0 3px var(--accent-soft); }
      .mk-card__back { display: none; font-size: 1rem; font-weight: 500; }
      .mk-card.is-flipped .mk-card__front { display: none; }
      .mk-card.is-flipped .mk-card__back { display: inline; }
      .mk-card--ghost { min-height: 48px; font-size: 0.85rem; font-weight: 500; color: var(--muted); cursor: default; }""" + PALETTE_CSS
    script = """
      document.querySelectorAll('[data-flip]').forEach((card) => {
        card.addEventListener('click', () => card.classList.toggle('is-flipped'));
      });"""
    return Mockup(
        id="flashcards",
        signature=f"flash:{word}:{hint}",
        html=_frame("flashcards", "Revisão rápida", body, extras),
        css=css,
        parts=("card", "hint", "palette"),
        script=script,
    )


def build_document_mockup(rng: Rng, theme, idea) -> Mockup:
    """Skeleton document. Draws: 5 heading widths, then 3 blocks of 4 line widths."""
    headings = [random_int(rng, 40, 95) for _ in range(5)]
    blocks = [[random_int(rng, 55, 100) for _ in range(4)] for _ in range(3)]
    heading_lines = "".join(f'<i class="mk-doc__h" style="width:{w}%"></i>' for w in headings)
    block_html = "".join(
        '<div class="mk-doc__block">' + "".join(f'<i style="width:{w}%"></i>' for w in block) + "</div>"
        for block in blocks
    )
    body = f"""<div class="mk-doc">
          <div class="mk-doc__toc">{heading_lines}</div>
          <div class="mk-doc__content">{block_html}</div>
        </div>"""
    extras = _palette_block(rng, theme)
    css = """
      .mk-doc { display: grid; grid-template-columns: 0.8fr 2fr; gap: 16px; }
      .mk-doc i { display: block; height: 8px; border-radius: 99px; background: var(--surface-soft); margin-bottom: 8px; }
      .mk-doc__h { background: var(--accent-soft) !important; height: 10px !important; }
      .mk-doc__block { padding: 10px 0; border-bottom: 1px dashed var(--border); }
      .mk-doc__block i:first-child { background: var(--highlight-soft); }""" + PALETTE_CSS
    return Mockup(
        id="document",
        signature=f"doc:{headings[0]}|{headings[1]}|{headings[2]}:{blocks[0][0]}|{blocks[1][0]}",
        html=_frame("document", "README.md", body, extras),
        css=css,
        parts=("toc", "blocks", "palette"),
    )


MockupBuilder = Callable[[Rng, object, object], Mockup]

# Ordered keyword table, first match wins.
MOCKUP_RULES: Sequence[Tuple[Tuple[str, ...], MockupBuilder]] = (
    (("timer", "pomodoro", "cronometro"), build_timer_mockup),
    (("habit", "streak"), build_habit_mockup),
    (("budget", "finance"), build_budget_mockup),
    (("flashcard", "card"), build_flashcards_mockup),
    (("readme", "document"), build_document_mockup),
    (("todo", "tarefas", "task", "checklist", "deploy"), build_list_mockup),
)

DEFAULT_MOCKUP_BUILDER: MockupBuilder = build_list_mockup


def _fold(text: str) -> str:
    """Lowercase and strip diacritics so 'Cronômetro' matches 'cronometro'."""
    normalized = unicodedata.normalize("NFKD", text or "")
    return "".join(c for c in normalized if not unicodedata.combining(c)).lower()


def resolve_mockup_builder(idea) -> MockupBuilder:
    haystack = _fold(f"{getattr(idea, 'slug', '')} {getattr(idea, 'title', '')}")
    for keywords, builder in MOCKUP_RULES:
        if any(keyword in haystack for keyword in keywords):
            return builder
    return DEFAULT_MOCKUP_BUILDER


def build_app_mockup(rng: Rng, theme, idea) -> Mockup:
    """Build the mockup whose archetype matches the idea's slug and title."""
    return resolve_mockup_builder(idea)(rng, theme, idea)
