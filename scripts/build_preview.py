#!/usr/bin/env python3
"""
Preview Builder - Renders the daily preview as one self-contained HTML page.
Features: theme tokens as CSS custom properties, layout/pattern overrides,
mockup stage, pin panel with weights, permalink and downloads (all client-side).
"""

import html
import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from content_pools import DEFAULT_WEIGHTS

BACK_LINK = "../../../index.html"

# Pin panel slider bounds (percent)
WEIGHT_MIN = 5
WEIGHT_MAX = 70


def json_for_script(data) -> str:
    """JSON safe to embed inside a <script> element."""
    return (
        json.dumps(data, ensure_ascii=False)
        .replace("&", "\\u0026")
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
    )


@dataclass
class ShellContext:
    """Everything the shell needs to render one day's preview."""
    key: str
    idea: object
    theme: object
    features: List[str]
    motto: str
    pattern_css: str
    profile: object
    typography: Dict[str, str]
    layout_id: str
    hero_mode: str
    layout_css: str
    mockup: object
    weights: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))


class PreviewBuilder:
    """Builds the final preview HTML."""

    def __init__(self, context: ShellContext):
        self.ctx = context
        self.theme = context.theme
        self.idea = context.idea

    def build(self) -> str:
        """Build the complete HTML page."""
        title = html.escape(self.idea.title or "Projeto do Dia")
        return f"""<!doctype html>
<html lang="pt-BR">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <meta name="theme-color" content="{self.theme.base}" />
    <title>{title}</title>
    {self._build_styles()}
  </head>
  <body>
    <div class="backdrop" aria-hidden="true"></div>
    <a class="back" href="{BACK_LINK}">Voltar</a>
    <div class="page layout-{self.ctx.layout_id}" data-layout="{self.ctx.layout_id}" data-hero="{self.ctx.hero_mode}">
      {self._build_hero()}
      {self._build_stage()}
      {self._build_features()}
      {self._build_pin_panel()}
    </div>
    {self._build_footer()}
    {self._build_scripts()}
  </body>
</html>
"""

    def _build_styles(self) -> str:
        """Build all CSS: tokens, base shell, hero modes, layout override, mockup."""
        t = self.theme
        body_font = self.ctx.typography.get("body") or "system-ui, sans-serif"
        heading_font = self.ctx.typography.get("heading") or "inherit"

        return f"""<style>
      :root {{
        --base: {t.base};
        --surface: {t.surface};
        --panel: {t.panel};
        --surface-soft: {t.surface_soft};
        --text: {t.text};
        --muted: {t.muted};
        --border: {t.border};
        --accent: {t.accent};
        --accent-soft: {t.accent_soft};
        --accent-strong: {t.accent_strong};
        --highlight: {t.highlight};
        --highlight-soft: {t.highlight_soft};
        --shadow: {t.shadow};
        --success: {t.success};
        --warning: {t.warning};
        --font-body: {body_font};
        --font-heading: {heading_font};
        --radius: 20px;
      }}
      *, *::before, *::after {{ box-sizing: border-box; }}
      body {{
        margin: 0;
        min-height: 100vh;
        color: var(--text);
        background: var(--base);
        font: 15px/1.6 var(--font-body);
      }}
      .backdrop {{
        position: fixed;
        inset: 0;
        z-index: -1;
        background: {self.ctx.pattern_css};
      }}
      a.back {{
        position: fixed;
        top: 20px;
        left: 24px;
        color: var(--text);
        text-decoration: none;
        font-size: 0.78rem;
        letter-spacing: 0.08em;
        text-transform: uppercase;
      }}
      a.back::before {{ content: '← '; }}
      .page {{
        display: grid;
        gap: 22px;
        max-width: 1180px;
        margin: 0 auto;
        padding: 72px 24px 40px;
        grid-template-columns: minmax(0, 1fr);
        grid-template-areas: "hero" "stage" "features" "pin";
      }}
      .hero {{ grid-area: hero; position: relative; display: flex; flex-direction: column; gap: 14px; overflow: hidden; }}
      .stage {{ grid-area: stage; }}
      .features {{ grid-area: features; }}
      .pin {{ grid-area: pin; }}
      .card {{
        background: var(--surface);
        border: 1px solid var(--border);
        border-radius: var(--radius);
        box-shadow: var(--shadow);
        padding: 24px;
      }}
      .eyebrow {{
        text-transform: uppercase;
        letter-spacing: 0.18em;
        font-size: 0.72rem;
        color: var(--muted);
      }}
      .hero h1 {{
        margin: 0;
        font-family: var(--font-heading);
        font-size: clamp(1.8rem, 4.4vw, 2.8rem);
        line-height: 1.1;
      }}
      .hero__why {{ margin: 0; max-width: 620px; color: var(--muted); }}
      .hero__tags {{ display: flex; flex-wrap: wrap; gap: 10px; align-items: center; }}
      .tag, .chip {{
        padding: 5px 12px;
        border-radius: 999px;
        font-size: 0.76rem;
        letter-spacing: 0.05em;
      }}
      .tag {{ border: 1px solid var(--border); text-transform: uppercase; }}
      .chip {{ background: var(--accent-soft); font-style: italic; }}
      .shape {{ position: absolute; border-radius: 50%; pointer-events: none; opacity: 0.7; }}
      .shape--a {{ width: 180px; height: 180px; right: -60px; top: -70px; background: var(--accent-soft); }}
      .shape--b {{ width: 90px; height: 90px; right: 80px; bottom: -40px; background: var(--highlight-soft); }}
      .shape--c {{ width: 14px; height: 14px; right: 48px; top: 36px; background: var(--highlight); }}
      .btn {{
        padding: 8px 14px;
        border-radius: 999px;
        border: 1px solid var(--border);
        background: transparent;
        color: var(--text);
        font: inherit;
        font-size: 0.82rem;
        cursor: pointer;
      }}
      .btn:hover, .btn:focus-visible {{ border-color: var(--accent); outline: none; }}
      .btn--solid {{ background: var(--accent); border-color: var(--accent); color: var(--base); }}
      .mk {{ border-radius: 16px; background: var(--surface); border: 1px solid var(--border); overflow: hidden; }}
      .mk__bar {{
        display: flex; align-items: center; gap: 6px; padding: 10px 14px;
        background: var(--panel); font-size: 0.74rem; color: var(--muted);
      }}
      .mk__bar i {{ width: 9px; height: 9px; border-radius: 50%; background: var(--surface-soft); }}
      .mk__bar span {{ margin-left: 8px; }}
      .mk__body {{ padding: 18px; }}
      .features h2, .pin h2, .stage h2 {{ margin: 0 0 14px; font: 600 1rem/1.3 var(--font-heading); }}
      .features ul {{ margin: 0; padding: 0; list-style: none; display: grid; gap: 10px; }}
      .features li {{ padding: 10px 14px; border-radius: 12px; background: var(--panel); }}
      .features li::before {{ content: '◆ '; color: var(--accent); }}
      .pin__row {{ display: grid; grid-template-columns: 80px 1fr 48px; gap: 10px; align-items: center; font-size: 0.84rem; }}
      .pin__row input[type=range] {{ accent-color: var(--accent); }}
      .pin__row output {{ text-align: right; color: var(--muted); }}
      .pin__link {{ display: flex; gap: 8px; margin-top: 14px; }}
      .pin__link input {{
        flex: 1; min-width: 0; padding: 8px 10px; border-radius: 10px;
        border: 1px solid var(--border); background: var(--panel); color: var(--text); font-size: 0.78rem;
      }}
      .pin__actions {{ display: flex; flex-wrap: wrap; gap: 8px; margin-top: 12px; }}
      .tech {{
        max-width: 1180px;
        margin: 0 auto;
        padding: 0 24px 40px;
        text-align: right;
        font-size: 0.76rem;
        color: var(--muted);
      }}
      [data-hero="banner"] .hero {{ background: linear-gradient(120deg, var(--accent-soft), var(--highlight-soft)); }}
      [data-hero="split"] .hero__tags {{ justify-content: flex-start; }}
      [data-hero="compact"] .hero {{ padding: 18px 22px; }}
      [data-hero="poster"] .hero {{ justify-content: flex-end; min-height: 360px; }}
      [data-hero="stacked"] .shape--a {{ left: -60px; right: auto; }}
      {self.ctx.layout_css}
      {self.ctx.mockup.css}
      @media (max-width: 760px) {{
        a.back {{ position: static; display: inline-block; margin: 16px 24px 0; }}
        .page {{ grid-template-columns: minmax(0, 1fr) !important; grid-template-areas: "hero" "stage" "features" "pin" !important; padding-top: 24px; }}
      }}
      @media (prefers-reduced-motion: reduce) {{
        *, *::before, *::after {{ transition-duration: 0.01ms !important; animation-duration: 0.01ms !important; }}
      }}
    </style>"""

    def _build_hero(self) -> str:
        """Build the hero section."""
        title = html.escape(self.idea.title or "Projeto do Dia")
        domain = html.escape(self.idea.domain or "Domínio")
        why = html.escape(self.idea.why or "")
        motto = html.escape(self.ctx.motto)
        today = html.escape(self.ctx.key)

        return f"""<header class="hero card">
        <span class="shape shape--a"></span>
        <span class="shape shape--b"></span>
        <span class="shape shape--c"></span>
        <div class="eyebrow">Projeto do dia · {today}</div>
        <h1 id="preview-title">{title}</h1>
        <p class="hero__why">{why}</p>
        <div class="hero__tags">
          <span class="tag">{domain}</span>
          <span class="chip">{motto}</span>
          <button class="btn" id="dl-tech" type="button">Baixar ficha técnica</button>
        </div>
      </header>"""

    def _build_stage(self) -> str:
        """Build the preview stage holding the mockup."""
        return f"""<section class="stage card" aria-label="Prévia do app">
        <h2>Prévia</h2>
        {self.ctx.mockup.html}
      </section>"""

    def _build_features(self) -> str:
        """Build the feature list."""
        items = "\n".join(
            f"          <li>{html.escape(feature)}</li>" for feature in self.ctx.features
        )
        return f"""<section class="features card">
        <h2>Features essenciais</h2>
        <ul>
{items}
        </ul>
      </section>"""

    def _build_pin_panel(self) -> str:
        """Build the pin panel: weight sliders, permalink and exports."""
        labels = {"theme": "Tema", "layout": "Layout", "pattern": "Padrão"}
        rows = []
        for name, label in labels.items():
            percent = round(self.ctx.weights.get(name, 0) * 100)
            rows.append(
                f"""          <label class="pin__row">
            <span>{label}</span>
            <input type="range" min="{WEIGHT_MIN}" max="{WEIGHT_MAX}" value="{percent}" data-weight="{name}" />
            <output data-weight-out="{name}">{percent}%</output>
          </label>"""
            )
        sliders = "\n".join(rows)

        return f"""<aside class="pin card" aria-label="Fixar variante">
        <h2>Fixar variante</h2>
{sliders}
        <div class="pin__link">
          <input id="pin-link" type="text" readonly aria-label="Permalink" />
          <button class="btn btn--solid" id="pin-copy" type="button">Copiar</button>
        </div>
        <div class="pin__actions">
          <button class="btn" id="pin-export" type="button">Exportar JSON</button>
        </div>
      </aside>"""

    def _build_footer(self) -> str:
        today = html.escape(self.ctx.key)
        signature = html.escape(getattr(self.ctx.profile, "signature", ""))
        return f"""<div class="tech">Preview diário · {today} · gerado localmente · <code>{signature}</code></div>"""

    def _page_data(self) -> Dict:
        idea = self.idea
        return {
            "key": self.ctx.key,
            "idea": {
                "title": idea.title,
                "domain": idea.domain,
                "why": idea.why,
                "slug": idea.slug or "preview",
            },
            "features": list(self.ctx.features),
            "profile": self.ctx.profile.to_dict(),
            "weightBounds": [WEIGHT_MIN, WEIGHT_MAX],
        }

    def _build_scripts(self) -> str:
        """Build the inline data block and the client-side behavior."""
        mockup_script = (self.ctx.mockup.script or "").strip()
        return f"""<script type="application/json" id="preview-data">{json_for_script(self._page_data())}</script>
    <script>
      {mockup_script}
      {PAGE_SCRIPT}
    </script>"""


PAGE_SCRIPT = """
      (function () {
        const data = JSON.parse(document.getElementById('preview-data').textContent);
        const profile = data.profile;
        const [minWeight, maxWeight] = data.weightBounds;

        function download(name, text, type) {
          const blob = new Blob([text], { type });
          const url = URL.createObjectURL(blob);
          const a = document.createElement('a');
          a.href = url;
          a.download = name;
          document.body.appendChild(a);
          a.click();
          requestAnimationFrame(() => {
            URL.revokeObjectURL(url);
            a.remove();
          });
        }

        const sliders = Array.from(document.querySelectorAll('[data-weight]'));
        const linkInput = document.getElementById('pin-link');

        function currentWeights() {
          const raw = {};
          sliders.forEach((slider) => {
            const value = Math.min(maxWeight, Math.max(minWeight, Number(slider.value) || minWeight));
            slider.value = value;
            raw[slider.dataset.weight] = value;
          });
          const total = Object.values(raw).reduce((sum, v) => sum + v, 0) || 1;
          const weights = {};
          Object.keys(raw).forEach((name) => {
            weights[name] = Number((raw[name] / total).toFixed(4));
          });
          return weights;
        }

        function permalink() {
          const url = new URL(window.location.href);
          url.search = '';
          url.hash = '';
          url.searchParams.set('seed', profile.seed);
          url.searchParams.set('themeId', profile.themeId);
          url.searchParams.set('layoutId', profile.layoutId);
          url.searchParams.set('patternId', profile.patternId);
          url.searchParams.set('mockupId', profile.mockupId);
          return url.toString();
        }

        function refresh() {
          const weights = currentWeights();
          Object.keys(weights).forEach((name) => {
            const out = document.querySelector('[data-weight-out="' + name + '"]');
            if (out) out.textContent = Math.round(weights[name] * 100) + '%';
          });
          if (linkInput) linkInput.value = permalink();
          return weights;
        }

        sliders.forEach((slider) => slider.addEventListener('change', refresh));
        sliders.forEach((slider) => slider.addEventListener('input', refresh));
        refresh();

        const copyBtn = document.getElementById('pin-copy');
        if (copyBtn) {
          copyBtn.addEventListener('click', () => {
            const link = permalink();
            if (navigator.clipboard && navigator.clipboard.writeText) {
              navigator.clipboard.writeText(link).then(() => { copyBtn.textContent = 'Copiado'; });
            } else if (linkInput) {
              linkInput.select();
              document.execCommand('copy');
              copyBtn.textContent = 'Copiado';
            }
          });
        }

        const exportBtn = document.getElementById('pin-export');
        if (exportBtn) {
          exportBtn.addEventListener('click', () => {
            const payload = Object.assign({}, profile, { weights: refresh(), permalink: permalink() });
            download('variante-' + data.key + '.json', JSON.stringify(payload, null, 2), 'application/json');
          });
        }

        const techBtn = document.getElementById('dl-tech');
        if (techBtn) {
          techBtn.addEventListener('click', () => {
            const lines = [
              '# Ficha Técnica',
              'Título: ' + data.idea.title,
              'Domínio: ' + data.idea.domain,
              'Dia UTC: ' + data.key,
              '',
              'Resumo:',
              data.idea.why,
              '',
              'Variante:',
              'Tema: ' + profile.themeId + ' (' + profile.accent + ')',
              'Layout: ' + profile.layoutId + ' · hero ' + profile.heroMode,
              'Padrão: ' + profile.patternId,
              'Mockup: ' + profile.mockupId,
              'Assinatura: ' + profile.signature,
              '',
              'Features essenciais:'
            ];
            data.features.forEach((feat) => lines.push('- ' + feat));
            download('ficha-tecnica-' + data.idea.slug + '.txt', lines.join('\\n'), 'text/plain;charset=utf-8');
          });
        }
      }());"""


def render_preview_shell(
    key: str,
    idea,
    theme,
    features: List[str],
    motto: str,
    pattern_css: str,
    profile,
    typography: Dict[str, str],
    layout_id: str,
    hero_mode: str,
    layout_css: str,
    mockup,
    weights: Optional[Dict[str, float]] = None,
) -> str:
    """Render the complete preview document."""
    context = ShellContext(
        key=key,
        idea=idea,
        theme=theme,
        features=list(features),
        motto=motto,
        pattern_css=pattern_css,
        profile=profile,
        typography=typography,
        layout_id=layout_id,
        hero_mode=hero_mode,
        layout_css=layout_css,
        mockup=mockup,
        weights=dict(weights or getattr(profile, "weights", None) or DEFAULT_WEIGHTS),
    )
    return PreviewBuilder(context).build()
