"""Server-side rendering of the dashboard page and its live regions."""

from __future__ import annotations

from datetime import date
from typing import Any, Sequence

from jinja2 import DictLoader, Environment, select_autoescape
from markupsafe import Markup

MAX_MOOD_LEVEL = 10
CHART_WIDTH = 300
CHART_HEIGHT = 170
CHART_PADDING = 16
DOWNLOAD_FILENAME = "aura-inspira.png"
REGION_NAMES = ("refresh", "hero", "image", "word", "tip", "tasks", "mood")


def mood_chart_points(series: Sequence[dict[str, Any]], width: int = CHART_WIDTH, height: int = CHART_HEIGHT) -> list[tuple[float, float]]:
    """Map mood levels (0-10) onto SVG coordinates, left to right."""
    if not series:
        return []
    inner_w = width - 2 * CHART_PADDING
    inner_h = height - 2 * CHART_PADDING
    points = []
    for i, entry in enumerate(series):
        if len(series) == 1:
            x = width / 2
        else:
            x = CHART_PADDING + i * inner_w / (len(series) - 1)
        level = min(max(entry["level"], 0), MAX_MOOD_LEVEL)
        y = height - CHART_PADDING - level * inner_h / MAX_MOOD_LEVEL
        points.append((round(x, 1), round(y, 1)))
    return points


MACROS_TEMPLATE = r"""
{%- macro card(title=None, icon=None, class_name="") -%}
<div class="card {{ class_name }}">
  {%- if title %}
  <div class="card-header">
    <span class="card-icon">{{ icon or "" }}</span>
    <h3>{{ title }}</h3>
  </div>
  {%- endif %}
  {{ caller() }}
</div>
{%- endmacro %}
"""

REFRESH_TEMPLATE = r"""<span class="spin-icon{% if state.essence_loading %} spinning{% endif %}">&#10227;</span><span>Novo Bão Dia</span>"""

HERO_TEMPLATE = r"""{% from "macros.html" import card %}
{% call card(class_name="hero") %}
  {% if state.essence_loading %}
  <div class="skeleton">
    <div class="bar bar-lg"></div>
    <div class="bar bar-md"></div>
    <div class="bar bar-block"></div>
  </div>
  {% elif state.essence %}
  <div class="hero-head">
    <h2>{{ state.essence.greeting }}</h2>
    <span class="sparkle">&#10024;</span>
  </div>
  <p class="quote">"{{ state.essence.quote }}"</p>
  <div class="pill">&#128205; {{ "Localização Detectada" if state.location else "Onde quer que você esteja" }}</div>
  {% endif %}
{% endcall %}
"""

IMAGE_TEMPLATE = r"""{% if state.image_loading %}
<div class="painting">
  <div class="spinner"></div>
  <p>Pintando sua manhã...</p>
</div>
{% elif state.generated_image %}
<div class="artwork">
  <img src="{{ state.generated_image }}" alt="Arte Gerada">
  <a class="download" href="/api/image/download" download="{{ download_filename }}" title="Baixar">&#11015;</a>
</div>
{% else %}
<div class="placeholder">
  <div class="placeholder-icon">&#128444;</div>
  <p>Gere uma imagem para decorar seu início de dia.</p>
</div>
{% endif %}
"""

WORD_TEMPLATE = r"""{% from "macros.html" import card %}
{% call card("Palavra do Dia", "📖") %}
  {% if state.essence %}
  <h4 class="word">{{ state.essence.wordOfDay.word }}</h4>
  <p class="muted">{{ state.essence.wordOfDay.meaning }}</p>
  {% endif %}
{% endcall %}
"""

TIP_TEMPLATE = r"""{% from "macros.html" import card %}
{% call card("Dica de Bem-estar", "✨") %}
  {% if state.essence %}<p>{{ state.essence.tip }}</p>{% endif %}
{% endcall %}
"""

TASKS_TEMPLATE = r"""{% for task in state.tasks %}
<li class="task{% if task.completed %} done{% endif %}" data-id="{{ task.id }}">
  <button class="check" data-action="toggle" data-id="{{ task.id }}" title="Concluir">{% if task.completed %}&#10003;{% endif %}</button>
  <span class="task-text">{{ task.text }}</span>
  <button class="delete" data-action="delete" data-id="{{ task.id }}" title="Remover">&#128465;</button>
</li>
{% endfor %}
"""

MOOD_TEMPLATE = r"""{% from "macros.html" import card %}
{% call card("Energia Semanal", "🙂") %}
<svg class="mood-chart" viewBox="0 0 {{ width }} {{ height + 30 }}" role="img" aria-label="Energia semanal">
  <polyline points="{% for x, y in points %}{{ x }},{{ y }} {% endfor %}" fill="none" stroke="#f97316" stroke-width="3" stroke-linejoin="round"/>
  {% for dot in dots %}
  <circle cx="{{ dot.x }}" cy="{{ dot.y }}" r="4" fill="#f97316"><title>{{ dot.day }}: {{ dot.level }}</title></circle>
  <text x="{{ dot.x }}" y="{{ height + 22 }}" text-anchor="middle">{{ dot.day }}</text>
  {% endfor %}
</svg>
{% endcall %}
"""

PAGE_TEMPLATE = r"""{% from "macros.html" import card %}<!DOCTYPE html>
<html lang="pt-BR">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Aura - Seu despertar inteligente</title>
<style>
  *, *::before, *::after { box-sizing: border-box; margin: 0; padding: 0; }

  body {
    font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
    background: #fffaf3;
    color: #1f2937;
  }

  .container { max-width: 1152px; margin: 0 auto; padding: 48px 16px; }

  header {
    display: flex;
    align-items: center;
    justify-content: space-between;
    gap: 16px;
    margin-bottom: 40px;
    flex-wrap: wrap;
  }

  .brand { display: flex; align-items: center; gap: 12px; }
  .brand-icon {
    background: linear-gradient(135deg, #fb923c, #fde047);
    border-radius: 16px;
    padding: 10px 14px;
    font-size: 1.8rem;
    color: #fff;
    box-shadow: 0 10px 20px #fed7aa;
  }
  .brand h1 { font-size: 1.9rem; line-height: 1; }
  .brand p { color: #ea580c; font-weight: 500; }

  button { font-family: inherit; cursor: pointer; }

  .btn-outline {
    display: flex;
    align-items: center;
    gap: 8px;
    padding: 8px 16px;
    background: #fff;
    border: 1px solid #ffedd5;
    border-radius: 12px;
    color: #ea580c;
    font-size: 0.95rem;
    transition: background 0.15s;
  }
  .btn-outline:hover { background: #fff7ed; }

  .btn-primary {
    display: flex;
    align-items: center;
    justify-content: center;
    gap: 8px;
    padding: 8px 24px;
    background: #f97316;
    color: #fff;
    border: none;
    border-radius: 12px;
    transition: background 0.15s;
  }
  .btn-primary:hover { background: #ea580c; }
  .btn-primary:disabled { background: #d1d5db; cursor: default; }

  .spin-icon { display: inline-block; }
  .spinning { animation: spin 1s linear infinite; }
  @keyframes spin { to { transform: rotate(360deg); } }
  @keyframes pulse { 50% { opacity: 0.5; } }

  main { display: grid; grid-template-columns: 2fr 1fr; gap: 24px; }
  .column { display: flex; flex-direction: column; gap: 24px; }
  .pair { display: grid; grid-template-columns: 1fr 1fr; gap: 24px; }
  @media (max-width: 900px) {
    main, .pair { grid-template-columns: 1fr; }
  }

  .card {
    background: rgba(255, 255, 255, 0.8);
    border: 1px solid #ffedd5;
    border-radius: 16px;
    padding: 24px;
    box-shadow: 0 1px 2px rgba(0, 0, 0, 0.05);
    transition: box-shadow 0.2s;
  }
  .card:hover { box-shadow: 0 4px 8px rgba(0, 0, 0, 0.08); }
  .card-header { display: flex; align-items: center; gap: 8px; margin-bottom: 16px; }
  .card-icon { padding: 6px 8px; background: #fff7ed; border-radius: 8px; color: #ea580c; }
  .card-header h3 { font-size: 1.1rem; font-weight: 600; color: #1f2937; }

  .hero { background: linear-gradient(135deg, #fff, #fff7ed); }
  .hero-head { display: flex; justify-content: space-between; align-items: flex-start; margin-bottom: 16px; }
  .hero-head h2 { font-size: 2.2rem; font-weight: 700; letter-spacing: -0.5px; }
  .sparkle { font-size: 1.8rem; }
  .quote { font-size: 1.2rem; color: #4b5563; font-style: italic; margin-bottom: 24px; line-height: 1.6; }
  .pill {
    display: inline-flex;
    gap: 6px;
    padding: 6px 16px;
    border-radius: 999px;
    border: 1px solid #ffedd5;
    background: rgba(255, 255, 255, 0.6);
    font-size: 0.85rem;
    color: #374151;
  }

  .skeleton { display: flex; flex-direction: column; gap: 16px; animation: pulse 2s infinite; }
  .bar { background: #ffedd5; border-radius: 6px; }
  .bar-lg { height: 32px; width: 75%; }
  .bar-md { height: 16px; width: 50%; background: #fff7ed; }
  .bar-block { height: 80px; width: 100%; background: #fff7ed; }

  .row { display: flex; gap: 12px; }
  input[type=text] {
    flex: 1;
    background: #f9fafb;
    border: 1px solid #f3f4f6;
    border-radius: 12px;
    padding: 8px 16px;
    font-size: 0.95rem;
    font-family: inherit;
    outline: none;
    transition: box-shadow 0.15s;
  }
  input[type=text]:focus { box-shadow: 0 0 0 2px #fed7aa; }

  .preview {
    margin-top: 16px;
    min-height: 300px;
    background: #f3f4f6;
    border: 1px dashed #e5e7eb;
    border-radius: 16px;
    overflow: hidden;
    display: flex;
    align-items: center;
    justify-content: center;
  }
  .painting { display: flex; flex-direction: column; align-items: center; gap: 8px; color: #6b7280; font-size: 0.9rem; }
  .spinner {
    width: 48px; height: 48px;
    border: 4px solid #fed7aa;
    border-top-color: #f97316;
    border-radius: 50%;
    animation: spin 0.8s linear infinite;
  }
  .artwork { position: relative; width: 100%; }
  .artwork img { width: 100%; display: block; }
  .download {
    position: absolute;
    right: 16px; bottom: 16px;
    background: #fff;
    color: #1f2937;
    border-radius: 50%;
    width: 44px; height: 44px;
    display: flex; align-items: center; justify-content: center;
    text-decoration: none;
    font-size: 1.3rem;
    opacity: 0;
    transition: opacity 0.2s;
  }
  .artwork:hover .download { opacity: 1; }
  .placeholder { text-align: center; padding: 32px; color: #9ca3af; }
  .placeholder-icon { font-size: 2.5rem; margin-bottom: 8px; }

  .word { font-size: 1.5rem; font-weight: 700; color: #ea580c; margin-bottom: 4px; }
  .muted { color: #4b5563; }

  .task-form { margin-bottom: 24px; }
  .task-form button { padding: 8px 14px; font-size: 1.2rem; }
  .task-list { list-style: none; display: flex; flex-direction: column; gap: 12px; }
  .task {
    display: flex;
    align-items: center;
    gap: 12px;
    padding: 12px;
    background: rgba(249, 250, 251, 0.5);
    border: 1px solid transparent;
    border-radius: 12px;
  }
  .task:hover { border-color: #ffedd5; }
  .check {
    width: 24px; height: 24px;
    border-radius: 50%;
    border: 2px solid #d1d5db;
    background: none;
    color: #fff;
    font-size: 0.8rem;
  }
  .task.done .check { background: #f97316; border-color: #f97316; }
  .task-text { flex: 1; color: #374151; }
  .task.done .task-text { text-decoration: line-through; color: #9ca3af; }
  .delete { background: none; border: none; opacity: 0; transition: opacity 0.15s; }
  .task:hover .delete { opacity: 1; }

  .mood-chart { width: 100%; height: 200px; }
  .mood-chart text { font-size: 11px; fill: #6b7280; }

  .insight { background: #ea580c; color: #fff; border-color: #ea580c; }
  .insight-label { font-size: 0.72rem; font-weight: 600; text-transform: uppercase; opacity: 0.8; margin-bottom: 8px; }

  .status { min-height: 1.2em; margin-top: 12px; color: #dc2626; font-size: 0.85rem; }

  footer { margin-top: 64px; text-align: center; color: #9ca3af; font-size: 0.85rem; }
</style>
</head>
<body>
<div class="container">

  <header>
    <div class="brand">
      <div class="brand-icon">&#9728;</div>
      <div>
        <h1>Aura</h1>
        <p>Seu despertar inteligente</p>
      </div>
    </div>
    <button id="refreshBtn" class="btn-outline" data-region="refresh" onclick="refreshEssence()">{{ regions.refresh }}</button>
  </header>

  <main>
    <div class="column">
      <div data-region="hero">{{ regions.hero }}</div>

      {% call card("Inspiração Visual", "🎨") %}
        <div class="row">
          <input id="imagePrompt" type="text" value="{{ state.image_prompt }}" placeholder="Descreva a arte que deseja criar...">
          <button id="imageBtn" class="btn-primary" onclick="generateImage()"{% if state.image_loading %} disabled{% endif %}>&#128444; <span>Criar Arte</span></button>
        </div>
        <div class="preview" data-region="image">{{ regions.image }}</div>
      {% endcall %}

      <div class="pair">
        <div data-region="word">{{ regions.word }}</div>
        <div data-region="tip">{{ regions.tip }}</div>
      </div>
    </div>

    <div class="column">
      {% call card("Tarefas da Manhã", "✔") %}
        <form id="taskForm" class="row task-form">
          <input id="taskInput" type="text" placeholder="O que bão vamos fazer?">
          <button type="submit" class="btn-primary" title="Adicionar">+</button>
        </form>
        <ul id="taskList" class="task-list" data-region="tasks">{{ regions.tasks }}</ul>
      {% endcall %}

      <div data-region="mood">{{ regions.mood }}</div>

      {% call card(class_name="insight") %}
        <div class="insight-label">&#9749; Insight</div>
        <p>"Cada manhã é uma tela em branco pronta para ser pintada."</p>
      {% endcall %}
    </div>
  </main>

  <div id="status" class="status"></div>

  <footer>
    <p>&copy; {{ year }} Aura - Elevando seu despertar.</p>
  </footer>
</div>

<script>
  const statusEl = document.getElementById('status');
  const imagePromptEl = document.getElementById('imagePrompt');
  const imageBtn = document.getElementById('imageBtn');
  const taskForm = document.getElementById('taskForm');
  const taskInput = document.getElementById('taskInput');
  const taskList = document.getElementById('taskList');

  function applyRegions(regions) {
    for (const [name, html] of Object.entries(regions || {})) {
      const el = document.querySelector('[data-region="' + name + '"]');
      if (el) el.innerHTML = html;
    }
  }

  // ── API call helper ──
  async function callApi(url, method, body) {
    statusEl.textContent = '';
    try {
      const res = await fetch(url, {
        method,
        headers: { 'Content-Type': 'application/json' },
        body: body === undefined ? undefined : JSON.stringify(body),
      });
      const data = await res.json();
      if (!res.ok || data.error) throw new Error(data.error || 'HTTP ' + res.status);
      applyRegions(data.regions);
      return data;
    } catch (e) {
      statusEl.textContent = e.message;
      await restoreState();
      return null;
    }
  }

  // Drops optimistic spinners after a failed action.
  async function restoreState() {
    try {
      const res = await fetch('/api/state');
      if (res.ok) applyRegions((await res.json()).regions);
    } catch (e) {
      document.querySelectorAll('#refreshBtn .spinning').forEach(el => el.classList.remove('spinning'));
    }
  }

  function startSession(location) {
    return callApi('/api/session/start', 'POST', location ? { location } : {});
  }

  function refreshEssence() {
    const icon = document.querySelector('#refreshBtn .spin-icon');
    if (icon) icon.classList.add('spinning');
    return callApi('/api/essence/refresh', 'POST', {});
  }

  async function generateImage() {
    const prompt = imagePromptEl.value;
    if (!prompt.trim()) return;
    imageBtn.disabled = true;
    applyRegions({ image: '<div class="painting"><div class="spinner"></div><p>Pintando sua manhã...</p></div>' });
    try {
      await callApi('/api/image', 'POST', { prompt });
    } finally {
      imageBtn.disabled = false;
    }
  }

  taskForm.addEventListener('submit', async (e) => {
    e.preventDefault();
    const text = taskInput.value;
    if (!text.trim()) return;
    const data = await callApi('/api/tasks', 'POST', { text });
    if (data) taskInput.value = '';
  });

  taskList.addEventListener('click', (e) => {
    const btn = e.target.closest('button[data-action]');
    if (!btn) return;
    const id = encodeURIComponent(btn.dataset.id);
    if (btn.dataset.action === 'toggle') {
      callApi('/api/tasks/' + id + '/toggle', 'POST', {});
    } else if (btn.dataset.action === 'delete') {
      callApi('/api/tasks/' + id, 'DELETE');
    }
  });

  // Geolocation is best-effort: either branch starts the session.
  if (navigator.geolocation) {
    navigator.geolocation.getCurrentPosition(
      (pos) => startSession(pos.coords.latitude + ', ' + pos.coords.longitude),
      () => startSession(),
    );
  } else {
    startSession();
  }
</script>
</body>
</html>
"""

_env = Environment(
    loader=DictLoader({
        "macros.html": MACROS_TEMPLATE,
        "refresh.html": REFRESH_TEMPLATE,
        "hero.html": HERO_TEMPLATE,
        "image.html": IMAGE_TEMPLATE,
        "word.html": WORD_TEMPLATE,
        "tip.html": TIP_TEMPLATE,
        "tasks.html": TASKS_TEMPLATE,
        "mood.html": MOOD_TEMPLATE,
        "page.html": PAGE_TEMPLATE,
    }),
    autoescape=select_autoescape(default_for_string=True, default=True),
)


def render_region(name: str, state: dict[str, Any]) -> str:
    if name not in REGION_NAMES:
        raise KeyError(f"Unknown region: {name}")
    context = {"state": state, "download_filename": DOWNLOAD_FILENAME}
    if name == "mood":
        points = mood_chart_points(state["mood"])
        context.update(
            points=points,
            dots=[
                {"x": x, "y": y, "day": entry["day"], "level": entry["level"]}
                for (x, y), entry in zip(points, state["mood"])
            ],
            width=CHART_WIDTH,
            height=CHART_HEIGHT,
        )
    return _env.get_template(f"{name}.html").render(**context).strip()


def render_regions(state: dict[str, Any]) -> dict[str, str]:
    return {name: render_region(name, state) for name in REGION_NAMES}


def render_page(state: dict[str, Any]) -> str:
    regions = {name: Markup(html) for name, html in render_regions(state).items()}
    return _env.get_template("page.html").render(
        state=state,
        regions=regions,
        year=date.today().year,
    )
