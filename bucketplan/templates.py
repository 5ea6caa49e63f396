"""HTML template assets for report rendering."""

from __future__ import annotations


def render_html_document(
    *,
    title: str,
    subtitle: str,
    summary_cards: str,
    inputs_panel: str,
    projection_tables: str,
    custom_panel: str,
    validation_table: str,
    payload_json: str,
) -> str:
    return f"""<!doctype html>
<html lang=\"en\">
<head>
  <meta charset=\"utf-8\" />
  <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
  <title>{title}</title>
  <style>
    :root {{
      --bg: #f4efe8;
      --panel: #fffdf8;
      --ink: #1f2937;
      --muted: #6b7280;
      --line: #d7c7af;
      --brand: #9a3412;
      --ok: #166534;
      --partial: #b45309;
      --warn: #991b1b;
    }}
    * {{ box-sizing: border-box; }}
    body {{ margin: 0; font-family: 'Trebuchet MS', 'Segoe UI', sans-serif; color: var(--ink); background: radial-gradient(circle at top right, #f9d8b4 0, var(--bg) 45%); }}
    .wrap {{ max-width: 1180px; margin: 0 auto; padding: 1rem; }}
    h1 {{ margin: 0.1rem 0 0.25rem; font-size: 1.9rem; }}
    .meta {{ color: var(--muted); font-size: 0.95rem; margin-bottom: 0.8rem; }}
    .tabs {{ display: flex; flex-wrap: wrap; gap: 0.5rem; margin: 0.75rem 0; }}
    .tab-btn {{ border: 1px solid var(--line); background: #fff; padding: 0.45rem 0.75rem; cursor: pointer; border-radius: 999px; font-weight: 700; }}
    .tab-btn.active {{ background: var(--brand); color: #fff; border-color: var(--brand); }}
    .tab {{ display: none; }}
    .tab.active {{ display: block; }}
    .panel {{ background: var(--panel); border: 1px solid var(--line); border-radius: 14px; padding: 0.85rem; margin-bottom: 0.85rem; }}
    .cards {{ display: grid; gap: 0.6rem; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); }}
    .card {{ background: #fff; border: 1px solid var(--line); border-radius: 12px; padding: 0.65rem; }}
    .card .k {{ color: var(--muted); font-size: 0.85rem; }}
    .card .v {{ font-size: 1.2rem; font-weight: 700; }}
    .coverage-good {{ color: var(--ok); }}
    .coverage-partial {{ color: var(--partial); }}
    .coverage-low {{ color: var(--warn); }}
    table {{ border-collapse: collapse; width: 100%; font-size: 0.9rem; }}
    th, td {{ border: 1px solid #e9dbc7; padding: 0.35rem 0.45rem; text-align: right; }}
    th:first-child, td:first-child {{ text-align: left; }}
    .penalty {{ background: #ffe6e6; }}
    .subtle {{ color: var(--muted); font-size: 0.85rem; }}
    pre {{ background: #f8f8f8; padding: 0.85rem; border-radius: 8px; overflow-x: auto; font-size: 0.8rem; }}
    @media (max-width: 700px) {{
      h1 {{ font-size: 1.5rem; }}
      .tab-btn {{ font-size: 0.9rem; }}
    }}
  </style>
</head>
<body>
  <div class=\"wrap\">
    <h1>{title}</h1>
    <div class=\"meta\">{subtitle}</div>
    <div class=\"tabs\" id=\"tabs\">
      <button class=\"tab-btn active\" data-tab=\"summary\">Summary</button>
      <button class=\"tab-btn\" data-tab=\"inputs\">Inputs</button>
      <button class=\"tab-btn\" data-tab=\"projections\">Projections</button>
      <button class=\"tab-btn\" data-tab=\"custom\">Custom Projection</button>
      <button class=\"tab-btn\" data-tab=\"validation\">Validation</button>
      <button class=\"tab-btn\" data-tab=\"data\">JSON Data</button>
    </div>

    <section class=\"tab active\" id=\"tab-summary\">
      <div class=\"cards\">{summary_cards}</div>
    </section>

    <section class=\"tab\" id=\"tab-inputs\">
      <div class=\"panel\">{inputs_panel}</div>
    </section>

    <section class=\"tab\" id=\"tab-projections\">
      <div class=\"panel\">{projection_tables}</div>
    </section>

    <section class=\"tab\" id=\"tab-custom\">
      <div class=\"panel\">{custom_panel}</div>
    </section>

    <section class=\"tab\" id=\"tab-validation\">
      <div class=\"panel\">{validation_table}</div>
    </section>

    <section class=\"tab\" id=\"tab-data\">
      <div class=\"panel\"><pre id=\"payload\"></pre></div>
    </section>
  </div>

  <script>
    const payload = {payload_json};

    function tabsInit() {{
      const buttons = [...document.querySelectorAll('.tab-btn')];
      buttons.forEach((btn) => {{
        btn.addEventListener('click', () => {{
          buttons.forEach((b) => b.classList.remove('active'));
          btn.classList.add('active');
          [...document.querySelectorAll('.tab')].forEach((tab) => tab.classList.remove('active'));
          document.getElementById(`tab-${{btn.dataset.tab}}`).classList.add('active');
        }});
      }});
    }}

    tabsInit();
    document.getElementById('payload').textContent = JSON.stringify(payload, null, 2);
  </script>
</body>
</html>
"""
