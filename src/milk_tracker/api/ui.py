"""Minimal browser UI that drives the JSON API."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse, RedirectResponse

router = APIRouter(tags=["ui"])


@router.get("/", include_in_schema=False)
async def index() -> RedirectResponse:
    """Send the browser to the tracker page."""
    return RedirectResponse(url="/ui")


@router.get("/ui", response_class=HTMLResponse)
async def tracker_ui() -> HTMLResponse:
    """Calendar, toggles, prices and summary on a single page."""
    return HTMLResponse(_TRACKER_UI_HTML)


_TRACKER_UI_HTML = """<!doctype html>
<html lang="gu">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>દૂધનો હિસાબ</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 1.5rem; max-width: 640px; }
      .row { margin-bottom: 1rem; }
      .grid { display: grid; grid-template-columns: repeat(7, 1fr); gap: 4px; }
      .cell { border: 1px solid #ddd; padding: 0.3rem; min-height: 2.5rem; cursor: pointer; font-size: 0.8rem; }
      .cell.selected { border-color: #2563eb; }
      .cell.today { background: #eff6ff; }
      input { padding: 0.3rem 0.5rem; }
      button { padding: 0.4rem 0.8rem; margin-right: 0.5rem; }
      pre { background: #f6f6f6; padding: 1rem; white-space: pre-wrap; }
    </style>
  </head>
  <body>
    <div class="row">
      <button onclick="navigate(-1)">&lt;</button>
      <strong id="label"></strong>
      <button onclick="navigate(1)">&gt;</button>
    </div>
    <div class="grid" id="calendar"></div>
    <div class="row" id="day"></div>
    <div class="row">
      ગાય ₹<input id="cowPrice" type="number" min="0" size="5" />
      ભેંસ ₹<input id="buffaloPrice" type="number" min="0" size="5" />
      <button onclick="savePrices()">સેવ</button>
    </div>
    <pre id="stats"></pre>
    <div class="row">
      <button onclick="summarize()">AI સારાંશ</button>
      <button onclick="share()">WhatsApp</button>
      <a href="/backup/export">બેકઅપ</a>
      <input id="restore" type="file" accept="application/json" onchange="restore(this)" />
    </div>
    <pre id="summary"></pre>
    <script>
      const now = new Date();
      let year = now.getFullYear();
      let month = now.getMonth() + 1;
      let selected = now.toISOString().slice(0, 10);

      async function call(method, path, body) {
        const res = await fetch(path, {
          method,
          headers: { 'Content-Type': 'application/json' },
          body: body === undefined ? undefined : JSON.stringify(body),
        });
        const data = await res.json();
        if (!res.ok) { alert(data.detail); throw new Error(data.detail); }
        return data;
      }

      async function render() {
        const cal = await call('GET', `/months/${year}/${month}/calendar`);
        document.getElementById('label').textContent = cal.label;
        const grid = document.getElementById('calendar');
        grid.innerHTML = '';
        for (let i = 0; i < cal.days[0].weekday; i++) grid.appendChild(document.createElement('div'));
        for (const day of cal.days) {
          const cell = document.createElement('div');
          cell.className = 'cell' + (day.date === selected ? ' selected' : '') + (day.is_today ? ' today' : '');
          cell.textContent = day.date.slice(8) + ' ' + (day.cow ? '🐄' : '') + (day.buffalo ? '🐃' : '') + (day.has_reason ? '📝' : '');
          cell.onclick = () => { selected = day.date; render(); };
          grid.appendChild(cell);
        }
        const record = await call('GET', `/records/${selected}`);
        document.getElementById('day').innerHTML = ['cow', 'buffalo'].map((kind) => `
          <div>${kind === 'cow' ? 'ગાય' : 'ભેંસ'}:
            <input type="checkbox" ${record[kind] ? 'checked' : ''} onchange="toggle('${kind}', this.checked)" />
            ${record[kind] ? '' : `<input placeholder="કારણ" value="${record[kind + 'Reason'] || ''}" onchange="reason('${kind}', this.value)" />`}
          </div>`).join('');
        const prices = await call('GET', '/prices');
        document.getElementById('cowPrice').value = prices.cow_price;
        document.getElementById('buffaloPrice').value = prices.buffalo_price;
        const stats = await call('GET', `/months/${year}/${month}`);
        document.getElementById('stats').textContent = JSON.stringify(stats, null, 2);
      }

      async function navigate(offset) {
        const target = await call('GET', `/months/${year}/${month}/navigate?offset=${offset}`);
        year = target.year; month = target.month; selected = target.selected;
        document.getElementById('summary').textContent = '';
        render();
      }
      async function toggle(kind, value) { await call('PUT', `/records/${selected}/${kind}`, { received: value }); render(); }
      async function reason(kind, text) { await call('PUT', `/records/${selected}/${kind}/reason`, { reason: text }); render(); }
      async function savePrices() {
        await call('PUT', '/prices', {
          cow_price: Number(document.getElementById('cowPrice').value),
          buffalo_price: Number(document.getElementById('buffaloPrice').value),
        });
        render();
      }
      async function summarize() {
        const out = document.getElementById('summary');
        out.textContent = '...';
        const result = await call('POST', `/months/${year}/${month}/summary`);
        if (result.applied) out.textContent = result.text;
      }
      async function share() {
        const result = await call('GET', `/months/${year}/${month}/share`);
        window.open(result.whatsapp_url, '_blank');
      }
      async function restore(input) {
        const file = input.files[0];
        if (!file) return;
        const res = await fetch('/backup/import', { method: 'POST', body: await file.text() });
        const data = await res.json();
        alert(res.ok ? data.message : data.detail);
        input.value = '';
        render();
      }
      render();
    </script>
  </body>
</html>
"""
