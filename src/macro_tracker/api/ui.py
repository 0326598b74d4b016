"""Single-page form that drives the tracker API."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["ui"])


@router.get("/", response_class=HTMLResponse)
async def tracker_ui() -> HTMLResponse:
    """Minimal macro tracker form."""
    return HTMLResponse(_TRACKER_UI_HTML)


_TRACKER_UI_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Macro Tracker</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      .row { margin-bottom: 1rem; }
      input, select { padding: 0.4rem 0.6rem; }
      button { padding: 0.4rem 0.8rem; margin-right: 0.5rem; }
      #suggestions button { display: block; margin: 0.2rem 0; }
      table { border-collapse: collapse; margin-bottom: 1rem; }
      td, th { padding: 0.3rem 0.8rem; text-align: center; }
      td:first-child, th:first-child { text-align: left; }
      .error { color: #b00020; }
      .bar { display: flex; height: 1.5rem; width: 480px; }
      .protein { background: #3b82f6; }
      .carbs { background: #a855f7; }
      .fat { background: #eab308; }
    </style>
  </head>
  <body>
    <h1>Macro Tracker</h1>
    <div class="row">
      <input id="query" placeholder="Search food (e.g. banana, boiled egg)" />
      <input id="quantity" type="number" min="1" value="100" />
      <select id="unit">
        <option value="grams">grams</option>
        <option value="piece">piece</option>
      </select>
      <button id="add">Add</button>
      <div id="suggestions"></div>
    </div>
    <div id="error" class="row error"></div>
    <table>
      <thead>
        <tr><th>Food Name</th><th>Protein (g)</th><th>Carbs (g)</th>
        <th>Fat (g)</th><th>Calories</th><th>Weight (g)</th></tr>
      </thead>
      <tbody id="entries"></tbody>
    </table>
    <div class="row">
      <input id="import" type="file" accept=".txt" />
      <button onclick="window.location = '/ledger/export'">Export Diet</button>
    </div>
    <div id="distribution"></div>
    <script>
      const $ = (id) => document.getElementById(id);
      let pollTimer = null;

      async function call(method, path, body) {
        const res = await fetch(path, {
          method,
          headers: { 'Content-Type': 'application/json' },
          body: body === undefined ? undefined : JSON.stringify(body)
        });
        return res.json();
      }

      function el(tag, text) {
        const node = document.createElement(tag);
        if (text !== undefined) { node.textContent = String(text); }
        return node;
      }

      function row(cells, bold) {
        const tr = el('tr');
        cells.forEach((c) => tr.appendChild(el(bold ? 'th' : 'td', c)));
        return tr;
      }

      function render(state) {
        if (state.detail !== undefined) { return refresh(); }
        if (document.activeElement !== $('query')) { $('query').value = state.query; }
        $('error').textContent = state.error;
        $('add').disabled = state.loading;
        $('add').textContent = state.loading ? 'Loading' : 'Add';
        $('suggestions').replaceChildren();
        if (state.suggestions_visible) {
          state.suggestions.forEach((name) => {
            const b = el('button', name);
            b.onmousedown = () => call('POST', '/suggestions/select', { name }).then(render);
            $('suggestions').appendChild(b);
          });
        }
        const t = state.totals;
        const rows = state.entries.map((e) =>
          row([e.name, e.protein, e.carbs, e.fat, e.calories, e.weight], false));
        if (state.entries.length) {
          rows.push(row(['Total', t.protein, t.carbs, t.fat, t.calories, t.weight], true));
        }
        $('entries').replaceChildren(...rows);
        const d = state.distribution;
        $('distribution').replaceChildren();
        if (state.entries.length) {
          const bar = el('div');
          bar.className = 'bar';
          const summary = el('p');
          ['protein', 'carbs', 'fat'].forEach((m) => {
            if (d[m].share !== null) {
              const segment = el('div');
              segment.className = m;
              segment.style.width = d[m].share + '%';
              bar.appendChild(segment);
            }
            const pct = d[m].calorie_percent === null ? '' : ' (' + d[m].calorie_percent + '%)';
            summary.appendChild(el('span', m + ': ' + d[m].grams + 'g' + pct + ' '));
          });
          $('distribution').append(el('h2', 'Macro Distribution'), bar, summary);
        }
      }

      async function refresh() {
        render(await call('GET', '/state'));
      }

      $('query').oninput = async (e) => {
        render(await call('PUT', '/query', { text: e.target.value }));
        clearTimeout(pollTimer);
        pollTimer = setTimeout(refresh, 600);
      };
      $('query').onfocus = () => call('POST', '/query/focus').then(render);
      $('query').onblur = () => call('POST', '/query/blur').then(render);
      $('quantity').onchange = (e) =>
        call('PUT', '/quantity', { quantity: Number(e.target.value) }).then(render);
      $('unit').onchange = (e) => call('PUT', '/unit', { unit: e.target.value }).then(render);
      $('add').onclick = async () => {
        $('add').disabled = true;
        render(await call('POST', '/foods'));
      };
      $('import').onchange = async (e) => {
        const file = e.target.files[0];
        if (!file) { return; }
        await fetch('/ledger/import', { method: 'POST', body: await file.text() });
        e.target.value = '';
        refresh();
      };
      refresh();
    </script>
  </body>
</html>
"""
