"""Dashboard page served at ``/``.

A single static page: the ticker form and analysis box on the left, the
live market panel (price, change, chart, bands) on the right. The script
fetches analysis and market data independently and drops any market
response that belongs to an older request.
"""

from cryptotracker.chart import layout, render_svg


PAGE_TITLE = "Crypto Tracker"

_STYLE = """
body { margin: 0; background: #030712; color: #e5e7eb;
       font-family: system-ui, -apple-system, "Segoe UI", sans-serif; }
.app-content { display: grid; grid-template-columns: minmax(300px, 1fr) 1.4fr;
               gap: 1.5rem; padding: 2rem; min-height: 100vh; box-sizing: border-box; }
.panel, .right-panel { background: #0b1220; border: 1px solid #1f2933;
                       border-radius: 12px; padding: 1.5rem; }
.panel-title { margin: 0 0 0.25rem; font-size: 1.4rem; }
.panel-subtitle, .live-meta, .candles-caption, .scalp-footer { color: #6b7280; font-size: 0.85rem; }
.form-row { display: flex; gap: 0.5rem; margin: 1rem 0; }
.input { flex: 1; padding: 0.55rem 0.75rem; border-radius: 8px; border: 1px solid #374151;
         background: #030712; color: inherit; text-transform: uppercase; }
.button { padding: 0.55rem 1rem; border-radius: 8px; border: none; background: #2563eb;
          color: white; cursor: pointer; }
.button:disabled { opacity: 0.5; cursor: default; }
.error-box { color: #f97373; margin: 0.5rem 0; }
.analysis-box { white-space: pre-wrap; line-height: 1.5; }
.live-header { display: flex; justify-content: space-between; align-items: flex-end; }
.live-symbol { font-size: 1.2rem; font-weight: 600; }
.live-price { font-size: 1.6rem; font-weight: 700; text-align: right; }
.change-up { color: #22c55e; text-align: right; }
.change-down { color: #f97373; text-align: right; }
.candles-wrapper { margin: 1rem 0; }
.candles-wrapper svg { width: 100%; height: 260px; }
.scalp-list { padding-left: 1.1rem; }
.market-error { margin-top: 0.4rem; color: #f97373; font-size: 0.8rem; }
.market-note { margin-top: 0.4rem; color: #fbbf24; font-size: 0.8rem; }
"""

_SCRIPT = """
const form = document.getElementById("form");
const input = document.getElementById("symbol");
const button = document.getElementById("submit");
const analysisBox = document.getElementById("analysis");
const errorBox = document.getElementById("error");
const loadingBox = document.getElementById("loading");
let marketToken = 0;

const BAND_LABELS = [
  ["aggressive_buy", "Aggressive entry"],
  ["conservative_buy", "Conservative entry"],
  ["take_profit", "Take-profit zone"],
  ["hard_stop", "Hard stop"],
];

function showMarket(data) {
  document.getElementById("live-symbol").textContent = `${data.symbol} / USD`;
  document.getElementById("live-price").textContent = data.price_text;
  const change = document.getElementById("live-change");
  change.textContent = `${data.change_text} 24h`;
  change.className = (data.change_24h ?? 0) >= 0 ? "change-up" : "change-down";
  document.getElementById("chart").innerHTML = data.svg;

  const bands = document.getElementById("bands");
  bands.innerHTML = "";
  if (data.bands_text) {
    const list = document.createElement("ul");
    list.className = "scalp-list";
    for (const [key, label] of BAND_LABELS) {
      const item = document.createElement("li");
      const strong = document.createElement("strong");
      strong.textContent = `${label}:`;
      item.append(strong, ` ${data.bands_text[key]}`);
      list.append(item);
    }
    bands.append(list);
  } else {
    bands.textContent = "Scalping levels will appear once market data loads.";
  }

  const note = document.getElementById("market-note");
  const error = document.getElementById("market-error");
  note.textContent = data.status === "degraded" ? data.message : "";
  error.textContent =
    data.status === "not_found" || data.status === "unavailable" ? data.message : "";
}

async function loadMarket(symbol) {
  const token = ++marketToken;
  try {
    const res = await fetch(`/api/market?symbol=${encodeURIComponent(symbol)}`);
    const data = await res.json();
    if (token !== marketToken) return;
    showMarket(data);
  } catch (err) {
    if (token !== marketToken) return;
    document.getElementById("market-error").textContent =
      "Unable to load market data for this symbol.";
  }
}

async function analyze(symbol) {
  button.disabled = true;
  button.textContent = "Thinking...";
  errorBox.textContent = "";
  analysisBox.textContent = "";
  loadingBox.hidden = false;
  try {
    const res = await fetch("/api/crypto", {
      method: "POST",
      headers: { "Content-Type": "application/json" },
      body: JSON.stringify({ symbol }),
    });
    if (!res.ok) throw new Error("Request failed");
    const data = await res.json();
    analysisBox.textContent = data.analysis;
    loadMarket(data.symbol);
  } catch (err) {
    console.error(err);
    errorBox.textContent = "Something went wrong. Try again.";
  } finally {
    button.disabled = false;
    button.textContent = "Analyze";
    loadingBox.hidden = true;
  }
}

form.addEventListener("submit", (event) => {
  event.preventDefault();
  const symbol = input.value.trim().toUpperCase();
  if (symbol) analyze(symbol);
});
input.addEventListener("input", () => {
  input.value = input.value.toUpperCase();
  button.disabled = !input.value.trim();
});

loadMarket("BTC");
"""


def render_dashboard() -> str:
    """Render the dashboard page with an empty chart placeholder."""
    placeholder = render_svg(layout([]))
    return f"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{PAGE_TITLE}</title>
<style>{_STYLE}</style>
</head>
<body>
<div class="app-content">
  <div class="panel">
    <h1 class="panel-title">{PAGE_TITLE}</h1>
    <p class="panel-subtitle">Type a crypto symbol and get a short analysis from the agent.</p>
    <form id="form" class="form-row">
      <input id="symbol" class="input" value="BTC" placeholder="BTC, ETH, AVAX">
      <button id="submit" type="submit" class="button">Analyze</button>
    </form>
    <div id="error" class="error-box"></div>
    <div id="loading" class="panel-subtitle" hidden>Contacting the agent. This might take a few seconds.</div>
    <div id="analysis" class="analysis-box"></div>
  </div>
  <div class="right-panel">
    <div class="live-header">
      <div>
        <div class="live-meta">Live market</div>
        <div id="live-symbol" class="live-symbol">BTC / USD</div>
      </div>
      <div>
        <div id="live-price" class="live-price">-</div>
        <div id="live-change" class="change-up">- 24h</div>
      </div>
    </div>
    <div class="candles-wrapper">
      <div id="chart">{placeholder}</div>
      <div class="candles-caption">Intraday OHLC snapshot (CoinGecko, 1-day window)</div>
    </div>
    <div class="scalp-box">
      <div class="scalp-title">Intraday scalping bands</div>
      <div id="bands" class="panel-subtitle">Scalping levels will appear once market data loads.</div>
      <div class="scalp-footer">These levels are simple percentage offsets for demo purposes and are
        <strong>not trading advice</strong>.</div>
      <div id="market-note" class="market-note"></div>
      <div id="market-error" class="market-error"></div>
    </div>
  </div>
</div>
<script>{_SCRIPT}</script>
</body>
</html>
"""
