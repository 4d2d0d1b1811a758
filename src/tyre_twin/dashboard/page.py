CONTROL_PAGE_HTML = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>TyreTwin Analytics</title>
  <style>
    body { font-family: Segoe UI, sans-serif; background:#020617; color:#e2e8f0; margin:0; padding:24px; }
    h1 { margin:0 0 16px; font-size:22px; }
    .grid { display:grid; grid-template-columns:repeat(auto-fit, minmax(300px, 1fr)); gap:16px; }
    .card { border:1px solid #1e293b; border-radius:12px; padding:16px; background:#0f172a; }
    .card h2 { margin-top:0; font-size:16px; color:#a5b4fc; }
    label { display:block; font-size:13px; margin:10px 0 4px; color:#94a3b8; }
    input[type=range], select, input[type=number] { width:100%; }
    .badge { display:inline-block; padding:4px 10px; border-radius:999px; font-weight:600; }
    .MINT { background:#065f46; } .ACTIVE { background:#1e3a8a; }
    .WARNING { background:#854d0e; } .CRITICAL { background:#991b1b; }
    table { width:100%; font-size:13px; } td:last-child { text-align:right; font-family:monospace; }
    button { background:#4f46e5; color:white; border:0; border-radius:8px; padding:8px 14px; cursor:pointer; margin-top:10px; }
    button.danger { background:#b91c1c; }
    svg { width:100%; height:160px; background:#020617; border-radius:8px; }
    .error { color:#f87171; font-size:13px; }
  </style>
</head>
<body>
  <h1>TyreTwin <span style="color:#818cf8;font-weight:300">Analytics</span></h1>
  <div class="grid">
    <div class="card">
      <h2>Tyre Health</h2>
      <div><span id="health" class="badge">-</span> <span id="rul"></span></div>
      <table id="stats"></table>
      <button class="danger" onclick="post('/api/reset', {})">Reset Simulation</button>
    </div>
    <div class="card">
      <h2>Environment</h2>
      <label>UV Index <span id="uvIndexVal"></span></label>
      <input type="range" id="uvIndex" min="0" max="12" step="0.5">
      <label>Ozone (ppb) <span id="ozoneLevelVal"></span></label>
      <input type="range" id="ozoneLevel" min="0" max="300" step="5">
      <label>Temperature (&deg;C) <span id="temperatureVal"></span></label>
      <input type="range" id="temperature" min="-20" max="60" step="1">
      <label><input type="checkbox" id="isMoving"> Moving</label>
      <label>Speed / Flex Freq (km/h) <span id="speedVal"></span></label>
      <input type="range" id="speed" min="0" max="150" step="5">
      <label>Simulation Speed <span id="multiplierVal"></span></label>
      <input type="range" id="multiplier" min="0.1" max="5" step="0.1">
    </div>
    <div class="card">
      <h2>Tyre Specs</h2>
      <label>Curing Time (minutes)</label>
      <input type="number" id="curingTime" min="10" max="30" step="1">
      <label>Antiozonant</label>
      <select id="antiozonantType"><option>6PPD</option><option>77PD</option><option>Natural Wax</option></select>
      <label>Rubber Compound</label>
      <select id="rubberCompound">
        <option>Soft (Sport)</option><option>Medium (All-Season)</option><option>Hard (Eco/Touring)</option>
      </select>
      <label>Initial Tread Depth (mm)</label>
      <input type="number" id="initialTreadDepth" min="4" max="12" step="0.1">
      <label>Manufacturer Life (km)</label>
      <input type="number" id="manufacturerLife" min="20000" max="100000" step="1000">
      <button onclick="saveProps()">Save Specs</button>
    </div>
    <div class="card">
      <h2>Visual Verification</h2>
      <input type="file" id="photo" accept="image/*">
      <p id="analysisStatus"></p>
      <p id="analysisError" class="error"></p>
      <table id="analysis"></table>
    </div>
    <div class="card">
      <h2>Chemistry Trend</h2>
      <svg id="chemChart" viewBox="0 0 500 160" preserveAspectRatio="none"></svg>
      <small>wax (amber) / bloom (green) / oxidation (red)</small>
    </div>
    <div class="card">
      <h2>Tread Wear Forecast</h2>
      <svg id="treadChart" viewBox="0 0 500 160" preserveAspectRatio="none"></svg>
      <label>Forecast Calibration <span id="calibrationVal"></span></label>
      <input type="range" id="calibration" min="0.5" max="2" step="0.1">
      <table id="forecast"></table>
    </div>
    <div class="card">
      <h2>Fracture Mechanics</h2>
      <table id="fracture"></table>
    </div>
  </div>
<script>
const PARAM_IDS = ["uvIndex", "ozoneLevel", "temperature", "speed"];
const PROP_IDS = ["curingTime", "antiozonantType", "rubberCompound", "initialTreadDepth", "manufacturerLife"];
let editing = false;

async function post(path, body) {
  const res = await fetch(path, {method: "POST", headers: {"Content-Type": "application/json"}, body: JSON.stringify(body)});
  return res.json();
}

function rows(el, obj) {
  const cells = Object.entries(obj).map(([k, v]) => {
    const tr = document.createElement("tr");
    [k, typeof v === "number" ? v.toFixed(3) : String(v)].forEach(text => {
      const td = document.createElement("td");
      td.textContent = text;
      tr.appendChild(td);
    });
    return tr;
  });
  document.getElementById(el).replaceChildren(...cells);
}

function line(points, max, color) {
  if (points.length < 2) return "";
  const step = 500 / (points.length - 1);
  const d = points.map((v, i) => `${i ? "L" : "M"}${(i * step).toFixed(1)},${(160 - (v / max) * 150).toFixed(1)}`).join(" ");
  return `<path d="${d}" fill="none" stroke="${color}" stroke-width="2"/>`;
}

function render(s) {
  const d = s.data;
  if (!d || !d.state) return;
  const health = document.getElementById("health");
  health.textContent = d.state;
  health.className = "badge " + d.state;
  document.getElementById("rul").textContent = `RUL ${d.rul} days`;
  rows("stats", {
    "Wax reserve %": d.waxReserve, "Surface bloom %": d.surfaceBloom, "Oxidation %": d.oxidationLevel,
    "Integrity %": d.structuralIntegrity, "Tread mm": d.treadDepth, "Mileage km": d.mileage, "Ticks": s.tick_count
  });
  rows("fracture", s.fracture);
  rows("forecast", s.forecast);
  const h = s.history;
  document.getElementById("chemChart").innerHTML =
    line(h.map(x => x.waxReserve), 100, "#f59e0b") + line(h.map(x => x.surfaceBloom), 100, "#10b981") +
    line(h.map(x => x.oxidationLevel), 100, "#ef4444");
  document.getElementById("treadChart").innerHTML = line(h.map(x => x.treadDepth), 12, "#22d3ee");
  const a = s.analysis;
  document.getElementById("analysisStatus").textContent = a.status === "analyzing" ? "Scanning tyre topology..." : "";
  document.getElementById("analysisError").textContent = a.error || "";
  if (a.last && a.last.hueColor) {
    rows("analysis", {Hue: a.last.hueColor, Condition: a.last.condition, Bloom: a.last.bloomDetected,
      Cracks: a.last.cracksDetected, "Wear %": a.last.estimatedWear, Confidence: a.last.confidence});
  }
  if (!editing) {
    PARAM_IDS.forEach(id => { document.getElementById(id).value = s.params[id]; });
    document.getElementById("isMoving").checked = s.params.isMoving;
    document.getElementById("multiplier").value = s.speed_multiplier;
    document.getElementById("calibration").value = s.forecast_calibration;
    PROP_IDS.forEach(id => { document.getElementById(id).value = s.props[id]; });
  }
  PARAM_IDS.forEach(id => { document.getElementById(id + "Val").textContent = s.params[id]; });
  document.getElementById("multiplierVal").textContent = s.speed_multiplier + "x";
  document.getElementById("calibrationVal").textContent = "x" + s.forecast_calibration.toFixed(1);
}

async function refresh() {
  try { render(await (await fetch("/api/state")).json()); } catch (e) { console.error(e); }
}

function saveProps() {
  const body = {};
  PROP_IDS.forEach(id => { body[id] = document.getElementById(id).value; });
  post("/api/properties", body);
}

document.querySelectorAll("input, select").forEach(el => {
  el.addEventListener("focus", () => { editing = true; });
  el.addEventListener("blur", () => { editing = false; });
});
PARAM_IDS.forEach(id => document.getElementById(id).addEventListener("change", e => post("/api/params", {[id]: Number(e.target.value)})));
document.getElementById("isMoving").addEventListener("change", e => post("/api/params", {isMoving: e.target.checked}));
document.getElementById("multiplier").addEventListener("change", e => post("/api/speed", {multiplier: Number(e.target.value)}));
document.getElementById("calibration").addEventListener("change", e => post("/api/calibration", {calibration: Number(e.target.value)}));
document.getElementById("photo").addEventListener("change", e => {
  const file = e.target.files[0];
  if (!file) return;
  const reader = new FileReader();
  reader.onloadend = () => post("/api/analyze", {image: reader.result});
  reader.readAsDataURL(file);
});
setInterval(refresh, 500);
refresh();
</script>
</body>
</html>
"""
