from functools import partial

from flask import Flask, jsonify, render_template_string, request

from backgrounds import DEFAULT_KEY, background_url
from config import configure_logging, load_settings
from panel import Error, WeatherPanel, state_view
from weather_client import MissingCredentialError, fetch_weather


# Flask app and WeatherAPI settings (WEATHER_API_KEY comes from the environment or .env)
settings = load_settings()
app = Flask(__name__)
app.config.update(
    WEATHER_API_KEY=settings.weather_api_key,
    WEATHER_API_URL=settings.weather_api_url,
)


def lookup_weather(query: str):
    """Run one lookup through a fresh panel and return its final state."""
    fetcher = partial(fetch_weather, url=app.config["WEATHER_API_URL"])
    panel = WeatherPanel(fetcher=fetcher, api_key=app.config["WEATHER_API_KEY"])
    return panel.submit(query)


@app.route('/', methods=['GET'])
def index():
    return render_template_string(HTML_TEMPLATE, default_background=background_url(DEFAULT_KEY))


@app.route('/api/get_weather', methods=['POST'])
def get_weather():
    data = request.get_json(silent=True)
    query = data.get('query') if isinstance(data, dict) else None

    if not isinstance(query, str) or not query.strip():
        return jsonify({"error": "Location query is missing."}), 400

    state = lookup_weather(query)
    view = state_view(state)
    if isinstance(state, Error):
        status = 500 if isinstance(state.cause, MissingCredentialError) else 502
        return jsonify({"error": view["error"]}), status
    return jsonify(view["weather"])


@app.route('/health', methods=['GET'])
def health():
    return jsonify({"status": "ok"})


HTML_TEMPLATE = r"""
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>Weather App</title>
    <script src="https://cdn.tailwindcss.com"></script>
    <script src="https://cdn.plot.ly/plotly-latest.min.js"></script>
  </head>
  <body id="app" class="min-h-screen flex items-center justify-center bg-cover bg-center text-slate-100"
        style="background-image: url('{{ default_background }}');">
    <div class="max-w-xl w-full p-6 m-6 rounded-xl bg-slate-900/70 backdrop-blur">
      <h1 class="text-3xl font-bold mb-4 text-center">Weather App</h1>

      <input id="location" name="location" type="text" placeholder="Enter Location"
             class="w-full p-3 rounded-md bg-slate-800 border border-slate-700" />
      <button id="fetch-weather-btn" class="mt-3 w-full p-3 bg-blue-600 rounded-md disabled:opacity-50" disabled>Get Weather</button>

      <p id="error" class="mt-3 text-red-300 hidden"></p>

      <div id="weather-info" class="mt-4 hidden text-center">
        <h2 id="loc" class="text-xl font-semibold">--</h2>
        <p id="cond" class="text-slate-300">--</p>
        <img id="cond_icon" src="" alt="weather icon" class="mx-auto w-16 h-16"/>
        <p id="temp">--</p>
        <p id="hum">--</p>

        <div class="mt-3 text-sm">
          <p id="aqi-index">Air Quality Index: N/A</p>
          <p id="aqi-pm25" class="hidden">PM2.5: N/A</p>
          <p id="aqi-pm10" class="hidden">PM10: N/A</p>
          <p id="aqi-present" class="hidden mt-2">Air quality data present: No</p>
          <p id="aqi-keys" class="hidden text-xs opacity-90"></p>
          <details id="aqi-details" class="hidden text-left mt-2">
            <summary class="cursor-pointer">Raw air_quality (debug)</summary>
            <pre id="aqi-details-raw" class="whitespace-pre-wrap"></pre>
          </details>
          <div id="chart-aqi" class="mt-3 hidden h-72"></div>
        </div>

        <div class="mt-3 w-full text-left">
          <div class="text-sm mb-1">air_quality (raw):</div>
          <pre id="aqi-raw" class="text-xs whitespace-pre-wrap bg-slate-800 p-2 rounded-md"></pre>
        </div>
      </div>
    </div>

    <script>
      document.addEventListener('DOMContentLoaded', () => {
        const defaultBackground = '{{ default_background }}';
        const appEl = document.getElementById('app');
        const locInput = document.getElementById('location');
        const fetchButton = document.getElementById('fetch-weather-btn');
        const errorEl = document.getElementById('error');

        // idle -> loading -> success | error; only one lookup at a time
        const state = { loading: false, error: '', weather: null };

        function canSubmit(){
          return !state.loading && locInput.value.trim() !== '';
        }

        function show(id, visible){
          document.getElementById(id).classList.toggle('hidden', !visible);
        }

        function setText(id, text){
          document.getElementById(id).textContent = text;
        }

        function renderAirQuality(aq, chart){
          setText('aqi-index', 'Air Quality Index: ' + (aq.present ? aq.index : 'N/A'));
          setText('aqi-pm25', 'PM2.5: ' + aq.pm2_5);
          setText('aqi-pm10', 'PM10: ' + aq.pm10);
          setText('aqi-present', 'Air quality data present: ' + (aq.present ? 'Yes' : 'No'));
          setText('aqi-keys', 'Keys: ' + aq.keys.join(', '));
          setText('aqi-details-raw', JSON.stringify(aq.raw, null, 2));
          setText('aqi-raw', JSON.stringify(aq.raw, null, 2));
          ['aqi-pm25', 'aqi-pm10', 'aqi-present', 'aqi-keys', 'aqi-details'].forEach(id => show(id, aq.present));

          const chartEl = document.getElementById('chart-aqi');
          if(chart){
            show('chart-aqi', true);
            Plotly.newPlot(chartEl, chart.data, chart.layout, {responsive: true});
          } else {
            Plotly.purge(chartEl);
            show('chart-aqi', false);
          }
        }

        function render(){
          fetchButton.disabled = !canSubmit();
          fetchButton.textContent = state.loading ? 'Loading...' : 'Get Weather';

          errorEl.textContent = state.error;
          show('error', Boolean(state.error));

          const data = state.weather;
          appEl.style.backgroundImage = `url(${data ? data.background_url : defaultBackground})`;
          show('weather-info', Boolean(data));
          if(!data){ return; }

          setText('loc', data.location_label);
          setText('cond', data.condition || '');
          // WeatherAPI icons are protocol-relative (//cdn.weatherapi.com/...)
          const iconEl = document.getElementById('cond_icon');
          if(data.condition_icon){
            iconEl.src = data.condition_icon.startsWith('//') ? 'https:' + data.condition_icon : data.condition_icon;
            iconEl.style.display = 'inline-block';
          } else { iconEl.style.display = 'none'; }
          setText('temp', 'Temperature: ' + data.temperature_c + '°C');
          setText('hum', 'Humidity: ' + data.humidity + '%');
          renderAirQuality(data.air_quality, data.air_quality_chart);
        }

        async function fetchWeather(){
          if(!canSubmit()){ return; }
          state.loading = true;
          state.error = '';
          render();
          try{
            const r = await fetch('/api/get_weather', {
              method: 'POST', headers: {'Content-Type': 'application/json'},
              body: JSON.stringify({query: locInput.value.trim()})
            });
            let data = null;
            try { data = await r.json(); } catch(e) { data = null; }
            if(!r.ok){
              throw new Error((data && data.error) || `Request failed with status ${r.status}`);
            }
            state.weather = data;
          }catch(err){
            state.error = err.message || 'Location not found';
            state.weather = null;
          }finally{
            state.loading = false;
            render();
          }
        }

        fetchButton.addEventListener('click', fetchWeather);
        locInput.addEventListener('input', render);
        locInput.addEventListener('keydown', (e) => { if(e.key === 'Enter') fetchWeather(); });
        render();
      });
    </script>
  </body>
</html>
"""


if __name__ == '__main__':
    configure_logging(settings.log_level)
    print("---------------------------------------------------------------------")
    print("Flask Application 'Weather App' is starting...")
    print(f"Access the page at: http://{settings.host}:{settings.port}/")
    print("---------------------------------------------------------------------")
    app.run(debug=settings.debug, host=settings.host, port=settings.port)
