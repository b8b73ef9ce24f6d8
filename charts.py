import json
from collections.abc import Mapping

import plotly.graph_objects as go
import plotly.io as pio

from air_quality import INDEX_KEYS, to_number

POLLUTANT_LABELS = {
    "co": "CO",
    "no2": "NO₂",
    "o3": "O₃",
    "so2": "SO₂",
    "pm2_5": "PM2.5",
    "pm10": "PM10",
}


def build_pollutant_chart(air_quality):
    """Bar chart of pollutant concentrations (µg/m³) as Plotly JSON, or None."""
    if not isinstance(air_quality, Mapping) or not air_quality:
        return None

    labels = []
    values = []
    for key, value in air_quality.items():
        if key in INDEX_KEYS:
            continue
        number = to_number(value)
        if number is None:
            continue
        labels.append(POLLUTANT_LABELS.get(key, key))
        values.append(number)
    if not values:
        return None

    fig = go.Figure()
    fig.add_trace(go.Bar(x=labels, y=values, name='Pollutants',
      marker=dict(color='#60a5fa', line=dict(color='#334155', width=1)),
      hovertemplate='<b>%{x}</b><br>%{y:.2f} µg/m³<extra></extra>'
    ))
    fig.update_layout(
      title='Air Quality', xaxis_title='Pollutant', yaxis_title='µg/m³',
      plot_bgcolor='#0f172a', paper_bgcolor='#1e293b',
      font=dict(color='#cbd5e1'), height=300, margin=dict(l=50, r=30, t=60, b=50),
      showlegend=False,
      xaxis=dict(showgrid=True, gridwidth=1, gridcolor='#334155'),
      yaxis_showgrid=True, yaxis_gridwidth=1, yaxis_gridcolor='#334155'
    )
    return json.loads(pio.to_json(fig))
