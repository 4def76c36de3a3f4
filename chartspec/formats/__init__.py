"""
Formats sub-package for chartspec.

Contains one module per supported chart wire schema. Each module defines
pydantic shape models (structural decoding), pure mapper functions
(semantic rules) and a ``ChartFormat`` subclass wiring the two together.

Design: Strategy Pattern
- base.py defines the ChartFormat ABC and the DecodeAttempt result type.
- chartjs.py: Chart.js ``{type, data: {labels, datasets}}`` payloads.
- plotly.py: Plotly single-heatmap and figure payloads.
- echarts.py: ECharts ``{xAxis, series: [{type, data}]}`` payloads.
- highcharts.py: Highcharts ``{xAxis: {categories}, series}`` payloads.
- vegalite.py: Vega-Lite subset with inline ``data.values`` rows.
- custom.py: the simple custom schema and the flat pie schema.

The detection chain (detect.py) tries the formats in a fixed priority order.
"""
