"""Single-file HTML report with base64-inlined charts."""

from __future__ import annotations

import base64
import datetime as _dt
from pathlib import Path
from typing import Any, Dict, List, Mapping

import pandas as pd
from jinja2 import BaseLoader, Environment, select_autoescape

from .metrics import AUC_CATEGORIES, Evaluation
from .utils import ensure_directory, get_logger

LOGGER = get_logger("report")

BASE_CSS = """
  html, body { font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; font-size: 11pt; color:#111; }
  main { max-width: 880px; margin: 24px auto; }
  h1 { font-size: 20pt; margin-bottom: 4px; }
  .sub { color:#555; font-size: 9pt; }
  table { border-collapse: collapse; margin: 8px 0 16px; }
  th, td { padding: 4px 10px; border-bottom: 1px solid #e5e7eb; }
  th { text-align:left; border-bottom: 1px solid #111; }
  td.num { text-align:right; font-variant-numeric: tabular-nums; }
  .verdict { font-size: 13pt; font-weight: 700; }
  .scale li.current { font-weight: 700; }
  img.chart { max-width: 100%; border: 1px solid #eee; }
"""

REPORT_TEMPLATE = r"""
<!DOCTYPE html><html><head><meta charset="utf-8"><title>{{ title }}</title>
<style>{{ base_css }}</style></head><body><main>
<h1>{{ title }}</h1>
<div class="sub">Generated {{ generated_at }} from <code>{{ source }}</code></div>

<h2>Overview</h2>
{% for paragraph in narrative %}<p>{{ paragraph }}</p>
{% endfor %}

<h2>Data</h2>
<table>
  <tr><th>Rows</th><td class="num">{{ summary.n_rows }}</td></tr>
  <tr><th>Columns</th><td class="num">{{ summary.n_columns }}</td></tr>
  <tr><th>Negative outcomes (0)</th><td class="num">{{ summary.class_counts[0] }}</td></tr>
  <tr><th>Positive outcomes (1)</th><td class="num">{{ summary.class_counts[1] }}</td></tr>
  <tr><th>Positive share</th><td class="num">{{ pct(summary.positive_share) }}</td></tr>
</table>
{% if summary.missing_values %}
<p>Columns with missing values:
{% for column, count in summary.missing_values.items() %}<code>{{ column }}</code> ({{ count }}){% if not loop.last %}, {% endif %}{% endfor %}
</p>
{% endif %}
{% if describe_rows %}
<table>
  <tr><th>Feature</th><th>Mean</th><th>Std</th><th>Min</th><th>Max</th></tr>
  {% for row in describe_rows %}
  <tr><td><code>{{ row.feature }}</code></td><td class="num">{{ num(row.mean) }}</td><td class="num">{{ num(row.std) }}</td><td class="num">{{ num(row.min) }}</td><td class="num">{{ num(row.max) }}</td></tr>
  {% endfor %}
</table>
{% endif %}
{% if balance_chart %}<img class="chart" alt="Outcome balance" src="{{ balance_chart }}"/>{% endif %}

<h2>Model</h2>
<p>Rows were assigned to training with probability {{ split.train_fraction }} (seed {{ split.seed }}):
{{ split.train }} training rows, {{ split.test }} test rows.</p>
<table>
  {% for key, value in params.items() %}<tr><th>{{ key }}</th><td>{{ value }}</td></tr>
  {% endfor %}
</table>

<h2>Confusion matrix</h2>
<table>
  <tr><th></th>{% for column in confusion.columns %}<th>{{ column }}</th>{% endfor %}</tr>
  {% for row in confusion.rows %}
  <tr><th>{{ row.label }}</th>{% for value in row["values"] %}<td class="num">{{ value }}</td>{% endfor %}</tr>
  {% endfor %}
</table>
<table>
  <tr><th>Accuracy</th><td class="num">{{ pct(evaluation.accuracy) }}</td></tr>
  <tr><th>Sensitivity</th><td class="num">{{ pct(evaluation.sensitivity) }}</td></tr>
  <tr><th>Specificity</th><td class="num">{{ pct(evaluation.specificity) }}</td></tr>
</table>

<h2>ROC curve</h2>
<p class="verdict">AUC = {{ num(evaluation.auc, 4) }}: {{ evaluation.auc_category }}</p>
<ul class="scale">
{% for category in categories %}<li{% if category == evaluation.auc_category %} class="current"{% endif %}>{{ category }}</li>
{% endfor %}
</ul>
{% if roc_chart %}<img class="chart" alt="ROC curve" src="{{ roc_chart }}"/>{% endif %}
</main></body></html>
"""

_ENV = Environment(loader=BaseLoader(), autoescape=select_autoescape(default_for_string=True))


def _num(value: Any, digits: int = 2) -> str:
    if value is None or pd.isna(value):
        return "n/a"
    return f"{float(value):.{digits}f}"


def _pct(value: Any) -> str:
    if value is None or pd.isna(value):
        return "n/a"
    return f"{float(value) * 100:.1f}%"


def image_data_uri(path: Path | None) -> str | None:
    """Return a base64 ``data:`` URI for a PNG, or None if there is no file."""
    if path is None or not Path(path).exists():
        return None
    encoded = base64.b64encode(Path(path).read_bytes()).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def build_narrative(
    summary: Mapping[str, Any],
    split: Mapping[str, Any],
    evaluation: Evaluation,
    outcome_column: str,
) -> List[str]:
    positive = summary.get("class_counts", {}).get(1, 0)
    return [
        (
            f"The dataset holds {summary.get('n_rows', 0)} records, {positive} of which have "
            f"a positive '{outcome_column}' outcome ({_pct(summary.get('positive_share'))})."
        ),
        (
            f"A support vector machine was fitted on {split.get('train', 0)} randomly selected rows "
            f"and evaluated on the remaining {split.get('test', 0)}."
        ),
        (
            f"On the held-out rows it reached {_pct(evaluation.accuracy)} accuracy, with sensitivity "
            f"{_pct(evaluation.sensitivity)} and specificity {_pct(evaluation.specificity)}."
        ),
        (
            f"The area under the ROC curve is {_num(evaluation.auc, 4)}, which rates as "
            f"\"{evaluation.auc_category}\" discrimination between the two outcome classes."
        ),
    ]


def _confusion_context(confusion: pd.DataFrame) -> Dict[str, Any]:
    rows = [
        {"label": str(label), "values": [int(v) for v in confusion.loc[label].tolist()]}
        for label in confusion.index
    ]
    return {"columns": [str(c) for c in confusion.columns], "rows": rows}


def _describe_rows(describe: pd.DataFrame | None) -> List[Dict[str, Any]]:
    if describe is None or describe.empty:
        return []
    return [
        {"feature": str(feature), **{key: row[key] for key in ("mean", "std", "min", "max")}}
        for feature, row in describe.iterrows()
    ]


def render_html_report(
    *,
    title: str,
    source: str | Path,
    summary: Mapping[str, Any],
    split: Mapping[str, Any],
    params: Mapping[str, Any],
    evaluation: Evaluation,
    outcome_column: str,
    roc_chart: Path | None = None,
    balance_chart: Path | None = None,
    generated_at: str | None = None,
) -> str:
    template = _ENV.from_string(REPORT_TEMPLATE)
    return template.render(
        base_css=BASE_CSS,
        title=title,
        source=str(source),
        generated_at=generated_at or _dt.datetime.now().strftime("%Y-%m-%d %H:%M"),
        narrative=build_narrative(summary, split, evaluation, outcome_column),
        summary=summary,
        describe_rows=_describe_rows(summary.get("numeric_describe")),
        split=split,
        params=params,
        confusion=_confusion_context(evaluation.confusion),
        evaluation=evaluation,
        categories=AUC_CATEGORIES,
        roc_chart=image_data_uri(roc_chart),
        balance_chart=image_data_uri(balance_chart),
        num=_num,
        pct=_pct,
    )


def write_html_report(out_path: Path, **context: Any) -> Path:
    """Render the report and write it to ``out_path``."""
    ensure_directory(Path(out_path).parent)
    html = render_html_report(**context)
    Path(out_path).write_text(html, encoding="utf-8")
    LOGGER.info("HTML report written to %s", out_path)
    return Path(out_path)
