"""Templating utilities for recommendation digest renderers."""

from __future__ import annotations

from typing import Any, Dict

from jinja2 import BaseLoader, Environment

ENV = Environment(
    loader=BaseLoader(),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    variable_start_string="[[",
    variable_end_string="]]",
)

DIGEST_MARKDOWN_TEMPLATE = ENV.from_string(
    """# [[ title ]]

_Scan [[ scan_id ]]{% if scan_url %} · [[ scan_url ]]{% endif %} · Generated [[ generated_at ]]_

{% if not items %}
No open recommendations. Every measured subfactor is at or above threshold, or was detected as already implemented.
{% else %}
**[[ items | length ]] recommendations** · {% for level, count in automation_counts.items() %}[[ level ]] [[ count ]]{% if not loop.last %} · {% endif %}{% endfor %}


{% for item in items %}
## [[ item.rank ]]. [[ item.gap ]]

_[[ item.pillar_name ]]{% if item.pillar_headline %}: [[ item.pillar_headline ]]{% endif %} · [[ item.priority ]] · Automation [[ item.automation_level ]] · Evidence [[ item.evidence_quality ]] ([[ item.confidence_pct ]]%) · [[ item.target_label ]]_

{% if item.finding %}
**Finding**
[[ item.finding ]]

{% endif %}
{% if item.why_it_matters %}
**Why it matters**
[[ item.why_it_matters ]]

{% endif %}
{% if item.recommendation %}
**Recommendation**
[[ item.recommendation ]]

{% endif %}
{% if item.what_to_include %}
**What to include**
[[ item.what_to_include ]]

{% endif %}
{% if item.how_to_implement %}
**How to implement**

{% for step in item.how_to_implement %}
[[ loop.index ]]. [[ step ]]
{% endfor %}

{% endif %}
{% if item.examples %}
**Examples**

{% for example in item.examples %}
- [[ example ]]
{% endfor %}

{% endif %}
{% for asset in item.assets %}
**Generated asset: [[ asset.asset_type ]]**

```
[[ asset.content ]]
```

{% endfor %}
_[[ item.evidence_summary ]]_

{% endfor %}
{% endif %}
"""
)

DIGEST_HTML_TEMPLATE = ENV.from_string(
    """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>[[ title | e ]]</title>
<style>
body { font-family: Georgia, serif; max-width: 46rem; margin: 2rem auto; line-height: 1.55; color: #1d1d1f; }
h1, h2 { font-family: Helvetica, Arial, sans-serif; }
pre { background: #f4f4f5; padding: 0.75rem; overflow-x: auto; }
</style>
</head>
<body>
<article>
[[ article_body ]]
</article>
</body>
</html>
"""
)


def render_digest_markdown(context: Dict[str, Any]) -> str:
    return DIGEST_MARKDOWN_TEMPLATE.render(**context)


def render_digest_html(context: Dict[str, Any]) -> str:
    return DIGEST_HTML_TEMPLATE.render(**context)
