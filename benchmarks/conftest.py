"""Benchmark fixtures and configuration."""

from __future__ import annotations

import pytest


@pytest.fixture
def large_template() -> str:
    """Generate a large template (~100KB) mixing text and every construct."""
    sections = []
    for i in range(400):
        sections.append(f"""
<section id="s{i}">
  <h2>{{{{ sections[{i}].title }}}}</h2>
  {{{{ if user.admin && !readonly }}}}<a href="{{{{ url('edit', {i}) }}}}">Edit</a>{{{{ end }}}}
  <ul>
  {{{{ for item of sections[{i}].items }}}}
    <li class="{{{{ item.active ? 'on' : 'off' }}}}">{{{{ item.name }}}} ({{{{ item.count * 2 + 1 }}}})</li>
  {{{{ end }}}}
  </ul>
  {{{{ // section {i} footer }}}}
</section>
""")
    return "\n".join(sections)


@pytest.fixture
def real_world_templates() -> list[str]:
    """Collection of real-world template patterns."""
    return [
        # Greeting
        "Hello {{ user.name }}!",
        # Conditional chain
        """{{ if order.total > 100 }}Free shipping
{{ else if order.total > 50 }}Half-price shipping
{{ else }}Standard shipping{{ end }}""",
        # Loop with formatting calls
        """<table>
{{ for row of report.rows }}  <tr><td>{{ row.label }}</td><td>{{ format(row.value, 2) }}</td></tr>
{{ end }}</table>""",
        # Nested loops and computed access
        """{{ for group of groups }}<h3>{{ group.name }}</h3>
{{ for i of range(group.size) }}{{ group.members[i].email }}, {{ end }}
{{ end }}""",
        # Plain text, no blocks
        "Nothing to substitute here, just a long literal paragraph of text.",
        # Arithmetic heavy
        "{{ (price * qty - discount) / (1 + tax) }} {{ -balance }} {{ !!flag }}",
    ]
