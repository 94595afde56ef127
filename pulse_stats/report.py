"""
HTML report rendering for a StatisticsRecord.

The page is a single static document: inline styles, one table with a row
per statistic, a button that copies the values as TSV for pasting into a
spreadsheet, and a link to the JSON view.
"""
from typing import Any, Iterable, List, Optional

from bs4 import BeautifulSoup

from .models import FIELD_LABELS, StatisticsRecord

SENTINEL = "(failed to retrieve)"

_STYLE = """
    body {
      font-family: system-ui, sans-serif;
      background: #f8f9fa;
      color: #222;
      margin: 0;
      padding: 2rem;
    }
    h1 {
      color: #2c3e50;
      margin-bottom: 0.5em;
    }
    table {
      border-collapse: collapse;
      width: 100%;
      max-width: 600px;
      margin: 1.5em 0;
      background: #fff;
      box-shadow: 0 2px 8px rgba(0,0,0,0.04);
    }
    th, td {
      padding: 0.75em 1em;
      border-bottom: 1px solid #e1e4e8;
      text-align: left;
    }
    th {
      background: #f3f6fa;
      font-weight: 500;
      width: 60%;
    }
    td {
      width: 40%;
    }
    tr:last-child td, tr:last-child th {
      border-bottom: none;
    }
    button {
      background: #0074d9;
      color: #fff;
      border: none;
      padding: 0.5em 1.2em;
      border-radius: 4px;
      font-size: 1em;
      cursor: pointer;
      margin-bottom: 1em;
    }
    button:hover,
    button:focus {
      background: #005fa3;
      box-shadow: 0 0 0 3px #80bfff;
    }
    a {
      color: #0074d9;
      text-decoration: none;
    }
    a:hover,
    a:focus {
      color: #005fa3;
      text-decoration: underline;
    }
    @media (max-width: 700px) {
      body {
        padding: 1em;
      }
      table {
        font-size: 0.95em;
      }
    }
"""

# Mirrors values_to_tsv(): one line per row, header cells skipped
_COPY_SCRIPT = r"""
    function copyTSV() {
      const rows = Array.from(document.querySelectorAll('table tr'));
      const tsv = rows.map(row => {
        const td = row.querySelector('td');
        if (td && td.textContent.includes('(failed to retrieve)')) {
          return '';
        }
        return td ? td.textContent.trim() : '';
      }).join('\n');
      navigator.clipboard.writeText(tsv);
      alert('Table values copied as TSV!');
    }
"""


def display_value(value: Any) -> str:
    """Text shown for a field in the report; absent values become the sentinel."""
    return SENTINEL if value is None else str(value)


def render_report_html(record: StatisticsRecord, project_name: str) -> str:
    """
    Build the HTML report page.

    Args:
        record: Statistics to show
        project_name: Display name of the project

    Returns:
        Complete HTML document
    """
    name = _escape_html(project_name)
    if record.range_label is None:
        title_range = "(unknown)"
        intro_range = "(unknown, failed to retrieve)"
    else:
        title_range = intro_range = _escape_html(record.range_label)

    html_parts = []
    html_parts.append("<!DOCTYPE html>")
    html_parts.append('<html lang="en">')
    html_parts.append("<head>")
    html_parts.append('  <meta charset="UTF-8">')
    html_parts.append('  <meta name="viewport" content="width=device-width, initial-scale=1.0">')
    html_parts.append(f"  <title>{name} Statistics - {title_range}</title>")
    html_parts.append(f"  <style>{_STYLE}  </style>")
    html_parts.append(f"  <script>{_COPY_SCRIPT}  </script>")
    html_parts.append("</head>")
    html_parts.append("<body>")
    html_parts.append(f"  <h1>{name} Pulse Overview</h1>")
    html_parts.append(
        f"  <p>This page provides an overview of {name}'s GitHub activity for the period: "
        f"<strong>{intro_range}</strong>. It is sourced from scraping GitHub.</p>"
    )
    html_parts.append('  <button onclick="copyTSV()">Copy values as TSV</button>')
    html_parts.append("  <small>(for easy pasting into spreadsheets)</small>")

    html_parts.append("  <table>")
    for field, label in FIELD_LABELS.items():
        value = _escape_html(display_value(getattr(record, field)))
        html_parts.append(f"    <tr><th>{_escape_html(label)}</th><td>{value}</td></tr>")
    html_parts.append("  </table>")

    html_parts.append('  <p><a href="?format=json">View as JSON</a></p>')
    html_parts.append("</body>")
    html_parts.append("</html>")

    return "\n".join(html_parts)


def values_to_tsv(values: Iterable[Optional[str]]) -> str:
    """
    Server-side equivalent of the page's copyTSV() button.

    Each item is the text of a row's value cell, or None for a row that has
    none. Any value containing the sentinel is copied as an empty line.
    """
    lines: List[str] = []
    for value in values:
        if value is None or SENTINEL in value:
            lines.append("")
        else:
            lines.append(value.strip())
    return "\n".join(lines)


def tsv_from_html(html: str) -> str:
    """Apply the copyTSV() transform to the table rows of a rendered report."""
    soup = BeautifulSoup(html, "html.parser")
    values = []
    for row in soup.select("table tr"):
        td = row.find("td")
        values.append(td.get_text() if td is not None else None)
    return values_to_tsv(values)


def _escape_html(text: str) -> str:
    """Escape HTML special characters."""
    if not text:
        return ""
    return (
        text
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )
