"""Deterministic local performance baseline runner.

This script benchmarks the converter hot paths on synthetic HTML fixtures. It
prints stable key=value lines for easy diffing and also writes the same output
to .perf/baseline.txt.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from statistics import median
from time import perf_counter

from htmlterm.core.html_to_text import convert, html_to_text
from htmlterm.core.preview import convert_for_preview

PARAGRAPH_SIZES: tuple[int, ...] = (1_000, 10_000, 50_000)
PARAGRAPH_REPEATS = 5
SMALL_CALLS = 1_000
SMALL_REPEATS = 3
LIST_ITEMS = 400
EVIDENCE_PATH = Path(".perf/baseline.txt")

SMALL_HTML = "<p><strong>Bold</strong> and <em>italic</em> text</p>"


def _build_paragraph(word_count: int) -> str:
    return "<p>" + "Test content " * (word_count // 2) + "</p>"


def _build_newsletter(item_count: int) -> str:
    items = "".join(
        f'<li>Item {index} with <a href="https://example.com/{index}">a link</a>'
        f"<ul><li>detail {index}</li></ul></li>"
        for index in range(item_count)
    )
    return (
        "<!DOCTYPE html><html><head><style>p { margin: 0; }</style></head><body>"
        f"<h1>Newsletter</h1><ul>{items}</ul>"
        "<blockquote>Quoted <b>reply</b> text</blockquote></body></html>"
    )


def _measure_sync_call_ms(function: Callable[[], object], repeats: int) -> float:
    function()
    samples_ms: list[float] = []
    for _ in range(repeats):
        start = perf_counter()
        function()
        samples_ms.append((perf_counter() - start) * 1000.0)
    return median(samples_ms)


def _repeat_small() -> None:
    for _ in range(SMALL_CALLS):
        html_to_text(SMALL_HTML)


def _collect_metrics() -> list[tuple[str, float]]:
    metrics: list[tuple[str, float]] = []
    for size in PARAGRAPH_SIZES:
        html = _build_paragraph(size)
        value = _measure_sync_call_ms(lambda html=html: convert(html), PARAGRAPH_REPEATS)
        metrics.append((f"paragraph_{size // 1000}k_words_ms", value))

    newsletter = _build_newsletter(LIST_ITEMS)
    metrics.append(
        ("newsletter_convert_ms", _measure_sync_call_ms(lambda: convert(newsletter), 5))
    )
    metrics.append(
        (
            "newsletter_preview_ms",
            _measure_sync_call_ms(lambda: convert_for_preview(newsletter), 5),
        )
    )
    metrics.append((f"small_x{SMALL_CALLS}_ms", _measure_sync_call_ms(_repeat_small, SMALL_REPEATS)))
    return metrics


def _render_lines(metrics: list[tuple[str, float]]) -> list[str]:
    return [f"{key}={value:.3f}" for key, value in metrics]


def _write_evidence(lines: list[str]) -> None:
    EVIDENCE_PATH.parent.mkdir(parents=True, exist_ok=True)
    EVIDENCE_PATH.write_text("\n".join(lines) + "\n", encoding="utf-8")


def main() -> int:
    lines = _render_lines(_collect_metrics())
    for line in lines:
        print(line)
    _write_evidence(lines)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
