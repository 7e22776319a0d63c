"""
Fixture tests: every case under fixtures/cases is parsed with BeautifulSoup
and compared to the baseline of the same name, once with the default
stylesheet table and once through the inline-style resolver.

A case whose text depends on style attributes ships a second baseline,
<name>.inline-styles.txt, for the resolver pass.
"""

from pathlib import Path

import pytest

from innertext.core import inner_text
from innertext.soup import select_root
from innertext.style import InlineStyleResolver

FIXTURES = Path(__file__).parent.parent / "fixtures"
CASES = sorted((FIXTURES / "cases").glob("*.html"))


def load_case(case: Path, mode: str | None = None) -> tuple[str, str]:
    baselines = FIXTURES / "baselines"
    baseline = baselines / f"{case.stem}.txt"
    if mode is not None and (baselines / f"{case.stem}.{mode}.txt").exists():
        baseline = baselines / f"{case.stem}.{mode}.txt"
    return case.read_text(encoding="utf-8"), baseline.read_text(encoding="utf-8")


def test_cases_present():
    assert len(CASES) >= 7


def test_styled_case_has_its_own_resolver_baseline():
    case = FIXTURES / "cases" / "styled.html"
    assert load_case(case)[1] != load_case(case, "inline-styles")[1]


@pytest.mark.parametrize("case", CASES, ids=lambda p: p.stem)
def test_default_stylesheet(case):
    markup, baseline = load_case(case)
    assert inner_text(select_root(markup)) + "\n" == baseline


@pytest.mark.parametrize("case", CASES, ids=lambda p: p.stem)
def test_inline_style_resolver(case):
    markup, baseline = load_case(case, "inline-styles")
    assert inner_text(select_root(markup), InlineStyleResolver()) == baseline.rstrip("\n")
