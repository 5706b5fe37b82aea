"""Tests for the SVG renderer and the HTML control panels."""

import pytest

from elements import Element, ElementState, elements_from_values
from algorithms import get_algorithm, list_algorithms
from algorithms.step import Stats, SwapPair
from engine import Phase
from ui import (
    COLOR_THEMES,
    algorithm_info_panel,
    algorithm_selector,
    array_controls,
    element_color,
    message_panel,
    playback_controls,
    render_array,
    stats_panel,
)
from ui.canvas import DEFAULT_FILL


ARRAY = [
    Element(40, 0, ElementState.COMPARING),
    Element(10, 1, ElementState.SORTED),
    Element(25, 2),
]


class TestRenderArray:
    @pytest.mark.parametrize("mode", ["bars", "circles", "lines", "matrix"])
    def test_every_mode_draws_every_element(self, mode):
        svg = render_array(ARRAY, mode=mode)
        assert svg.startswith("<svg")
        assert svg.rstrip().endswith("</svg>")
        for idx in range(len(ARRAY)):
            assert f'data-index="{idx}"' in svg

    def test_unknown_mode_falls_back_to_bars(self):
        assert 'class="bars"' in render_array(ARRAY, mode="spiral")

    def test_empty_array(self):
        svg = render_array([])
        assert "data-index" not in svg

    def test_swap_pair_is_marked(self):
        svg = render_array(ARRAY, swap_pair=SwapPair(0, 2))
        assert svg.count('data-swap="1"') == 2
        assert "swap-bridge" in svg

    @pytest.mark.parametrize("theme", list(COLOR_THEMES))
    def test_theme_colors_used(self, theme):
        svg = render_array(ARRAY, theme=theme)
        assert COLOR_THEMES[theme]["comparing"] in svg
        assert COLOR_THEMES[theme]["sorted"] in svg
        assert DEFAULT_FILL in svg

    def test_single_element_lines(self):
        svg = render_array(elements_from_values([7]), mode="lines")
        assert 'data-index="0"' in svg


class TestElementColor:
    def test_selected_shares_current_color(self):
        e = Element(1, 0, ElementState.SELECTED)
        assert element_color(e, "ocean") == COLOR_THEMES["ocean"]["current"]

    def test_unknown_theme_uses_default(self):
        e = Element(1, 0, ElementState.PIVOT)
        assert element_color(e, "plaid") == COLOR_THEMES["default"]["pivot"]


class TestPanels:
    def test_playback_controls_reflect_phase(self):
        html = playback_controls(phase=Phase.PLAYING, cursor=3, total_steps=10)
        assert "⏸" in html
        assert 'id="btn-next" title="Next step" disabled' in html
        assert ">3<" in html and ">10<" in html

    def test_completed_badge(self):
        assert "FINISHED" in playback_controls(phase=Phase.COMPLETED)

    def test_algorithm_selector_lists_variants(self):
        html = algorithm_selector(list_algorithms(), "quick", "hoare")
        assert 'id="variant-selector"' in html
        assert '<option value="hoare" selected>' in html
        assert '<option value="quick" selected>' in html

    def test_algorithm_selector_without_variants(self):
        html = algorithm_selector(list_algorithms(), "bubble")
        assert "variant-selector" not in html

    def test_stats_panel(self):
        html = stats_panel(Stats(comparisons=6, swaps=4, time_elapsed=1500, progress=50.0), Phase.PAUSED)
        assert ">6<" in html and ">4<" in html
        assert "1.5s" in html
        assert "width: 50.0%" in html

    def test_info_panel(self):
        html = algorithm_info_panel(get_algorithm("merge"))
        assert "Merge Sort" in html
        assert "O(n log n)" in html
        assert "Stable" in html

    def test_message_is_escaped(self):
        assert "&lt;b&gt;" in message_panel("<b>")
        assert "Ready to sort" in message_panel("")

    def test_array_controls_disabled(self):
        assert "disabled" in array_controls(30, disabled=True)
