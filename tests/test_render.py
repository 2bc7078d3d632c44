from __future__ import annotations

import unittest

from dashboard import DashboardState
from models import MorningEssence, Task, WordOfDay
from render import REGION_NAMES, mood_chart_points, render_page, render_regions


def ready_state(**overrides) -> dict:
    state = DashboardState(
        essence_loading=False,
        essence=MorningEssence(
            greeting="Bão dia, <gente>!",
            quote="Quem espera sempre alcança.",
            word_of_day=WordOfDay("Saudade", "Lembrança nostálgica."),
            tip="Respire fundo três vezes.",
        ),
        location="-19.9, -43.9",
        location_attempted=True,
    )
    for key, value in overrides.items():
        setattr(state, key, value)
    return state.snapshot()


class CardTests(unittest.TestCase):
    def test_titled_card_has_icon_and_header(self) -> None:
        html = render_regions(ready_state())["word"]
        self.assertTrue(html.startswith('<div class="card ">'))
        self.assertIn('<span class="card-icon">📖</span>', html)
        self.assertIn("<h3>Palavra do Dia</h3>", html)
        self.assertIn('<h4 class="word">Saudade</h4>', html)

    def test_untitled_card_has_no_header(self) -> None:
        html = render_regions(ready_state())["hero"]
        self.assertTrue(html.startswith('<div class="card hero">'))
        self.assertNotIn("card-header", html)

    def test_card_class_name_in_page(self) -> None:
        html = render_page(ready_state())
        start = html.index('<div class="card insight">')
        self.assertNotIn("card-header", html[start:html.index("insight-label", start)])

    def test_card_content_is_escaped(self) -> None:
        state = ready_state()
        state["essence"]["tip"] = "<b>Durma</b>"
        self.assertIn("&lt;b&gt;Durma&lt;/b&gt;", render_regions(state)["tip"])


class MoodChartTests(unittest.TestCase):
    def test_points_span_width_and_scale_levels(self) -> None:
        series = [{"day": "Seg", "level": 0}, {"day": "Ter", "level": 5}, {"day": "Qua", "level": 10}]
        points = mood_chart_points(series, width=116, height=116)
        self.assertEqual(points, [(16.0, 100.0), (58.0, 58.0), (100.0, 16.0)])

    def test_single_point_is_centered(self) -> None:
        self.assertEqual(mood_chart_points([{"day": "Seg", "level": 10}], width=100, height=100), [(50.0, 16.0)])

    def test_empty_series(self) -> None:
        self.assertEqual(mood_chart_points([]), [])


class RegionTests(unittest.TestCase):
    def test_all_regions_rendered(self) -> None:
        self.assertEqual(set(render_regions(ready_state())), set(REGION_NAMES))

    def test_loading_hero_shows_skeleton(self) -> None:
        regions = render_regions(DashboardState().snapshot())
        self.assertIn("skeleton", regions["hero"])
        self.assertIn("spinning", regions["refresh"])
        self.assertNotIn("Saudade", regions["word"])

    def test_ready_hero_escapes_model_text(self) -> None:
        regions = render_regions(ready_state())
        self.assertIn("Bão dia, &lt;gente&gt;!", regions["hero"])
        self.assertIn("Localização Detectada", regions["hero"])
        self.assertIn("Saudade", regions["word"])
        self.assertIn("Lembrança nostálgica.", regions["word"])
        self.assertIn("Respire fundo três vezes.", regions["tip"])
        self.assertNotIn("spinning", regions["refresh"])

    def test_hero_without_location(self) -> None:
        regions = render_regions(ready_state(location=""))
        self.assertIn("Onde quer que você esteja", regions["hero"])

    def test_image_region_states(self) -> None:
        self.assertIn("Pintando sua manhã", render_regions(ready_state(image_loading=True))["image"])
        self.assertIn("Gere uma imagem", render_regions(ready_state())["image"])

        html = render_regions(ready_state(generated_image="data:image/png;base64,AAAA"))["image"]
        self.assertIn('src="data:image/png;base64,AAAA"', html)
        self.assertIn('download="aura-inspira.png"', html)

    def test_task_region(self) -> None:
        state = ready_state(tasks=[Task("1", "Beber <água>"), Task("2", "Meditar", completed=True)])
        html = render_regions(state)["tasks"]
        self.assertIn("Beber &lt;água&gt;", html)
        self.assertIn('class="task done" data-id="2"', html)
        self.assertEqual(html.count("<li"), 2)

    def test_mood_region_lists_days(self) -> None:
        html = render_regions(ready_state())["mood"]
        for day in ("Seg", "Ter", "Qua", "Qui", "Sex", "Sáb", "Dom"):
            self.assertIn(f">{day}</text>", html)
        self.assertIn("<polyline", html)


class PageTests(unittest.TestCase):
    def test_page_embeds_regions_unescaped(self) -> None:
        html = render_page(ready_state(image_prompt="um pôr do sol"))
        self.assertIn("<title>Aura - Seu despertar inteligente</title>", html)
        self.assertIn('data-region="hero"><div class="card hero">', html)
        self.assertIn('value="um pôr do sol"', html)
        self.assertIn("Tarefas da Manhã", html)
        self.assertIn("navigator.geolocation", html)

    def test_failed_action_restores_server_state(self) -> None:
        html = render_page(ready_state())
        catch_block = html[html.index("} catch (e) {"):html.index("function startSession")]
        self.assertIn("await restoreState();", catch_block)
        self.assertIn("fetch('/api/state')", catch_block)


if __name__ == "__main__":
    unittest.main()
