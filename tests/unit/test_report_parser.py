import logging

import pytest

from hair_advisor.core.config import ParserConfig
from hair_advisor.core.models.analysis import AnalysisResult
from hair_advisor.core.parsing import DEFAULT_COLOR_HEX, DEFAULT_ICON_HINTS
from hair_advisor.core.parsing.patterns import detect_language
from hair_advisor.core.parsing.report_parser import (
    FAILURE_PHRASES,
    ReportParser,
    is_failure_report,
    parse_report,
)


def test_parse_english_report(parser, english_report):
    result = parser.parse(english_report)

    assert result.analysis_failed is False
    assert result.health_score == 82
    assert result.scalp_summary == "The scalp appears healthy with minimal flaking."

    color = result.color_analysis
    assert color.detected_color_label == "Dark Brown"
    assert color.color_hex == "#5D4037"
    assert color.color_reference_note == "Similar to level 3 shades (3.0 Dark Brown)"
    assert color.summary == "Rich dark brown with warm undertones."

    assert [item.text for item in result.recommendations] == [
        "Drink more water daily.",
        "Use a sulfate-free shampoo.",
        "Trim split ends every 8 weeks.",
        "Protect hair from UV exposure.",
        "Try a weekly herbal mask.",
    ]
    assert [item.icon_hint for item in result.recommendations] == ["💧", "shampoo", "scissors", "sun", "leaf"]
    assert result.raw_text == english_report


def test_parse_french_report(parser, french_report):
    result = parser.parse(french_report)

    assert result.health_score == 74
    assert result.scalp_summary == "Le cuir chevelu présente une légère sécheresse sans rougeurs."
    assert result.color_analysis.detected_color_label == "Light Brown"
    assert result.color_analysis.color_hex == "#8B5A2B"
    assert result.color_analysis.summary == "Un châtain clair lumineux."
    assert result.recommendations[0].text == "Utilisez un après-shampooing hydratant."
    assert result.recommendations[0].icon_hint == "water"
    assert result.recommendations[1].text == "Massez le cuir chevelu chaque soir."
    assert result.recommendations[1].icon_hint == DEFAULT_ICON_HINTS[1]


def test_parse_arabic_report(parser, arabic_report):
    result = parser.parse(arabic_report)

    assert result.health_score == 68
    assert result.scalp_summary == "فروة الرأس جافة قليلاً مع وجود قشرة خفيفة في المنطقة الأمامية."
    assert result.color_analysis.detected_color_label == "Dark Brown"
    assert result.color_analysis.color_hex == "#4A3728"
    assert result.color_analysis.summary == "لون بني داكن طبيعي."
    assert [item.text for item in result.recommendations] == [
        "استخدمي شامبو لطيف.",
        "اشربي الكثير من الماء.",
    ]
    assert [item.icon_hint for item in result.recommendations] == ["شامبو", "💧"]


@pytest.mark.parametrize("text", [
    "Unable to analyze the image.",
    "  UNABLE   TO analyze  ",
    "Analysis failed",
    "No data available.",
    "Impossible d’analyser.",
    "تعذر التحليل",
])
def test_failure_phrases_mark_analysis_failed(parser, text):
    result = parser.parse(text)

    assert result.analysis_failed is True
    assert result.health_score == 75
    assert result.color_analysis is None
    assert result.scalp_summary is None
    assert result.recommendations == ()


def test_failure_phrase_inside_longer_text_is_not_a_failure(parser):
    text = "We were unable to analyze the left image, but the rest looks fine. Global Hair State Score: 70%"

    result = parser.parse(text)

    assert result.analysis_failed is False
    assert result.health_score == 70


def test_failure_phrases_include_trailing_period_variants():
    assert "analysis failed" in FAILURE_PHRASES
    assert "analysis failed." in FAILURE_PHRASES
    assert not is_failure_report("analysis failed..")


@pytest.mark.parametrize("text", ["", "   \n\t  ", None])
def test_empty_input_returns_default_result_and_warns(parser, caplog, text):
    caplog.set_level(logging.WARNING, logger="hair_advisor.core.parsing.report_parser")

    result = parser.parse(text)

    assert result.analysis_failed is False
    assert result.health_score == 75
    assert result.color_analysis is None
    assert result.scalp_summary is None
    assert result.recommendations == ()
    assert "Empty report text" in caplog.text


@pytest.mark.parametrize("text,expected", [
    ("Global Hair State Score: 82%", 82),
    ("**Global Hair State Score:** 91%", 91),
    ("Global Hair State Score: [55%]", 55),
    ("Your hair looks about 64% healthy overall.", 64),
    ("No percentage in this report at all.", 75),
    ("Global Hair State Score: 150%", 100),
    ("Score global de l'état des cheveux : 47 %", 47),
    ("الدرجة العالمية لحالة الشعر: 58٪", 58),
])
def test_health_score_cascade(parser, text, expected):
    assert parser.parse(text).health_score == expected


def test_labelled_score_wins_over_earlier_bare_percentage(parser):
    text = "About 10% of strands show split ends.\n\n**Global Hair State Score:**\n77%"

    assert parser.parse(text).health_score == 77


def test_color_from_taxonomy_without_hex(parser):
    text = "**Color Analysis:**\nDetected Color: dark brown\n"

    color = parser.parse(text).color_analysis

    assert color.detected_color_label == "Dark Brown"
    assert color.color_hex == "#3B2A22"
    assert color.color_reference_note == "Similar to level 3 shades (3.0 Dark Brown)"
    assert color.summary == (
        "Detected hair color: Dark Brown (#3B2A22). Similar to level 3 shades (3.0 Dark Brown)."
    )


def test_text_hex_overrides_taxonomy_hex(parser):
    text = "**Color Analysis:**\nDetected Color: Dark Brown\nHex Code: #5d4037\n"

    color = parser.parse(text).color_analysis

    assert color.detected_color_label == "Dark Brown"
    assert color.color_hex == "#5D4037"


def test_unknown_color_phrase_keeps_raw_label_and_default_hex(parser):
    text = "**Color Analysis:**\nDetected Color: Lavender\n"

    color = parser.parse(text).color_analysis

    assert color.detected_color_label == "Lavender"
    assert color.color_hex == DEFAULT_COLOR_HEX
    assert color.color_reference_note is None


def test_color_keyword_fallback_from_first_sentence(parser):
    text = "**Color Analysis:**\nYour hair shows a natural black shade with shine. It is also thick.\n"

    color = parser.parse(text).color_analysis

    assert color.detected_color_label == "Black"
    assert color.color_hex == "#1C1A1A"


def test_color_phrase_from_sentence_pattern(parser):
    text = "**Hair Color Analysis**\nYour hair color is auburn, with copper highlights.\n"

    color = parser.parse(text).color_analysis

    assert color.detected_color_label == "Auburn"


def test_hex_only_color_section_uses_hex_as_label(parser):
    text = "**Color Analysis:**\nHex: #ABCDEF\n"

    color = parser.parse(text).color_analysis

    assert color.detected_color_label == "#ABCDEF"
    assert color.color_hex == "#ABCDEF"


def test_color_section_without_any_color_is_absent(parser):
    text = "**Color Analysis:**\nThe lighting made it hard to tell.\n"

    assert parser.parse(text).color_analysis is None


def test_arabic_keyword_inside_longer_word_is_not_a_color(parser):
    text = "**تحليل مفصل للون:**\nالبنية قوية والإضاءة ضعيفة في الصورة.\n"

    assert parser.parse(text, "ar").color_analysis is None


def test_no_color_section_means_no_color(parser):
    assert parser.parse("Global Hair State Score: 80%").color_analysis is None


def test_scalp_section_with_only_short_sentences_is_absent(parser):
    text = "**Scalp Analysis:**\nOk. Fine. Good!\n"

    assert parser.parse(text).scalp_summary is None


def test_scalp_summary_skips_short_leading_sentences(parser):
    text = "**Scalp Condition:**\nHealthy. Some redness visible around the hairline!\n"

    assert parser.parse(text).scalp_summary == "Some redness visible around the hairline."


def test_scalp_minimum_length_is_configurable():
    text = "**Scalp Analysis:**\nOk. Fine.\n"

    result = ReportParser(min_sentence_length=2).parse(text)

    assert result.scalp_summary == "Ok."


def test_recommendations_are_capped_at_five_in_order(parser):
    bullets = "\n".join(f"- Tip number {n}" for n in range(1, 8))
    text = f"**Recommendations:**\n{bullets}\n"

    items = parser.parse(text).recommendations

    assert [item.text for item in items] == [f"Tip number {n}" for n in range(1, 6)]


def test_missing_icon_hints_follow_default_cycle(parser):
    text = "**Recommendations:**\n- one\n- two\n- three\n- four\n- five\n"

    items = parser.parse(text).recommendations

    assert [item.icon_hint for item in items] == list(DEFAULT_ICON_HINTS)


def test_recommendation_bullets_accept_dot_bullets_and_skip_prose(parser):
    text = (
        "**Recommendations:**\n"
        "Here are my suggestions:\n"
        "• **Recommendation:** Use a wide-tooth comb. **IconHint:** brush\n"
        "-\n"
        "---\n"
        "- Sleep on a silk pillowcase (IconHint: night)\n"
    )

    items = parser.parse(text).recommendations

    assert [(item.text, item.icon_hint) for item in items] == [
        ("Use a wide-tooth comb.", "brush"),
        ("Sleep on a silk pillowcase", "night"),
    ]


@pytest.mark.parametrize("bullet,expected", [
    ("- Recommendation: Drink water daily. IconHint: [water]", ("Drink water daily.", "water")),
    ("- Recommendation: Drink water daily. IconHint: water drop", ("Drink water daily.", "water drop")),
    ("- Recommendation: Drink water daily. IconHint: [water drop]", ("Drink water daily.", "water drop")),
    ("- توصية: اشربي الماء. IconHint: [قطرة ماء]", ("اشربي الماء.", "قطرة ماء")),
    ("- توصية: اشربي الماء. IconHint: قطرة ماء", ("اشربي الماء.", "قطرة ماء")),
])
def test_icon_hint_is_removed_from_recommendation_text(parser, bullet, expected):
    text = f"**Recommendations:**\n{bullet}\n"

    items = parser.parse(text).recommendations

    assert [(item.text, item.icon_hint) for item in items] == [expected]


def test_recommendations_stop_at_next_section(parser):
    text = "**Recommendations:**\n- Drink water\n\n**Notes:**\n- not a recommendation\n"

    items = parser.parse(text).recommendations

    assert [item.text for item in items] == ["Drink water"]


def test_max_recommendations_from_config():
    parser = ReportParser.from_config(ParserConfig(max_recommendations=2))
    text = "**Recommendations:**\n- a1\n- b2\n- c3\n"

    assert len(parser.parse(text).recommendations) == 2


def test_parsing_is_deterministic(parser, english_report, arabic_report):
    assert parser.parse(english_report) == parser.parse(english_report)
    assert parser.parse(arabic_report) == parse_report(arabic_report)


def test_language_tag_only_reorders_patterns(parser, english_report):
    assert parser.parse(english_report, language="ar") == parser.parse(english_report)
    assert parser.parse(english_report, language="xx") == parser.parse(english_report)


@pytest.mark.parametrize("text", [
    "**",
    "**Recommendations:**",
    "**Color Analysis:**\n#",
    "%%%% 999999% ####",
    "\x00\x01 random bytes ￿",
    "- IconHint:\n- IconHint: \n",
])
def test_parse_never_raises(parser, text):
    result = parser.parse(text)

    assert isinstance(result, AnalysisResult)
    assert 0 <= result.health_score <= 100


@pytest.mark.parametrize("text,expected", [
    (None, "en"),
    ("Global Hair State Score: 82%", "en"),
    ("**Analyse détaillée du cuir chevelu :** les cheveux sont secs", "fr"),
    ("**التوصيات:**\n- IconHint: 💧 اشربي الماء", "ar"),
])
def test_detect_language(text, expected):
    assert detect_language(text) == expected
